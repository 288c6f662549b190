from datetime import date

from datalead.collections import PostCollection
from datalead.content import ContentItem


def item(title, pub_date):
    return ContentItem(title=title, pub_date=pub_date)


def test_sorted_newest_first_then_slug():
    posts = PostCollection(
        [
            item("Beta", date(2024, 1, 1)),
            item("Gamma", date(2023, 6, 1)),
            item("Alpha", date(2024, 1, 1)),
            item("Delta", date(2024, 3, 1)),
        ]
    )
    assert [p.title for p in posts.sorted()] == ["Delta", "Alpha", "Beta", "Gamma"]
    assert [p.title for p in posts.sorted(reverse=False)] == ["Gamma", "Alpha", "Beta", "Delta"]


def test_latest_and_sequence_protocol():
    posts = PostCollection(item(f"Post {n}", date(2024, 1, n)) for n in range(1, 6))
    assert len(posts) == 5
    assert posts[0].title == "Post 1"
    assert [p.title for p in posts.latest(2)] == ["Post 5", "Post 4"]
    assert len(posts.latest(10)) == 5


def test_by_year_groups_newest_year_first():
    posts = PostCollection(
        [
            item("Old", date(2022, 5, 1)),
            item("New", date(2024, 2, 18)),
            item("Newer", date(2024, 6, 1)),
        ]
    )
    years = posts.by_year()
    assert list(years) == [2024, 2022]
    assert [p.title for p in years[2024]] == ["Newer", "New"]
    assert PostCollection([]).by_year() == {}
