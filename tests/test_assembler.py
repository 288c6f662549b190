import re
from datetime import date

import pytest

from datalead.assembler import PageAssembler
from datalead.build import load_data
from datalead.content import ContentItem, ContentProcessor, MissingFieldError
from datalead.templates import TemplateEngine

NAVBAR_RE = re.compile(r'<nav class="navbar">.*?</nav>', re.DOTALL)


def scala_item(**overrides):
    fields = dict(
        title="Scala 101",
        description="Learn the very basics of Scala 3",
        pub_date=date(2024, 2, 18),
        img_src="/assets/images/articles/scala-101-1.png",
        img_alt="Scala 101 cover",
        body="## Why Scala?\n\nBecause.\n",
    )
    fields.update(overrides)
    return ContentItem(**fields)


def make_assembler(data=None):
    return PageAssembler(TemplateEngine(data), data)


def head_of(html: str) -> str:
    return html.split("</head>", 1)[0]


def test_metadata_section_keeps_header_values_verbatim():
    page = make_assembler().assemble(scala_item())
    head = head_of(page.html)
    assert "<title>Scala 101</title>" in head
    assert '<meta name="description" content="Learn the very basics of Scala 3" />' in head
    assert '<meta property="article:published_time" content="2024-02-18" />' in head
    assert '<meta property="og:image" content="/assets/images/articles/scala-101-1.png" />' in head
    assert '<meta property="og:image:alt" content="Scala 101 cover" />' in head
    assert page.url == "/posts/scala-101/"
    assert page.title == "Scala 101"


def test_page_contains_title_description_and_image_in_body():
    html = make_assembler().assemble(scala_item()).html
    body = html.split("<body>", 1)[1]
    assert '<h1 class="post-title">Scala 101</h1>' in body
    assert "Learn the very basics of Scala 3" in body
    assert 'src="/assets/images/articles/scala-101-1.png"' in body
    assert '<h2 id="why-scala">Why Scala?</h2>' in body
    assert '<a href="#why-scala">Why Scala?</a>' in body
    assert 'datetime="2024-02-18">Feb 18, 2024</time>' in body


def test_assembly_is_idempotent():
    assembler = make_assembler()
    item = scala_item()
    first = assembler.assemble(item)
    second = assembler.assemble(item)
    assert first.html == second.html
    assert make_assembler().assemble(item).html == first.html


def test_navbar_is_identical_on_every_page(project):
    data = load_data(project)
    assembler = make_assembler(data)
    items = ContentProcessor(project / "content" / "posts").load()
    pages = [assembler.assemble(item) for item in items]
    pages.append(assembler.assemble_index(items))
    pages.append(assembler.assemble_listing(items))

    navbars = {NAVBAR_RE.search(page.html).group(0) for page in pages}
    assert len(navbars) == 1
    labels = re.findall(r'<li class="nav-menu-item"><a href="[^"]+">([^<]+)</a>', navbars.pop())
    assert labels == ["Blog", "GitHub", "Twitter"]


def test_missing_fields_fail_assembly():
    assembler = make_assembler()
    item = scala_item()
    object.__setattr__(item, "title", "")
    with pytest.raises(MissingFieldError):
        assembler.assemble(item)


def test_unknown_layout_falls_back_to_post():
    html = make_assembler().assemble(scala_item(layout="fancy")).html
    assert '<article class="section post">' in html


def test_item_without_image_has_no_image_meta():
    html = make_assembler().assemble(scala_item(img_src="", img_alt="")).html
    assert "og:image" not in html
    assert "post-hero" not in html


def test_index_page_has_hero_and_latest_posts(project):
    data = load_data(project)
    items = ContentProcessor(project / "content" / "posts").load()
    page = PageAssembler(TemplateEngine(data), data, latest_count=1).assemble_index(items)
    assert page.url == "/"
    assert page.title == "The Data Lead"
    assert '<section class="section hero">' in page.html
    assert page.html.count('class="hero-social-link"') == 3
    assert 'href="/posts/scala-101/"' in page.html
    assert 'href="/posts/python-decorators/"' not in page.html


def test_hero_only_on_landing_page(project):
    data = load_data(project)
    assembler = make_assembler(data)
    items = ContentProcessor(project / "content" / "posts").load()
    assert "hero-title" not in assembler.assemble(items[0]).html
    assert "hero-title" not in assembler.assemble_listing(items).html


def test_listing_groups_posts_by_year(project):
    data = load_data(project)
    items = ContentProcessor(project / "content" / "posts").load()
    html = make_assembler(data).assemble_listing(items).html
    assert html.index('<h2 class="post-year">2024</h2>') < html.index(
        '<h2 class="post-year">2023</h2>'
    )
    assert html.index("Scala 101") < html.index("Python Decorators")


def test_empty_listing():
    page = make_assembler().assemble_listing([])
    assert "No posts yet." in page.html
    assert page.url == "/posts/"
