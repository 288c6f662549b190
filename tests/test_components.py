import re

import pytest
from markupsafe import Markup

from datalead.components import ComponentRenderer, HeroProps, SocialLink
from datalead.navigation import LogoProps, NavigationEntry, build_logo, build_navigation
from datalead.templates import TemplateEngine

LINK_RE = re.compile(r'<a class="hero-social-link" href="([^"]+)"><img class="hero-social-icon" src="([^"]+)" alt="([^"]+)" /></a>')


def make_hero(links):
    return HeroProps(
        title=Markup('Hi there, I\'m <span class="intro-name">Jean-Loic</span>'),
        description=Markup("I share tutorials on <b>Scala</b>."),
        avatar="/assets/images/avatar.png",
        social_links=tuple(links),
    )


def test_hero_renders_social_links_in_order():
    links = [
        SocialLink("Twitter", "/assets/images/twitter-icon.png", "https://twitter.com/x"),
        SocialLink("Facebook", "/assets/images/facebook-icon.png", "https://facebook.com/x"),
        SocialLink("LinkedIn", "/assets/images/linkedin-icon.png", "https://linkedin.com/x"),
    ]
    html = ComponentRenderer(TemplateEngine()).hero(make_hero(links))
    assert html.count("<a ") == 3
    assert LINK_RE.findall(html) == [
        ("https://twitter.com/x", "/assets/images/twitter-icon.png", "Twitter icon"),
        ("https://facebook.com/x", "/assets/images/facebook-icon.png", "Facebook icon"),
        ("https://linkedin.com/x", "/assets/images/linkedin-icon.png", "LinkedIn icon"),
    ]


def test_hero_inserts_prerendered_markup_verbatim():
    html = ComponentRenderer(TemplateEngine()).hero(make_hero([]))
    assert '<span class="intro-name">Jean-Loic</span>' in html
    assert "<b>Scala</b>" in html
    assert 'src="/assets/images/avatar.png"' in html
    assert 'alt="Avatar image"' in html
    assert "<a " not in html


def test_hero_requires_avatar():
    props = HeroProps(title=Markup("t"), description=Markup("d"), avatar="")
    with pytest.raises(ValueError):
        ComponentRenderer(TemplateEngine()).hero(props)


def test_hero_props_from_site_data():
    data = {
        "title": "Site",
        "hero": {
            "title": "<em>Hello</em>",
            "social": [{"name": "Twitter", "icon": "/t.png", "href": "https://t", "alt": "T"}],
        },
    }
    props = HeroProps.from_data(data)
    assert props.title == Markup("<em>Hello</em>")
    assert props.avatar == "/assets/images/avatar.png"
    assert props.social_links == (SocialLink("Twitter", "/t.png", "https://t", "T"),)


def test_social_link_defaults():
    link = SocialLink.from_data({"name": "Youtube", "icon": "/y.png"})
    assert link.href == "/"
    assert link.icon_alt == "Youtube icon"


@pytest.mark.parametrize("entry", [{"icon": "/y.png"}, {"name": "Youtube"}, "Youtube"])
def test_social_link_requires_name_and_icon(entry):
    with pytest.raises(ValueError, match="Social link needs"):
        SocialLink.from_data(entry)


def test_navbar_lists_entries_in_declared_order():
    engine = TemplateEngine()
    entries = build_navigation({"navigation": {"github": "https://github.com/x"}})
    html = ComponentRenderer(engine).navbar(entries, LogoProps("/assets/images/avatar.png", "The Data Lead"))
    items = re.findall(r'<li class="nav-menu-item"><a href="([^"]+)">([^<]+)</a></li>', html)
    assert items == [
        ("/posts/", "Blog"),
        ("https://github.com/x", "GitHub"),
        ("/", "Twitter"),
    ]
    assert '<a class="navbar-brand" href="/">' in html
    assert "The Data Lead" in html


def test_logo_escapes_name():
    html = ComponentRenderer(TemplateEngine()).logo(LogoProps("/i.png", "R&D <Lab>"))
    assert "R&amp;D &lt;Lab&gt;" in html


def test_navigation_entry_validates_target():
    assert NavigationEntry("Docs", "https://example.com").href == "https://example.com"
    with pytest.raises(ValueError):
        NavigationEntry("Blog", "posts/")
    with pytest.raises(ValueError):
        NavigationEntry("", "/")


def test_build_navigation_defaults_and_logo():
    assert [(e.label, e.href) for e in build_navigation()] == [
        ("Blog", "/posts/"),
        ("GitHub", "/"),
        ("Twitter", "/"),
    ]
    assert build_logo({}) == LogoProps("/assets/images/avatar.png", "The Data Lead")
    assert build_logo({"title": "Mine"}).name == "Mine"
