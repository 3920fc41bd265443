from pathlib import Path

import pytest

from bramble.content import Page
from bramble.templates import (
    PartialRenderer,
    TemplateEngine,
    TemplateNotFoundError,
    render_template,
)


def make_page(
    title="Hello", slug="hello", date="2024-01-01", summary="Hi...", collection="posts"
):
    return Page(
        title=title,
        date=date,
        slug=slug,
        summary=summary,
        content="<p>Hi</p>",
        body="Hi",
        collection=collection,
        path=Path(f"{slug}.md"),
    )


# --- render_template ---


def test_render_template_substitutes_known_names():
    assert render_template("Hi {{ name }}!", {"name": "Bob"}) == "Hi Bob!"


def test_render_template_leaves_unknown_names():
    assert render_template("Hi {{ name }}!", {}) == "Hi {{ name }}!"
    assert render_template("{{ a }} {{b}}", {"a": "x"}) == "x {{b}}"


def test_render_template_whitespace_inside_braces():
    values = {"name": "Bob"}
    assert render_template("{{name}}", values) == "Bob"
    assert render_template("{{   name\t}}", values) == "Bob"
    assert render_template("{{\nname\n}}", values) == "Bob"


def test_render_template_only_matches_bare_words():
    values = {"a": "x", "b": "y"}
    assert render_template("{{ a.b }}", values) == "{{ a.b }}"
    assert render_template("{{ a b }}", values) == "{{ a b }}"
    assert render_template("{ a }", values) == "{ a }"


def test_render_template_does_not_rescan_values():
    values = {"a": "{{ b }}", "b": "x"}
    assert render_template("{{ a }}|{{ b }}", values) == "{{ b }}|x"


def test_render_template_coerces_values():
    assert render_template("{{ n }}", {"n": 3}) == "3"
    assert render_template("{{ n }}", {"n": ""}) == ""
    assert render_template("{{ n }}", {"n": None}) == "None"
    assert render_template("{{ n }}", {"n": False}) == "False"


def test_render_template_is_deterministic():
    template = "<title>{{ title }}</title>{{ content }}{{ missing }}"
    values = {"title": "T", "content": "<p>c</p>"}
    first = render_template(template, values)
    assert first == render_template(template, values)
    assert first == "<title>T</title><p>c</p>{{ missing }}"


# --- TemplateEngine ---


def test_template_engine_renders_named_template(tmp_path):
    (tmp_path / "post.html").write_text(
        "<h1>{{ title }}</h1>{{ content }}", encoding="utf-8"
    )
    engine = TemplateEngine(tmp_path)
    rendered = engine.render("post.html", {"title": "T", "content": "<p>x</p>"})
    assert rendered == "<h1>T</h1><p>x</p>"


def test_template_engine_caches_text(tmp_path):
    path = tmp_path / "layout.html"
    path.write_text("v1 {{ x }}", encoding="utf-8")
    engine = TemplateEngine(tmp_path)
    assert engine.render("layout.html", {"x": "a"}) == "v1 a"
    path.write_text("v2 {{ x }}", encoding="utf-8")
    assert engine.render("layout.html", {"x": "a"}) == "v1 a"


def test_template_engine_missing_template(tmp_path):
    engine = TemplateEngine(tmp_path)
    with pytest.raises(TemplateNotFoundError) as excinfo:
        engine.get_template("post.html")
    assert excinfo.value.name == "post.html"
    assert excinfo.value.templates_dir == tmp_path
    assert isinstance(excinfo.value, FileNotFoundError)


# --- PartialRenderer ---


def test_cards_link_and_escape():
    partials = PartialRenderer()
    html = partials.cards([make_page(title="Tom & Jerry")])
    assert '<a href="/posts/hello.html">Tom &amp; Jerry</a>' in html
    assert '<p class="meta">2024-01-01</p>' in html
    assert "<p>Hi...</p>" in html
    assert html.startswith('<div class="card">')
    assert html.endswith("</div>")


def test_cards_keep_page_order():
    partials = PartialRenderer()
    pages = [
        make_page(title="First", slug="first", collection="announcements"),
        make_page(title="Second", slug="second", collection="announcements"),
    ]
    html = partials.cards(pages)
    assert html.index("/announcements/first.html") < html.index(
        "/announcements/second.html"
    )
    assert html.count('<div class="card">') == 2
    assert partials.cards([]) == ""


def test_listing_contains_heading_search_and_cards():
    partials = PartialRenderer()
    html = partials.listing("Latest News", "Search news...", [make_page()])
    assert html.startswith("<h2>Latest News</h2>")
    assert 'placeholder="Search news..."' in html
    assert 'aria-label="Search news..."' in html
    assert '<div class="card">' in html
    assert "&lt;div" not in html


def test_home_renders_hero_intro_and_latest():
    partials = PartialRenderer()
    html = partials.home(
        intro="<p>Welcome <em>all</em></p>",
        hero_image="images/flag.png",
        hero_alt="Flag",
        latest=[make_page()],
        latest_heading="Latest Updates",
    )
    assert '<div class="hero"><img src="images/flag.png" alt="Flag"></div>' in html
    assert "<p>Welcome <em>all</em></p>" in html
    assert "<h2>Latest Updates</h2>" in html
    assert "/posts/hello.html" in html


def test_home_without_hero():
    partials = PartialRenderer()
    html = partials.home(intro="", hero_image=None, latest=[], latest_heading="Latest")
    assert "hero" not in html
    assert "<h2>Latest</h2>" in html


def test_image_partial():
    partials = PartialRenderer()
    html = partials.image("images/emblem.jpg", "Emblem", "about-emblem")
    assert html == (
        '<div class="about-emblem"><img src="images/emblem.jpg" alt="Emblem" /></div>'
    )
