"""Tests for resolving inline link tags."""

import pytest

from doclet_html.inline_links import resolve_links, split_link_text
from doclet_html.link_registry import LinkRegistry
from doclet_html.tutorial import Tutorial


@pytest.fixture
def registry() -> LinkRegistry:
    """Registry knowing the class Foo and the tutorial 'intro'."""
    r = LinkRegistry()
    r.register_link("Foo", "Foo.html")
    r.register_tutorials(
        Tutorial(name="", children=[Tutorial(name="intro", title="Intro")])
    )
    return r


@pytest.mark.parametrize(
    ("html", "expected"),
    [
        ("See {@link Foo}.", 'See <a href="Foo.html">Foo</a>.'),
        ("{@link Foo|the foo}", '<a href="Foo.html">the foo</a>'),
        ("{@link Foo the foo}", '<a href="Foo.html">the foo</a>'),
        ("[caption]{@link Foo}", '<a href="Foo.html">caption</a>'),
        ("{@linkplain Foo}", '<a href="Foo.html">Foo</a>'),
        ("{@linkcode Foo}", '<a href="Foo.html"><code>Foo</code></a>'),
        ("{@link Nope}", "Nope"),
        (
            "{@link https://example.com Example}",
            '<a href="https://example.com">Example</a>',
        ),
        ("{@tutorial intro}", '<a href="tutorial-intro.html">Intro</a>'),
        ("{@tutorial missing}", '<em class="disabled">Tutorial: missing</em>'),
    ],
)
def test_resolve_links(registry: LinkRegistry, html: str, expected: str) -> None:
    """Verify each inline tag form is replaced."""
    assert resolve_links(html, registry) == expected


def test_text_without_tags_is_unchanged(registry: LinkRegistry) -> None:
    """Verify HTML without inline tags passes through untouched."""
    html = "<p>No links {here}.</p>"
    assert resolve_links(html, registry) == html


def test_split_link_text() -> None:
    """Verify target and text splitting."""
    assert split_link_text("Foo") == ("Foo", "")
    assert split_link_text("Foo | the foo") == ("Foo", "the foo")
    assert split_link_text("Foo  the foo") == ("Foo", "the foo")
