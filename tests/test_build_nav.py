"""Tests for assembling the navigation sidebar."""

from doclet_html.build_nav import build_nav
from doclet_html.doclet import Doclet
from doclet_html.doclet_store import DocletStore
from doclet_html.link_registry import LinkRegistry
from doclet_html.nav_tree import NavTreeBuilder
from doclet_html.site_config import SiteConfig
from doclet_html.symbol_groups import group_symbols
from doclet_html.tutorial import Tutorial


def _nav(
    doclets: list[Doclet], tutorials: list[Tutorial] | None = None, **options: object
) -> str:
    store = DocletStore(doclets)
    registry = LinkRegistry()
    for d in doclets:
        registry.register_link(d.longname or d.name, registry.create_link(d))
    config = SiteConfig(**options)  # type: ignore[arg-type]
    groups = group_symbols(store)
    groups.tutorials = tutorials or []
    registry.register_tutorials(Tutorial(name="", children=groups.tutorials))
    builder = NavTreeBuilder(store, registry, config)
    return str(build_nav(groups, builder, registry, config))


def test_home_and_menu_links() -> None:
    """Verify the home link comes first, followed by configured menu links."""
    nav = _nav([], menu={"GitHub": {"href": "https://github.com", "target": "_blank"}})
    assert nav.startswith('<h2><a href="index.html">Home</a></h2>')
    assert '<h2><a href="https://github.com" target="_blank" >GitHub</a></h2>' in nav


def test_sections_follow_configured_order() -> None:
    """Verify sections are emitted in the configured order."""
    doclets = [
        Doclet(kind="class", name="Foo", longname="Foo"),
        Doclet(kind="module", name="util", longname="module:util"),
    ]
    default = _nav(doclets, nav_details=False)
    assert default.index("Classes") < default.index("Modules")

    reordered = _nav(
        doclets, nav_details=False, nav_section_order=("Modules", "Classes")
    )
    assert reordered.index("Modules") < reordered.index("Classes")

    only_modules = _nav(doclets, nav_details=False, nav_section_order=("Modules",))
    assert "Classes" not in only_modules


def test_globals_listed() -> None:
    """Verify global functions are listed under a Global heading."""
    doclets = [Doclet(kind="function", name="go", longname="go", scope="global")]
    nav = _nav(doclets)
    assert '<h3>Global</h3><ul><li><a href="global.html#go">go</a></li></ul>' in nav


def test_global_typedefs_only_when_enabled() -> None:
    """Verify global typedefs are hidden unless typedefs is on."""
    doclets = [Doclet(kind="typedef", name="Cb", longname="Cb", scope="global")]
    hidden = _nav(doclets)
    assert '<h3><a href="global.html">Global</a></h3>' in hidden
    assert "global.html#Cb" not in hidden

    shown = _nav(doclets, typedefs=True)
    assert '<li><a href="global.html#Cb">Cb</a></li>' in shown


def test_symbol_listed_once() -> None:
    """Verify a global sharing a class's longname is not listed again."""
    doclets = [
        Doclet(kind="class", name="Foo", longname="Foo"),
        Doclet(kind="function", name="Foo", longname="Foo", scope="global"),
    ]
    nav = _nav(doclets, nav_details=False)
    assert nav.count('<a href="Foo.html">Foo</a>') == 1
    assert '<h3><a href="global.html">Global</a></h3>' in nav


def test_modules_use_their_own_seen_set() -> None:
    """Verify a module is listed even when its exported class was listed."""
    doclets = [
        Doclet(kind="class", name="module:m", longname="module:m"),
        Doclet(kind="module", name="m", longname="module:m"),
    ]
    nav = _nav(doclets, nav_details=False)
    assert '<a href="module-m.html">module:m</a>' in nav
    assert '<a href="module-m.html">m</a>' in nav


def test_tutorials_section() -> None:
    """Verify tutorials are linked by their titles."""
    nav = _nav([], [Tutorial(name="intro", title="Getting Started")])
    assert "Tutorials" in nav
    assert '<a href="tutorial-intro.html">Getting Started</a>' in nav
