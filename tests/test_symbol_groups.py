"""Tests for symbol grouping and module export attachment."""

from doclet_html.attach_module_symbols import attach_module_symbols
from doclet_html.doclet import Doclet
from doclet_html.doclet_store import DocletStore
from doclet_html.symbol_groups import group_symbols


def test_group_symbols_by_kind() -> None:
    """Verify doclets land in the bucket of their kind, in store order."""
    store = DocletStore(
        [
            Doclet(kind="class", name="B", longname="B"),
            Doclet(kind="class", name="A", longname="A"),
            Doclet(kind="module", name="m", longname="module:m"),
            Doclet(kind="namespace", name="ns", longname="ns"),
            Doclet(kind="mixin", name="Mx", longname="Mx"),
            Doclet(kind="interface", name="I", longname="I"),
            Doclet(kind="event", name="change", longname="event:change"),
        ]
    )
    groups = group_symbols(store)
    assert [d.name for d in groups.classes] == ["B", "A"]
    assert [d.name for d in groups.modules] == ["m"]
    assert [d.name for d in groups.namespaces] == ["ns"]
    assert [d.name for d in groups.mixins] == ["Mx"]
    assert [d.name for d in groups.interfaces] == ["I"]
    assert [d.name for d in groups.events] == ["change"]
    assert groups.globals == []


def test_external_names_lose_quotes() -> None:
    """Verify quoted external names are shown without quotes."""
    store = DocletStore(
        [Doclet(kind="external", name='"jquery.fn"', longname='external:"jquery.fn"')]
    )
    groups = group_symbols(store)
    assert groups.externals[0].name == "jquery.fn"
    assert groups.externals[0].longname == 'external:"jquery.fn"'


def test_globals() -> None:
    """Verify top-level members/functions are globals but module exports are not."""
    store = DocletStore(
        [
            Doclet(kind="function", name="go", longname="go", scope="global"),
            Doclet(kind="typedef", name="Cb", longname="Cb", scope="global"),
            Doclet(kind="member", name="x", longname="Foo#x", memberof="Foo"),
            Doclet(kind="function", name="module:util", longname="module:util"),
        ]
    )
    groups = group_symbols(store)
    assert [d.name for d in groups.globals] == ["go", "Cb"]


def test_attach_class_with_description() -> None:
    """Verify a described class sharing a module's longname is attached as a copy."""
    module = Doclet(kind="module", name="m", longname="module:m")
    cls = Doclet(
        kind="class", name="module:m", longname="module:m", description="A class."
    )
    modules = attach_module_symbols([cls], [module])

    assert modules == [module]
    assert len(module.modules) == 1
    assert module.modules[0].name == '(require("m"))'
    assert module.modules[0] is not cls
    assert cls.name == "module:m"


def test_attach_class_without_description() -> None:
    """Verify classes are attached even without a description."""
    module = Doclet(kind="module", name="m", longname="module:m")
    cls = Doclet(kind="class", name="module:m", longname="module:m")
    attach_module_symbols([cls], [module])
    assert [s.kind for s in module.modules] == ["class"]


def test_undescribed_function_is_not_attached() -> None:
    """Verify a function export without a description is left out."""
    module = Doclet(kind="module", name="m", longname="module:m")
    fn = Doclet(kind="function", name="module:m", longname="module:m")
    attach_module_symbols([fn], [module])
    assert module.modules == []


def test_other_modules_untouched() -> None:
    """Verify modules without a matching export get no attachments."""
    module = Doclet(kind="module", name="other", longname="module:other")
    fn = Doclet(
        kind="function", name="module:m", longname="module:m", description="Run."
    )
    attach_module_symbols([fn], [module])
    assert module.modules == []
