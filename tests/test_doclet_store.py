"""Tests for doclet store queries, ordering and pruning."""

import pytest

from doclet_html.doclet import Doclet
from doclet_html.doclet_store import DocletStore, order_doclets, parse_order_spec


def _store() -> DocletStore:
    return DocletStore(
        [
            Doclet(kind="class", name="Foo", longname="Foo"),
            Doclet(kind="function", name="a", longname="Foo#a", memberof="Foo"),
            Doclet(kind="member", name="b", longname="Foo.b", memberof="Foo"),
            Doclet(kind="module", name="util", longname="module:util"),
            Doclet(kind="function", name="go", longname="go", scope="global"),
        ]
    )


def test_find_by_value_and_list() -> None:
    """Verify plain values match by equality and lists by any-of."""
    store = _store()
    assert [d.name for d in store.find({"kind": "class"})] == ["Foo"]
    found = store.find({"kind": ["member", "function"], "memberof": "Foo"})
    assert [d.name for d in found] == ["a", "b"]


def test_find_operators() -> None:
    """Verify the prefix and undefined operators."""
    store = _store()
    assert [d.name for d in store.find({"longname": {"left": "module:"}})] == ["util"]
    top_level = store.find({"memberof": {"is_undefined": True}})
    assert [d.name for d in top_level] == ["Foo", "util", "go"]


def test_find_list_field_membership() -> None:
    """Verify a plain value matches list fields by membership."""
    store = DocletStore(
        [
            Doclet(kind="function", name="on", longname="on", listens=["event:x"]),
            Doclet(kind="function", name="off", longname="off"),
        ]
    )
    assert [d.name for d in store.find({"listens": "event:x"})] == ["on"]


def test_find_with_predicate() -> None:
    """Verify callables are accepted as queries."""
    store = _store()
    assert len(store.find(lambda d: d.name.startswith("g"))) == 1
    assert len(store.find()) == len(store)


def test_each_visits_doclets_in_order() -> None:
    """Verify each calls the function once per doclet in store order."""
    names: list[str] = []
    _store().each(lambda d: names.append(d.name))
    assert names == ["Foo", "a", "b", "util", "go"]


def test_unknown_operator_raises() -> None:
    """Verify an unsupported operator is reported instead of ignored."""
    with pytest.raises(ValueError, match="Unsupported query operator"):
        _store().find({"name": {"like": "F%"}})


def test_parse_order_spec() -> None:
    """Verify field specs parse into (field, descending) pairs."""
    assert parse_order_spec("kind, scope desc, name") == [
        ("kind", False),
        ("scope", True),
        ("name", False),
    ]
    assert parse_order_spec(" , ") == []


def test_order_kind_scope_desc_name() -> None:
    """Verify the default details order: kind, then scope descending, then name."""
    doclets = [
        Doclet(kind="member", name="c", scope="instance"),
        Doclet(kind="function", name="b", scope="instance"),
        Doclet(kind="function", name="z", scope="static"),
        Doclet(kind="function", name="a", scope="instance"),
    ]
    ordered = order_doclets(doclets, "kind, scope desc, name")
    assert [d.name for d in ordered] == ["z", "a", "b", "c"]


def test_sort_is_stable_and_puts_missing_first() -> None:
    """Verify ties keep store order and missing values sort first."""
    store = DocletStore(
        [
            Doclet(kind="class", name="B", longname="B", version="2"),
            Doclet(kind="class", name="A", longname="A", version="1"),
            Doclet(kind="class", name="B", longname="B2"),
        ]
    )
    store.sort("name, version, since")
    assert [d.longname for d in store] == ["A", "B2", "B"]


def test_prune() -> None:
    """Verify undocumented, ignored, anonymous and private doclets are removed."""
    doclets = [
        Doclet(kind="class", name="Keep", longname="Keep"),
        Doclet(kind="function", name="u", longname="u", undocumented=True),
        Doclet(kind="function", name="i", longname="i", ignore=True),
        Doclet(kind="function", name="anon", memberof="<anonymous>"),
        Doclet(kind="function", name="p", longname="p", access="private"),
    ]
    store = DocletStore(doclets)
    store.prune()
    assert [d.name for d in store] == ["Keep"]

    with_private = DocletStore(doclets)
    with_private.prune(include_private=True)
    assert [d.name for d in with_private] == ["Keep", "p"]


def test_add_event_listeners() -> None:
    """Verify events record the longnames of their listeners."""
    store = DocletStore(
        [
            Doclet(kind="event", name="change", longname="Foo#event:change"),
            Doclet(
                kind="function",
                name="onChange",
                longname="Bar#onChange",
                listens=["Foo#event:change"],
            ),
        ]
    )
    store.add_event_listeners()
    event = store.find({"kind": "event"})[0]
    assert event.listeners == ["Bar#onChange"]
