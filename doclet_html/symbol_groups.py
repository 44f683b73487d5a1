"""Partitioning of the doclet collection into navigation buckets."""

from dataclasses import dataclass, field
from typing import Any

from doclet_html.doclet import Doclet, is_module_exports
from doclet_html.doclet_store import DocletStore


@dataclass
class SymbolGroups:
    """Doclets grouped by the kind of page or section they belong to."""

    classes: list[Doclet] = field(default_factory=list)
    modules: list[Doclet] = field(default_factory=list)
    namespaces: list[Doclet] = field(default_factory=list)
    mixins: list[Doclet] = field(default_factory=list)
    externals: list[Doclet] = field(default_factory=list)
    interfaces: list[Doclet] = field(default_factory=list)
    events: list[Doclet] = field(default_factory=list)
    globals: list[Doclet] = field(default_factory=list)
    tutorials: list[Any] = field(default_factory=list)


def group_symbols(store: DocletStore) -> SymbolGroups:
    """Partition the store by kind, keeping the store's order."""
    externals = store.find({"kind": "external"})
    # Quoted names like `@external "jquery.fn"` keep dots out of the hierarchy.
    for doclet in externals:
        doclet.name = doclet.name.removeprefix('"').removesuffix('"')

    globals_ = store.find(
        {
            "kind": ["member", "function", "constant", "typedef"],
            "memberof": {"is_undefined": True},
        }
    )
    return SymbolGroups(
        classes=store.find({"kind": "class"}),
        modules=store.find({"kind": "module"}),
        namespaces=store.find({"kind": "namespace"}),
        mixins=store.find({"kind": "mixin"}),
        externals=externals,
        interfaces=store.find({"kind": "interface"}),
        events=store.find({"kind": "event"}),
        # `module.exports = function () {}` is a module, not a global.
        globals=[d for d in globals_ if not is_module_exports(d)],
    )
