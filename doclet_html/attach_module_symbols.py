"""Logic for attaching directly exported classes and functions to modules."""

import copy
from collections.abc import Iterable

from doclet_html.doclet import Doclet


def attach_module_symbols(
    candidates: Iterable[Doclet], modules: Iterable[Doclet]
) -> list[Doclet]:
    """Attach copies of same-longname classes and functions to their modules.

    A class or function sharing its longname with a module is what the module
    exports. Each module gets copies in ``modules``, renamed to read like
    ``(require("foo"))``. Functions without a description are left out; classes
    always show, for their constructor signature. The candidates themselves
    are not modified.
    """
    by_longname: dict[str, list[Doclet]] = {}
    for symbol in candidates:
        if symbol.longname:
            by_longname.setdefault(symbol.longname, []).append(symbol)

    modules = list(modules)
    for module in modules:
        symbols = by_longname.get(module.longname or "")
        if not symbols:
            continue
        module.modules = [
            _export_copy(s) for s in symbols if s.description or s.kind == "class"
        ]
    return modules


def _export_copy(symbol: Doclet) -> Doclet:
    exported = copy.deepcopy(symbol)
    if exported.kind in {"class", "function"}:
        exported.name = exported.name.replace("module:", '(require("', 1) + '"))'
    return exported
