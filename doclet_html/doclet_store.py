"""In-memory doclet collection supporting structural queries and ordering."""

from collections.abc import Callable, Iterable, Iterator
from typing import Any

from doclet_html.doclet import Doclet

# A query is either a predicate or a mapping of field -> condition. A condition
# is a plain value (equality, or membership for list fields), a list of
# accepted values, or a dict operator: {"left": prefix}, {"is_undefined": bool}.
Query = dict[str, Any] | Callable[[Doclet], bool]


def matches(doclet: Doclet, query: Query | None) -> bool:
    """Check whether a doclet satisfies a query."""
    if query is None:
        return True
    if callable(query):
        return bool(query(doclet))
    return all(_matches_condition(doclet.get(k), cond) for k, cond in query.items())


def _matches_condition(value: Any, cond: Any) -> bool:
    if isinstance(cond, dict):
        if "left" in cond:
            return isinstance(value, str) and value.startswith(str(cond["left"]))
        if "is_undefined" in cond:
            return (value is None) == bool(cond["is_undefined"])
        msg = f"Unsupported query operator: {sorted(cond)}"
        raise ValueError(msg)
    if isinstance(cond, list | tuple | set):
        return any(_matches_condition(value, c) for c in cond)
    if isinstance(value, list):
        return cond in value
    return value == cond


def filter_doclets(doclets: Iterable[Doclet], query: Query | None) -> list[Doclet]:
    """Return the doclets matching a query, preserving order."""
    return [d for d in doclets if matches(d, query)]


def parse_order_spec(spec: str) -> list[tuple[str, bool]]:
    """Parse ``"kind, scope desc, name"`` into ``[(field, descending), ...]``."""
    fields = []
    for part in spec.split(","):
        words = part.split()
        if not words:
            continue
        descending = len(words) > 1 and words[1].lower() == "desc"
        fields.append((words[0], descending))
    return fields


def _sort_value(value: Any) -> tuple[int, Any]:
    if value is None:
        return (0, "")
    if isinstance(value, bool):
        return (1, int(value))
    if isinstance(value, int | float):
        return (1, value)
    return (2, str(value))


def order_doclets(doclets: Iterable[Doclet], spec: str) -> list[Doclet]:
    """Stable multi-field sort of doclets by an order spec."""
    result = list(doclets)
    # Sort by the least significant field first; sorted() is stable.
    for name, descending in reversed(parse_order_spec(spec)):
        result.sort(key=lambda d, n=name: _sort_value(d.get(n)), reverse=descending)
    return result


class DocletStore:
    """Holds every doclet of one run in a stable order."""

    def __init__(self, doclets: Iterable[Doclet]) -> None:
        """Initialize the store with the doclets of a run."""
        self.doclets: list[Doclet] = list(doclets)

    def __iter__(self) -> Iterator[Doclet]:
        """Iterate over all doclets in store order."""
        return iter(self.doclets)

    def __len__(self) -> int:
        """Return the number of doclets."""
        return len(self.doclets)

    def find(self, query: Query | None = None) -> list[Doclet]:
        """Return all doclets matching the query."""
        return filter_doclets(self.doclets, query)

    def each(self, fn: Callable[[Doclet], None]) -> None:
        """Call fn on every doclet."""
        for doclet in self.doclets:
            fn(doclet)

    def remove(self, query: Query) -> int:
        """Remove all doclets matching the query and return how many."""
        before = len(self.doclets)
        self.doclets = [d for d in self.doclets if not matches(d, query)]
        return before - len(self.doclets)

    def sort(self, fields: str) -> None:
        """Sort the store in place by a comma separated field spec."""
        self.doclets = order_doclets(self.doclets, fields)

    def prune(self, *, include_private: bool = False) -> None:
        """Drop doclets that should never be published."""
        self.remove({"undocumented": True})
        self.remove({"ignore": True})
        self.remove({"memberof": "<anonymous>"})
        if not include_private:
            self.remove({"access": "private"})

    def add_event_listeners(self) -> None:
        """Record on each event doclet the longnames of doclets listening to it."""
        for event in self.find({"kind": "event"}):
            if not event.longname:
                continue
            listeners = self.find({"listens": event.longname})
            event.listeners = [str(d.longname) for d in listeners if d.longname]
