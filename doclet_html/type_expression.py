"""Turning type expressions into HTML with links to documented types.

A type expression is free text such as ``Array.<module:geo/shape~Point>`` or
``string|Foo``. Resolution runs in two passes: ``tokenize_type_expression``
splits the text into identifier and literal spans, then ``link_type_expression``
links the identifiers that name exactly one documented typedef, class or
external and escapes everything else.
"""

import re
from dataclasses import dataclass

from markupsafe import Markup, escape

from doclet_html.doclet import Doclet
from doclet_html.doclet_store import DocletStore
from doclet_html.link_registry import LinkRegistry

TYPE_KINDS = ["typedef", "class", "external"]

TYPE_TOKEN_RE = re.compile(r"(\bmodule:[/\w]+\w[~#.]\w+\b)|(\b\w+\b)")
SHORT_NAME_RE = re.compile(r".*[.~#](\w+)")
EXTERNAL_NAME_RE = re.compile(r"\s*external:(\w+)")


@dataclass(frozen=True)
class TypeToken:
    """A span of a type expression."""

    text: str
    is_identifier: bool


def tokenize_type_expression(text: str) -> list[TypeToken]:
    """Split a type expression into identifier and literal spans.

    Concatenating the token texts always gives back the input.
    """
    tokens: list[TypeToken] = []
    last = 0
    for m in TYPE_TOKEN_RE.finditer(text):
        if m.start() > last:
            tokens.append(TypeToken(text[last : m.start()], is_identifier=False))
        tokens.append(TypeToken(m.group(0), is_identifier=True))
        last = m.end()
    if last < len(text):
        tokens.append(TypeToken(text[last:], is_identifier=False))
    return tokens


def type_short_name(name: str) -> str:
    """Compact a long type name to its last segment."""
    m = SHORT_NAME_RE.match(name)
    if m:
        return m.group(1)
    m = EXTERNAL_NAME_RE.match(name)
    if m:
        return m.group(1)
    return name


class TypeLinker:
    """Links the documented types mentioned in type expressions."""

    def __init__(
        self,
        store: DocletStore,
        registry: LinkRegistry,
        *,
        compact_long_types: bool = False,
        expand_short_types: bool = False,
    ) -> None:
        """Initialize the linker with the doclets and links of the run."""
        self.store = store
        self.registry = registry
        self.compact_long_types = compact_long_types
        self.expand_short_types = expand_short_types
        self._by_name: dict[str, list[Doclet]] = {}
        self._longname_counts: dict[str, int] = {}
        self.reindex()

    def reindex(self) -> None:
        """Rebuild the type lookups after doclets in the store were renamed."""
        self._by_name = {}
        self._longname_counts = {}
        for doclet in self.store.find({"kind": TYPE_KINDS}):
            self._by_name.setdefault(doclet.name, []).append(doclet)
            if doclet.longname:
                count = self._longname_counts.get(doclet.longname, 0)
                self._longname_counts[doclet.longname] = count + 1

    def long_name_for(self, name: str) -> str:
        """Expand a short type name if exactly one type carries it."""
        found = self._by_name.get(name, [])
        if len(found) == 1 and found[0].longname:
            return found[0].longname
        return name

    def type_exists(self, longname: str) -> bool:
        """Check that exactly one typedef, class or external has the longname."""
        return self._longname_counts.get(longname, 0) == 1

    def format_type(self, name: str) -> Markup:
        """Escape a type name for display, compacting it if configured."""
        if self.compact_long_types:
            return escape(type_short_name(name))
        return escape(name)

    def link_token(self, token: str) -> Markup | None:
        """Return link markup for an identifier, or None if it is not a type."""
        longname = self.long_name_for(token) if self.expand_short_types else token
        if not self.type_exists(longname):
            return None
        return self.registry.linkto(longname, self.format_type(longname))

    def link_type_expression(self, text: str) -> Markup:
        """Render a type expression as HTML with links to documented types."""
        parts: list[str] = []
        for token in tokenize_type_expression(text):
            link = self.link_token(token.text) if token.is_identifier else None
            parts.append(link if link is not None else escape(token.text))
        return Markup("").join(parts)
