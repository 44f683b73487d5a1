"""Compiling doclets into the navigation tree shown in the sidebar."""

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from markupsafe import Markup

from doclet_html.doclet import Doclet
from doclet_html.doclet_store import DocletStore, filter_doclets, order_doclets
from doclet_html.link_registry import LinkRegistry
from doclet_html.site_config import SiteConfig

NAMESPACE_PREFIX_RE = re.compile(r"\b(module|event):")

LinkFn = Callable[[str, str], Markup]


@dataclass
class NavItem:
    """A link in the navigation, with optional members/methods sublists."""

    link: Markup
    doclet: Doclet | None = None
    details: list["NavGroup"] = field(default_factory=list)


@dataclass
class NavGroup:
    """A heading with nested path groups and its own items."""

    heading: str = ""
    children: dict[str, "NavGroup"] = field(default_factory=dict)
    items: list[NavItem] = field(default_factory=list)
    css_class: str | None = None


def insert_path(root: NavGroup, segments: list[str], item: NavItem) -> NavGroup:
    """Add an item under the group for a path, creating groups on the way.

    Groups are keyed and headed by the path so far (``a/``, ``a/b/``), so
    symbols sharing a prefix share groups. Returns the group holding the item.
    """
    current = root
    slug = ""
    for segment in segments:
        slug += segment + "/"
        if slug not in current.children:
            current.children[slug] = NavGroup(heading=slug)
        current = current.children[slug]
    current.items.append(item)
    return current


def split_path(display_name: str) -> tuple[list[str], str]:
    """Split ``a/b/C`` into ``(["a", "b"], "C")``.

    A name ending in ``/`` has no leaf and is not split.
    """
    head, sep, leaf = display_name.rpartition("/")
    if not sep or not leaf:
        return [], display_name
    if not head:
        return [], leaf
    return head.split("/"), leaf


def display_name_for(doclet: Doclet, *, use_longname: bool) -> str:
    """Return the name a doclet is listed under in the navigation."""
    if use_longname and doclet.longname:
        return NAMESPACE_PREFIX_RE.sub("", doclet.longname)
    return doclet.name


class NavTreeBuilder:
    """Builds one navigation section at a time."""

    def __init__(
        self, store: DocletStore, registry: LinkRegistry, config: SiteConfig
    ) -> None:
        """Initialize the builder with the doclets, links and settings of a run."""
        self.store = store
        self.registry = registry
        self.config = config

    def build(
        self,
        entries: Iterable[Any],
        heading: str,
        seen: set[str],
        link_fn: LinkFn,
    ) -> NavGroup:
        """Build the navigation tree for one section.

        Entries without a longname, such as tutorials, become plain links at the
        root. Longnames already in ``seen`` are skipped and every longname
        listed here is added to it.
        """
        root = NavGroup(heading=heading)
        for entry in entries:
            longname = getattr(entry, "longname", None)
            if not longname:
                insert_path(root, [], NavItem(link=link_fn("", entry.name)))
                continue
            if longname in seen:
                continue

            display = display_name_for(
                entry, use_longname=self.config.use_longname_in_nav
            )
            # The label is the leaf even when the tree is flat.
            segments, label = split_path(display)
            if not self.config.nav_group_by_path:
                segments = []

            item = NavItem(link=link_fn(longname, label), doclet=entry)
            insert_path(root, segments, item)
            if self.config.nav_details:
                item.details = self.member_details(longname)
            seen.add(longname)
        return root

    def member_details(self, longname: str) -> list[NavGroup]:
        """Return the members and methods sublists of a symbol, if any."""
        selection = self.store.find(
            {"kind": ["member", "function"], "memberof": longname}
        )
        selection = filter_doclets(selection, self.config.nav_details_filter)
        selection = order_doclets(selection, self.config.nav_details_order)

        details = []
        for kind, css_class in (("member", "members"), ("function", "methods")):
            picked = [d for d in selection if d.kind == kind]
            if picked:
                items = [
                    NavItem(link=self.registry.linkto(d.longname, d.name), doclet=d)
                    for d in picked
                ]
                details.append(NavGroup(items=items, css_class=css_class))
        return details
