"""Serialization of navigation trees into nested list markup."""

from markupsafe import escape

from doclet_html.doclet import Doclet
from doclet_html.nav_tree import NavGroup, NavItem

DATA_ATTRIBUTES = ("kind", "access", "async")


def render_menu(
    group: NavGroup, level: int = 0, *, skip_empty_groups: bool = True
) -> str:
    """Render a navigation group as nested ``<ul>`` markup.

    The output depends only on the tree: two spaces of indentation per level,
    children in insertion order. With ``skip_empty_groups`` a group without
    items of its own emits only its descendants, without a heading or list.
    """
    result = "".join(
        _render_item(item, level, skip_empty_groups=skip_empty_groups)
        for item in group.items
    )
    result += "".join(
        render_menu(child, level + 1, skip_empty_groups=skip_empty_groups)
        for child in group.children.values()
    )

    if not result:
        return ""
    if not group.items and skip_empty_groups:
        return result

    html = ""
    if group.heading:
        heading = escape(group.heading)
        if level == 0:
            html += f"{_indent(level, -1)}<h3>\n"
            html += f"{_indent(level)}{heading}\n"
            html += f"{_indent(level, -1)}</h3>\n"
        else:
            html += f"{_indent(level, -1)}<li>\n"
            html += f"{_indent(level)}{heading}\n"
            html += f"{_indent(level, -1)}</li>\n"

    css = f' class="{escape(group.css_class)}"' if group.css_class else ""
    html += f"{_indent(level, -1)}<ul{css}>\n{result}{_indent(level, -1)}</ul>\n"
    return html


def _render_item(item: NavItem, level: int, *, skip_empty_groups: bool) -> str:
    data = _data_attributes(item.doclet) if item.doclet else ""
    html = f"{_indent(level)}<li{data}>\n"
    html += f"{_indent(level, 1)}{item.link}\n"
    for detail in item.details:
        html += render_menu(detail, level + 2, skip_empty_groups=skip_empty_groups)
    html += f"{_indent(level)}</li>\n"
    return html


def _data_attributes(doclet: Doclet) -> str:
    attrs = ""
    for name in DATA_ATTRIBUTES:
        value = doclet.get(name)
        if not value:
            continue
        if value is True:
            value = "true"
        attrs += f' data-{name}="{escape(value)}"'
    return attrs


def _indent(level: int, offset: int = 0) -> str:
    return "  " * (level + offset + 1)
