"""Logic for resolving ``{@link}`` and ``{@tutorial}`` inline tags in HTML."""

import re

from markupsafe import Markup

from doclet_html.link_registry import LinkRegistry

INLINE_TAG_RE = re.compile(
    r"(?:\[([^\]]+)\])?\{@(link|linkcode|linkplain|tutorial)\s+([^}]+?)\s*\}"
)


def split_link_text(text: str) -> tuple[str, str]:
    """Split ``target|text`` or ``target text`` into target and link text."""
    if "|" in text:
        target, _, label = text.partition("|")
        return target.strip(), label.strip()
    parts = text.split(None, 1)
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()


def resolve_links(html: str, registry: LinkRegistry) -> str:
    """Replace inline link tags with anchors to their targets."""

    def repl(m: re.Match) -> str:
        caption, tag, content = m.group(1), m.group(2), m.group(3)
        if tag == "tutorial":
            return str(registry.tutorial_link(content.strip(), caption))

        target, label = split_link_text(content)
        label = caption or label or target
        # Text inside the page is already HTML.
        text = Markup(label)
        if tag == "linkcode":
            text = Markup("<code>{}</code>").format(text)
        return str(registry.linkto(target, text))

    return INLINE_TAG_RE.sub(repl, html)
