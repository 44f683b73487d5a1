"""Source file table, path shortening and highlighted source listings."""

import os
from collections.abc import Iterable
from dataclasses import dataclass

from markupsafe import Markup
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.util import ClassNotFound

from doclet_html.doclet import Doclet

# Listing lines get ids "line-1", "line-2", ... for links from symbol pages.
LINE_ANCHOR_PREFIX = "line"


@dataclass
class SourceFile:
    """A source file referenced by at least one doclet."""

    resolved: str
    shortened: str | None = None


def source_path(doclet: Doclet) -> str | None:
    """Return the path of the file a doclet was found in."""
    if not doclet.meta or not doclet.meta.filename:
        return None
    if doclet.meta.path and doclet.meta.path != "null":
        return os.path.join(doclet.meta.path, doclet.meta.filename)
    return doclet.meta.filename


def build_source_table(doclets: Iterable[Doclet]) -> dict[str, SourceFile]:
    """Collect the distinct source files of all doclets, in first-seen order."""
    files: dict[str, SourceFile] = {}
    for doclet in doclets:
        path = source_path(doclet)
        if path and path not in files:
            files[path] = SourceFile(resolved=path)
    return files


def common_prefix(paths: list[str]) -> str:
    """Return the longest common directory of the paths, with a trailing separator."""
    if not paths:
        return ""
    try:
        prefix = os.path.commonpath([os.path.dirname(p) for p in paths])
    except ValueError:
        # Mix of absolute and relative paths, or different drives.
        return ""
    if not prefix:
        return ""
    return prefix.rstrip(os.sep) + os.sep


def shorten_paths(files: dict[str, SourceFile]) -> dict[str, SourceFile]:
    """Set each file's path relative to the common prefix, with forward slashes."""
    prefix = common_prefix(list(files))
    for source in files.values():
        short = source.resolved
        if prefix and short.startswith(prefix):
            short = short[len(prefix) :]
        source.shortened = short.replace("\\", "/")
    return files


def highlight_source(code: str, filename: str) -> Markup:
    """Render source code as highlighted HTML with numbered line anchors."""
    try:
        lexer = get_lexer_for_filename(filename, code)
    except ClassNotFound:
        lexer = TextLexer()
    formatter = HtmlFormatter(
        linenos="inline",
        lineanchors=LINE_ANCHOR_PREFIX,
        anchorlinenos=True,
        cssclass="source",
    )
    return Markup(highlight(code, lexer, formatter))
