"""Allocation of output filenames and the longname -> URL link map."""

import logging
import re
from typing import TYPE_CHECKING
from urllib.parse import quote

from markupsafe import Markup, escape

from doclet_html.doclet import Doclet, is_module_exports

if TYPE_CHECKING:
    from doclet_html.tutorial import Tutorial

logger = logging.getLogger(__name__)

FILE_EXTENSION = ".html"
# Sentinel keys for the reserved pages; "index" and "global" are valid longnames.
INDEX_KEY = "<home>"
GLOBAL_KEY = "<global>"

CONTAINER_KINDS = frozenset(
    {"class", "module", "external", "namespace", "mixin", "interface"}
)
NAMESPACE_KINDS = ("module", "event", "external")
SCOPE_PUNC = {"inner": "~", "instance": "#", "static": "."}

NAMESPACE_PREFIX_RE = re.compile(r"^(" + "|".join(NAMESPACE_KINDS) + r"):")
UNSAFE_CHARS_RE = re.compile(r"[\\/?*:|'\"<>]")
VARIATION_RE = re.compile(r"\([\s\S]*\)$")
CONTAINER_PREFIX_RE = re.compile(r"(\S+?):")
URL_PREFIX_RE = re.compile(r"^(?:(?:http|ftp)s?://|file:|mailto:)")
URL_SAFE = ":/#?&=@~!$'()*+,;%"


def safe_basename(name: str) -> str:
    """Turn a symbol name into a filesystem-safe file basename."""
    basename = NAMESPACE_PREFIX_RE.sub(r"\1-", name)
    basename = UNSAFE_CHARS_RE.sub("_", basename)
    basename = basename.replace("~", "-").replace("#", "_")
    basename = VARIATION_RE.sub("", basename)
    basename = re.sub(r"^[.\-]", "", basename)
    return basename or "_"


def has_url_prefix(text: str) -> bool:
    """Check if the text is an absolute http(s), ftp(s), file or mailto URL."""
    return bool(URL_PREFIX_RE.match(text))


class LinkRegistry:
    """Owns every output filename and symbol URL of one generation pass."""

    def __init__(self) -> None:
        """Initialize the registry and reserve the home and global pages."""
        self.longname_to_url: dict[str, str] = {}
        self.longname_to_id: dict[str, str] = {}
        self._files: dict[str, str] = {}  # lowercased filename -> owning key
        self._filename_by_key: dict[str, str] = {}
        self._ids: dict[str, set[str]] = {}  # filename -> lowercased ids
        self._tutorials: dict[str, Tutorial] = {}
        self._tutorial_urls: dict[str, str] = {}

        self.index_url = self.allocate_filename("index", key=INDEX_KEY)
        self.global_url = self.allocate_filename("global", key=GLOBAL_KEY)

    def allocate_filename(self, candidate: str, key: str | None = None) -> str:
        """Return a unique filename for a key, allocating one on first use.

        Filenames are unique case-insensitively. A collision with a filename
        owned by another key gets a numeric suffix: ``Foo.html``,
        ``foo_1.html``, ``FOO_2.html``.
        """
        key = candidate if key is None else key
        if key in self._filename_by_key:
            return self._filename_by_key[key]

        basename = safe_basename(candidate)
        # Leading underscores are reserved for suffixes and hidden files.
        if basename.startswith("_"):
            basename = "-" + basename

        filename = basename
        suffix = 0
        while filename.lower() in self._files:
            suffix += 1
            filename = f"{basename}_{suffix}"

        self._files[filename.lower()] = key
        full = filename + FILE_EXTENSION
        self._filename_by_key[key] = full
        return full

    def register_link(self, longname: str, url: str) -> bool:
        """Record the URL of a longname. Conflicting re-registration is refused."""
        existing = self.longname_to_url.get(longname)
        if existing is None:
            self.longname_to_url[longname] = url
            return True
        if existing == url:
            return True
        logger.error(
            "Conflicting link for %s: keeping %s, ignoring %s", longname, existing, url
        )
        return False

    def resolve(self, longname: str | None) -> str | None:
        """Return the URL of a documented longname, or None."""
        if longname is None:
            return None
        return self.longname_to_url.get(longname)

    def filename_for(self, longname: str) -> str:
        """Return the file a longname lives in, allocating and registering it."""
        url = self.longname_to_url.get(longname)
        if url is None:
            url = self.allocate_filename(longname)
            self.register_link(longname, url)
        return url

    def create_link(self, doclet: Doclet) -> str:
        """Compute the URL a doclet should be published at."""
        longname = doclet.longname or doclet.name
        fragment = ""

        fake_container = None
        if doclet.kind not in CONTAINER_KINDS:
            match = CONTAINER_PREFIX_RE.match(longname)
            if match and match.group(1) in CONTAINER_KINDS:
                fake_container = match.group(1)

        if doclet.kind in CONTAINER_KINDS or is_module_exports(doclet):
            filename = self.filename_for(longname)
        elif fake_container:
            # Mistagged doclet, e.g. a module whose kind says "member".
            filename = self.filename_for(doclet.memberof or longname)
            if doclet.name != longname:
                fragment = self._get_id(
                    filename, longname, _format_name_for_link(doclet)
                )
        else:
            if doclet.memberof:
                filename = self.filename_for(doclet.memberof)
            else:
                filename = self.global_url
            if doclet.name != longname or doclet.scope == "global":
                fragment = self._get_id(
                    filename, longname, _format_name_for_link(doclet)
                )

        return filename + (f"#{fragment}" if fragment else "")

    def _get_id(self, filename: str, longname: str, candidate: str) -> str:
        if longname in self.longname_to_id:
            return self.longname_to_id[longname]
        if not candidate:
            return ""
        # HTML5 ids cannot contain whitespace.
        fragment = re.sub(r"\s", "", candidate)
        used = self._ids.setdefault(filename, set())
        base = fragment
        suffix = 0
        while fragment.lower() in used:
            suffix += 1
            fragment = f"{base}_{suffix}"
        used.add(fragment.lower())
        self.longname_to_id[longname] = fragment
        return fragment

    def linkto(
        self,
        longname: str | None,
        text: str | None = None,
        css_class: str | None = None,
        fragment_id: str | None = None,
    ) -> Markup:
        """Render a link to a longname, or its escaped text when unknown."""
        class_attr = Markup(' class="{}"').format(css_class) if css_class else ""
        fragment = f"#{fragment_id}" if fragment_id else ""
        stripped = (longname or "").strip("<>")

        if has_url_prefix(stripped):
            return Markup('<a href="{}"{}>{}</a>').format(
                stripped + fragment, class_attr, text or stripped
            )

        label = text if text else (longname or "")
        url = self.resolve(longname)
        if not url:
            return escape(label)
        return Markup('<a href="{}"{}>{}</a>').format(
            quote(url + fragment, safe=URL_SAFE), class_attr, label
        )

    def register_tutorials(self, root: "Tutorial") -> None:
        """Make every tutorial in the tree linkable by name."""
        stack = list(root.children)
        while stack:
            node = stack.pop()
            self._tutorials[node.name] = node
            stack.extend(node.children)

    def tutorial_to_url(self, name: str) -> str:
        """Return the output filename of a tutorial."""
        if name not in self._tutorial_urls:
            self._tutorial_urls[name] = self.allocate_filename(
                f"tutorial-{name}", key=f"<tutorial>{name}"
            )
        return self._tutorial_urls[name]

    def tutorial_link(self, name: str, content: str | None = None) -> Markup:
        """Link to a tutorial by name; unknown tutorials render disabled."""
        node = self._tutorials.get(name)
        if node is None:
            return Markup('<em class="disabled">Tutorial: {}</em>').format(name)
        return Markup('<a href="{}">{}</a>').format(
            self.tutorial_to_url(name), content or node.title
        )


def fragment_of(url: str) -> str | None:
    """Return the fragment after ``#`` in a URL, if any."""
    if "#" not in url:
        return None
    return url.rsplit("#", 1)[1]


def _format_name_for_link(doclet: Doclet) -> str:
    prefix = f"{doclet.kind}:" if doclet.kind in NAMESPACE_KINDS else ""
    name = prefix + (doclet.name or "") + (doclet.variation or "")
    punc = SCOPE_PUNC.get(doclet.scope or "", "")
    # "#" already marks the fragment; avoid URLs like foo.html##bar.
    if punc != "#":
        name = punc + name
    return name
