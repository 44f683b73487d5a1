"""Orchestration logic for turning a doclet store into an HTML site."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from markupsafe import Markup

from doclet_html.attach_module_symbols import attach_module_symbols
from doclet_html.build_nav import build_nav
from doclet_html.doclet import Doclet, Example
from doclet_html.doclet_store import DocletStore
from doclet_html.inline_links import resolve_links
from doclet_html.link_registry import SCOPE_PUNC, LinkRegistry, fragment_of
from doclet_html.nav_tree import NavTreeBuilder
from doclet_html.signatures import (
    add_attribs,
    add_signature_params,
    add_signature_returns,
    add_signature_types,
    needs_signature,
)
from doclet_html.site_config import SiteConfig
from doclet_html.site_writer import (
    BUILTIN_STATIC,
    copy_static_files,
    write_page,
    write_source_css,
)
from doclet_html.source_files import (
    SourceFile,
    build_source_table,
    highlight_source,
    shorten_paths,
    source_path,
)
from doclet_html.symbol_groups import SymbolGroups, group_symbols
from doclet_html.template_renderer import TemplateRenderer
from doclet_html.tutorial import Tutorial
from doclet_html.type_expression import TypeLinker

logger = logging.getLogger(__name__)

CAPTION_RE = re.compile(
    r"^\s*<caption>([\s\S]+?)</caption>(\s*[\n\r])([\s\S]+)$", re.IGNORECASE
)
TRIM_QUOTES_RE = re.compile(r"""^(["'])(.*)\1$""", re.DOTALL)

# Container page types in the order they are checked per registered longname.
PAGE_TYPES = (
    ("Module", "modules"),
    ("Class", "classes"),
    ("Namespace", "namespaces"),
    ("Mixin", "mixins"),
    ("External", "externals"),
    ("Interface", "interfaces"),
)


@dataclass
class PublishResult:
    """Pages written by a run, and the ones that could not be written."""

    out_dir: Path
    written: list[Path] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def remove_quotes(text: str, mode: str | None) -> str:
    """Strip quotes from a name: every quote (``all``) or one enclosing pair."""
    if mode == "all":
        return text.replace('"', "").replace("'", "")
    if mode == "trim":
        return TRIM_QUOTES_RE.sub(r"\2", text)
    return text


def split_example(example: str) -> Example:
    """Split a leading ``<caption>...</caption>`` off an example."""
    m = CAPTION_RE.match(example)
    if m:
        return Example(code=m.group(3), caption=m.group(1))
    return Example(code=example)


def hash_to_link(registry: LinkRegistry, doclet: Doclet, see: str) -> str:
    """Turn a ``#member`` reference into a link on the doclet's own page."""
    if not see.startswith("#") or len(see) < 2:
        return see
    url = registry.create_link(doclet).split("#", 1)[0] + see
    return Markup('<a href="{}">{}</a>').format(url, see)


def ancestor_links(
    by_longname: dict[str, Doclet], registry: LinkRegistry, doclet: Doclet
) -> list[Markup]:
    """Return breadcrumb links for the containers of a doclet, outermost first."""
    chain: list[Doclet] = []
    seen: set[str] = set()
    parent = doclet.memberof
    while parent and parent not in seen:
        seen.add(parent)
        ancestor = by_longname.get(parent)
        if ancestor is None:
            break
        chain.append(ancestor)
        parent = ancestor.memberof

    links = [
        registry.linkto(a.longname, SCOPE_PUNC.get(a.scope or "", "") + a.name)
        for a in reversed(chain)
    ]
    if links:
        links[-1] += SCOPE_PUNC.get(doclet.scope or "", "")
    return links


class SitePublisher:
    """Runs one generation pass over a doclet store."""

    def __init__(
        self,
        store: DocletStore,
        tutorials: Tutorial,
        config: SiteConfig,
        out_dir: Path,
        renderer: TemplateRenderer | None = None,
        readme_html: str | None = None,
    ) -> None:
        """Initialize the pass; the link registry starts out empty."""
        self.store = store
        self.tutorials = tutorials
        self.config = config
        self.registry = LinkRegistry()
        self.renderer = renderer or TemplateRenderer(
            config.templates_dir, config.layout_file
        )
        self.readme_html = readme_html
        self.linker = TypeLinker(
            store,
            self.registry,
            compact_long_types=config.compact_long_types,
            expand_short_types=config.expand_short_types,
        )
        self.result = PublishResult(out_dir=out_dir)

    def run(self) -> PublishResult:
        """Execute the full publishing pipeline."""
        self.store.prune(include_private=self.config.private)
        if self.config.sort:
            self.store.sort(self.config.effective_sort_fields)
        self.store.add_event_listeners()

        self._normalize()
        self.linker.reindex()
        source_files = build_source_table(self.store)

        out_root = self._output_root()
        out_root.mkdir(parents=True, exist_ok=True)
        self.result.out_dir = out_root
        self._copy_static(out_root)

        if source_files:
            shorten_paths(source_files)
        self._register_links(source_files)
        self._add_signatures()

        groups = group_symbols(self.store)
        # Grouping strips quotes from external names.
        self.linker.reindex()
        groups.tutorials = self.tutorials.children
        self.registry.register_tutorials(self.tutorials)

        builder = NavTreeBuilder(self.store, self.registry, self.config)
        nav = build_nav(groups, builder, self.registry, self.config)
        attach_module_symbols(
            self.store.find(
                {"kind": ["class", "function"], "longname": {"left": "module:"}}
            ),
            groups.modules,
        )
        self.renderer.add_globals(
            linkto=self.registry.linkto,
            link_to_type=self.linker.link_type_expression,
            tutorial_link=self.registry.tutorial_link,
            find=self.store.find,
            nav=nav,
            output_source_files=self.config.output_source_files,
            site_title=self.config.site_title,
        )

        # Source listings first, so symbol pages can link to their lines.
        if self.config.output_source_files:
            self._generate_source_files(source_files)
        if groups.globals:
            global_docs = [{"kind": "globalobj"}]
            self._generate("", "Global", global_docs, self.registry.global_url)
        self._generate_home()
        self._generate_containers(groups)
        self._generate_tutorials(self.tutorials)

        print(f"Generated {len(self.result.written)} HTML pages into: {out_root}")
        return self.result

    def _normalize(self) -> None:
        mode = self.config.remove_quotes
        if mode:
            for doclet in self.store:
                doclet.name = remove_quotes(doclet.name, mode)
                if doclet.longname:
                    doclet.longname = remove_quotes(doclet.longname, mode)

        for doclet in self.store:
            doclet.attribs = Markup("")
            doclet.examples = [
                e if isinstance(e, Example) else split_example(str(e))
                for e in doclet.examples
            ]
            doclet.see = [hash_to_link(self.registry, doclet, s) for s in doclet.see]

    def _output_root(self) -> Path:
        out_root = self.result.out_dir
        packages = self.store.find({"kind": "package"})
        if packages and packages[0].name:
            out_root = out_root / packages[0].name / (packages[0].version or "")
        return out_root

    def _copy_static(self, out_root: Path) -> None:
        copy_static_files(BUILTIN_STATIC, out_root)
        write_source_css(out_root)
        for extra in self.config.static_files:
            copy_static_files(Path(extra), out_root)

    def _register_links(self, source_files: dict[str, SourceFile]) -> None:
        for doclet in self.store:
            # A file's name links to its source listing instead.
            if doclet.kind != "file":
                longname = doclet.longname or doclet.name
                url = self.registry.create_link(doclet)
                self.registry.register_link(longname, url)

            path = source_path(doclet)
            if doclet.meta and path in source_files:
                shortened = source_files[path].shortened
                if shortened:
                    doclet.meta.shortpath = shortened

    def _add_signatures(self) -> None:
        for doclet in self.store:
            url = self.registry.resolve(doclet.longname or doclet.name) or ""
            doclet.id = fragment_of(url) or doclet.name
            if needs_signature(doclet):
                add_signature_params(doclet)
                add_signature_returns(doclet, self.linker)
                add_attribs(doclet)

        # Ancestors need every URL registered first.
        by_longname = {d.longname: d for d in self.store if d.longname}
        for doclet in self.store:
            doclet.ancestors = ancestor_links(by_longname, self.registry, doclet)
            if doclet.kind in {"member", "constant"}:
                add_signature_types(doclet, self.linker)
                add_attribs(doclet)
            if doclet.kind == "constant":
                doclet.kind = "member"

    def _write(self, filename: str, html: str) -> None:
        try:
            out_file = write_page(self.result.out_dir, filename, html)
        except OSError:
            logger.exception("Failed to write page %s", filename)
            self.result.failed.append(filename)
            return
        self.result.written.append(out_file)

    def _generate(
        self,
        page_type: str,
        title: str,
        docs: list[Any],
        filename: str,
    ) -> None:
        html = self.renderer.render(
            "container.html", {"type": page_type, "title": title, "docs": docs}
        )
        self._write(filename, resolve_links(html, self.registry))

    def _generate_source_files(self, source_files: dict[str, SourceFile]) -> None:
        print(f"Writing {len(source_files)} source listings...")
        for source in source_files.values():
            shortened = source.shortened or source.resolved
            try:
                code = Path(source.resolved).read_text(encoding=self.config.encoding)
            except (OSError, UnicodeDecodeError) as e:
                logger.error(
                    "Error while generating source file %s: %s", source.resolved, e
                )
                continue

            # Doclets link to their file through its shortened path.
            outfile = self.registry.allocate_filename(
                shortened, key=f"<source>{shortened}"
            )
            self.registry.register_link(shortened, outfile)
            html = self.renderer.render(
                "source.html",
                {
                    "type": "Source",
                    "title": shortened,
                    "code": highlight_source(code, shortened),
                },
            )
            self._write(outfile, html)

    def _generate_home(self) -> None:
        mainpage = {
            "kind": "mainpage",
            "readme": self.readme_html,
            "longname": self.config.main_page_title,
        }
        docs = [
            *self.store.find({"kind": "package"}),
            mainpage,
            *self.store.find({"kind": "file"}),
        ]
        self._generate("", "Home", docs, self.registry.index_url)

    def _generate_containers(self, groups: SymbolGroups) -> None:
        for longname, url in list(self.registry.longname_to_url.items()):
            for page_type, attr in PAGE_TYPES:
                docs = [d for d in getattr(groups, attr) if d.longname == longname]
                if docs:
                    self._generate(page_type, docs[0].name, docs, url)

    def _generate_tutorials(self, node: Tutorial) -> None:
        # A tutorial has at most one parent, so this cannot loop.
        for child in node.children:
            html = self.renderer.render(
                "tutorial.html",
                {
                    "title": f"Tutorial: {child.title}",
                    "header": child.title,
                    "content": child.parse(),
                    "children": child.children,
                },
            )
            # Tutorials may use {@link} too.
            html = resolve_links(html, self.registry)
            self._write(self.registry.tutorial_to_url(child.name), html)
            self._generate_tutorials(child)


def publish(
    store: DocletStore,
    tutorials: Tutorial,
    config: SiteConfig,
    out_dir: Path,
    renderer: TemplateRenderer | None = None,
    readme_html: str | None = None,
) -> PublishResult:
    """Generate the documentation site for a doclet store into out_dir."""
    return SitePublisher(
        store, tutorials, config, out_dir, renderer=renderer, readme_html=readme_html
    ).run()
