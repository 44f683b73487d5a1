"""Assembling the complete navigation sidebar."""

from markupsafe import Markup

from doclet_html.link_registry import LinkRegistry
from doclet_html.nav_tree import LinkFn, NavTreeBuilder
from doclet_html.render_menu import render_menu
from doclet_html.site_config import SiteConfig
from doclet_html.symbol_groups import SymbolGroups


def build_nav(
    groups: SymbolGroups,
    builder: NavTreeBuilder,
    registry: LinkRegistry,
    config: SiteConfig,
) -> Markup:
    """Build the sidebar HTML: home link, extra menu links, sections, globals."""
    nav = Markup('<h2><a href="{}">Home</a></h2>').format(registry.index_url)
    for label, attrs in config.menu.items():
        attr_html = Markup("").join(
            Markup('{}="{}" ').format(name, value) for name, value in attrs.items()
        )
        nav += Markup("<h2><a {}>{}</a></h2>").format(attr_html, label)

    seen: set[str] = set()
    seen_tutorials: set[str] = set()

    def section(
        entries: list, heading: str, seen_set: set[str], link_fn: LinkFn
    ) -> str:
        tree = builder.build(entries, heading, seen_set, link_fn)
        return render_menu(tree, skip_empty_groups=config.nav_skip_empty_groups)

    def link_external(longname: str, name: str) -> Markup:
        return registry.linkto(longname, name.removeprefix('"').removesuffix('"'))

    def link_tutorial(_longname: str, name: str) -> Markup:
        return registry.tutorial_link(name)

    # Build order fixes which section claims a symbol first; Modules never
    # claims anything.
    sections = {
        "Classes": section(groups.classes, "Classes", seen, registry.linkto),
        "Modules": section(groups.modules, "Modules", set(), registry.linkto),
        "Externals": section(groups.externals, "Externals", seen, link_external),
        "Events": section(groups.events, "Events", seen, registry.linkto),
        "Namespaces": section(groups.namespaces, "Namespaces", seen, registry.linkto),
        "Mixins": section(groups.mixins, "Mixins", seen, registry.linkto),
        "Tutorials": section(
            groups.tutorials, "Tutorials", seen_tutorials, link_tutorial
        ),
        "Interfaces": section(groups.interfaces, "Interfaces", seen, registry.linkto),
    }
    for name in config.nav_section_order:
        nav += Markup(sections[name])

    if groups.globals:
        global_nav = Markup("")
        for doclet in groups.globals:
            listed = config.typedefs or doclet.kind != "typedef"
            if listed and doclet.longname and doclet.longname not in seen:
                link = registry.linkto(doclet.longname, doclet.name)
                global_nav += Markup("<li>{}</li>").format(link)
            if doclet.longname:
                seen.add(doclet.longname)

        if not global_nav:
            # The heading is the only way to reach the global page.
            nav += Markup('<h3><a href="{}">Global</a></h3>').format(
                registry.global_url
            )
        else:
            nav += Markup("<h3>Global</h3><ul>{}</ul>").format(global_nav)

    return nav
