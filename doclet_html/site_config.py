"""Validated, flat configuration of one site generation run."""

from dataclasses import dataclass, field
from typing import Any

from doclet_html.config_error import ConfigError
from doclet_html.doclet_store import parse_order_spec
from doclet_html.load_config import DEFAULT_SECTION_ORDER

REMOVE_QUOTES_MODES = (None, "all", "trim")


@dataclass(frozen=True)
class SiteConfig:
    """Settings read by the publisher and its components."""

    nav_group_by_path: bool = False
    nav_details: bool = True
    nav_details_filter: dict[str, Any] | None = None
    nav_details_order: str = "kind, scope desc, name"
    nav_section_order: tuple[str, ...] = tuple(DEFAULT_SECTION_ORDER)
    nav_skip_empty_groups: bool = True
    use_longname_in_nav: bool = False
    typedefs: bool = False
    menu: dict[str, dict[str, str]] = field(default_factory=dict)
    sort: bool = True
    sort_fields: str | None = None
    compact_long_types: bool = False
    expand_short_types: bool = False
    remove_quotes: str | None = None
    private: bool = False
    output_source_files: bool = True
    encoding: str = "utf-8"
    static_files: tuple[str, ...] = ()
    site_title: str = "Documentation"
    main_page_title: str = "Main Page"
    readme: str | None = None
    templates_dir: str | None = None
    layout_file: str | None = None

    @property
    def effective_sort_fields(self) -> str:
        """Return the sort spec, defaulting on how names are shown in the nav."""
        if self.sort_fields:
            return self.sort_fields
        if self.use_longname_in_nav:
            return "longname, version, since"
        return "name, version, since"

    @classmethod
    def from_mapping(cls, config: dict[str, Any]) -> "SiteConfig":
        """Build and validate a SiteConfig from the merged YAML mapping."""
        nav = _section(config, "navigation")
        sorting = _section(config, "sorting")
        types = _section(config, "types")
        doclets = _section(config, "doclets")
        output = _section(config, "output")
        templates = _section(config, "templates")

        section_order = tuple(
            _list(nav, "section_order", "navigation", DEFAULT_SECTION_ORDER)
        )
        unknown = [s for s in section_order if s not in DEFAULT_SECTION_ORDER]
        if unknown:
            msg = f"navigation.section_order has unknown sections: {unknown}"
            raise ConfigError(msg)

        details_order = _str(nav, "details_order", "navigation") or ""
        if not parse_order_spec(details_order):
            msg = "navigation.details_order must name at least one field"
            raise ConfigError(msg)

        details_filter = nav.get("details_filter")
        if details_filter is not None and not isinstance(details_filter, dict):
            msg = "navigation.details_filter must be a mapping"
            raise ConfigError(msg)

        menu = nav.get("menu") or {}
        if not isinstance(menu, dict) or not all(
            isinstance(v, dict) for v in menu.values()
        ):
            msg = "navigation.menu must map labels to attribute mappings"
            raise ConfigError(msg)

        remove_quotes = doclets.get("remove_quotes")
        if remove_quotes not in REMOVE_QUOTES_MODES:
            msg = f"doclets.remove_quotes must be one of {REMOVE_QUOTES_MODES}"
            raise ConfigError(msg)

        return cls(
            nav_group_by_path=_bool(nav, "group_by_path", "navigation"),
            nav_details=_bool(nav, "details", "navigation", default=True),
            nav_details_filter=details_filter,
            nav_details_order=details_order,
            nav_section_order=section_order,
            nav_skip_empty_groups=_bool(
                nav, "skip_empty_groups", "navigation", default=True
            ),
            use_longname_in_nav=_bool(nav, "use_longname", "navigation"),
            typedefs=_bool(nav, "typedefs", "navigation"),
            menu={
                str(label): {str(a): str(v) for a, v in attrs.items()}
                for label, attrs in menu.items()
            },
            sort=_bool(sorting, "enabled", "sorting", default=True),
            sort_fields=_str(sorting, "fields", "sorting"),
            compact_long_types=_bool(types, "compact_long_types", "types"),
            expand_short_types=_bool(types, "expand_short_types", "types"),
            remove_quotes=remove_quotes,
            private=_bool(doclets, "private", "doclets"),
            output_source_files=_bool(output, "source_files", "output", default=True),
            encoding=_str(output, "encoding", "output") or "utf-8",
            static_files=tuple(_list(output, "static_files", "output", [])),
            site_title=_str(output, "site_title", "output") or "Documentation",
            main_page_title=_str(output, "main_page_title", "output") or "Main Page",
            readme=_str(output, "readme", "output"),
            templates_dir=_str(templates, "dir", "templates"),
            layout_file=_str(templates, "layout_file", "templates"),
        )


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    value = config.get(name) or {}
    if not isinstance(value, dict):
        msg = f"Config section '{name}' must be a mapping"
        raise ConfigError(msg)
    return value


def _bool(
    section: dict[str, Any], key: str, where: str, *, default: bool = False
) -> bool:
    value = section.get(key, default)
    if value is None:
        return default
    if not isinstance(value, bool):
        msg = f"{where}.{key} must be true or false, got {value!r}"
        raise ConfigError(msg)
    return value


def _str(section: dict[str, Any], key: str, where: str) -> str | None:
    value = section.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        msg = f"{where}.{key} must be a string, got {value!r}"
        raise ConfigError(msg)
    return value


def _list(
    section: dict[str, Any], key: str, where: str, default: list[str]
) -> list[str]:
    value = section.get(key)
    if value is None:
        return list(default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        msg = f"{where}.{key} must be a list of strings"
        raise ConfigError(msg)
    return value
