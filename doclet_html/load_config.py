"""Logic for loading and merging configuration files."""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from doclet_html.config_error import ConfigError
from doclet_html.deep_merge import deep_merge

logger = logging.getLogger(__name__)

DEFAULT_SECTION_ORDER = [
    "Classes",
    "Modules",
    "Externals",
    "Events",
    "Namespaces",
    "Mixins",
    "Tutorials",
    "Interfaces",
]

DEFAULT_CONFIG: dict[str, Any] = {
    "navigation": {
        "group_by_path": False,
        "details": True,
        "details_filter": None,
        "details_order": "kind, scope desc, name",
        "section_order": DEFAULT_SECTION_ORDER,
        "skip_empty_groups": True,
        "use_longname": False,
        "typedefs": False,
        "menu": {},
    },
    "sorting": {
        "enabled": True,
        "fields": None,
    },
    "types": {
        "compact_long_types": False,
        "expand_short_types": False,
    },
    "doclets": {
        "remove_quotes": None,
        "private": False,
    },
    "output": {
        "source_files": True,
        "encoding": "utf-8",
        "static_files": [],
        "site_title": "Documentation",
        "main_page_title": "Main Page",
        "readme": None,
    },
    "templates": {
        "dir": None,
        "layout_file": None,
    },
}


def load_config(*paths: str | None) -> dict[str, Any]:
    """Load configuration from YAML files and merge them over the defaults.

    Files are applied in order, so later ones override earlier ones, except
    for additive lists such as ``static_files``.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    for path in paths:
        if not path:
            continue
        p = Path(path)
        if not p.exists():
            logger.warning("Config file %s not found, skipping it", p)
            continue
        user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        if not isinstance(user_config, dict):
            msg = f"Config file {p} must contain a mapping"
            raise ConfigError(msg)
        config = deep_merge(config, user_config)
    return config
