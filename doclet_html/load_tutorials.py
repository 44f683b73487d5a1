"""Logic for loading a directory of tutorials into a tutorial tree."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from doclet_html.tutorial import Tutorial

logger = logging.getLogger(__name__)

CONTENT_TYPES = {".md": "md", ".markdown": "md", ".html": "html", ".htm": "html"}
STRUCTURE_FILES = ("tutorials.json", "tutorials.yml", "tutorials.yaml")


def load_tutorials(directory: Path | None) -> Tutorial:
    """Load tutorials from a directory; the returned root has no content.

    Titles and nesting come from an optional ``tutorials.json`` (or ``.yml``)
    mapping each tutorial name to ``{"title": ..., "children": [...]}``.
    Children may also be given as a nested mapping of the same shape.
    """
    root = Tutorial(name="", title="")
    if directory is None:
        return root
    if not directory.is_dir():
        logger.warning("Tutorials directory %s does not exist", directory)
        return root

    by_name: dict[str, Tutorial] = {}
    for path in sorted(directory.iterdir()):
        content_type = CONTENT_TYPES.get(path.suffix.lower())
        if content_type and path.is_file():
            by_name[path.stem] = Tutorial(
                name=path.stem,
                title=path.stem,
                content=path.read_text(encoding="utf-8"),
                content_type=content_type,
            )

    nested: set[str] = set()
    _apply_structure(_load_structure(directory), by_name, nested)
    root.children = [t for name, t in by_name.items() if name not in nested]
    return root


def _load_structure(directory: Path) -> dict[str, Any]:
    for name in STRUCTURE_FILES:
        path = directory / name
        if not path.exists():
            continue
        text = path.read_text(encoding="utf-8")
        data = json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
        if isinstance(data, dict):
            return data
        logger.warning("Ignoring %s: expected a mapping of tutorial names", path)
    return {}


def _apply_structure(
    structure: dict[str, Any], by_name: dict[str, Tutorial], nested: set[str]
) -> None:
    for name, conf in structure.items():
        tutorial = by_name.get(name)
        if tutorial is None:
            logger.warning("Tutorial structure names unknown tutorial %s", name)
            continue
        if not isinstance(conf, dict):
            continue
        if conf.get("title"):
            tutorial.title = str(conf["title"])

        children = conf.get("children") or []
        if isinstance(children, dict):
            _apply_structure(children, by_name, nested)
            children = list(children)
        for child_name in children:
            child = by_name.get(str(child_name))
            if child is None:
                logger.warning("Tutorial %s lists unknown child %s", name, child_name)
                continue
            # A tutorial has at most one parent.
            if child.name in nested or child is tutorial:
                continue
            tutorial.children.append(child)
            nested.add(child.name)
