"""Logic for loading a JSDoc doclet dump into Doclet records."""

import json
from pathlib import Path
from typing import Any

import yaml

from doclet_html.doclet import Doclet, DocletType, Meta, Param


def load_doclets(path: Path) -> list[Doclet]:
    """Load the output of ``jsdoc -X`` (JSON, or the same list as YAML)."""
    if not path.exists():
        msg = f"Doclet dump not found: {path}"
        raise SystemExit(msg)

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yml", ".yaml"}:
        raw = yaml.safe_load(text)
    else:
        raw = json.loads(text)

    if not isinstance(raw, list):
        msg = f"Expected a list of doclets in {path}, got {type(raw).__name__}"
        raise SystemExit(msg)
    return [doclet_from_mapping(d) for d in raw if isinstance(d, dict)]


def doclet_from_mapping(data: dict[str, Any]) -> Doclet:
    """Convert one raw doclet mapping into a Doclet."""
    return Doclet(
        kind=str(data.get("kind") or ""),
        name=str(data.get("name") or ""),
        longname=_opt_str(data.get("longname")),
        memberof=_opt_str(data.get("memberof")),
        scope=_opt_str(data.get("scope")),
        type=_type(data.get("type")),
        params=[_param(p) for p in data.get("params") or [] if isinstance(p, dict)],
        returns=[_param(p) for p in data.get("returns") or [] if isinstance(p, dict)],
        properties=[
            _param(p) for p in data.get("properties") or [] if isinstance(p, dict)
        ],
        description=str(data.get("description") or ""),
        classdesc=str(data.get("classdesc") or ""),
        meta=_meta(data.get("meta")),
        examples=[str(e) for e in data.get("examples") or []],
        see=[str(s) for s in data.get("see") or []],
        access=_opt_str(data.get("access")),
        is_async=bool(data.get("async")),
        generator=bool(data.get("generator")),
        virtual=bool(data.get("virtual")),
        readonly=bool(data.get("readonly")),
        nullable=data.get("nullable"),
        variation=_opt_str(data.get("variation")),
        hideconstructor=bool(data.get("hideconstructor")),
        undocumented=bool(data.get("undocumented")),
        ignore=bool(data.get("ignore")),
        listens=[str(x) for x in data.get("listens") or []],
        fires=[str(x) for x in data.get("fires") or []],
        version=_opt_str(data.get("version")),
        since=_opt_str(data.get("since")),
        deprecated=data.get("deprecated"),
        author=[str(a) for a in data.get("author") or []],
        readme=str(data.get("readme") or ""),
        raw=data,
    )


def _opt_str(value: object) -> str | None:
    return None if value is None else str(value)


def _type(value: object) -> DocletType | None:
    if not isinstance(value, dict):
        return None
    return DocletType(names=[str(n) for n in value.get("names") or []])


def _param(data: dict[str, Any]) -> Param:
    return Param(
        name=str(data.get("name") or ""),
        type=_type(data.get("type")),
        description=str(data.get("description") or ""),
        optional=bool(data.get("optional")),
        nullable=data.get("nullable"),
        variable=bool(data.get("variable")),
        defaultvalue=data.get("defaultvalue"),
    )


def _meta(value: object) -> Meta | None:
    if not isinstance(value, dict):
        return None
    lineno = value.get("lineno")
    return Meta(
        filename=str(value.get("filename") or ""),
        path=_opt_str(value.get("path")),
        lineno=int(lineno) if lineno is not None else None,
    )
