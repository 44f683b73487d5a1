"""Data models for representing doclets extracted by JSDoc."""

from dataclasses import dataclass, field
from typing import Any

from markupsafe import Markup


@dataclass
class DocletType:
    """A type annotation: one or more type expression strings."""

    names: list[str] = field(default_factory=list)


@dataclass
class Param:
    """A parameter, return value or property of a doclet."""

    name: str = ""
    type: DocletType | None = None
    description: str = ""
    optional: bool = False
    nullable: bool | None = None
    variable: bool = False
    defaultvalue: Any = None


@dataclass
class Meta:
    """Where a doclet was found in the source tree."""

    filename: str = ""
    path: str | None = None
    lineno: int | None = None
    shortpath: str | None = None


@dataclass
class Example:
    """A code example, optionally with a caption."""

    code: str
    caption: str = ""


@dataclass
class Doclet:
    """Represents a documented symbol (class, function, member, etc.)."""

    kind: str
    name: str = ""
    longname: str | None = None
    memberof: str | None = None
    scope: str | None = None
    type: DocletType | None = None
    params: list[Param] = field(default_factory=list)
    returns: list[Param] = field(default_factory=list)
    properties: list[Param] = field(default_factory=list)
    description: str = ""
    classdesc: str = ""
    meta: Meta | None = None
    examples: list[Any] = field(default_factory=list)
    see: list[str] = field(default_factory=list)
    access: str | None = None
    is_async: bool = False
    generator: bool = False
    virtual: bool = False
    readonly: bool = False
    nullable: bool | None = None
    variation: str | None = None
    hideconstructor: bool = False
    undocumented: bool = False
    ignore: bool = False
    listens: list[str] = field(default_factory=list)
    fires: list[str] = field(default_factory=list)
    version: str | None = None
    since: str | None = None
    deprecated: str | bool | None = None
    author: list[str] = field(default_factory=list)
    readme: str = ""
    raw: dict[str, Any] = field(default_factory=dict)  # original parsed record

    # Set while publishing
    signature: Markup = field(default_factory=Markup)
    attribs: Markup = field(default_factory=Markup)
    id: str = ""
    ancestors: list[Markup] = field(default_factory=list)
    modules: list["Doclet"] = field(default_factory=list)
    listeners: list[str] = field(default_factory=list)

    def get(self, name: str) -> Any:
        """Look up an attribute by its JSDoc field name."""
        if name == "async":
            return self.is_async
        return getattr(self, name, None)


def is_module_exports(doclet: Doclet) -> bool:
    """Check if the doclet is the value a module exports directly."""
    return bool(
        doclet.longname
        and doclet.longname == doclet.name
        and doclet.longname.startswith("module:")
        and doclet.kind != "module"
    )
