"""Core data models shared across docsite components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

GLOBAL_LONGNAME = "global"

CONTAINER_KINDS = frozenset({"class", "module", "external", "namespace", "mixin", "interface"})


@dataclass
class TypeSpec:
    """Declared type names of a doclet or parameter."""

    names: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: object) -> Optional["TypeSpec"]:
        if not isinstance(payload, Mapping):
            return None
        names = payload.get("names")
        if not isinstance(names, list):
            return None
        return cls(names=_as_str_list(names))


@dataclass
class Param:
    """A parameter, return or yield entry."""

    name: str = ""
    type: Optional[TypeSpec] = None
    description: Optional[str] = None
    optional: bool = False
    nullable: Optional[bool] = None
    variable: bool = False
    default_value: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: object) -> Optional["Param"]:
        if not isinstance(payload, Mapping):
            return None
        default = payload.get("defaultvalue")
        return cls(
            name=_as_str(payload.get("name")) or "",
            type=TypeSpec.from_dict(payload.get("type")),
            description=_as_str(payload.get("description")),
            optional=payload.get("optional") is True,
            nullable=_as_bool(payload.get("nullable")),
            variable=payload.get("variable") is True,
            default_value=None if default is None else str(default),
        )


@dataclass
class Example:
    """A code example split into caption and code."""

    caption: str
    code: str


@dataclass
class DocletMeta:
    """Source location of a doclet."""

    filename: Optional[str] = None
    path: Optional[str] = None
    lineno: Optional[int] = None
    shortpath: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: object) -> Optional["DocletMeta"]:
        if not isinstance(payload, Mapping):
            return None
        lineno = payload.get("lineno")
        return cls(
            filename=_as_str(payload.get("filename")),
            path=_as_str(payload.get("path")),
            lineno=lineno if isinstance(lineno, int) and not isinstance(lineno, bool) else None,
        )


@dataclass
class Ancestor:
    """An enclosing symbol of a doclet, with its resolved link."""

    name: str
    link: Optional[str]
    longname: str


@dataclass
class Doclet:
    """Documentation record for one code symbol."""

    longname: str
    name: str = ""
    kind: str = ""
    memberof: Optional[str] = None
    scope: Optional[str] = None
    access: Optional[str] = None
    virtual: bool = False
    readonly: bool = False
    nullable: Optional[bool] = None
    is_async: bool = False
    generator: bool = False
    version: Optional[str] = None
    since: Optional[str] = None
    description: Optional[str] = None
    classdesc: Optional[str] = None
    params: List[Param] = field(default_factory=list)
    returns: List[Param] = field(default_factory=list)
    yields: List[Param] = field(default_factory=list)
    examples: List[Any] = field(default_factory=list)
    see: List[str] = field(default_factory=list)
    meta: Optional[DocletMeta] = None
    type: Optional[TypeSpec] = None
    undocumented: bool = False
    ignore: bool = False
    # Derived by the enricher.
    id: Optional[str] = None
    signature: Optional[str] = None
    attribs: Optional[str] = None
    ancestors: List[Ancestor] = field(default_factory=list)

    @property
    def is_container(self) -> bool:
        return self.kind in CONTAINER_KINDS

    @property
    def is_module_exports(self) -> bool:
        """True for the value a module exports as a whole, documented under the module's longname."""
        return (
            self.kind != "module"
            and self.longname == self.name
            and self.longname.startswith("module:")
        )

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Optional["Doclet"]:
        """Build a typed doclet from a raw JSON record, or None when it has no longname."""
        longname = payload.get("longname")
        if not isinstance(longname, str) or not longname:
            return None
        return cls(
            longname=longname,
            name=_as_str(payload.get("name")) or "",
            kind=_as_str(payload.get("kind")) or "",
            memberof=_as_str(payload.get("memberof")),
            scope=_as_str(payload.get("scope")),
            access=_as_str(payload.get("access")),
            virtual=payload.get("virtual") is True,
            readonly=payload.get("readonly") is True,
            nullable=_as_bool(payload.get("nullable")),
            is_async=payload.get("async") is True,
            generator=payload.get("generator") is True,
            version=_as_str(payload.get("version")),
            since=_as_str(payload.get("since")),
            description=_as_str(payload.get("description")),
            classdesc=_as_str(payload.get("classdesc")),
            params=_as_params(payload.get("params")),
            returns=_as_params(payload.get("returns")),
            yields=_as_params(payload.get("yields")),
            examples=_as_str_list(payload.get("examples")),
            see=_as_str_list(payload.get("see")),
            meta=DocletMeta.from_dict(payload.get("meta")),
            type=TypeSpec.from_dict(payload.get("type")),
            undocumented=payload.get("undocumented") is True,
            ignore=payload.get("ignore") is True,
        )


@dataclass
class SourceFileEntry:
    """A source file referenced by at least one doclet."""

    full_path: str
    relative_path: Optional[str] = None


@dataclass
class Tutorial:
    """A tutorial page; a tutorial without a name is an anonymous grouping."""

    name: Optional[str] = None
    title: str = ""
    content: str = ""
    children: List["Tutorial"] = field(default_factory=list)
    kind: str = "tutorial"

    @property
    def longname(self) -> Optional[str]:
        return f"tutorial:{self.name}" if self.name else None


@dataclass
class NavigationNode:
    """One entry of the navigation tree."""

    display_name: str
    link: str
    kind: str
    longname: str
    children: List["NavigationNode"] = field(default_factory=list)


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]
    return []


def _as_params(value: Any) -> List[Param]:
    if not isinstance(value, list):
        return []
    params: List[Param] = []
    for item in value:
        param = Param.from_dict(item)
        if param is not None:
            params.append(param)
    return params


__all__ = [
    "Ancestor",
    "CONTAINER_KINDS",
    "Doclet",
    "DocletMeta",
    "Example",
    "GLOBAL_LONGNAME",
    "NavigationNode",
    "Param",
    "SourceFileEntry",
    "Tutorial",
    "TypeSpec",
]
