r"""Read-only declaration tree parsed from TypeDoc's JSON output.

TypeDoc describes a project as nested reflections: the project holds external
modules, modules hold namespaces, namespaces hold interfaces, functions and so
on. This module turns that JSON into frozen :class:`DeclarationNode` objects so
the flattener never touches raw dictionaries.

Example
-------
>>> project = parse_project(
...     {
...         "name": "types",
...         "kind": 0,
...         "children": [
...             {"name": '"chrome"', "kind": 1, "children": [
...                 {"name": "chrome", "kind": 2, "flags": {"isExported": True}},
...             ]},
...         ],
...     }
... )
>>> project.children[0].get_child_by_name("chrome").kind
<ReflectionKind.NAMESPACE: 2>
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import typing as typ


class DeclarationFormatError(ValueError):
    """Raised when TypeDoc JSON does not describe a reflection tree."""


class ReflectionKind(enum.Enum):
    """TypeDoc reflection kinds with the tool's numeric tags."""

    PROJECT = 0
    MODULE = 1
    NAMESPACE = 2
    ENUM = 4
    ENUM_MEMBER = 16
    VARIABLE = 32
    FUNCTION = 64
    CLASS = 128
    INTERFACE = 256
    CONSTRUCTOR = 512
    PROPERTY = 1024
    METHOD = 2048
    CALL_SIGNATURE = 4096
    INDEX_SIGNATURE = 8192
    CONSTRUCTOR_SIGNATURE = 16384
    PARAMETER = 32768
    TYPE_LITERAL = 65536
    TYPE_PARAMETER = 131072
    ACCESSOR = 262144
    GET_SIGNATURE = 524288
    SET_SIGNATURE = 1048576
    OBJECT_LITERAL = 2097152
    TYPE_ALIAS = 4194304
    EVENT = 8388608
    REFERENCE = 16777216

    @property
    def label(self) -> str:
        """Return a lower-case label such as ``"type alias"``."""
        return self.name.lower().replace("_", " ")


@dc.dataclass(frozen=True, slots=True)
class CommentTag:
    """A ``@tag text`` pair from a doc comment."""

    tag: str
    text: str = ""


@dc.dataclass(frozen=True, slots=True)
class DocComment:
    """Doc comment text as TypeDoc splits it.

    Attributes
    ----------
    short_text : str
        First paragraph of the comment.
    text : str
        Remaining paragraphs, possibly empty.
    tags : tuple[CommentTag, ...]
        Block tags such as ``@since`` or ``@deprecated``.
    """

    short_text: str = ""
    text: str = ""
    tags: tuple[CommentTag, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class ReflectionFlags:
    """Visibility and modifier flags attached to a reflection."""

    is_exported: bool = False
    is_external: bool = False
    is_private: bool = False
    is_protected: bool = False
    is_optional: bool = False
    is_static: bool = False


@dc.dataclass(frozen=True, slots=True)
class DeclarationNode:
    """One reflection in the declaration tree.

    ``type`` keeps TypeDoc's raw type payload; :mod:`.converter` renders it.
    ``signatures`` and ``parameters`` are populated for callables only.
    """

    name: str
    kind: ReflectionKind
    comment: DocComment | None = None
    flags: ReflectionFlags = ReflectionFlags()
    children: tuple[DeclarationNode, ...] = ()
    signatures: tuple[DeclarationNode, ...] = ()
    parameters: tuple[DeclarationNode, ...] = ()
    type: typ.Mapping[str, typ.Any] | None = None
    default_value: str | None = None

    def get_child_by_name(self, name: str) -> DeclarationNode | None:
        """Return the first direct child named exactly ``name``."""
        for child in self.children:
            if child.name == name:
                return child
        return None


def parse_project(payload: typ.Mapping[str, typ.Any]) -> DeclarationNode:
    """Parse a TypeDoc project JSON document into a declaration tree.

    Parameters
    ----------
    payload : Mapping[str, Any]
        Decoded JSON written by ``typedoc --json``.

    Returns
    -------
    DeclarationNode
        Root node whose children are the project's top-level modules.

    Raises
    ------
    DeclarationFormatError
        If the payload or any nested reflection lacks a ``name``/``kind`` or
        uses a kind number TypeDoc does not define.
    """
    if not isinstance(payload, cabc.Mapping):
        msg = "TypeDoc output must be a JSON object."
        raise DeclarationFormatError(msg)
    return parse_declaration(payload)


def parse_declaration(payload: typ.Mapping[str, typ.Any]) -> DeclarationNode:
    """Parse a single reflection (and its descendants)."""
    if not isinstance(payload, cabc.Mapping):
        msg = f"Expected a reflection object, got {_describe(payload)}."
        raise DeclarationFormatError(msg)
    name = payload.get("name")
    raw_kind = payload.get("kind")
    if not isinstance(name, str) or not isinstance(raw_kind, int):
        msg = f"Reflection is missing a name or kind: {_describe(payload)}"
        raise DeclarationFormatError(msg)
    try:
        kind = ReflectionKind(raw_kind)
    except ValueError as exc:
        msg = f"Unknown reflection kind {raw_kind} for '{name}'."
        raise DeclarationFormatError(msg) from exc

    default_value = payload.get("defaultValue")
    return DeclarationNode(
        name=name,
        kind=kind,
        comment=_parse_comment(payload.get("comment")),
        flags=_parse_flags(payload.get("flags")),
        children=_parse_many(payload.get("children")),
        signatures=_parse_many(payload.get("signatures")),
        parameters=_parse_many(payload.get("parameters")),
        type=payload.get("type"),
        default_value=str(default_value) if default_value is not None else None,
    )


def _parse_many(items: object) -> tuple[DeclarationNode, ...]:
    if not items:
        return ()
    if not isinstance(items, list):
        msg = f"Expected a list of reflections, got {type(items).__name__}."
        raise DeclarationFormatError(msg)
    return tuple(parse_declaration(item) for item in items)


def _parse_comment(raw: object) -> DocComment | None:
    """Return a DocComment for TypeDoc's comment object, or None."""
    if not isinstance(raw, cabc.Mapping):
        return None
    tags = tuple(
        CommentTag(tag=str(item.get("tag", "")), text=str(item.get("text", "")).strip())
        for item in raw.get("tags", []) or []
        if isinstance(item, cabc.Mapping)
    )
    return DocComment(
        short_text=str(raw.get("shortText", "") or ""),
        text=str(raw.get("text", "") or ""),
        tags=tags,
    )


def _parse_flags(raw: object) -> ReflectionFlags:
    if not isinstance(raw, cabc.Mapping):
        return ReflectionFlags()
    return ReflectionFlags(
        is_exported=bool(raw.get("isExported", False)),
        is_external=bool(raw.get("isExternal", False)),
        is_private=bool(raw.get("isPrivate", False)),
        is_protected=bool(raw.get("isProtected", False)),
        is_optional=bool(raw.get("isOptional", False)),
        is_static=bool(raw.get("isStatic", False)),
    )


def _describe(payload: object) -> str:
    """Return a short description of a malformed payload for error messages."""
    if isinstance(payload, cabc.Mapping):
        keys = ", ".join(sorted(str(key) for key in payload)) or "no keys"
        return f"object with {keys}"
    return type(payload).__name__


__all__ = [
    "CommentTag",
    "DeclarationFormatError",
    "DeclarationNode",
    "DocComment",
    "ReflectionFlags",
    "ReflectionKind",
    "parse_declaration",
    "parse_project",
]
