"""Convert declaration nodes into the simplified render model.

Templates never see TypeDoc's type graph. Each exported declaration becomes a
:class:`RenderType`: a flat record holding a readable type string plus the
members, parameters or enum values the reference page lists beneath it.
"""

from __future__ import annotations

import dataclasses as dc
import json
import typing as typ

from .declarations import DeclarationFormatError, ReflectionKind, parse_declaration
from .helpers import extract_comment, iter_tags

if typ.TYPE_CHECKING:
    from .declarations import DeclarationNode

_MEMBER_KINDS = frozenset(
    {
        ReflectionKind.PROPERTY,
        ReflectionKind.METHOD,
        ReflectionKind.VARIABLE,
        ReflectionKind.FUNCTION,
        ReflectionKind.ACCESSOR,
    }
)
_CALLABLE_KINDS = frozenset(
    {ReflectionKind.FUNCTION, ReflectionKind.METHOD, ReflectionKind.CONSTRUCTOR}
)
_RECORD_KINDS = frozenset(
    {ReflectionKind.INTERFACE, ReflectionKind.TYPE_LITERAL, ReflectionKind.CLASS}
)


@dc.dataclass(slots=True)
class RenderType:
    """A declaration flattened for display.

    Attributes
    ----------
    name : str
        Display name; the flattener overwrites it with the exported name.
    kind : str
        Lower-case kind label such as ``"interface"`` or ``"function"``.
    comment : str
        Markdown doc comment, empty when undocumented.
    type : str
        Readable type expression (return type for callables).
    optional : bool
        Whether the member or parameter may be omitted.
    parameters : list[RenderType]
        Call parameters for functions and methods.
    returns : RenderType | None
        Return type for callables, ``None`` otherwise.
    properties : list[RenderType]
        Members of interfaces, type literals and object-shaped aliases.
    values : list[str]
        Member names of enums.
    deprecated : str | None
        ``@deprecated`` text, if present.
    since : str | None
        ``@since`` text, if present.
    """

    name: str
    kind: str
    comment: str = ""
    type: str = ""
    optional: bool = False
    parameters: list[RenderType] = dc.field(default_factory=list)
    returns: RenderType | None = None
    properties: list[RenderType] = dc.field(default_factory=list)
    values: list[str] = dc.field(default_factory=list)
    deprecated: str | None = None
    since: str | None = None

    def to_dict(self) -> dict[str, typ.Any]:
        """Return a JSON-serialisable mapping of this render type."""
        return dc.asdict(self)


def declaration_to_type(declaration: DeclarationNode) -> RenderType:
    """Convert ``declaration`` into a :class:`RenderType`.

    Parameters
    ----------
    declaration : DeclarationNode
        Exported reflection taken from a namespace.

    Returns
    -------
    RenderType
        Flattened description; callables render their first signature,
        record-like kinds render their members, enums their member names.
    """
    kind = declaration.kind
    render = RenderType(
        name=declaration.name,
        kind=kind.label,
        comment=extract_comment(declaration.comment),
        optional=declaration.flags.is_optional,
    )
    _apply_tags(render, declaration)

    if kind in _CALLABLE_KINDS and declaration.signatures:
        _apply_signature(render, declaration.signatures[0])
    elif kind in _RECORD_KINDS:
        render.type = declaration.name
        render.properties = _members(declaration)
    elif kind is ReflectionKind.ENUM:
        render.type = declaration.name
        render.values = [
            child.name
            for child in declaration.children
            if child.kind is ReflectionKind.ENUM_MEMBER
        ]
    else:
        render.type = format_type(declaration.type)
        literal = _reflection_declaration(declaration.type)
        if literal is not None and literal.children:
            render.properties = _members(literal)
    return render


def format_type(raw: typ.Mapping[str, typ.Any] | None) -> str:
    """Render TypeDoc's type payload as a TypeScript-like expression."""
    if not raw:
        return "any"
    kind = raw.get("type")
    match kind:
        case "intrinsic" | "typeParameter" | "unknown":
            return str(raw.get("name", "any"))
        case "reference":
            name = str(raw.get("name", "any"))
            args = raw.get("typeArguments") or []
            if args:
                return f"{name}<{', '.join(format_type(arg) for arg in args)}>"
            return name
        case "union":
            return " | ".join(format_type(item) for item in raw.get("types", []))
        case "intersection":
            return " & ".join(format_type(item) for item in raw.get("types", []))
        case "array":
            element = raw.get("elementType")
            inner = format_type(element)
            if element and element.get("type") in {"union", "intersection"}:
                inner = f"({inner})"
            return f"{inner}[]"
        case "tuple":
            elements = raw.get("elements") or []
            return f"[{', '.join(format_type(item) for item in elements)}]"
        case "stringLiteral":
            return json.dumps(raw.get("value", ""))
        case "reflection":
            return _format_reflection(raw)
        case _:
            return str(raw.get("name") or kind or "any")


def _format_reflection(raw: typ.Mapping[str, typ.Any]) -> str:
    declaration = _reflection_declaration(raw)
    if declaration is None:
        return "object"
    if declaration.signatures:
        signature = declaration.signatures[0]
        params = ", ".join(_format_parameter(param) for param in signature.parameters)
        return f"({params}) => {format_type(signature.type)}"
    return "object"


def _format_parameter(param: DeclarationNode) -> str:
    marker = "?" if param.flags.is_optional else ""
    return f"{param.name}{marker}: {format_type(param.type)}"


def _reflection_declaration(
    raw: typ.Mapping[str, typ.Any] | None,
) -> DeclarationNode | None:
    """Return the inline declaration of a ``reflection`` type, if any."""
    if not raw or raw.get("type") != "reflection":
        return None
    payload = raw.get("declaration")
    if not payload:
        return None
    try:
        return parse_declaration(payload)
    except DeclarationFormatError:
        return None


def _apply_signature(render: RenderType, signature: DeclarationNode) -> None:
    """Copy parameters and return type from a call signature."""
    if not render.comment:
        render.comment = extract_comment(signature.comment)
    render.parameters = [_convert_parameter(param) for param in signature.parameters]
    render.type = format_type(signature.type)
    render.returns = RenderType(
        name="return", kind="return", type=render.type
    )


def _convert_parameter(param: DeclarationNode) -> RenderType:
    converted = RenderType(
        name=param.name,
        kind=param.kind.label,
        comment=extract_comment(param.comment),
        type=format_type(param.type),
        optional=param.flags.is_optional,
    )
    callback = _reflection_declaration(param.type)
    if callback is not None and callback.signatures:
        converted.parameters = [
            _convert_parameter(inner) for inner in callback.signatures[0].parameters
        ]
    return converted


def _members(declaration: DeclarationNode) -> list[RenderType]:
    return [
        declaration_to_type(child)
        for child in declaration.children
        if child.kind in _MEMBER_KINDS and not child.flags.is_private
    ]


def _apply_tags(render: RenderType, declaration: DeclarationNode) -> None:
    for tag, text in iter_tags(declaration.comment):
        if tag == "deprecated":
            render.deprecated = text or "Deprecated."
        elif tag == "since":
            render.since = text or None


__all__ = ["RenderType", "declaration_to_type", "format_type"]
