"""Flatten exported ``chrome.*`` namespaces into independent render records.

TypeDoc nests namespaces the way the declaration file does
(``chrome`` > ``devtools`` > ``network``). Reference pages want one flat record
per namespace, named by its dotted path, holding that namespace's own types,
methods and properties. :func:`flatten_namespaces` performs that walk.

Example
-------
>>> from devsite_pages.typedoc import flatten_namespaces
>>> namespaces = flatten_namespaces(project)  # doctest: +SKIP
>>> [ns.name for ns in namespaces]  # doctest: +SKIP
['chrome.management', 'chrome.management.events']
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .._constants import ROOT_NAMESPACE
from .converter import declaration_to_type
from .declarations import ReflectionKind
from .helpers import (
    METHOD_KINDS,
    NAMESPACE_KINDS,
    PROPERTY_KINDS,
    TYPE_KINDS,
    exported_children,
    extract_comment,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .converter import RenderType
    from .declarations import DeclarationNode
    from .helpers import KindSet

    ChildrenLookup = cabc.Callable[[DeclarationNode, KindSet], dict[str, DeclarationNode]]
    TypeConverter = cabc.Callable[[DeclarationNode], RenderType]


class ShapeError(TypeError):
    """Raised when the declaration tree is not the single-module shape we read."""


@dc.dataclass(slots=True)
class RenderNamespace:
    """A namespace flattened for rendering.

    Attributes
    ----------
    name : str
        Fully-qualified dotted name, e.g. ``"chrome.management.events"``.
    short_name : str
        ``name`` without the leading ``chrome`` segment.
    comment : str
        Markdown doc comment of the namespace itself.
    types, properties, methods : list[RenderType]
        The namespace's exported children, partitioned by kind.
    """

    name: str
    short_name: str
    comment: str = ""
    types: list[RenderType] = dc.field(default_factory=list)
    properties: list[RenderType] = dc.field(default_factory=list)
    methods: list[RenderType] = dc.field(default_factory=list)

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the JSON shape consumed by the namespace data loader."""
        return {
            "name": self.name,
            "shortName": self.short_name,
            "comment": self.comment,
            "types": [item.to_dict() for item in self.types],
            "properties": [item.to_dict() for item in self.properties],
            "methods": [item.to_dict() for item in self.methods],
        }


def flatten_namespaces(
    project: DeclarationNode,
    *,
    children_of: ChildrenLookup = exported_children,
    to_type: TypeConverter = declaration_to_type,
) -> list[RenderNamespace]:
    """Return every exported namespace below ``chrome`` as a flat, sorted list.

    Parameters
    ----------
    project : DeclarationNode
        Root of the TypeDoc project.
    children_of : callable, optional
        Export filter returning ``{name: node}`` for a node and a kind set.
    to_type : callable, optional
        Converter producing a :class:`RenderType` for a declaration.

    Returns
    -------
    list[RenderNamespace]
        One record per namespace path, sorted by ``name``. A namespace
        exported under two paths appears twice.

    Raises
    ------
    ShapeError
        If the project does not hold exactly one top-level module, or the
        module lacks a ``chrome`` child. Nothing is returned in that case.
    """
    discovered = _find_namespaces(_chrome_namespace(project), children_of)

    flat: list[RenderNamespace] = []
    for name, declaration in discovered.items():
        _, *rest = name.split(".")
        render_namespace = RenderNamespace(
            name=name,
            short_name=".".join(rest),
            comment=extract_comment(declaration.comment),
        )
        buckets: tuple[tuple[list[RenderType], KindSet], ...] = (
            (render_namespace.types, TYPE_KINDS),
            (render_namespace.methods, METHOD_KINDS),
            (render_namespace.properties, PROPERTY_KINDS),
        )
        for target, kinds in buckets:
            for child_name, child in children_of(declaration, kinds).items():
                render_type = to_type(child)
                render_type.name = child_name
                target.append(render_type)
        flat.append(render_namespace)

    flat.sort(key=_collation_key)
    return flat


def _chrome_namespace(project: DeclarationNode) -> DeclarationNode:
    """Return the ``chrome`` namespace inside the project's only module."""
    toplevel = project.children
    if len(toplevel) != 1 or toplevel[0].kind is not ReflectionKind.MODULE:
        msg = "expected single top-level module"
        raise ShapeError(msg)
    chrome = toplevel[0].get_child_by_name(ROOT_NAMESPACE)
    if chrome is None:
        msg = f"expected module to contain {ROOT_NAMESPACE}"
        raise ShapeError(msg)
    return chrome


def _find_namespaces(
    root: DeclarationNode, children_of: ChildrenLookup
) -> dict[str, DeclarationNode]:
    """Map each exported namespace path below ``root`` to its declaration."""
    found: dict[str, DeclarationNode] = {}

    def _walk(namespace: DeclarationNode, prefix: str) -> None:
        for name, child in children_of(namespace, NAMESPACE_KINDS).items():
            key = f"{prefix}.{name}"
            found[key] = child
            _walk(child, key)

    _walk(root, ROOT_NAMESPACE)
    return found


def _collation_key(namespace: RenderNamespace) -> tuple[str, str]:
    """Order names case-insensitively, then by codepoint for a stable tie-break."""
    return namespace.name.casefold(), namespace.name


__all__ = ["RenderNamespace", "ShapeError", "flatten_namespaces"]
