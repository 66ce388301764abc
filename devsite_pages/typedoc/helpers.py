"""Small lookups over declaration nodes shared by the flattener and converter."""

from __future__ import annotations

import typing as typ

from .declarations import ReflectionKind

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .declarations import DeclarationNode, DocComment

KindSet = typ.AbstractSet[ReflectionKind]

TYPE_KINDS: frozenset[ReflectionKind] = frozenset(
    {
        ReflectionKind.ENUM,
        ReflectionKind.TYPE_LITERAL,
        ReflectionKind.TYPE_ALIAS,
        ReflectionKind.INTERFACE,
    }
)
METHOD_KINDS: frozenset[ReflectionKind] = frozenset({ReflectionKind.FUNCTION})
PROPERTY_KINDS: frozenset[ReflectionKind] = frozenset(
    {ReflectionKind.PROPERTY, ReflectionKind.VARIABLE}
)
NAMESPACE_KINDS: frozenset[ReflectionKind] = frozenset({ReflectionKind.NAMESPACE})


def extract_comment(comment: DocComment | None) -> str:
    """Return the comment's prose as Markdown, or ``""`` when absent."""
    if comment is None:
        return ""
    parts = [part.strip() for part in (comment.short_text, comment.text)]
    return "\n\n".join(part for part in parts if part)


def is_exported(node: DeclarationNode) -> bool:
    """Return True when ``node`` is part of the public surface."""
    flags = node.flags
    return flags.is_exported and not (flags.is_private or flags.is_protected)


def exported_children(
    node: DeclarationNode, kinds: KindSet
) -> dict[str, DeclarationNode]:
    """Return exported children of ``node`` whose kind is in ``kinds``.

    Parameters
    ----------
    node : DeclarationNode
        Parent reflection to search (not recursive).
    kinds : AbstractSet[ReflectionKind]
        Kinds to keep, e.g. :data:`TYPE_KINDS`.

    Returns
    -------
    dict[str, DeclarationNode]
        Matching children keyed by name, in declaration order. When two
        children share a name the first one wins.
    """
    found: dict[str, DeclarationNode] = {}
    for child in node.children:
        if child.kind in kinds and is_exported(child):
            found.setdefault(child.name, child)
    return found


def iter_tags(comment: DocComment | None) -> cabc.Iterator[tuple[str, str]]:
    """Yield ``(tag, text)`` pairs for a comment's block tags."""
    if comment is None:
        return
    for tag in comment.tags:
        yield tag.tag, tag.text


__all__ = [
    "METHOD_KINDS",
    "NAMESPACE_KINDS",
    "PROPERTY_KINDS",
    "TYPE_KINDS",
    "KindSet",
    "exported_children",
    "extract_comment",
    "is_exported",
    "iter_tags",
]
