"""Turn TypeDoc declaration output into flat namespace records.

The pipeline runs ``typedoc --json`` over a ``.d.ts`` file
(:mod:`.runner`), parses the result into frozen declaration nodes
(:mod:`.declarations`), and flattens every exported ``chrome.*`` namespace into
a :class:`RenderNamespace` (:mod:`.flattener`) whose members are converted to
:class:`RenderType` records (:mod:`.converter`).
"""

from .converter import RenderType, declaration_to_type
from .declarations import (
    DeclarationFormatError,
    DeclarationNode,
    ReflectionKind,
    parse_project,
)
from .flattener import RenderNamespace, ShapeError, flatten_namespaces
from .helpers import exported_children, extract_comment
from .runner import TypeConversionError, convert_types, generate_project, write_namespaces

__all__ = [
    "DeclarationFormatError",
    "DeclarationNode",
    "ReflectionKind",
    "RenderNamespace",
    "RenderType",
    "ShapeError",
    "TypeConversionError",
    "convert_types",
    "declaration_to_type",
    "exported_children",
    "extract_comment",
    "flatten_namespaces",
    "generate_project",
    "parse_project",
    "write_namespaces",
]
