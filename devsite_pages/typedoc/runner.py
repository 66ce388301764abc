"""Run TypeDoc over a declaration file and write the flattened namespaces.

This module shells out to the TypeDoc CLI, which emits its project model as
JSON, then hands the parsed tree to :func:`flatten_namespaces`. TypeDoc
warnings and errors abort the conversion: a declaration file TypeDoc cannot
read cleanly would produce misleading reference pages. Other tool chatter is
logged and ignored.

Example
-------
>>> from pathlib import Path
>>> from devsite_pages.typedoc.runner import convert_types, write_namespaces
>>> namespaces = convert_types(Path("types/chrome.d.ts"))  # doctest: +SKIP
>>> write_namespaces(namespaces, Path("site/_data/namespaces-source.json"))  # doctest: +SKIP
PosixPath('site/_data/namespaces-source.json')
"""

from __future__ import annotations

import json
import subprocess
import tempfile
import typing as typ
from pathlib import Path

from ..logging import get_logger
from .declarations import DeclarationFormatError, parse_project
from .flattener import flatten_namespaces

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .declarations import DeclarationNode
    from .flattener import RenderNamespace

DEFAULT_TYPEDOC_COMMAND: tuple[str, ...] = ("npx", "typedoc")
_FATAL_PREFIXES = ("Error:", "Warning:")

logger = get_logger("typedoc")


class TypeConversionError(RuntimeError):
    """Raised when TypeDoc fails or reports problems with the source."""


def generate_project(
    source: Path, *, command: cabc.Sequence[str] | None = None
) -> DeclarationNode:
    """Run TypeDoc on ``source`` and return the parsed project tree.

    Parameters
    ----------
    source : Path
        Declaration file (``.d.ts``) to document.
    command : Sequence[str], optional
        Executable prefix used to launch TypeDoc; defaults to
        ``("npx", "typedoc")``.

    Returns
    -------
    DeclarationNode
        Root of the project reflection tree.

    Raises
    ------
    FileNotFoundError
        If ``source`` does not exist.
    TypeConversionError
        If TypeDoc cannot be launched, exits unsuccessfully, reports a warning
        or error, or writes no usable JSON.
    """
    if not source.exists():
        msg = f"Type source '{source}' not found."
        raise FileNotFoundError(msg)

    base = list(command or DEFAULT_TYPEDOC_COMMAND)
    with tempfile.TemporaryDirectory(prefix="devsite-types-") as tmp:
        output = Path(tmp) / "project.json"
        args = [
            *base,
            "--includeDeclarations",
            "--exclude",
            "**/node_modules/**",
            "--json",
            str(output),
            str(source),
        ]
        logger.debug("running %s", " ".join(args))
        try:
            result = subprocess.run(  # noqa: S603 - arguments are built locally
                args,
                check=False,
                text=True,
                capture_output=True,
            )
        except FileNotFoundError as exc:
            msg = f"could not convert types: '{base[0]}' is not installed"
            raise TypeConversionError(msg) from exc

        _check_messages(f"{result.stdout}\n{result.stderr}")
        if result.returncode != 0:
            msg = f"could not convert types: typedoc exited with status {result.returncode}"
            raise TypeConversionError(msg)
        payload = _read_output(output)

    try:
        return parse_project(payload)
    except DeclarationFormatError as exc:
        msg = f"could not convert types: {exc}"
        raise TypeConversionError(msg) from exc


def _check_messages(text: str) -> None:
    """Escalate TypeDoc warnings/errors and log any other output."""
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if line.startswith(_FATAL_PREFIXES):
            msg = f"could not convert types: {line}"
            raise TypeConversionError(msg)
        logger.warning(line)


def _read_output(path: Path) -> typ.Any:
    """Return the decoded TypeDoc JSON or raise for missing/empty output."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = "could not convert types, null return value"
        raise TypeConversionError(msg) from exc
    try:
        payload = json.loads(text) if text.strip() else None
    except json.JSONDecodeError as exc:
        msg = f"could not convert types: invalid JSON output ({exc})"
        raise TypeConversionError(msg) from exc
    if not payload:
        msg = "could not convert types, null return value"
        raise TypeConversionError(msg)
    return payload


def convert_types(
    source: Path, *, command: cabc.Sequence[str] | None = None
) -> list[RenderNamespace]:
    """Run TypeDoc on ``source`` and flatten its ``chrome.*`` namespaces."""
    project = generate_project(source, command=command)
    return flatten_namespaces(project)


def write_namespaces(namespaces: cabc.Iterable[RenderNamespace], path: Path) -> Path:
    """Write flattened namespaces as the JSON array the data loader reads."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [namespace.to_dict() for namespace in namespaces]
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    return path


__all__ = [
    "DEFAULT_TYPEDOC_COMMAND",
    "TypeConversionError",
    "convert_types",
    "generate_project",
    "write_namespaces",
]
