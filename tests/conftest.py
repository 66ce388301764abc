"""Shared fixtures for the devsite_pages test suite.

The fixtures here describe a small TypeDoc project shaped like Chrome's
declaration file: a single external module holding ``chrome``, which exports
the ``alarms`` and ``management`` namespaces (the latter with a nested
``events`` namespace). Tests take either the raw JSON payload or the parsed
declaration tree.
"""

from __future__ import annotations

import logging
import typing as typ

import pytest

from devsite_pages.typedoc.declarations import (
    DeclarationNode,
    ReflectionFlags,
    ReflectionKind,
    parse_project,
)

EXPORTED = {"isExported": True}


def _intrinsic(name: str) -> dict[str, str]:
    return {"type": "intrinsic", "name": name}


@pytest.fixture(autouse=True)
def _reset_package_logger() -> typ.Iterator[None]:
    """Undo CLI logging configuration so caplog keeps seeing records."""
    yield
    logger = logging.getLogger("devsite_pages")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def typedoc_payload() -> dict[str, typ.Any]:
    """Return TypeDoc JSON for a miniature ``chrome`` declaration file."""
    events = {
        "name": "events",
        "kind": 2,
        "flags": EXPORTED,
        "children": [
            {
                "name": "onInstalled",
                "kind": 32,
                "flags": EXPORTED,
                "comment": {"shortText": "Fired when an app or extension is installed."},
                "type": {
                    "type": "reference",
                    "name": "Event",
                    "typeArguments": [{"type": "reference", "name": "ExtensionInfo"}],
                },
            }
        ],
    }
    get_all = {
        "name": "getAll",
        "kind": 64,
        "flags": EXPORTED,
        "signatures": [
            {
                "name": "getAll",
                "kind": 4096,
                "comment": {"shortText": "Returns all installed extensions."},
                "parameters": [
                    {
                        "name": "callback",
                        "kind": 32768,
                        "flags": {"isOptional": True},
                        "type": {
                            "type": "reflection",
                            "declaration": {
                                "name": "__type",
                                "kind": 65536,
                                "signatures": [
                                    {
                                        "name": "__type",
                                        "kind": 4096,
                                        "parameters": [
                                            {
                                                "name": "result",
                                                "kind": 32768,
                                                "type": {
                                                    "type": "array",
                                                    "elementType": {
                                                        "type": "reference",
                                                        "name": "ExtensionInfo",
                                                    },
                                                },
                                            }
                                        ],
                                        "type": _intrinsic("void"),
                                    }
                                ],
                            },
                        },
                    }
                ],
                "type": _intrinsic("void"),
            }
        ],
    }
    management = {
        "name": "management",
        "kind": 2,
        "flags": EXPORTED,
        "comment": {
            "shortText": "The `chrome.management` API manages installed apps.",
            "text": "See {@link alarms.create} for scheduling.",
        },
        "children": [
            events,
            {
                "name": "ExtensionInfo",
                "kind": 256,
                "flags": EXPORTED,
                "comment": {"shortText": "Information about an installed extension."},
                "children": [
                    {"name": "id", "kind": 1024, "type": _intrinsic("string")},
                    {
                        "name": "enabled",
                        "kind": 1024,
                        "flags": {"isOptional": True},
                        "type": _intrinsic("boolean"),
                    },
                ],
            },
            {
                "name": "ExtensionType",
                "kind": 4194304,
                "flags": EXPORTED,
                "type": {
                    "type": "union",
                    "types": [
                        {"type": "stringLiteral", "value": "extension"},
                        {"type": "stringLiteral", "value": "theme"},
                    ],
                },
            },
            get_all,
            {
                "name": "LaunchType",
                "kind": 4,
                "flags": EXPORTED,
                "comment": {"tags": [{"tag": "since", "text": "Chrome 37\n"}]},
                "children": [
                    {"name": "OPEN_AS_REGULAR_TAB", "kind": 16},
                    {"name": "OPEN_AS_WINDOW", "kind": 16},
                ],
            },
            {
                "name": "internalHelper",
                "kind": 64,
                "flags": {},
                "signatures": [{"name": "internalHelper", "kind": 4096}],
            },
        ],
    }
    alarms = {
        "name": "alarms",
        "kind": 2,
        "flags": EXPORTED,
        "children": [
            {
                "name": "create",
                "kind": 64,
                "flags": EXPORTED,
                "signatures": [
                    {
                        "name": "create",
                        "kind": 4096,
                        "parameters": [
                            {
                                "name": "name",
                                "kind": 32768,
                                "flags": {"isOptional": True},
                                "type": _intrinsic("string"),
                            }
                        ],
                        "type": _intrinsic("void"),
                    }
                ],
            }
        ],
    }
    return {
        "name": "chrome-types",
        "kind": 0,
        "children": [
            {
                "name": '"chrome"',
                "kind": 1,
                "flags": EXPORTED,
                "children": [
                    {
                        "name": "chrome",
                        "kind": 2,
                        "flags": EXPORTED,
                        "children": [management, alarms],
                    }
                ],
            }
        ],
    }


@pytest.fixture
def chrome_project(typedoc_payload: dict[str, typ.Any]) -> DeclarationNode:
    """Return the parsed declaration tree for ``typedoc_payload``."""
    return parse_project(typedoc_payload)


@pytest.fixture
def make_node() -> typ.Callable[..., DeclarationNode]:
    """Return a factory for exported declaration nodes."""

    def _make(
        name: str,
        kind: ReflectionKind,
        *children: DeclarationNode,
        exported: bool = True,
    ) -> DeclarationNode:
        return DeclarationNode(
            name=name,
            kind=kind,
            flags=ReflectionFlags(is_exported=exported),
            children=children,
        )

    return _make
