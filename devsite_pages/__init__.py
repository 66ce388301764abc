"""Build pipeline for the devsite API reference and localized content pages.

The package converts TypeDoc declarations into flat ``chrome.*`` namespace
records, renders one reference page per namespace, and lists localized
front-matter content with one entry per url.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``filter_by_locale``: Pick one record per url for a locale.
- ``flatten_namespaces``: Flatten a declaration tree into namespace records.
- ``load_namespaces``: Load the namespace cache into reference page records.

Examples
--------
>>> from devsite_pages import main
>>> main()  # doctest: +SKIP
>>> from devsite_pages import app
>>> app.name[0]
'pages'
"""

from __future__ import annotations

from .cli import app, main
from .locale_filter import filter_by_locale
from .namespaces import load_namespaces
from .typedoc import flatten_namespaces

__all__ = ["app", "filter_by_locale", "flatten_namespaces", "load_namespaces", "main"]
