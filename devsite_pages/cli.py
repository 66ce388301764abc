"""Cyclopts CLI entrypoint for building the devsite reference and listing pages.

The ``pages`` console script defined here converts a TypeScript declaration
file into the flattened namespace cache (``pages types``), renders one API
reference page per namespace (``pages reference``), renders the locale
filtered content listing (``pages listing``), or does both page builds in one
go (``pages build``).

Examples
--------
Regenerate the namespace cache from the configured declaration file:

>>> from devsite_pages.cli import app
>>> app.run(["types"])  # doctest: +SKIP

Build every page, skipping the API reference:

>>> app.run(["build", "--ignore-extensions"])  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import SiteConfig, load_site_config
from .generator import ContentListingBuilder, ReferencePageBuilder
from .logging import configure_logging
from .typedoc import convert_types, write_namespaces

DEFAULT_CONFIG = Path("config/site.yaml")

app = App(name="pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
]
VerboseOption = typ.Annotated[bool, Parameter(help="Enable debug logging")]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load_config(
    config: Path,
    *,
    output_dir: Path | None = None,
    ignore_extensions: bool = False,
) -> SiteConfig:
    """Load ``config`` and apply command-line overrides."""
    site_config = load_site_config(config)
    if output_dir is not None:
        site_config = dc.replace(site_config, output_dir=output_dir)
    if ignore_extensions:
        site_config.namespaces.ignore_extensions = True
    return site_config


@app.command(help="Convert a .d.ts file into the flattened namespace cache.")
def types(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    source: typ.Annotated[
        Path | None,
        Parameter(help="Override the declaration file", env_var="INPUT_SOURCE"),
    ] = None,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Override the namespace cache path", env_var="INPUT_OUTPUT"),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Run TypeDoc over the declaration file and write the namespace cache.

    Parameters
    ----------
    config : Path, optional
        Site configuration file. Only read when ``source`` or ``output`` is
        not supplied on the command line.
    source : Path or None, optional
        Declaration file to convert; defaults to ``namespaces.types_source``.
    output : Path or None, optional
        Destination JSON file; defaults to ``namespaces.cache``.
    verbose : bool, optional
        Emit debug logging.

    Raises
    ------
    ValueError
        If no declaration file is configured or supplied.
    TypeConversionError
        If TypeDoc fails or reports warnings/errors.
    ShapeError
        If the declaration tree is not a single module holding ``chrome``.
    """
    configure_logging(verbose=verbose)
    if source is None or output is None:
        namespaces_config = load_site_config(config).namespaces
        source = source or namespaces_config.types_source
        output = output or namespaces_config.cache_path
    if source is None:
        msg = "No declaration file configured; pass --source or set namespaces.types_source."
        raise ValueError(msg)

    namespaces = convert_types(source)
    path = write_namespaces(namespaces, output)
    print(f"wrote {_format_path(path)} ({len(namespaces)} namespaces)")


@app.command(help="Render API reference pages from the namespace cache.")
def reference(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    ignore_extensions: typ.Annotated[
        bool, Parameter(help="Skip loading namespace data")
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """Render one HTML page per cached namespace."""
    configure_logging(verbose=verbose)
    site_config = _load_config(
        config, output_dir=output_dir, ignore_extensions=ignore_extensions
    )
    for path in ReferencePageBuilder(site_config).run():
        print(f"wrote {_format_path(path)}")


@app.command(help="Render the content listing for a locale.")
def listing(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    locale: typ.Annotated[
        str | None, Parameter(help="Target locale", env_var="INPUT_LOCALE")
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Render the listing page for ``locale`` (defaults to the site default)."""
    configure_logging(verbose=verbose)
    site_config = _load_config(config, output_dir=output_dir)
    path = ContentListingBuilder(site_config, locale=locale).run()
    print(f"wrote {_format_path(path)}")


@app.command(help="Render reference pages and every locale's listing.")
def build(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    ignore_extensions: typ.Annotated[
        bool, Parameter(help="Skip loading namespace data")
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """Render the full site: API reference plus one listing per locale.

    Parameters
    ----------
    config : Path, optional
        Site configuration file (overridable via ``INPUT_CONFIG``).
    output_dir : Path or None, optional
        Override for ``site.output_dir``.
    ignore_extensions : bool, optional
        Skip the namespace cache entirely; no reference pages are written.
    verbose : bool, optional
        Emit debug logging.
    """
    configure_logging(verbose=verbose)
    site_config = _load_config(
        config, output_dir=output_dir, ignore_extensions=ignore_extensions
    )
    written = ReferencePageBuilder(site_config).run()
    written.extend(
        ContentListingBuilder(site_config, locale=code).run()
        for code in site_config.locales
    )
    for path in written:
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `pages` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
