"""Load and validate site configuration YAML for devsite builds.

This subpackage parses the project's ``site.yaml`` file and produces slotted
dataclasses (:class:`SiteConfig`, :class:`NamespacesConfig`,
:class:`ThemeConfig`) that the reference and listing builders consume. The
primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from devsite_pages.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> site.namespaces.cache_path  # doctest: +SKIP
PosixPath('site/_data/namespaces-source.json')
"""

from .loader import load_site_config
from .models import NamespacesConfig, SiteConfig, SiteConfigError, ThemeConfig

__all__ = [
    "NamespacesConfig",
    "SiteConfig",
    "SiteConfigError",
    "ThemeConfig",
    "load_site_config",
]
