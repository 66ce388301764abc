"""Common literal values used across devsite_pages.

These constants keep filenames, permalinks and environment keys centralized so
templates, loaders, and tests can import the same values without drifting.
Intended for internal use within the devsite_pages package.

Examples
--------
>>> from devsite_pages import _constants
>>> _constants.REFERENCE_PERMALINK_TEMPLATE.format(name="management")
'en/docs/tools/reference/management/'
>>> _constants.NAMESPACES_CACHE_FILENAME
'namespaces-source.json'
"""

DEFAULT_LOCALE = "en"
ROOT_NAMESPACE = "chrome"
NAMESPACES_CACHE_FILENAME = "namespaces-source.json"
REFERENCE_PERMALINK_TEMPLATE = "en/docs/tools/reference/{name}/"
IGNORE_EXTENSIONS_ENV = "ELEVENTY_IGNORE_EXTENSIONS"
