"""Utilities for rendering devsite reference and listing pages."""

from .link_rewriter import ReferenceLinkExtension
from .listing import ContentListingBuilder
from .reference import ReferencePageBuilder, format_signature
from .renderer import HtmlContentRenderer

__all__ = [
    "ContentListingBuilder",
    "HtmlContentRenderer",
    "ReferenceLinkExtension",
    "ReferencePageBuilder",
    "format_signature",
]
