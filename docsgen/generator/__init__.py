"""Rendering and orchestration for full docsgen site builds."""

from .heading_anchors import HeadingAnchorExtension
from .renderer import HtmlContentRenderer
from .site_builder import SiteBuilder, build_site

__all__ = [
    "HeadingAnchorExtension",
    "HtmlContentRenderer",
    "SiteBuilder",
    "build_site",
]
