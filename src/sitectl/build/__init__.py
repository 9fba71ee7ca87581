from __future__ import annotations

from .driver import BuiltPage, build_pages, discover_pages, global_stylesheet_href, page_for_changed_path
from .render import LayoutData, LayoutWrapper, PageRenderer, PageSource, RenderedPage, ShellLayout, ViewFileRenderer

__all__ = [
    "BuiltPage",
    "LayoutData",
    "LayoutWrapper",
    "PageRenderer",
    "PageSource",
    "RenderedPage",
    "ShellLayout",
    "ViewFileRenderer",
    "build_pages",
    "discover_pages",
    "global_stylesheet_href",
    "page_for_changed_path",
]
