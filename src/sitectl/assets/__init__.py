from __future__ import annotations

from .resolver import ResolutionResult, imported_chunks, resolve
from .tags import css_tags_for_entry, render_tags, tags_for_entry

__all__ = [
    "ResolutionResult",
    "css_tags_for_entry",
    "imported_chunks",
    "render_tags",
    "resolve",
    "tags_for_entry",
]
