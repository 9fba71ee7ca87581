from __future__ import annotations

from html import escape
from typing import Mapping

from ..manifest.model import Chunk
from .resolver import ResolutionResult, resolve


def normalize_public_path(public_path: str = "/") -> str:
    prefix = public_path or "/"
    return prefix if prefix.endswith("/") else prefix + "/"


def asset_href(public_path: str, target: str) -> str:
    return normalize_public_path(public_path) + target.lstrip("/")


def stylesheet_tag(href: str) -> str:
    return f'<link rel="stylesheet" href="{escape(href, quote=True)}">'


def modulepreload_tag(href: str) -> str:
    return f'<link rel="modulepreload" href="{escape(href, quote=True)}">'


def module_script_tag(src: str) -> str:
    return f'<script type="module" src="{escape(src, quote=True)}"></script>'


def style_tags(result: ResolutionResult, public_path: str = "/") -> list[str]:
    return [stylesheet_tag(asset_href(public_path, target)) for target in result.style_targets]


def render_tags(result: ResolutionResult, public_path: str = "/") -> str:
    if result.main_target is None:
        return ""
    lines = style_tags(result, public_path)
    lines.extend(modulepreload_tag(asset_href(public_path, target)) for target in result.preload_targets)
    lines.append(module_script_tag(asset_href(public_path, result.main_target)))
    return "\n".join(lines)


def tags_for_entry(manifest: Mapping[str, Chunk], entry_key: str, public_path: str = "/") -> str:
    return render_tags(resolve(manifest, entry_key), public_path)


def css_tags_for_entry(manifest: Mapping[str, Chunk], entry_key: str, public_path: str = "/") -> list[str]:
    return style_tags(resolve(manifest, entry_key), public_path)
