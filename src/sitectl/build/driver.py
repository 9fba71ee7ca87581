from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Mapping

from ..assets.tags import asset_href, tags_for_entry
from ..config import SiteConfig
from ..core.context import RunContext
from ..errors import ScriptError
from ..exit_codes import ERR_INPUT
from ..logging import log_event
from ..manifest.model import Chunk
from .render import LayoutData, LayoutWrapper, PageRenderer, PageSource


@dataclass(frozen=True)
class BuiltPage:
    name: str
    entry_key: str
    output: Path
    has_assets: bool


def _all_pages(project_root: Path, config: SiteConfig) -> list[PageSource]:
    pages_root = config.pages_root(project_root)
    if not pages_root.is_dir():
        raise ScriptError(f"pages directory not found: {pages_root}", ERR_INPUT, "input_error")
    out: list[PageSource] = []
    for directory in sorted(p for p in pages_root.iterdir() if p.is_dir()):
        controller = directory / f"{directory.name}{config.controller_suffix}"
        if controller.is_file():
            out.append(PageSource(directory.name, directory, controller))
    return out


def discover_pages(ctx: RunContext, target: str | None = None) -> list[PageSource]:
    pages = _all_pages(ctx.project_root, ctx.config)
    if not target:
        return pages
    selected = [page for page in pages if page.name == target]
    if not selected:
        log_event(ctx, "warn", "build", "page_not_found", page=target, fallback="all")
        return pages
    return selected


def page_for_changed_path(changed: str | Path, project_root: Path, config: SiteConfig) -> str | None:
    """Name of the page a changed source file belongs to, or None when every page must be rebuilt."""
    path = Path(changed)
    if path.is_absolute():
        try:
            path = path.resolve().relative_to(project_root.resolve())
        except ValueError:
            return None
    parts = PurePosixPath(path.as_posix()).parts
    prefix = PurePosixPath(config.pages_prefix).parts
    if len(parts) <= len(prefix) + 1 or parts[: len(prefix)] != prefix:
        return None
    return parts[len(prefix)]


def global_stylesheet_href(manifest: Mapping[str, Chunk], config: SiteConfig) -> str | None:
    if not config.global_stylesheet:
        return None
    chunk = manifest.get(config.global_stylesheet)
    if chunk is None:
        return None
    return asset_href(config.public_path, chunk.file)


def _build_one(
    ctx: RunContext,
    page: PageSource,
    manifest: Mapping[str, Chunk],
    renderer: PageRenderer,
    layout: LayoutWrapper,
    global_css_href: str | None,
) -> BuiltPage:
    config = ctx.config
    entry_key = config.page_entry_key(page.name)
    tags = tags_for_entry(manifest, entry_key, config.public_path)
    if entry_key not in manifest:
        log_event(ctx, "warn", "build", "no_compiled_output", page=page.name, entry=entry_key)
    rendered = renderer.render(page)
    html = layout.wrap(
        LayoutData(
            title=rendered.title,
            tags=tags,
            content=rendered.content,
            global_css_href=global_css_href,
        )
    )
    out_path = config.out_root(ctx.project_root) / config.page_output_name(page.name)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(html.strip(), encoding="utf-8")
    log_event(ctx, "info", "build", "generated", page=page.name, output=out_path.name)
    return BuiltPage(name=page.name, entry_key=entry_key, output=out_path, has_assets=bool(tags))


def build_pages(
    ctx: RunContext,
    manifest: Mapping[str, Chunk],
    renderer: PageRenderer,
    layout: LayoutWrapper,
    target: str | None = None,
    jobs: int = 1,
) -> list[BuiltPage]:
    pages = discover_pages(ctx, target)
    css_href = global_stylesheet_href(manifest, ctx.config)

    def _run_one(page: PageSource) -> BuiltPage:
        return _build_one(ctx, page, manifest, renderer, layout, css_href)

    if jobs > 1:
        with ThreadPoolExecutor(max_workers=jobs) as ex:
            return list(ex.map(_run_one, pages))
    return [_run_one(page) for page in pages]
