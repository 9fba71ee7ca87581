"""Render and layout-wrap capabilities used by the page build driver.

Template engines are out of scope: callers plug in their own ``PageRenderer``
and ``LayoutWrapper``. The defaults here pass the view file through unchanged
and wrap it in a bare HTML document.
"""

from __future__ import annotations

from dataclasses import dataclass
from html import escape
from pathlib import Path
from typing import Protocol

from ..config import SiteConfig
from ..errors import ScriptError
from ..exit_codes import ERR_INPUT


@dataclass(frozen=True)
class PageSource:
    name: str
    directory: Path
    controller: Path

    def view_path(self, config: SiteConfig) -> Path:
        return self.directory / f"{self.name}{config.view_suffix}"


@dataclass(frozen=True)
class RenderedPage:
    title: str
    content: str


@dataclass(frozen=True)
class LayoutData:
    title: str
    tags: str
    content: str
    global_css_href: str | None = None


class PageRenderer(Protocol):
    def render(self, page: PageSource) -> RenderedPage: ...


class LayoutWrapper(Protocol):
    def wrap(self, data: LayoutData) -> str: ...


class ViewFileRenderer:
    def __init__(self, config: SiteConfig) -> None:
        self.config = config

    def render(self, page: PageSource) -> RenderedPage:
        view = page.view_path(self.config)
        try:
            content = view.read_text(encoding="utf-8")
        except OSError as exc:
            raise ScriptError(f"unable to read view template {view}: {exc}", ERR_INPUT, "input_error") from exc
        return RenderedPage(title=self.config.page_titles.get(page.name, page.name), content=content)


class ShellLayout:
    def wrap(self, data: LayoutData) -> str:
        head = [
            '<meta charset="utf-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1">',
            f"<title>{escape(data.title)}</title>",
        ]
        if data.global_css_href:
            head.append(f'<link rel="stylesheet" href="{escape(data.global_css_href, quote=True)}">')
        if data.tags:
            head.append(data.tags)
        return "\n".join(
            [
                "<!doctype html>",
                "<html>",
                "<head>",
                *head,
                "</head>",
                "<body>",
                data.content.strip(),
                "</body>",
                "</html>",
            ]
        )
