from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping


@dataclass(frozen=True)
class SiteConfig:
    """Directory and naming conventions of one site project.

    Every path is relative to the project root and written with forward
    slashes; the module keys of the chunk manifest and the import graph use
    the same form, so ``page_entry_key`` can be compared to either directly.
    """

    source_dir: str = "src"
    pages_dir: str = "pages"
    layout_dir: str = "layout"
    shared_dir: str = "design-system"
    out_dir: str = "dist"
    manifest: str = ".vite/manifest.json"
    public_path: str = "/"
    home_page: str = "home"
    global_stylesheet: str | None = "src/styles.css"
    controller_suffix: str = ".controller.ts"
    view_suffix: str = ".view.ejs"
    client_suffix: str = ".client.ts"
    model_suffix: str = ".model.ts"
    component_template_suffix: str = ".component.ejs"
    script_extensions: tuple[str, ...] = (".ts", ".tsx", ".js", ".mjs")
    shared_behavior_allowed: bool = False
    page_titles: Mapping[str, str] = field(default_factory=dict)

    @property
    def pages_prefix(self) -> str:
        return f"{self.source_dir}/{self.pages_dir}"

    @property
    def layout_prefix(self) -> str:
        return f"{self.source_dir}/{self.layout_dir}"

    @property
    def shared_prefix(self) -> str:
        return f"{self.source_dir}/{self.shared_dir}"

    def pages_root(self, project_root: Path) -> Path:
        return project_root / self.source_dir / self.pages_dir

    def layout_root(self, project_root: Path) -> Path:
        return project_root / self.source_dir / self.layout_dir

    def shared_root(self, project_root: Path) -> Path:
        return project_root / self.source_dir / self.shared_dir

    def out_root(self, project_root: Path) -> Path:
        return project_root / self.out_dir

    def manifest_path(self, project_root: Path) -> Path:
        return project_root / self.out_dir / self.manifest

    def page_entry_key(self, page: str) -> str:
        return f"{self.pages_prefix}/{page}/{page}{self.client_suffix}"

    def page_output_name(self, page: str) -> str:
        return "index.html" if page == self.home_page else f"{page}.html"
