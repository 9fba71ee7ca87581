from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

SITE_FILES: dict[str, str] = {
    "package.json": "{}\n",
    "src/styles.css": "body { margin: 0; }\n",
    "src/pages/home/home.controller.ts": "export const pageTitle = 'Home';\n",
    "src/pages/home/home.view.ejs": "<main><%- include('./components/hero/hero.component.ejs') %></main>\n",
    "src/pages/home/home.client.ts": "import './components/hero/hero.client.js';\n",
    "src/pages/home/components/hero/hero.client.ts": "export function mountHero() {}\n",
    "src/pages/home/components/hero/hero.component.ejs": "<section class=\"hero\"></section>\n",
    "src/pages/about/about.controller.ts": "export const pageTitle = 'About';\n",
    "src/pages/about/about.view.ejs": "<main>About</main>\n",
    "src/layout/layout.controller.ts": "import { getLayoutData } from './layout.model.js';\n",
    "src/layout/layout.model.ts": "export function getLayoutData() { return {}; }\n",
    "src/layout/layout.view.ejs": "<!doctype html><%- content %>\n",
    "src/layout/layout.client.ts": "import './components/header/header.client.js';\nimport { html } from 'lit';\n",
    "src/layout/components/header/header.client.ts": "export function mountHeader() {}\n",
    "src/layout/components/header/header.component.ejs": "<header></header>\n",
    "src/design-system/button/button.component.ejs": "<button><%= label %></button>\n",
}

SITE_DIRS = ("src/pages/about/components",)

MANIFEST: dict[str, dict[str, object]] = {
    "src/styles.css": {"file": "assets/styles-1a2b.css", "src": "src/styles.css", "isEntry": True},
    "src/pages/home/home.client.ts": {
        "file": "assets/home-3c4d.js",
        "css": ["assets/home-3c4d.css"],
        "imports": ["_shared-5e6f.js"],
        "isEntry": True,
    },
    "_shared-5e6f.js": {"file": "assets/shared-5e6f.js", "css": ["assets/shared-5e6f.css"]},
}


def write_files(root: Path, files: dict[str, str]) -> None:
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")


def make_site(root: Path) -> Path:
    write_files(root, SITE_FILES)
    for rel in SITE_DIRS:
        (root / rel).mkdir(parents=True, exist_ok=True)
    return root


def write_manifest(root: Path, manifest: dict[str, dict[str, object]] | None = None) -> Path:
    path = root / "dist/.vite/manifest.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(MANIFEST if manifest is None else manifest, indent=2), encoding="utf-8")
    return path


def run_sitectl(*args: str, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(ROOT / "src")
    env.setdefault("RUN_ID", "pytest-run")
    return subprocess.run(
        [sys.executable, "-m", "sitectl", *args],
        cwd=(cwd or ROOT),
        env=env,
        text=True,
        capture_output=True,
        check=False,
    )
