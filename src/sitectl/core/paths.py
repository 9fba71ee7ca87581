from __future__ import annotations

from pathlib import Path

CONFIG_FILENAME = "sitectl.yaml"
_ROOT_MARKERS = (CONFIG_FILENAME, "package.json")


def find_project_root(start: Path | None = None) -> Path:
    cur = (start or Path.cwd()).resolve()
    if cur.is_file():
        cur = cur.parent
    origin = cur
    while True:
        if any((cur / marker).is_file() for marker in _ROOT_MARKERS):
            return cur
        if cur.parent == cur:
            return origin
        cur = cur.parent


def rel_posix(path: Path, root: Path) -> str:
    return path.resolve().relative_to(root.resolve()).as_posix()
