"""Static import graph over a site's script sources.

Keys and values are project-relative posix paths. Only relative specifiers
that resolve to a file on disk become edges; package imports are dropped.
"""

from __future__ import annotations

import json
import posixpath
import re
from pathlib import Path
from typing import Iterable, Mapping

from ..contracts import validate
from ..errors import ScriptError
from ..exit_codes import ERR_INPUT

ImportGraph = Mapping[str, tuple[str, ...]]

SPECIFIER_RE = re.compile(
    r"""
    (?:
      \bimport\s+(?:[\w*\s{},$]*\s+from\s+)? |
      \bexport\s+(?:[\w*\s{},$]*\s+from\s+) |
      \brequire\s*\(\s* |
      \bimport\s*\(\s*
    )
    ['"](?P<spec>[^'"]+)['"]
    """,
    re.VERBOSE,
)

_JS_EMIT_SUFFIXES = (".js", ".mjs", ".jsx")
_SKIP_DIRS = frozenset({"node_modules", ".git"})


def normalize_module(path: str) -> str:
    return path.replace("\\", "/")


def extract_specifiers(text: str) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for match in SPECIFIER_RE.finditer(text):
        spec = match.group("spec")
        if spec not in seen:
            seen.add(spec)
            out.append(spec)
    return out


def join_specifier(importer: str, spec: str) -> str | None:
    if not spec.startswith("."):
        return None
    joined = posixpath.normpath(posixpath.join(posixpath.dirname(importer), spec))
    if joined == ".." or joined.startswith("../"):
        return None
    return joined


def _candidates(base: str, extensions: Iterable[str]) -> list[str]:
    exts = tuple(extensions)
    out = [base]
    stem, suffix = posixpath.splitext(base)
    if suffix in _JS_EMIT_SUFFIXES:
        out.extend(stem + ext for ext in exts)
    out.extend(base + ext for ext in exts)
    out.extend(f"{base}/index{ext}" for ext in exts)
    return out


def resolve_specifier(project_root: Path, importer: str, spec: str, extensions: Iterable[str]) -> str | None:
    base = join_specifier(importer, spec)
    if base is None:
        return None
    for candidate in _candidates(base, extensions):
        if (project_root / candidate).is_file():
            return candidate
    return None


def iter_sources(project_root: Path, source_dir: str, extensions: Iterable[str]) -> list[Path]:
    exts = set(extensions)
    base = project_root / source_dir
    if not base.is_dir():
        return []
    return sorted(
        path
        for path in base.rglob("*")
        if path.is_file() and path.suffix in exts and not _SKIP_DIRS.intersection(path.relative_to(base).parts)
    )


def build_import_graph(project_root: Path, source_dir: str, extensions: Iterable[str]) -> dict[str, tuple[str, ...]]:
    exts = tuple(extensions)
    root = project_root.resolve()
    graph: dict[str, tuple[str, ...]] = {}
    for path in iter_sources(root, source_dir, exts):
        module = path.relative_to(root).as_posix()
        try:
            text = path.read_text(encoding="utf-8", errors="ignore")
        except OSError as exc:
            raise ScriptError(f"unable to read {module}: {exc}", ERR_INPUT, "input_error") from exc
        targets: list[str] = []
        for spec in extract_specifiers(text):
            target = resolve_specifier(root, module, spec, exts)
            if target is not None and target not in targets:
                targets.append(target)
        graph[module] = tuple(targets)
    return graph


def normalize_graph(raw: Mapping[str, Iterable[str]]) -> dict[str, tuple[str, ...]]:
    return {normalize_module(key): tuple(normalize_module(item) for item in values) for key, values in raw.items()}


def load_import_graph(path: Path) -> dict[str, tuple[str, ...]]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ScriptError(f"unable to read import graph {path}: {exc}", ERR_INPUT, "input_error") from exc
    except json.JSONDecodeError as exc:
        raise ScriptError(f"import graph {path} is not valid JSON: {exc}", ERR_INPUT, "input_error") from exc
    validate("import-graph", payload, source=str(path))
    return normalize_graph(payload)


def anchor_graph(graph: ImportGraph, source_dir: str) -> dict[str, tuple[str, ...]]:
    """Re-root a graph keyed relative to ``source_dir`` (``madge --json src``) at the project root.

    Graphs where any module already sits under ``source_dir`` are returned unchanged.
    """
    prefix = source_dir.strip("/") + "/"
    modules = set(graph)
    for targets in graph.values():
        modules.update(targets)
    if not modules or any(module.startswith(prefix) for module in modules):
        return dict(graph)

    def _anchor(module: str) -> str:
        return prefix + posixpath.normpath(module)

    return {_anchor(key): tuple(_anchor(target) for target in targets) for key, targets in graph.items()}
