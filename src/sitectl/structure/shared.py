"""Shared components must not depend on page or layout code."""

from __future__ import annotations

import posixpath
import re
from pathlib import Path

from ..config import SiteConfig
from ..core.paths import rel_posix
from .graph import ImportGraph, extract_specifiers, join_specifier, resolve_specifier
from .model import Violation, ViolationKind

INCLUDE_RE = re.compile(r"""\binclude\(\s*(['"`])(?P<target>.+?)\1""")


def _template_extension(config: SiteConfig) -> str:
    return Path(config.component_template_suffix).suffix or config.component_template_suffix


def include_target(module: str, target: str, project_root: Path) -> str | None:
    """Project-relative path an ``include(...)`` in ``module`` points at, or None outside the project."""
    norm = target.replace("\\", "/")
    if norm.startswith("/"):
        try:
            return Path(norm).resolve().relative_to(project_root.resolve()).as_posix()
        except ValueError:
            return None
    joined = posixpath.normpath(posixpath.join(posixpath.dirname(module), norm))
    if joined == ".." or joined.startswith("../"):
        return None
    return joined


def _forbidden_include(module: str, target: str, project_root: Path, config: SiteConfig) -> bool:
    resolved = include_target(module, target, project_root)
    if resolved is None:
        return False
    return any(resolved.startswith(prefix + "/") for prefix in (config.pages_prefix, config.layout_prefix))


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="ignore")


def check_shared_templates(project_root: Path, config: SiteConfig) -> list[Violation]:
    shared_root = config.shared_root(project_root)
    if not shared_root.is_dir():
        return []
    ext = _template_extension(config)
    out: list[Violation] = []
    for path in sorted(p for p in shared_root.rglob(f"*{ext}") if p.is_file()):
        module = rel_posix(path, project_root)
        targets = [
            m.group("target")
            for m in INCLUDE_RE.finditer(_read(path))
            if _forbidden_include(module, m.group("target"), project_root, config)
        ]
        if not targets:
            continue
        out.append(
            Violation(
                ViolationKind.SHARED_TEMPLATE_INCLUDE,
                f"Design system component '{module}' includes page/layout templates. It must be standalone.",
                paths=(module,),
                filenames=tuple(dict.fromkeys(targets)),
            )
        )
    return out


def check_shared_imports(project_root: Path, config: SiteConfig, graph: ImportGraph) -> list[Violation]:
    shared_root = config.shared_root(project_root)
    if not shared_root.is_dir():
        return []
    prefix = config.shared_prefix + "/"
    exts = set(config.script_extensions)
    modules = {rel_posix(p, project_root) for p in shared_root.rglob("*") if p.is_file() and p.suffix in exts}
    modules.update(m for m in graph if m.startswith(prefix))
    out: list[Violation] = []
    for module in sorted(modules):
        offenders = [target for target in graph.get(module, ()) if not target.startswith(prefix)]
        path = project_root / module
        if path.is_file():
            for spec in extract_specifiers(_read(path)):
                joined = join_specifier(module, spec)
                if joined is None and spec.startswith("."):
                    offenders.append(spec)
                    continue
                if joined is None or (joined + "/").startswith(prefix):
                    continue
                if resolve_specifier(project_root, module, spec, config.script_extensions) is None:
                    offenders.append(joined)
        offenders = list(dict.fromkeys(offenders))
        if not offenders:
            continue
        out.append(
            Violation(
                ViolationKind.SHARED_EXTERNAL_IMPORT,
                f"Design system component '{module}' imports from outside {config.shared_prefix}. Keep it self-contained.",
                paths=(module,),
                filenames=tuple(offenders),
            )
        )
    return out
