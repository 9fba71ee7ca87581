from __future__ import annotations

from pathlib import Path

from ..config import SiteConfig
from ..errors import ScriptError
from ..exit_codes import ERR_USAGE
from .checks import ValidationTarget, domains, run_checks, select_checks
from .graph import ImportGraph, anchor_graph
from .model import ValidationReport


def validate(
    project_root: Path,
    config: SiteConfig | None = None,
    graph: ImportGraph | None = None,
    *,
    domain: str = "all",
) -> ValidationReport:
    """Run every structure and import check against ``project_root``.

    All violations are collected before returning; the filesystem is only
    read. ``graph`` replaces the import graph scanned from the source tree,
    e.g. one exported by a bundler; a graph keyed relative to the
    source directory is re-rooted at the project root first.
    """
    checks = select_checks(domain)
    if not checks:
        raise ScriptError(f"unknown check domain `{domain}` (expected one of: {', '.join(domains())})", ERR_USAGE)
    cfg = config or SiteConfig()
    if graph is not None:
        graph = anchor_graph(graph, cfg.source_dir)
    target = ValidationTarget(project_root, cfg, graph)
    violations, rows = run_checks(target, checks)
    return ValidationReport(violations=tuple(violations), checks=tuple(rows))
