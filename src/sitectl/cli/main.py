from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .. import __version__
from ..assets.resolver import resolve
from ..assets.tags import css_tags_for_entry, render_tags
from ..build.driver import build_pages, page_for_changed_path
from ..build.render import ShellLayout, ViewFileRenderer
from ..contracts import validate as validate_contract
from ..core.context import RunContext
from ..errors import ScriptError
from ..exit_codes import ERR_INTERNAL, ERR_VALIDATION, OK
from ..logging import log_event
from ..manifest.loader import load_manifest
from ..structure.checks import CHECKS, domains
from ..structure.graph import build_import_graph, load_import_graph
from ..structure.validator import validate
from .output import emit, render_error, resolve_output_format, write_payload


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="sitectl", description="static site asset tags and structure checks")
    p.add_argument("--version", action="version", version=f"sitectl {__version__}")
    p.add_argument("--project-root", help="site project root (default: nearest sitectl.yaml or package.json)")
    p.add_argument("--run-id", help="run identifier for log events")
    p.add_argument("--format", choices=["text", "json"], default=None, help="output format")
    p.add_argument("--json", action="store_true", help="alias for --format json")
    p.add_argument("--log-json", action="store_true", help="emit log events as JSON lines")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable verbose diagnostics")
    vg.add_argument("--quiet", action="store_true", help="only emit errors")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("version", help="print version")
    sub.add_parser("checks", help="list registered structure checks")

    validate_p = sub.add_parser("validate", help="validate page, layout and component structure")
    validate_p.add_argument("--graph", help="precomputed import graph JSON (default: scan sources)")
    validate_p.add_argument("--domain", choices=domains(), default="all", help="restrict to one check domain")
    validate_p.add_argument("--out-file", help="also write the JSON report to this path")

    graph_p = sub.add_parser("graph", help="print the static import graph of the source tree")
    graph_p.add_argument("--out-file", help="also write the graph to this path")

    tags_p = sub.add_parser("tags", help="print asset tags for one manifest entry")
    tags_p.add_argument("entry", help="manifest key of the entry module")
    tags_p.add_argument("--manifest", help="manifest path (default: <out_dir>/<manifest>)")
    tags_p.add_argument("--public-path", help="prefix for every asset href")
    tags_p.add_argument("--css-only", action="store_true", help="only stylesheet links")

    build_p = sub.add_parser("build", help="render every page into the output directory")
    build_p.add_argument("page", nargs="?", help="only rebuild this page")
    build_p.add_argument("--changed", help="rebuild the page owning this changed source file")
    build_p.add_argument("--manifest", help="manifest path (default: <out_dir>/<manifest>)")
    build_p.add_argument("--jobs", type=int, default=1, help="build pages on N threads")
    return p


def _manifest_path(ctx: RunContext, override: str | None) -> Path:
    if override:
        path = Path(override)
        return path if path.is_absolute() else ctx.project_root / path
    return ctx.config.manifest_path(ctx.project_root)


def _run_validate(ctx: RunContext, ns: argparse.Namespace, as_json: bool) -> int:
    graph = load_import_graph(Path(ns.graph)) if ns.graph else None
    report = validate(ctx.project_root, ctx.config, graph, domain=ns.domain)
    payload = {**report.to_payload(), "run_id": ctx.run_id}
    validate_contract("validation-report", payload)
    write_payload(ns.out_file, payload)
    log_event(ctx, "info", "validate", "finish", violations=report.count)
    if as_json:
        emit(payload, as_json=True)
    elif report.ok:
        print("✓ Structure validation passed")
    else:
        for item in report.violations:
            print(f"✘ {item.message}")
            if item.hint:
                print(f"  hint: {item.hint}")
        print(f"{report.count} structure violation(s)")
    return OK if report.ok else ERR_VALIDATION


def _run_graph(ctx: RunContext, ns: argparse.Namespace) -> int:
    graph = build_import_graph(ctx.project_root, ctx.config.source_dir, ctx.config.script_extensions)
    payload = {module: list(targets) for module, targets in graph.items()}
    write_payload(ns.out_file, payload)
    emit(payload, as_json=ctx.output_format == "json")
    return OK


def _run_tags(ctx: RunContext, ns: argparse.Namespace, as_json: bool) -> int:
    manifest = load_manifest(_manifest_path(ctx, ns.manifest))
    public_path = ns.public_path if ns.public_path is not None else ctx.config.public_path
    result = resolve(manifest, ns.entry)
    if not result.found:
        log_event(ctx, "warn", "tags", "no_compiled_output", entry=ns.entry)
    if as_json:
        emit(
            {
                "schema_version": 1,
                "tool": "sitectl",
                "entry": ns.entry,
                "found": result.found,
                "style_targets": list(result.style_targets),
                "preload_targets": list(result.preload_targets),
                "main_target": result.main_target,
            },
            as_json=True,
        )
        return OK
    if ns.css_only:
        text = "\n".join(css_tags_for_entry(manifest, ns.entry, public_path))
    else:
        text = render_tags(result, public_path)
    if text:
        print(text)
    return OK


def _run_build(ctx: RunContext, ns: argparse.Namespace, as_json: bool) -> int:
    target = ns.page
    if ns.changed:
        target = page_for_changed_path(ns.changed, ctx.project_root, ctx.config)
        log_event(ctx, "info", "build", "changed", path=ns.changed, page=target or "all")
    manifest = load_manifest(_manifest_path(ctx, ns.manifest))
    built = build_pages(ctx, manifest, ViewFileRenderer(ctx.config), ShellLayout(), target=target, jobs=max(1, ns.jobs))
    if as_json:
        emit(
            {
                "schema_version": 1,
                "tool": "sitectl",
                "status": "ok",
                "pages": [
                    {"name": page.name, "entry": page.entry_key, "output": page.output.name, "has_assets": page.has_assets}
                    for page in built
                ],
            },
            as_json=True,
        )
    else:
        for page in built:
            print(f"✓ Generated {page.output.name}")
    return OK


def _run_checks_list(as_json: bool) -> int:
    rows = [{"id": c.check_id, "domain": c.domain, "budget_ms": c.budget_ms, "description": c.description} for c in CHECKS]
    if as_json:
        emit({"schema_version": 1, "tool": "sitectl", "checks": rows}, as_json=True)
    else:
        for row in rows:
            print(f"{row['id']}: {row['description']}")
    return OK


def dispatch(ctx: RunContext, ns: argparse.Namespace) -> int:
    as_json = ctx.output_format == "json"
    if ns.cmd == "validate":
        return _run_validate(ctx, ns, as_json)
    if ns.cmd == "graph":
        return _run_graph(ctx, ns)
    if ns.cmd == "tags":
        return _run_tags(ctx, ns, as_json)
    if ns.cmd == "build":
        return _run_build(ctx, ns, as_json)
    raise ScriptError(f"unknown command `{ns.cmd}`", ERR_INTERNAL)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    fmt = resolve_output_format(cli_json=ns.json, cli_format=ns.format)
    as_json = fmt == "json"
    if ns.cmd == "version":
        if as_json:
            emit({"schema_version": 1, "tool": "sitectl", "version": __version__}, as_json=True)
        else:
            print(f"sitectl {__version__}")
        return OK
    if ns.cmd == "checks":
        return _run_checks_list(as_json)
    try:
        ctx = RunContext.from_args(ns.project_root, ns.run_id, fmt, ns.verbose, ns.quiet, ns.log_json)  # type: ignore[arg-type]
        log_event(ctx, "debug", "cli", "start", cmd=ns.cmd, root=ctx.project_root)
        return dispatch(ctx, ns)
    except ScriptError as exc:
        print(render_error(as_json=as_json, message=str(exc), code=exc.code, kind=exc.kind), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(render_error(as_json=as_json, message=f"internal error: {exc}", code=ERR_INTERNAL), file=sys.stderr)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
