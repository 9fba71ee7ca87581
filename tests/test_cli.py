from __future__ import annotations

import json
from pathlib import Path

import pytest

from helpers import run_sitectl, write_files, write_manifest
from sitectl import __version__
from sitectl.cli.main import main
from sitectl.cli.output import dumps_json, emit
from sitectl.exit_codes import ERR_CONFIG, ERR_INPUT, ERR_USAGE, ERR_VALIDATION, OK


def _run(root: Path, *args: str) -> int:
    return main(["--project-root", str(root), *args])


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--json", "version"]) == OK
    assert json.loads(capsys.readouterr().out)["version"] == __version__


def test_checks_listing(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--json", "checks"]) == OK
    ids = [row["id"] for row in json.loads(capsys.readouterr().out)["checks"]]
    assert "imports/component-ownership" in ids


def test_validate_passes_on_valid_tree(site_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(site_root, "validate") == OK
    assert "✓ Structure validation passed" in capsys.readouterr().out


def test_validate_reports_violations(site_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_files(site_root, {"src/pages/about/notes.txt": "scratch\n"})
    assert _run(site_root, "validate") == ERR_VALIDATION
    out = capsys.readouterr().out
    assert "✘ Page 'about' has extra files: notes.txt" in out
    assert "1 structure violation(s)" in out


def test_validate_json_report_and_out_file(site_root: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_files(site_root, {"src/pages/about/notes.txt": "scratch\n"})
    out_file = tmp_path / "reports/structure.json"
    assert _run(site_root, "--json", "--run-id", "r1", "validate", "--out-file", str(out_file)) == ERR_VALIDATION
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "fail"
    assert payload["run_id"] == "r1"
    assert payload["violations"][0]["kind"] == "extra_files"
    assert json.loads(out_file.read_text(encoding="utf-8")) == payload


def test_validate_with_precomputed_graph(site_root: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    graph = tmp_path / "graph.json"
    graph.write_text(json.dumps({"src/pages/about/about.controller.ts": ["src/pages/home/home.controller.ts"]}), encoding="utf-8")
    assert _run(site_root, "--json", "validate", "--graph", str(graph), "--domain", "imports") == ERR_VALIDATION
    payload = json.loads(capsys.readouterr().out)
    assert [item["kind"] for item in payload["violations"]] == ["cross_page_import"]


def test_graph_command(site_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(site_root, "--json", "graph") == OK
    graph = json.loads(capsys.readouterr().out)
    assert graph["src/pages/home/home.client.ts"] == ["src/pages/home/components/hero/hero.client.ts"]


def test_tags_text(site_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_manifest(site_root)
    assert _run(site_root, "tags", "src/pages/home/home.client.ts", "--public-path", "/blog") == OK
    assert capsys.readouterr().out.splitlines() == [
        '<link rel="stylesheet" href="/blog/assets/home-3c4d.css">',
        '<link rel="stylesheet" href="/blog/assets/shared-5e6f.css">',
        '<link rel="modulepreload" href="/blog/assets/shared-5e6f.js">',
        '<script type="module" src="/blog/assets/home-3c4d.js"></script>',
    ]


def test_tags_css_only(site_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_manifest(site_root)
    assert _run(site_root, "tags", "src/pages/home/home.client.ts", "--css-only") == OK
    assert capsys.readouterr().out.splitlines() == [
        '<link rel="stylesheet" href="/assets/home-3c4d.css">',
        '<link rel="stylesheet" href="/assets/shared-5e6f.css">',
    ]


def test_tags_json_for_missing_entry(site_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_manifest(site_root)
    assert _run(site_root, "--json", "tags", "src/pages/about/about.client.ts") == OK
    captured = capsys.readouterr()
    payload = json.loads(captured.out)
    assert payload["found"] is False
    assert payload["main_target"] is None
    assert "action=no_compiled_output" in captured.err


def test_build_all_pages(site_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_manifest(site_root)
    assert _run(site_root, "--quiet", "build") == OK
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["✓ Generated about.html", "✓ Generated index.html"]
    assert captured.err == ""
    assert (site_root / "dist/index.html").is_file()


def test_build_changed_file_rebuilds_its_page(site_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_manifest(site_root)
    assert _run(site_root, "--json", "build", "--changed", "src/pages/about/about.view.ejs") == OK
    pages = json.loads(capsys.readouterr().out)["pages"]
    assert [(page["name"], page["output"], page["has_assets"]) for page in pages] == [("about", "about.html", False)]


def test_malformed_manifest_is_an_input_error(site_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_manifest(site_root, {"src/pages/home/home.client.ts": {"css": ["a.css"]}})
    assert _run(site_root, "--json", "build") == ERR_INPUT
    envelope = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert envelope["status"] == "error"
    assert envelope["errors"][0]["code"] == ERR_INPUT
    assert envelope["errors"][0]["kind"] == "schema_error"


def test_missing_manifest_is_an_input_error(site_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(site_root, "tags", "src/pages/home/home.client.ts") == ERR_INPUT
    assert "unable to read manifest" in capsys.readouterr().err


def test_invalid_config_exit_code(site_root: Path) -> None:
    (site_root / "sitectl.yaml").write_text("unknown_key: 1\n", encoding="utf-8")
    assert _run(site_root, "validate") == ERR_CONFIG


def test_bad_arguments_exit_with_usage_code() -> None:
    with pytest.raises(SystemExit) as exc:
        main(["validate", "--domain", "styles"])
    assert exc.value.code == ERR_USAGE


@pytest.mark.integration
def test_module_entrypoint_validates_tree(site_root: Path) -> None:
    proc = run_sitectl("--project-root", str(site_root), "--json", "validate")
    assert proc.returncode == OK, proc.stderr
    payload = json.loads(proc.stdout)
    assert payload["status"] == "pass"
    assert payload["run_id"] == "pytest-run"


@pytest.mark.integration
def test_module_entrypoint_log_json(site_root: Path) -> None:
    write_manifest(site_root)
    proc = run_sitectl("--project-root", str(site_root), "--json", "--log-json", "build", "about")
    assert proc.returncode == OK, proc.stderr
    events = [json.loads(line) for line in proc.stderr.splitlines()]
    assert {"no_compiled_output", "generated"} <= {event["action"] for event in events}
    assert all(event["run_id"] == "pytest-run" for event in events)


def test_validate_with_source_relative_graph(site_root: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    graph = tmp_path / "madge.json"
    graph.write_text(json.dumps({"pages/about/about.controller.ts": ["pages/home/home.controller.ts"]}), encoding="utf-8")
    assert _run(site_root, "--json", "validate", "--graph", str(graph), "--domain", "imports") == ERR_VALIDATION
    payload = json.loads(capsys.readouterr().out)
    assert [item["kind"] for item in payload["violations"]] == ["cross_page_import"]


def test_json_payloads_are_compact_with_sorted_keys(capsys: pytest.CaptureFixture[str]) -> None:
    emit({"tool": "sitectl", "b": [1, 2], "a": {"z": 1, "y": 2}}, as_json=True)
    assert capsys.readouterr().out == '{"a":{"y":2,"z":1},"b":[1,2],"tool":"sitectl"}\n'
    assert dumps_json({"b": 1, "a": 2}, pretty=True) == '{\n  "a": 2,\n  "b": 1\n}'
