"""Directory conventions for pages, the layout and shared components."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..config import SiteConfig
from ..core.paths import rel_posix
from ..errors import ScriptError
from ..exit_codes import ERR_INPUT
from .model import Violation, ViolationKind

COMPONENTS_DIR = "components"


class NodeKind(str, Enum):
    PAGE = "page"
    LAYOUT = "layout"
    SHARED = "shared"


@dataclass(frozen=True)
class ProjectNode:
    kind: NodeKind
    name: str
    path: Path

    @property
    def label(self) -> str:
        return self.kind.value.capitalize()


@dataclass(frozen=True)
class ComponentFolder:
    name: str
    path: Path
    owner: ProjectNode


def _list_dir(path: Path) -> list[Path]:
    try:
        return sorted(path.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise ScriptError(f"unable to read directory {path}: {exc}", ERR_INPUT, "input_error") from exc


def _require_dir(path: Path, what: str) -> None:
    if not path.is_dir():
        raise ScriptError(f"{what} directory not found: {path}", ERR_INPUT, "input_error")


def discover_nodes(project_root: Path, config: SiteConfig) -> list[ProjectNode]:
    pages_root = config.pages_root(project_root)
    layout_root = config.layout_root(project_root)
    _require_dir(pages_root, "pages")
    _require_dir(layout_root, "layout")
    nodes = [ProjectNode(NodeKind.PAGE, entry.name, entry) for entry in _list_dir(pages_root) if entry.is_dir()]
    nodes.append(ProjectNode(NodeKind.LAYOUT, layout_root.name, layout_root))
    return nodes


def _check_node_root(node: ProjectNode, project_root: Path, config: SiteConfig) -> list[Violation]:
    name = node.name
    required = (f"{name}{config.controller_suffix}", f"{name}{config.view_suffix}", COMPONENTS_DIR)
    optional = (f"{name}{config.client_suffix}", f"{name}{config.model_suffix}")
    present = {entry.name: entry for entry in _list_dir(node.path)}
    missing = [item for item in required if item not in present]
    if COMPONENTS_DIR in present and not present[COMPONENTS_DIR].is_dir():
        missing.append(f"{COMPONENTS_DIR}/")
    extra = [item for item in present if item not in required and item not in optional]
    where = rel_posix(node.path, project_root)
    out: list[Violation] = []
    if missing:
        out.append(
            Violation(
                ViolationKind.MISSING_FILES,
                f"{node.label} '{name}' is missing: {', '.join(missing)}",
                paths=(where,),
                filenames=tuple(missing),
            )
        )
    if extra:
        out.append(
            Violation(
                ViolationKind.EXTRA_FILES,
                f"{node.label} '{name}' has extra files: {', '.join(extra)}",
                paths=(where,),
                filenames=tuple(extra),
                hint=f"allowed entries: {', '.join((*required, *optional))}",
            )
        )
    return out


def _check_folder_files(
    folder: ComponentFolder,
    expected: tuple[str, ...],
    optional: tuple[str, ...],
    project_root: Path,
) -> list[Violation]:
    files = [entry.name for entry in _list_dir(folder.path)]
    missing = [item for item in expected if item not in files]
    extra = [item for item in files if item not in expected and item not in optional]
    where = rel_posix(folder.path, project_root)
    owner = folder.owner
    context = f"Component '{folder.name}' in {owner.label} '{owner.name}' ({where})"
    out: list[Violation] = []
    if missing:
        out.append(
            Violation(
                ViolationKind.MISSING_FILES,
                f"{context} is missing {', '.join(missing)}",
                paths=(where,),
                filenames=tuple(missing),
            )
        )
    if extra:
        out.append(
            Violation(
                ViolationKind.EXTRA_FILES,
                f"{context} has extra files: {', '.join(extra)}",
                paths=(where,),
                filenames=tuple(extra),
                hint=f"a component folder holds exactly: {', '.join(expected)}",
            )
        )
    return out


def _stray_file(entry: Path, project_root: Path, container: str) -> Violation:
    return Violation(
        ViolationKind.STRAY_COMPONENT_FILE,
        f"Only component folders allowed under {container}, found file: {entry.name}",
        paths=(rel_posix(entry, project_root),),
        filenames=(entry.name,),
        hint=f"move {entry.name} into a folder named after its component",
    )


def check_component_folders(node: ProjectNode, project_root: Path, config: SiteConfig) -> list[Violation]:
    components = node.path / COMPONENTS_DIR
    if not components.is_dir():
        return []
    container = f"{node.label} '{node.name}'/{COMPONENTS_DIR}"
    out: list[Violation] = []
    for entry in _list_dir(components):
        if not entry.is_dir():
            out.append(_stray_file(entry, project_root, container))
            continue
        folder = ComponentFolder(entry.name, entry, node)
        expected = (f"{entry.name}{config.client_suffix}", f"{entry.name}{config.component_template_suffix}")
        out.extend(_check_folder_files(folder, expected, (), project_root))
    return out


def check_page_layout(project_root: Path, config: SiteConfig) -> list[Violation]:
    out: list[Violation] = []
    for node in discover_nodes(project_root, config):
        out.extend(_check_node_root(node, project_root, config))
        out.extend(check_component_folders(node, project_root, config))
    return out


def check_shared_layout(project_root: Path, config: SiteConfig) -> list[Violation]:
    shared_root = config.shared_root(project_root)
    if not shared_root.is_dir():
        return []
    node = ProjectNode(NodeKind.SHARED, shared_root.name, shared_root)
    out: list[Violation] = []
    for entry in _list_dir(shared_root):
        if not entry.is_dir():
            out.append(_stray_file(entry, project_root, config.shared_prefix))
            continue
        optional = (f"{entry.name}{config.client_suffix}",) if config.shared_behavior_allowed else ()
        expected = (f"{entry.name}{config.component_template_suffix}",)
        out.extend(_check_folder_files(ComponentFolder(entry.name, entry, node), expected, optional, project_root))
    return out
