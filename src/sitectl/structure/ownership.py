"""Import rules between pages, the layout and their owned components."""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass

from ..config import SiteConfig
from .graph import ImportGraph
from .model import Violation, ViolationKind


@dataclass(frozen=True)
class OwnedComponent:
    module: str
    name: str
    owner: str
    namespace: str


def component_pattern(config: SiteConfig) -> re.Pattern[str]:
    src = re.escape(config.source_dir)
    pages = re.escape(config.pages_dir)
    layout = re.escape(config.layout_dir)
    suffix = re.escape(config.client_suffix)
    return re.compile(rf"^{src}/({pages}/[^/]+|{layout})/components/([^/]+)/\2{suffix}$")


def page_namespace(module: str, config: SiteConfig) -> str | None:
    prefix = config.pages_prefix + "/"
    if not module.startswith(prefix):
        return None
    rest = module[len(prefix) :]
    if "/" not in rest:
        return None
    return prefix + rest.split("/", 1)[0] + "/"


def owned_components(graph: ImportGraph, config: SiteConfig) -> dict[str, OwnedComponent]:
    pattern = component_pattern(config)
    modules = set(graph)
    for imports in graph.values():
        modules.update(imports)
    out: dict[str, OwnedComponent] = {}
    for module in sorted(modules):
        match = pattern.match(module)
        if match is None:
            continue
        owner = match.group(1)
        out[module] = OwnedComponent(
            module=module,
            name=match.group(2),
            owner=owner,
            namespace=f"{config.source_dir}/{owner}/",
        )
    return out


def _shared_home(component: OwnedComponent, config: SiteConfig) -> str:
    return f"{config.shared_prefix}/{component.name}/"


def check_cross_page_imports(graph: ImportGraph, config: SiteConfig) -> list[Violation]:
    components = owned_components(graph, config)
    out: list[Violation] = []
    for importer in sorted(graph):
        own = page_namespace(importer, config)
        if own is None:
            continue
        reported: set[str] = set()
        for target in graph[importer]:
            other = page_namespace(target, config)
            if other is None or other == own or target in components or target in reported:
                continue
            reported.add(target)
            out.append(
                Violation(
                    ViolationKind.CROSS_PAGE_IMPORT,
                    f"Page '{importer}' imports another page '{target}'. Pages cannot import each other.",
                    paths=(importer, target),
                    hint="move the shared code out of the page directories",
                )
            )
    return out


def check_component_ownership(graph: ImportGraph, config: SiteConfig) -> list[Violation]:
    components = owned_components(graph, config)
    usage: dict[str, set[str]] = {}
    out: list[Violation] = []
    for importer in sorted(graph):
        reported: set[str] = set()
        for target in graph[importer]:
            component = components.get(target)
            if component is None or importer == target:
                continue
            if not importer.startswith(component.namespace):
                if target in reported:
                    continue
                reported.add(target)
                out.append(
                    Violation(
                        ViolationKind.FOREIGN_COMPONENT_IMPORT,
                        f"Component '{component.name}' from '{component.owner}' is imported in '{importer}'.",
                        paths=(target, importer),
                        hint=f"Move it to {_shared_home(component, config)}",
                    )
                )
                continue
            usage.setdefault(target, set()).add(importer)
    for module in sorted(usage):
        users = sorted(usage[module])
        if len(users) < 2:
            continue
        component = components[module]
        out.append(
            Violation(
                ViolationKind.COMPONENT_REUSED,
                f"Component '{component.name}' is used in multiple places ({', '.join(users)}).",
                paths=(module, *users),
                filenames=tuple(posixpath.basename(user) for user in users),
                hint=f"Move to {_shared_home(component, config)}",
            )
        )
    return out
