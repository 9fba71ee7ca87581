"""Transitive chunk resolution over a bundler manifest.

The walk is depth-first in import-list order. A key is marked visited before
its own imports are explored and the chunk is appended only after all of
them, so every chunk follows its dependencies and appears once, at the
position of its first discovery. Keys without a manifest entry are walked
through (they have no imports) but never emitted. The visited set is local to
each call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Mapping

from ..manifest.model import Chunk


@dataclass(frozen=True)
class ResolutionResult:
    style_targets: tuple[str, ...] = ()
    preload_targets: tuple[str, ...] = ()
    main_target: str | None = None

    @property
    def found(self) -> bool:
        return self.main_target is not None


EMPTY_RESULT = ResolutionResult()


def imported_chunks(manifest: Mapping[str, Chunk], key: str) -> list[Chunk]:
    root = manifest.get(key)
    if root is None:
        return []
    ordered: list[Chunk] = []
    visited: set[str] = set()
    # (key whose imports are pending, iterator over them); the root frame has no key to emit.
    stack: list[tuple[str | None, Iterator[str]]] = [(None, iter(root.imports))]
    while stack:
        owner, pending = stack[-1]
        for imp in pending:
            if imp in visited:
                continue
            visited.add(imp)
            child = manifest.get(imp)
            stack.append((imp, iter(child.imports if child is not None else ())))
            break
        else:
            stack.pop()
            if owner is not None:
                chunk = manifest.get(owner)
                if chunk is not None:
                    ordered.append(chunk)
    return ordered


def resolve(manifest: Mapping[str, Chunk], entry_key: str) -> ResolutionResult:
    entry = manifest.get(entry_key)
    if entry is None:
        return EMPTY_RESULT
    imports = imported_chunks(manifest, entry_key)
    styles = [*entry.css]
    for chunk in imports:
        styles.extend(chunk.css)
    return ResolutionResult(
        style_targets=tuple(styles),
        preload_targets=tuple(chunk.file for chunk in imports),
        main_target=entry.file,
    )
