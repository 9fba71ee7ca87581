from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Mapping


@dataclass(frozen=True)
class Chunk:
    key: str
    file: str
    css: tuple[str, ...] = ()
    imports: tuple[str, ...] = ()
    is_entry: bool = False

    @classmethod
    def from_payload(cls, key: str, raw: Mapping[str, Any]) -> "Chunk":
        return cls(
            key=key,
            file=str(raw["file"]),
            css=tuple(str(item) for item in raw.get("css") or ()),
            imports=tuple(str(item) for item in raw.get("imports") or ()),
            is_entry=bool(raw.get("isEntry", False)),
        )


class Manifest(Mapping[str, Chunk]):
    """Read-only chunk table keyed by module key.

    Import keys are not required to have an entry of their own; lookups of
    such keys simply miss.
    """

    __slots__ = ("_chunks",)

    def __init__(self, chunks: Mapping[str, Chunk] | None = None) -> None:
        self._chunks: Mapping[str, Chunk] = MappingProxyType(dict(chunks or {}))

    @classmethod
    def from_chunks(cls, *chunks: Chunk) -> "Manifest":
        return cls({chunk.key: chunk for chunk in chunks})

    @classmethod
    def from_payload(cls, payload: Mapping[str, Mapping[str, Any]]) -> "Manifest":
        return cls({str(key): Chunk.from_payload(str(key), raw) for key, raw in payload.items()})

    def __getitem__(self, key: str) -> Chunk:
        return self._chunks[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._chunks)

    def __len__(self) -> int:
        return len(self._chunks)

    def __repr__(self) -> str:
        return f"Manifest({len(self._chunks)} chunks)"

    def entries(self) -> list[Chunk]:
        return [chunk for chunk in self._chunks.values() if chunk.is_entry]
