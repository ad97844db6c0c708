"""Resolution of report paths into logical file identities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping

    from genericcov.core.model.types import FileIdentity


class ResourceLocator(Protocol):
    """Maps a path as written in a report to the file it designates.

    Implementations must be side-effect free; ``None`` means the file is
    unknown to the host.
    """

    def resolve(self, path: str) -> FileIdentity | None: ...


@dataclass(frozen=True, slots=True)
class MappingResourceLocator:
    """Looks report paths up in a fixed table."""

    files: Mapping[str, FileIdentity] = field(default_factory=dict)

    def resolve(self, path: str) -> FileIdentity | None:
        return self.files.get(path)


@dataclass(frozen=True, slots=True)
class FileSystemResourceLocator:
    """Resolves report paths to existing regular files.

    Relative paths are anchored at ``base_dir``; absolute paths are taken as
    they are. Neither is confined to ``base_dir``, so ``..`` segments may
    lead outside it. The identity handed out is the resolved :class:`Path`.
    """

    base_dir: Path

    def resolve(self, path: str) -> Path | None:
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.base_dir / candidate
        try:
            resolved = candidate.resolve()
        except (OSError, RuntimeError):
            return None
        return resolved if resolved.is_file() else None


__all__ = ["FileSystemResourceLocator", "MappingResourceLocator", "ResourceLocator"]
