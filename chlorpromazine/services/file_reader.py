"""Reader for the whitelisted project documentation files."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path

from ..core.config import ServerSettings
from ..core.exceptions import ExternalServiceError
from ..core.logging_config import get_logger

logger = get_logger(__name__)

TRUNCATION_MARKER = "\n[... truncated ...]"


class FileReaderService:
    """Concatenate a fixed whitelist of files found under ``root``."""

    def __init__(self, root: Path, filenames: Sequence[str], *, max_bytes: int = 64_000) -> None:
        self._root = Path(root).resolve()
        self._filenames = tuple(filenames)
        self._max_bytes = max_bytes

    @classmethod
    def from_settings(cls, settings: ServerSettings) -> "FileReaderService":
        return cls(
            settings.project_root,
            settings.grounding_file_list,
            max_bytes=settings.max_file_bytes,
        )

    async def read_project_files(self) -> str:
        return await asyncio.to_thread(self._read_all)

    def _read_all(self) -> str:
        sections: list[str] = []
        for name in self._filenames:
            path = (self._root / name).resolve()
            if not path.is_relative_to(self._root):
                logger.warning("grounding_file_outside_root", file=name)
                continue
            if not path.is_file():
                continue
            sections.append(f"--- {name} ---\n{self._read_one(path)}")

        if not sections:
            raise ExternalServiceError(
                f"None of the project files {list(self._filenames)} exist under {self._root}"
            )
        return "\n\n".join(sections)

    def _read_one(self, path: Path) -> str:
        try:
            with path.open("rb") as handle:
                data = handle.read(self._max_bytes + 1)
        except OSError as exc:
            raise ExternalServiceError(f"Failed to read {path}: {exc}") from exc

        text = data[: self._max_bytes].decode("utf-8", errors="replace")
        if len(data) > self._max_bytes:
            text += TRUNCATION_MARKER
        return text
