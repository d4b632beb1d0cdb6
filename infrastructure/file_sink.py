# ============================================================================
# FILE SINK
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Infrastructure - Generated artifact persistence
# PURPOSE: Write generated SQL text to a directory (or memory for dry runs)
# CREATED: 19 OCT 2026
# ============================================================================
"""
File Sink

Generators hand every completed buffer to a FileSink:

- LocalFileSink: writes UTF-8 files under a base directory, overwriting
- MemoryFileSink: keeps files in a dict (dry runs, tests)

Writes are synchronous. A run that fails midway leaves already written
files in place; there is no rollback.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Union

from core.logging import get_logger, ComponentType

logger = get_logger(__name__, ComponentType.SINK)


class FileSink(ABC):
    """Destination for generated artifacts."""

    @abstractmethod
    def write(self, path: str, text: str) -> None:
        """
        Write text to path, creating or overwriting it.

        Args:
            path: File name relative to the sink (e.g. "db_create.sql")
            text: Complete file content
        """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable description of where files go."""


class LocalFileSink(FileSink):
    """
    Writes files under a base directory.

    Usage:
        sink = LocalFileSink("build/ddl")
        sink.write("db_create.sql", text)
    """

    def __init__(self, base_path: Union[str, Path]):
        self.base_path = Path(base_path)
        self.written: List[Path] = []

    @property
    def location(self) -> str:
        return str(self.base_path)

    def write(self, path: str, text: str) -> None:
        target = self.base_path / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        self.written.append(target)
        logger.debug(f"Wrote {target} ({len(text)} chars)")


class MemoryFileSink(FileSink):
    """Keeps generated files in memory, keyed by path."""

    def __init__(self, location: str = "<memory>"):
        self._location = location
        self.files: Dict[str, str] = {}

    @property
    def location(self) -> str:
        return self._location

    def write(self, path: str, text: str) -> None:
        self.files[path] = text
        logger.debug(f"Captured {path} ({len(text)} chars)")


__all__ = ["FileSink", "LocalFileSink", "MemoryFileSink"]
