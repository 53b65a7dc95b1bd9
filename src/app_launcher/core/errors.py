"""Exception types raised by the launcher core."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class LauncherError(Exception):
    """Base class for launcher errors."""


class ParseError(LauncherError):
    """A descriptor file could not be read or is malformed."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class NoCommand(LauncherError):
    """An entry has no usable launch command."""

    def __init__(self, entry_id: str, reason: str = "no launch command") -> None:
        self.entry_id = entry_id
        self.reason = reason
        super().__init__(f"{entry_id}: {reason}")


class LaunchSpawnError(LauncherError):
    """The launched process could not be created."""

    def __init__(self, argv: Sequence[str], reason: str) -> None:
        self.argv = list(argv)
        self.reason = reason
        super().__init__(f"Failed to start {self.argv[0] if self.argv else '<empty>'}: {reason}")
