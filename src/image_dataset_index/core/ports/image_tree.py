from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol


class ImageTreePort(Protocol):
    """Port for reading the dataset directory tree."""

    def is_dir(self, path: str | Path) -> bool: ...

    def list_dir(self, path: str | Path) -> list[str]:
        """Names of the first-level entries of `path`, in no particular order."""
        ...

    def iter_files(self, path: str | Path) -> Iterable[Path]:
        """Every file below `path`, recursively, following symlinks, in filesystem order."""
        ...
