from __future__ import annotations

from typing import Any, Protocol


class ProgressSinkPort(Protocol):
    """Port for status lines emitted while indexing (stdout, JSONL, etc.)."""

    def log(self, *, message: str, details: dict[str, Any] | None = None) -> None:
        ...
