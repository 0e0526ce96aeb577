from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from image_dataset_index.core.ports.progress_sink import ProgressSinkPort


def _to_jsonable(value: Any) -> Any:
    """Best-effort conversion of detail values to JSON-serializable types."""

    if value is None or isinstance(value, (bool, int, float, str)):
        return value

    # numpy scalars
    if isinstance(value, np.generic):
        return value.item()

    if isinstance(value, np.ndarray):
        return value.item() if value.shape == () else value.tolist()

    if isinstance(value, Path):
        return str(value)

    if isinstance(value, dict):
        return {str(k): _to_jsonable(v) for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]

    return str(value)


class JsonlFileProgressSink(ProgressSinkPort):
    """Append-only JSONL progress log.

    Each call writes one JSON object on a single line:
      {"ts": "...", "message": "...", "details": {...}}
    """

    def __init__(self, *, path: str | Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def log(self, *, message: str, details: dict[str, Any] | None = None) -> None:
        record = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "message": message.strip(),
            "details": _to_jsonable(details or {}),
        }
        line = json.dumps(record, ensure_ascii=False)

        with self._path.open("a", encoding="utf-8") as f:
            f.write(line)
            f.write("\n")


class CompositeProgressSink(ProgressSinkPort):
    """Tee progress to multiple sinks."""

    def __init__(self, *sinks: ProgressSinkPort) -> None:
        self._sinks = [s for s in sinks if s is not None]

    def log(self, *, message: str, details: dict[str, Any] | None = None) -> None:
        for s in self._sinks:
            s.log(message=message, details=details)
