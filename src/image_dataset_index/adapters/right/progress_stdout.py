from __future__ import annotations

from typing import Any

from image_dataset_index.core.ports.progress_sink import ProgressSinkPort


class StdoutProgressSink(ProgressSinkPort):
    def log(self, *, message: str, details: dict[str, Any] | None = None) -> None:
        print(message)
