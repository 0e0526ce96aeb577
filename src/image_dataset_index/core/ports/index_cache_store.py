from __future__ import annotations

from pathlib import Path
from typing import Protocol

from image_dataset_index.core.domain.entities.index import DatasetIndex


class IndexCacheStorePort(Protocol):
    """Port for persisting a built dataset index.

    Keep serialization out of core; adapters implement this (npz, safetensors, ...).
    """

    def save(self, *, index: DatasetIndex, path: str | Path) -> None: ...

    def load(self, *, path: str | Path) -> DatasetIndex: ...
