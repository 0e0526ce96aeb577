from __future__ import annotations

import json
from pathlib import Path

import numpy as np
from safetensors import SafetensorError, safe_open
from safetensors.numpy import save_file

from image_dataset_index.adapters.right.cache_files import atomic_destination
from image_dataset_index.core.domain.entities.index import SPLITS, DatasetIndex, EncodedSplit
from image_dataset_index.core.domain.errors.indexing import CacheLoadError, CachePersistError
from image_dataset_index.core.ports.index_cache_store import IndexCacheStorePort

_SPLIT_FIELDS = ("image_path", "image_class", "image_superclass")


class SafetensorsIndexCacheStore(IndexCacheStorePort):
    """Stores the index arrays as safetensors.

    Tensors are named `{split}.{field}` plus `idx_to_super_idx`; `basedir` and
    the JSON-encoded `class_list` travel in the string metadata header.
    """

    def save(self, *, index: DatasetIndex, path: str | Path) -> None:
        tensors: dict[str, np.ndarray] = {
            "idx_to_super_idx": np.ascontiguousarray(index.idx_to_super_idx, dtype=np.int64),
        }
        for split in SPLITS:
            encoded = index.split(split)
            for name in _SPLIT_FIELDS:
                tensors[f"{split}.{name}"] = np.ascontiguousarray(getattr(encoded, name))

        metadata = {
            "basedir": index.basedir,
            "class_list": json.dumps(list(index.class_list)),
        }

        with atomic_destination(path) as tmp:
            try:
                save_file(tensors, str(tmp), metadata=metadata)
            except (SafetensorError, TypeError, ValueError) as e:
                # The header is UTF-8 JSON, so a basedir that is not valid UTF-8 fails here.
                raise CachePersistError(path) from e

    def load(self, *, path: str | Path) -> DatasetIndex:
        try:
            with safe_open(str(path), framework="np") as f:
                metadata = f.metadata() or {}
                tensors = {k: f.get_tensor(k) for k in f.keys()}
        except Exception as e:  # pylint: disable=broad-exception-caught
            # OSError for missing files, SafetensorError for corrupt headers.
            raise CacheLoadError(path, str(e)) from e

        try:
            splits = {
                split: EncodedSplit(
                    image_path=tensors[f"{split}.image_path"],
                    image_class=tensors[f"{split}.image_class"],
                    image_superclass=tensors[f"{split}.image_superclass"],
                )
                for split in SPLITS
            }
            return DatasetIndex(
                basedir=metadata["basedir"],
                class_list=tuple(json.loads(metadata["class_list"])),
                idx_to_super_idx=tensors["idx_to_super_idx"],
                train=splits["train"],
                val=splits["val"],
            )
        except KeyError as e:
            raise CacheLoadError(path, f"missing key {e}") from e
