from __future__ import annotations

from pathlib import Path

import numpy as np

from image_dataset_index.adapters.right.cache_files import atomic_destination
from image_dataset_index.core.domain.entities.index import SPLITS, DatasetIndex, EncodedSplit
from image_dataset_index.core.domain.errors.indexing import CacheLoadError
from image_dataset_index.core.ports.index_cache_store import IndexCacheStorePort

_SPLIT_FIELDS = ("image_path", "image_class", "image_superclass")


class NpzIndexCacheStore(IndexCacheStorePort):
    """Stores the index as an uncompressed .npz archive.

    Keys:
      - basedir (0-d str), class_list (str), idx_to_super_idx (int64)
      - {split}_image_path (uint8), {split}_image_class, {split}_image_superclass (int64)

    Everything is a plain array, so it loads with allow_pickle=False.
    """

    def save(self, *, index: DatasetIndex, path: str | Path) -> None:
        arrays: dict[str, np.ndarray] = {
            "basedir": np.asarray(index.basedir, dtype=np.str_),
            "class_list": np.asarray(index.class_list, dtype=np.str_).reshape(-1),
            "idx_to_super_idx": np.asarray(index.idx_to_super_idx, dtype=np.int64),
        }
        for split in SPLITS:
            encoded = index.split(split)
            for name in _SPLIT_FIELDS:
                arrays[f"{split}_{name}"] = getattr(encoded, name)

        # Writing through a file object keeps numpy from appending ".npz" to the name.
        with atomic_destination(path) as tmp:
            with tmp.open("wb") as f:
                np.savez(f, **arrays)

    def load(self, *, path: str | Path) -> DatasetIndex:
        try:
            with np.load(path, allow_pickle=False) as data:
                splits = {
                    split: EncodedSplit(
                        image_path=data[f"{split}_image_path"],
                        image_class=data[f"{split}_image_class"],
                        image_superclass=data[f"{split}_image_superclass"],
                    )
                    for split in SPLITS
                }
                return DatasetIndex(
                    basedir=str(data["basedir"]),
                    class_list=tuple(str(c) for c in data["class_list"]),
                    idx_to_super_idx=data["idx_to_super_idx"],
                    train=splits["train"],
                    val=splits["val"],
                )
        except KeyError as e:
            raise CacheLoadError(path, f"missing key {e}") from e
        except (OSError, ValueError) as e:
            raise CacheLoadError(path, str(e)) from e
