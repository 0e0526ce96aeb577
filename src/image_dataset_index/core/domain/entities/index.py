from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

import numpy as np

from image_dataset_index.core.domain.utils.path_encoding import decode_path, decode_paths, path_bytes

__all__ = ["SplitName", "SPLITS", "ImageRecords", "EncodedSplit", "DatasetIndex"]

SplitName = Literal["train", "val"]
SPLITS: tuple[SplitName, ...] = ("train", "val")


@dataclass
class ImageRecords:
    """Images collected from one split, in traversal order.

    `max_length` is the longest relative path in filesystem bytes plus one
    terminator byte (1 when the split is empty).
    """

    paths: list[str] = field(default_factory=list)
    class_ids: list[int] = field(default_factory=list)
    superclass_ids: list[int] = field(default_factory=list)
    max_length: int = 1

    def add(self, path: str, class_id: int, superclass_id: int) -> None:
        self.paths.append(path)
        self.class_ids.append(class_id)
        self.superclass_ids.append(superclass_id)
        self.max_length = max(self.max_length, len(path_bytes(path)) + 1)

    def __len__(self) -> int:
        return len(self.paths)


@dataclass(frozen=True)
class EncodedSplit:
    """Fixed-width encoded image table for one split.

    `image_path` is uint8 of shape (n, max_length), each row a zero-padded
    UTF-8 relative path (`class/filename`). `image_class` and
    `image_superclass` are int64 of shape (n,), aligned with the rows.
    """

    image_path: np.ndarray
    image_class: np.ndarray
    image_superclass: np.ndarray

    def __len__(self) -> int:
        return int(self.image_path.shape[0])

    def decoded_paths(self) -> list[str]:
        return decode_paths(self.image_path)

    def image_file(self, i: int, *, basedir: str | Path, split: SplitName) -> Path:
        """Location of image `i` on disk: basedir/split/class/filename."""

        return Path(basedir) / split / decode_path(self.image_path[i])


@dataclass(frozen=True)
class DatasetIndex:
    basedir: str
    class_list: tuple[str, ...]
    idx_to_super_idx: np.ndarray
    train: EncodedSplit
    val: EncodedSplit

    def split(self, name: SplitName) -> EncodedSplit:
        if name == "train":
            return self.train
        if name == "val":
            return self.val
        raise ValueError(f"split must be one of: train, val (got {name!r})")

    @property
    def num_classes(self) -> int:
        return len(self.class_list)

    def summary(self) -> dict[str, object]:
        return {
            "basedir": self.basedir,
            "num_classes": self.num_classes,
            "num_superclasses": int(self.idx_to_super_idx.max()) if self.idx_to_super_idx.size else 0,
            "train_images": len(self.train),
            "val_images": len(self.val),
        }
