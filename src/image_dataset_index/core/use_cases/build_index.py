from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import numpy as np

from image_dataset_index.core.domain.commands.build_index import BuildIndexCommand
from image_dataset_index.core.domain.entities.classes import ClassIndex, SuperclassMapping
from image_dataset_index.core.domain.entities.index import DatasetIndex, EncodedSplit, ImageRecords
from image_dataset_index.core.domain.errors.indexing import (
    CachePersistError,
    CardinalityMismatch,
    DirectoryNotFound,
    MissingSuperclass,
    UnknownClass,
    UnknownSuperclass,
)
from image_dataset_index.core.domain.utils.path_encoding import encode_labels, encode_paths
from image_dataset_index.core.ports.image_tree import ImageTreePort
from image_dataset_index.core.ports.index_cache_store import IndexCacheStorePort
from image_dataset_index.core.ports.progress_sink import ProgressSinkPort
from image_dataset_index.core.ports.superclass_source import SuperclassSourcePort


def find_classes(tree: ImageTreePort, train_dir: str | Path) -> ClassIndex:
    """Every first-level entry of the training root is a class, ids assigned in sorted order."""

    return ClassIndex.from_names(tree.list_dir(train_dir))


def get_superclasses(source: SuperclassSourcePort) -> SuperclassMapping:
    return SuperclassMapping.from_rows(source.load_rows())


def get_idx_mapping(classes: ClassIndex, superclasses: SuperclassMapping) -> np.ndarray:
    """Return the superclass id of every class id: element k belongs to class k + 1."""

    if len(classes) != len(superclasses):
        raise CardinalityMismatch(num_classes=len(classes), num_mapped=len(superclasses))

    idx_to_super_idx = np.zeros((len(classes),), dtype=np.int64)
    for name, idx in classes.class_to_idx.items():
        super_idx = superclasses.class_to_super_idx.get(name)
        if super_idx is None:
            raise MissingSuperclass(name)
        idx_to_super_idx[idx - 1] = super_idx
    return idx_to_super_idx


def _has_extension(name: str, suffixes: tuple[str, ...]) -> bool:
    return name.lower().endswith(suffixes)


def find_images(
    tree: ImageTreePort,
    split_dir: str | Path,
    classes: ClassIndex,
    superclasses: SuperclassMapping,
    *,
    extensions: Iterable[str],
) -> ImageRecords:
    """Collect (class/filename, class id, superclass id) for every image below `split_dir`.

    The order is whatever the directory walk yields; it is not sorted.
    """

    suffixes = tuple(f".{e.lower()}" for e in extensions)
    records = ImageRecords()

    for file_path in tree.iter_files(split_dir):
        file_path = Path(file_path)
        if not _has_extension(file_path.name, suffixes):
            continue

        class_name = file_path.parent.name
        rel_path = f"{class_name}/{file_path.name}"

        class_id = classes.class_to_idx.get(class_name)
        if class_id is None:
            raise UnknownClass(class_name, file_path)

        # Looked up from the mapping again rather than via the joined array.
        superclass_id = superclasses.class_to_super_idx.get(class_name)
        if superclass_id is None:
            raise UnknownSuperclass(class_name, file_path)

        records.add(rel_path, class_id, superclass_id)

    return records


def encode_split(records: ImageRecords) -> EncodedSplit:
    return EncodedSplit(
        image_path=encode_paths(records.paths, records.max_length),
        image_class=encode_labels(records.class_ids),
        image_superclass=encode_labels(records.superclass_ids),
    )


class BuildDatasetIndexUseCase:
    def __init__(
        self,
        *,
        image_tree: ImageTreePort,
        superclass_source: SuperclassSourcePort,
        cache_store: IndexCacheStorePort,
        progress_sink: ProgressSinkPort | None = None,
    ) -> None:
        self._tree = image_tree
        self._superclasses = superclass_source
        self._store = cache_store
        self._progress = progress_sink

    def _log(self, message: str, **details) -> None:
        if self._progress:
            self._progress.log(message=message, details=details or None)

    def run(self, command: BuildIndexCommand) -> DatasetIndex:
        train_dir = Path(command.data_dir) / "train"
        val_dir = Path(command.data_dir) / "val"
        if not self._tree.is_dir(train_dir):
            raise DirectoryNotFound(train_dir, what="train directory")
        if not self._tree.is_dir(val_dir):
            raise DirectoryNotFound(val_dir, what="val directory")

        extensions = command.normalized_extensions()

        self._log("=> Generating list of images", data_dir=command.data_dir)
        classes = find_classes(self._tree, train_dir)
        superclasses = get_superclasses(self._superclasses)
        idx_to_super_idx = get_idx_mapping(classes, superclasses)

        self._log(" | finding all validation images")
        val_records = find_images(self._tree, val_dir, classes, superclasses, extensions=extensions)
        val = encode_split(val_records)

        self._log(" | finding all training images")
        train_records = find_images(self._tree, train_dir, classes, superclasses, extensions=extensions)
        train = encode_split(train_records)

        index = DatasetIndex(
            basedir=command.data_dir,
            class_list=classes.class_list,
            idx_to_super_idx=idx_to_super_idx,
            train=train,
            val=val,
        )

        self._log(f" | saving list of images to {command.cache_path}", **index.summary())
        try:
            self._store.save(index=index, path=command.cache_path)
        except OSError as e:
            raise CachePersistError(command.cache_path) from e

        return index
