from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from image_dataset_index.core.domain.errors.indexing import DirectoryUnreadable
from image_dataset_index.core.ports.image_tree import ImageTreePort


def _raise(err: OSError) -> None:
    raise DirectoryUnreadable(err.filename or "?", err.strerror or str(err)) from err


def _dir_key(path: str) -> tuple[int, int]:
    st = os.stat(path)
    return st.st_dev, st.st_ino


class FilesystemImageTree(ImageTreePort):
    """Local filesystem adapter built on os.scandir / os.walk."""

    def is_dir(self, path: str | Path) -> bool:
        return os.path.isdir(path)

    def list_dir(self, path: str | Path) -> list[str]:
        try:
            with os.scandir(path) as it:
                return [entry.name for entry in it]
        except OSError as e:
            raise DirectoryUnreadable(path, e.strerror or str(e)) from e

    def iter_files(self, path: str | Path) -> Iterator[Path]:
        # followlinks mirrors `find -L`; symlinked files already show up in filenames.
        # A directory that resolves to one of its own ancestors is a loop and is not entered.
        top = os.fspath(path)
        try:
            ancestors = {top: frozenset([_dir_key(top)])}
        except OSError as e:
            _raise(e)

        for root, dirs, files in os.walk(top, followlinks=True, onerror=_raise):
            seen = ancestors.pop(root)
            kept = []
            for name in dirs:
                child = os.path.join(root, name)
                try:
                    key = _dir_key(child)
                except OSError as e:
                    _raise(e)
                if key in seen:
                    continue
                ancestors[child] = seen | {key}
                kept.append(name)
            dirs[:] = kept

            for name in files:
                yield Path(root) / name
