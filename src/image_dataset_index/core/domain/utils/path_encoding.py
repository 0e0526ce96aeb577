from __future__ import annotations

import os
from collections.abc import Sequence

import numpy as np


def path_bytes(path: str) -> bytes:
    """Raw filesystem bytes of `path`.

    Names that are not valid UTF-8 come back from the OS as surrogate escapes;
    os.fsencode restores the original bytes instead of failing.
    """

    return os.fsencode(path)


def encode_paths(paths: Sequence[str], max_length: int) -> np.ndarray:
    """Pack paths into a zero-initialized uint8 buffer of shape (len(paths), max_length).

    Each row holds the filesystem bytes of one path from offset 0; the
    remaining bytes stay zero and act as terminator plus padding. `max_length`
    must be at least the longest encoded path plus one.
    """

    buf = np.zeros((len(paths), max(1, int(max_length))), dtype=np.uint8)
    for i, path in enumerate(paths):
        raw = path_bytes(path)
        if len(raw) >= buf.shape[1]:
            raise ValueError(f"path {path!r} needs {len(raw) + 1} bytes, buffer width is {buf.shape[1]}")
        buf[i, : len(raw)] = np.frombuffer(raw, dtype=np.uint8)
    return buf


def encode_labels(labels: Sequence[int]) -> np.ndarray:
    return np.asarray(labels, dtype=np.int64).reshape(-1)


def decode_path(row: np.ndarray) -> str:
    raw = np.asarray(row, dtype=np.uint8).tobytes()
    return os.fsdecode(raw.split(b"\x00", 1)[0])


def decode_paths(buf: np.ndarray) -> list[str]:
    return [decode_path(row) for row in buf]
