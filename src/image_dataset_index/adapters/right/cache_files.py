from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


@contextmanager
def atomic_destination(path: str | Path) -> Iterator[Path]:
    """Yield a temporary sibling of `path`; move it over `path` only if the block succeeds.

    mkstemp creates the file as 0600; it gets the usual umask-derived mode
    before the move so the cache is as readable as any other written file.
    """

    dest = Path(path)
    dest.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{dest.name}.", suffix=".tmp", dir=dest.parent)
    os.close(fd)
    tmp = Path(tmp_name)
    try:
        yield tmp
        os.chmod(tmp, 0o666 & ~_current_umask())
        os.replace(tmp, dest)
    finally:
        if tmp.exists():
            tmp.unlink()
