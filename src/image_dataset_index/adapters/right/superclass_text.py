from __future__ import annotations

from pathlib import Path

from image_dataset_index.core.domain.entities.classes import SuperclassRow
from image_dataset_index.core.domain.errors.indexing import MalformedMappingFile
from image_dataset_index.core.ports.superclass_source import SuperclassSourcePort


def parse_superclass_rows(text: str, *, path: str | Path = "<string>") -> list[SuperclassRow]:
    """Parse whitespace-separated class names, one superclass per line.

    Line i (1-based) becomes superclass i. Trailing blank lines are ignored;
    a blank line between rows would shift every later id, so it is an error.
    """

    lines = text.rstrip().splitlines()
    rows: list[SuperclassRow] = []
    for lineno, line in enumerate(lines, start=1):
        names = tuple(line.split())
        if not names:
            raise MalformedMappingFile(path, f"line {lineno} is empty")
        rows.append(SuperclassRow(superclass_id=lineno, member_class_names=names))
    return rows


class WhitespaceSuperclassFile(SuperclassSourcePort):
    """Reads a plain-text superclass mapping file from disk."""

    def __init__(self, *, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load_rows(self) -> list[SuperclassRow]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise MalformedMappingFile(self._path, f"not valid UTF-8 ({e.reason})") from e
        except OSError as e:
            raise MalformedMappingFile(self._path, f"cannot read file ({e.strerror or e})") from e
        return parse_superclass_rows(text, path=self._path)
