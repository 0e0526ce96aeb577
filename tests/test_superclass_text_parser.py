from __future__ import annotations

from pathlib import Path

import pytest

from image_dataset_index.adapters.right.superclass_text import WhitespaceSuperclassFile, parse_superclass_rows
from image_dataset_index.core.domain.entities.classes import SuperclassMapping
from image_dataset_index.core.domain.errors.indexing import MalformedMappingFile


def test_rows_are_numbered_from_one() -> None:
    rows = parse_superclass_rows("cat lion\ndog  wolf\tfox\n\n")

    assert [r.superclass_id for r in rows] == [1, 2]
    assert rows[0].member_class_names == ("cat", "lion")
    assert rows[1].member_class_names == ("dog", "wolf", "fox")


def test_mapping_from_rows_maps_every_name_to_its_row() -> None:
    mapping = SuperclassMapping.from_rows(parse_superclass_rows("cat lion\ndog\n"))

    assert dict(mapping.class_to_super_idx) == {"cat": 1, "lion": 1, "dog": 2}
    assert len(mapping) == 3


def test_blank_line_between_rows_is_malformed(tmp_path: Path) -> None:
    p = tmp_path / "superclasses.txt"
    p.write_text("cat\n\ndog\n", encoding="utf-8")

    with pytest.raises(MalformedMappingFile, match="line 2"):
        WhitespaceSuperclassFile(path=p).load_rows()


def test_missing_file_is_reported_as_malformed(tmp_path: Path) -> None:
    with pytest.raises(MalformedMappingFile, match="cannot read"):
        WhitespaceSuperclassFile(path=tmp_path / "nope.txt").load_rows()


def test_non_utf8_file_is_malformed(tmp_path: Path) -> None:
    p = tmp_path / "superclasses.txt"
    p.write_bytes(b"cat \xff\xfe\n")

    with pytest.raises(MalformedMappingFile, match="UTF-8"):
        WhitespaceSuperclassFile(path=p).load_rows()
