from __future__ import annotations

import os

import numpy as np
import pytest

from image_dataset_index.core.domain.entities.index import ImageRecords
from image_dataset_index.core.domain.utils.path_encoding import decode_paths, encode_labels, encode_paths
from image_dataset_index.core.use_cases.build_index import encode_split


def test_buffer_width_is_longest_path_plus_one() -> None:
    records = ImageRecords()
    records.add("cat/1.jpg", 1, 1)
    records.add("dog/long_name.png", 2, 2)

    encoded = encode_split(records)

    assert encoded.image_path.shape == (2, len("dog/long_name.png") + 1)
    assert encoded.image_path.dtype == np.uint8
    assert encoded.decoded_paths() == ["cat/1.jpg", "dog/long_name.png"]
    # Shorter rows are zero padded.
    assert encoded.image_path[0, len("cat/1.jpg") :].tolist() == [0] * (18 - 9)
    assert encoded.image_class.tolist() == [1, 2]
    assert encoded.image_superclass.tolist() == [1, 2]


def test_width_counts_utf8_bytes() -> None:
    records = ImageRecords()
    records.add("café/é.jpg", 1, 1)

    assert records.max_length == len("café/é.jpg".encode("utf-8")) + 1
    assert decode_paths(encode_paths(records.paths, records.max_length)) == ["café/é.jpg"]


def test_empty_split_encodes_to_zero_rows() -> None:
    encoded = encode_split(ImageRecords())

    assert encoded.image_path.shape == (0, 1)
    assert encoded.image_class.shape == (0,)
    assert len(encoded) == 0


def test_too_narrow_buffer_is_rejected() -> None:
    with pytest.raises(ValueError):
        encode_paths(["cat/1.jpg"], len("cat/1.jpg"))


def test_labels_are_int64() -> None:
    assert encode_labels([3, 1, 2]).dtype == np.int64


def test_non_utf8_file_names_keep_their_raw_bytes() -> None:
    # os.walk reports undecodable bytes as surrogate escapes.
    name = "cat/" + os.fsdecode(b"caf\xe9.jpg")
    records = ImageRecords()
    records.add(name, 1, 1)

    encoded = encode_split(records)

    assert records.max_length == len(b"cat/caf\xe9.jpg") + 1
    assert encoded.image_path[0, : len(b"cat/caf\xe9.jpg")].tobytes() == b"cat/caf\xe9.jpg"
    assert encoded.decoded_paths() == [name]
