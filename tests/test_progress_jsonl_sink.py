from __future__ import annotations

import json

import numpy as np

from image_dataset_index.adapters.right.progress_jsonl import CompositeProgressSink, JsonlFileProgressSink


def test_jsonl_progress_sink_writes_valid_lines(tmp_path) -> None:
    p = tmp_path / "logs" / "index.jsonl"
    sink = JsonlFileProgressSink(path=p)

    sink.log(message="=> Generating list of images", details={"data_dir": "/data"})
    sink.log(message=" | saving list of images to gen/x.npz", details={"train_images": np.int64(2)})

    text = p.read_text(encoding="utf-8").strip()
    lines = [ln for ln in text.splitlines() if ln.strip()]
    assert len(lines) == 2

    rec0 = json.loads(lines[0])
    assert rec0["message"] == "=> Generating list of images"
    assert rec0["details"]["data_dir"] == "/data"

    rec1 = json.loads(lines[1])
    assert rec1["message"] == "| saving list of images to gen/x.npz"
    assert rec1["details"]["train_images"] == 2


def test_composite_sink_tees(tmp_path) -> None:
    a = JsonlFileProgressSink(path=tmp_path / "a.jsonl")
    b = JsonlFileProgressSink(path=tmp_path / "b.jsonl")

    CompositeProgressSink(a, b).log(message="hello")

    for p in (a.path, b.path):
        assert json.loads(p.read_text(encoding="utf-8"))["message"] == "hello"
