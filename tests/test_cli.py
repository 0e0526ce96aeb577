from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from image_dataset_index.adapters.left.cli import app
from image_dataset_index.adapters.right.cache_safetensors import SafetensorsIndexCacheStore

runner = CliRunner()


def _make_dataset(root: Path, superclasses: str) -> tuple[Path, Path]:
    for rel in ["train/cat/1.jpg", "train/dog/2.png", "val/cat/3.jpeg"]:
        p = root / "data" / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"")
    mapping = root / "superclasses.txt"
    mapping.write_text(superclasses, encoding="utf-8")
    return root / "data", mapping


def test_build_writes_cache_and_progress_log(tmp_path: Path) -> None:
    data, mapping = _make_dataset(tmp_path, "cat\ndog\n")
    cache = tmp_path / "gen" / "imagenet.safetensors"
    log_path = tmp_path / "logs" / "index.jsonl"

    result = runner.invoke(
        app,
        [
            "build",
            "--data", str(data),
            "--superclasses", str(mapping),
            "--cache", str(cache),
            "--cache-format", "safetensors",
            "--log-path", str(log_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "=> Generating list of images" in result.output
    assert "Indexing complete" in result.output

    index = SafetensorsIndexCacheStore().load(path=cache)
    assert index.class_list == ("cat", "dog")
    assert len(index.train) == 2

    messages = [json.loads(ln)["message"] for ln in log_path.read_text(encoding="utf-8").splitlines()]
    assert messages[0] == "=> Generating list of images"
    assert len(messages) == 4

    shown = runner.invoke(app, ["inspect", "--cache", str(cache)])
    assert shown.exit_code == 0, shown.output
    assert "classes: 2" in shown.output
    assert "val: 1 images" in shown.output


def test_build_reports_missing_superclass(tmp_path: Path) -> None:
    data, mapping = _make_dataset(tmp_path, "cat\nbird\n")
    cache = tmp_path / "imagenet.npz"

    result = runner.invoke(
        app, ["build", "--data", str(data), "--superclasses", str(mapping), "--cache", str(cache)]
    )

    assert result.exit_code == 1
    assert "class dog has no superclass" in result.output
    assert not cache.exists()


def test_build_rejects_unknown_cache_format(tmp_path: Path) -> None:
    data, mapping = _make_dataset(tmp_path, "cat\ndog\n")

    result = runner.invoke(
        app, ["build", "--data", str(data), "--superclasses", str(mapping), "--cache-format", "pickle"]
    )

    assert result.exit_code != 0
