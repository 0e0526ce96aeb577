from __future__ import annotations

from dataclasses import asdict
from pathlib import Path

import inject
import typer

from image_dataset_index.adapters.left.inject_config import configure_injections
from image_dataset_index.adapters.right.cache_npz import NpzIndexCacheStore
from image_dataset_index.adapters.right.cache_safetensors import SafetensorsIndexCacheStore
from image_dataset_index.adapters.right.filesystem_image_tree import FilesystemImageTree
from image_dataset_index.adapters.right.progress_jsonl import CompositeProgressSink, JsonlFileProgressSink
from image_dataset_index.adapters.right.progress_stdout import StdoutProgressSink
from image_dataset_index.adapters.right.superclass_text import WhitespaceSuperclassFile
from image_dataset_index.core.domain.commands.build_index import DEFAULT_IMAGE_EXTENSIONS, BuildIndexCommand
from image_dataset_index.core.domain.entities.index import SPLITS
from image_dataset_index.core.domain.errors.indexing import IndexingError
from image_dataset_index.core.ports.index_cache_store import IndexCacheStorePort
from image_dataset_index.core.use_cases.build_index import BuildDatasetIndexUseCase

app = typer.Typer(add_completion=False, no_args_is_help=True)

_CACHE_SUFFIXES = {"npz": ".npz", "safetensors": ".safetensors"}


def _make_cache_store(cache_format: str) -> IndexCacheStorePort:
    cache_format = cache_format.lower().strip()
    if cache_format == "npz":
        return NpzIndexCacheStore()
    if cache_format == "safetensors":
        return SafetensorsIndexCacheStore()
    raise typer.BadParameter("cache_format must be one of: npz, safetensors")


def _fail(err: IndexingError) -> typer.Exit:
    typer.echo(f"Error: {err}", err=True)
    return typer.Exit(code=1)


@app.command()
def build(
    data: str = typer.Option(..., help="Dataset root containing train/ and val/"),
    superclasses: str = typer.Option(..., help="Text file, one superclass per line listing its class names"),
    cache: str = typer.Option("", help="Where to write the index (default gen/imagenet.<format>)"),
    cache_format: str = typer.Option("npz", help="Cache format: npz | safetensors"),
    extension: list[str] = typer.Option(
        list(DEFAULT_IMAGE_EXTENSIONS),
        help="Repeatable image extensions, matched case-insensitively: --extension jpg --extension png",
    ),
    log_path: str = typer.Option("", help="If set, append progress events as JSONL to this path"),
) -> None:
    """Scan a split/class/image dataset and write its index cache."""

    cache_store = _make_cache_store(cache_format)
    cache_path = cache or str(Path("gen") / f"imagenet{_CACHE_SUFFIXES[cache_format.lower().strip()]}")

    stdout_progress = StdoutProgressSink()
    progress = (
        CompositeProgressSink(stdout_progress, JsonlFileProgressSink(path=log_path))
        if log_path
        else stdout_progress
    )

    cmd = BuildIndexCommand(data_dir=data, cache_path=cache_path, extensions=tuple(extension))
    if not cmd.normalized_extensions():
        raise typer.BadParameter("at least one non-empty --extension is required")

    configure_injections(
        image_tree=FilesystemImageTree(),
        superclass_source=WhitespaceSuperclassFile(path=superclasses),
        cache_store=cache_store,
        progress_sink=progress,
    )
    use_case = inject.instance(BuildDatasetIndexUseCase)

    try:
        index = use_case.run(cmd)
    except IndexingError as e:
        raise _fail(e) from e

    typer.echo("Indexing complete")
    typer.echo(f"Summary: {index.summary()}")
    typer.echo(f"Build command: {asdict(cmd)}")


@app.command(name="inspect")
def inspect_cache(
    cache: str = typer.Option(..., help="Index cache file to read"),
    cache_format: str = typer.Option("", help="npz | safetensors (default: from the file suffix)"),
    show: int = typer.Option(3, min=0, help="How many paths to print per split"),
) -> None:
    """Print a summary of an existing index cache."""

    if not cache_format:
        cache_format = "safetensors" if Path(cache).suffix.lower() == ".safetensors" else "npz"
    store = _make_cache_store(cache_format)

    try:
        index = store.load(path=cache)
    except IndexingError as e:
        raise _fail(e) from e

    typer.echo(f"basedir: {index.basedir}")
    typer.echo(f"classes: {index.num_classes}")
    for split in SPLITS:
        encoded = index.split(split)
        typer.echo(f"{split}: {len(encoded)} images, path width {encoded.image_path.shape[1]}")
        for i in range(min(show, len(encoded))):
            class_name = index.class_list[int(encoded.image_class[i]) - 1]
            typer.echo(
                f"  {encoded.image_file(i, basedir=index.basedir, split=split)}"
                f"  class={class_name} superclass={int(encoded.image_superclass[i])}"
            )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
