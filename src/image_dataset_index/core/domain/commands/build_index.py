from __future__ import annotations

from dataclasses import dataclass

DEFAULT_IMAGE_EXTENSIONS: tuple[str, ...] = ("jpg", "png", "jpeg", "ppm", "bmp")


@dataclass(frozen=True)
class BuildIndexCommand:
    """Intent to index a dataset root containing train/ and val/."""

    data_dir: str
    cache_path: str

    # Matched case-insensitively against the end of each file name.
    extensions: tuple[str, ...] = DEFAULT_IMAGE_EXTENSIONS

    def normalized_extensions(self) -> tuple[str, ...]:
        return tuple(sorted({e.strip().lstrip(".").lower() for e in self.extensions if e.strip().lstrip(".")}))
