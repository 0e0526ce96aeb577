from __future__ import annotations

from typing import Protocol

from image_dataset_index.core.domain.entities.classes import SuperclassRow


class SuperclassSourcePort(Protocol):
    """Port for reading superclass membership rows (row i lists the classes of superclass i)."""

    def load_rows(self) -> list[SuperclassRow]: ...
