from __future__ import annotations

from pathlib import Path

__all__ = [
    "IndexingError",
    "DirectoryNotFound",
    "DirectoryUnreadable",
    "MalformedMappingFile",
    "CardinalityMismatch",
    "MissingSuperclass",
    "UnknownClass",
    "UnknownSuperclass",
    "CachePersistError",
    "CacheLoadError",
]


class IndexingError(Exception):
    """Base class for every failure that aborts an indexing run."""


class DirectoryNotFound(IndexingError):
    def __init__(self, path: str | Path, *, what: str = "directory") -> None:
        self.path = Path(path)
        super().__init__(f"{what} not found: {self.path}")


class DirectoryUnreadable(IndexingError):
    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot read directory {self.path}: {reason}")


class MalformedMappingFile(IndexingError):
    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"malformed superclass mapping file {self.path}: {reason}")


class CardinalityMismatch(IndexingError):
    """The mapping file names a different number of classes than were discovered."""

    def __init__(self, *, num_classes: int, num_mapped: int) -> None:
        self.num_classes = num_classes
        self.num_mapped = num_mapped
        super().__init__(
            f"found {num_classes} classes but the superclass mapping names {num_mapped}"
        )


class MissingSuperclass(IndexingError):
    def __init__(self, class_name: str) -> None:
        self.class_name = class_name
        super().__init__(f"class {class_name} has no superclass")


class UnknownClass(IndexingError):
    def __init__(self, class_name: str, path: str | Path) -> None:
        self.class_name = class_name
        self.path = Path(path)
        super().__init__(f"class not found: {class_name} (image {self.path})")


class UnknownSuperclass(IndexingError):
    def __init__(self, class_name: str, path: str | Path) -> None:
        self.class_name = class_name
        self.path = Path(path)
        super().__init__(f"superclass not found: {class_name} (image {self.path})")


class CachePersistError(IndexingError):
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"could not write index cache to {self.path}")


class CacheLoadError(IndexingError):
    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"could not load index cache {self.path}: {reason}")
