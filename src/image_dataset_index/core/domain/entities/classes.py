from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

__all__ = ["ClassIndex", "SuperclassRow", "SuperclassMapping"]


@dataclass(frozen=True)
class ClassIndex:
    """Sorted class names and their 1-based ids.

    `class_list[i]` is the class with id `i + 1`; `class_to_idx` is its inverse.
    """

    class_list: tuple[str, ...]
    class_to_idx: Mapping[str, int] = field(repr=False)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "ClassIndex":
        class_list: list[str] = []
        class_to_idx: dict[str, int] = {}
        for name in sorted(names):
            if name in class_to_idx or name in (".", ".."):
                continue
            class_list.append(name)
            class_to_idx[name] = len(class_list)
        return cls(class_list=tuple(class_list), class_to_idx=MappingProxyType(class_to_idx))

    def __len__(self) -> int:
        return len(self.class_list)


@dataclass(frozen=True)
class SuperclassRow:
    """One row of the superclass mapping file (row number == superclass id)."""

    superclass_id: int
    member_class_names: tuple[str, ...]


@dataclass(frozen=True)
class SuperclassMapping:
    class_to_super_idx: Mapping[str, int] = field(repr=False)

    @classmethod
    def from_rows(cls, rows: Iterable[SuperclassRow]) -> "SuperclassMapping":
        # A name repeated in a later row takes that row's id.
        class_to_super_idx: dict[str, int] = {}
        for row in rows:
            for name in row.member_class_names:
                class_to_super_idx[name] = row.superclass_id
        return cls(class_to_super_idx=MappingProxyType(class_to_super_idx))

    def __len__(self) -> int:
        return len(self.class_to_super_idx)
