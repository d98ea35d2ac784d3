"""Configuration for the union-find store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class StoreConfig:
    """Behaviour switches for :class:`~nodeunion.union_find.UnionFindClient`.

    Attributes:
        batch_duplicates: What ``insert_batch`` does with a name that is already
            indexed or repeated in the batch ("allow" | "reject"). "allow" gives
            every name its own record and lets the newest one shadow the older
            ones in the name index.
        path_compression: Halve paths during Find. Off by default, so every
            lookup walks the full chain to the representative.
        initial_capacity: Record slots allocated up front, placeholder included.
    """

    batch_duplicates: str = "allow"
    path_compression: bool = False
    initial_capacity: int = 16

    _VALID_DUPLICATE_POLICIES: ClassVar[tuple[str, ...]] = ("allow", "reject")

    def __post_init__(self) -> None:
        if not isinstance(self.batch_duplicates, str):
            raise ValueError(f"batch_duplicates must be a string, got {self.batch_duplicates!r}")
        if not isinstance(self.path_compression, bool):
            raise ValueError(f"path_compression must be a bool, got {self.path_compression!r}")
        if isinstance(self.initial_capacity, bool) or not isinstance(self.initial_capacity, int):
            raise ValueError(f"initial_capacity must be an int, got {self.initial_capacity!r}")
        if self.batch_duplicates not in self._VALID_DUPLICATE_POLICIES:
            raise ValueError(
                f"batch_duplicates must be one of {self._VALID_DUPLICATE_POLICIES}, "
                f"got '{self.batch_duplicates}'"
            )
        if self.initial_capacity < 1:
            raise ValueError(f"initial_capacity must be >= 1, got {self.initial_capacity}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "batch_duplicates": self.batch_duplicates,
            "path_compression": self.path_compression,
            "initial_capacity": self.initial_capacity,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StoreConfig:
        return cls(
            batch_duplicates=data.get("batch_duplicates", "allow"),
            path_compression=data.get("path_compression", False),
            initial_capacity=data.get("initial_capacity", 16),
        )
