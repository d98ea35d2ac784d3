"""Union-Find store over named nodes, backed by growable numpy arrays."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, NamedTuple, Sequence

import numpy as np

from .config import StoreConfig
from .errors import (
    DuplicateNameError,
    MalformedConnectionError,
    PositionOutOfRangeError,
    UnknownNameError,
)

logger = logging.getLogger(__name__)

# Slot 0 is a placeholder record: self-parented, size 0, never merged.
PLACEHOLDER = 0


class BulkConnection(NamedTuple):
    """Zero-based pair of indexes into the order names were batch-inserted."""

    a: int
    b: int


class UnionFindClient:
    """Disjoint sets of named nodes with union-by-size.

    Records live in parallel arrays addressed by position: ``parent[p]`` is the
    position ``p`` defers to and ``size[p]`` is the set size while ``p`` is a
    representative. Real nodes start at position 1 in insertion order.

    >>> client = UnionFindClient()
    >>> client.insert_batch(["A", "B", "C"])
    3
    >>> client.connect("A", "B")
    True
    >>> client.are_connected("B", "A"), client.disjoint_set_count()
    (True, 2)
    """

    def __init__(self, config: StoreConfig | None = None) -> None:
        self.config = config or StoreConfig()
        capacity = self.config.initial_capacity
        self.parent = np.arange(capacity, dtype=np.int64)
        self._size = np.zeros(capacity, dtype=np.int64)
        self._names: list[str | None] = [None]
        self._index: dict[str, int] = {}
        self._set_count = 0

    # ------------------------------------------------------------------
    # node store & name index
    def _reserve(self, extra: int) -> None:
        needed = len(self._names) + extra
        capacity = self.parent.shape[0]
        if needed <= capacity:
            return
        while capacity < needed:
            capacity *= 2
        grown = self.parent.shape[0]
        self.parent = np.concatenate(
            [self.parent, np.arange(grown, capacity, dtype=np.int64)]
        )
        self._size = np.concatenate([self._size, np.zeros(capacity - grown, dtype=np.int64)])

    def _append(self, names: Sequence[str]) -> None:
        self._reserve(len(names))
        start = len(self._names)
        stop = start + len(names)
        self.parent[start:stop] = np.arange(start, stop, dtype=np.int64)
        self._size[start:stop] = 1
        for position, name in enumerate(names, start=start):
            previous = self._index.get(name)
            if previous is not None:
                logger.warning(
                    "Node %r at position %d shadows the record at position %d",
                    name,
                    position,
                    previous,
                )
            self._index[name] = position
        self._names.extend(names)
        self._set_count += len(names)

    def insert(self, name: str) -> bool:
        if name in self._index:
            return False
        self._append([name])
        return True

    def insert_batch(self, names: Iterable[str]) -> int:
        """Append one record per name, in order.

        No lookup is made before appending under the default ``"allow"``
        policy: a repeated name gets a second record and the name index then
        points at the newest one. With ``batch_duplicates="reject"`` the whole
        batch is checked first and :class:`DuplicateNameError` is raised
        without touching the store.
        """
        names = list(names)
        if self.config.batch_duplicates == "reject":
            seen: set[str] = set()
            duplicates = []
            for name in names:
                if name in seen or name in self._index:
                    duplicates.append(name)
                seen.add(name)
            if duplicates:
                raise DuplicateNameError(duplicates)
        self._append(names)
        logger.debug("Inserted %d nodes, store now holds %d", len(names), self.count())
        return len(names)

    def exists(self, name: str) -> bool:
        return name in self._index

    def position_of(self, name: str) -> int | None:
        return self._index.get(name)

    def name_at(self, position: int) -> str:
        self._check_position(position)
        return self._names[position]  # type: ignore[return-value]

    def count(self) -> int:
        return len(self._names) - 1

    def disjoint_set_count(self) -> int:
        return self._set_count

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[str]:
        # One name per record, shadowed batch duplicates included.
        return iter(self._names[1:])  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(nodes={self.count()}, sets={self._set_count})"

    # ------------------------------------------------------------------
    # find
    def _check_position(self, position: int, detail: str = "") -> None:
        if not PLACEHOLDER < position < len(self._names):
            raise PositionOutOfRangeError(position, self.count(), detail)

    def _find(self, x: int) -> int:
        parent = self.parent
        if self.config.path_compression:
            while parent[x] != x:
                parent[x] = parent[parent[x]]
                x = parent[x]
        else:
            while parent[x] != x:
                x = parent[x]
        return int(x)

    def find_root(self, name: str) -> int | None:
        position = self._index.get(name)
        if position is None:
            return None
        return self._find(position)

    def find_root_at(self, position: int) -> int:
        self._check_position(position)
        return self._find(position)

    # ------------------------------------------------------------------
    # union
    def _merge(self, ra: int, rb: int) -> bool:
        if ra == rb:
            return False
        size = self._size
        if size[ra] < size[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        size[ra] += size[rb]
        self._set_count -= 1
        return True

    def _root_of(self, name: str) -> int:
        root = self.find_root(name)
        if root is None:
            raise UnknownNameError(name)
        return root

    def connect(self, name_a: str, name_b: str) -> bool:
        """Merge the sets holding ``name_a`` and ``name_b``.

        The smaller set goes under the larger one; on a tie ``name_b``'s set
        goes under ``name_a``'s. Returns ``False`` when they already share a
        representative.
        """
        return self._merge(self._root_of(name_a), self._root_of(name_b))

    def connect_at(self, position_a: int, position_b: int) -> bool:
        return self._merge(self.find_root_at(position_a), self.find_root_at(position_b))

    def are_connected(self, name_a: str, name_b: str) -> bool:
        ra = self.find_root(name_a)
        return ra is not None and ra == self.find_root(name_b)

    def component_size(self, name: str) -> int:
        return int(self._size[self._root_of(name)])

    # ------------------------------------------------------------------
    # bulk loader
    def connect_bulk(self, connections: Iterable[Sequence[int]] | np.ndarray) -> int:
        """Apply zero-based index pairs in order and return the number of merges.

        Indexes refer to the order names were given to :meth:`insert_batch`
        and are shifted by one past the placeholder. Pairs are applied one at
        a time; if one is out of range, the pairs before it stay applied.
        """
        pairs = _as_pairs(connections, self.count())
        merges = 0
        for i, (a, b) in enumerate(pairs.tolist()):
            pa = a + 1
            pb = b + 1
            for position in (pa, pb):
                self._check_position(position, f"connection #{i} ({a},{b})")
            if self._merge(self._find(pa), self._find(pb)):
                merges += 1
        logger.debug(
            "Applied %d connections (%d merges), %d disjoint sets remain",
            pairs.shape[0],
            merges,
            self._set_count,
        )
        return merges


def _as_pairs(connections: Iterable[Sequence[int]] | np.ndarray, count: int) -> np.ndarray:
    if not isinstance(connections, np.ndarray):
        connections = list(connections)
        if not connections:
            return np.zeros((0, 2), dtype=np.int64)
    try:
        pairs = np.asarray(connections)
    except ValueError as exc:
        raise MalformedConnectionError("<bulk>", 0, repr(connections)[:80], str(exc)) from exc
    if pairs.size == 0:
        return np.zeros((0, 2), dtype=np.int64)
    if pairs.ndim != 2 or pairs.shape[1] != 2:
        raise MalformedConnectionError(
            "<bulk>", 0, f"shape {pairs.shape}", "expected a sequence of index pairs"
        )
    if pairs.dtype == object or np.issubdtype(pairs.dtype, np.unsignedinteger):
        if _fits_int64(pairs.astype(object), count):
            pairs = pairs.astype(np.int64)
    if not np.issubdtype(pairs.dtype, np.integer):
        raise MalformedConnectionError(
            "<bulk>", 0, f"dtype {pairs.dtype}", "connection indexes must be integers"
        )
    return pairs.astype(np.int64, copy=False)


def _fits_int64(pairs: np.ndarray, count: int) -> bool:
    """Whether every entry is an int, raising for ints outside the int64 range."""
    limits = np.iinfo(np.int64)
    for i, (a, b) in enumerate(pairs.tolist()):
        for value in (a, b):
            if isinstance(value, bool) or not isinstance(value, int):
                return False
            if not limits.min <= value <= limits.max:
                raise PositionOutOfRangeError(value + 1, count, f"connection #{i} ({a},{b})")
    return True


__all__ = ["BulkConnection", "PLACEHOLDER", "UnionFindClient"]
