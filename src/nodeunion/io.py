"""Readers for the node-name and connection text sources."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO, Iterator

import numpy as np

from .errors import MalformedConnectionError, SourceDecodeError

logger = logging.getLogger(__name__)

Source = str | os.PathLike[str] | IO[str]

# Largest index that still fits the int64 pair array.
MAX_INDEX = int(np.iinfo(np.int64).max)


def _numbered(lines: IO[str], name: str, encoding: str) -> Iterator[tuple[str, int, str]]:
    number = 0
    try:
        for number, line in enumerate(lines, start=1):
            yield name, number, line
    except UnicodeDecodeError as exc:
        raise SourceDecodeError(name, number + 1, exc.encoding or encoding) from exc


def _lines(source: Source, encoding: str = "utf-8") -> Iterator[tuple[str, int, str]]:
    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        with path.open("r", encoding=encoding) as handle:
            yield from _numbered(handle, str(path), encoding)
    else:
        name = getattr(source, "name", "<stream>")
        yield from _numbered(source, str(name), getattr(source, "encoding", None) or encoding)


def read_names(source: Source) -> list[str]:
    """One node name per line. Blank lines are skipped and take no position."""
    names = [line.strip() for _, _, line in _lines(source) if line.strip()]
    logger.debug("Read %d node names", len(names))
    return names


def parse_connection(text: str, source: str = "<string>", line_number: int = 1) -> tuple[int, int]:
    fields = text.strip().split(",")
    if len(fields) != 2:
        raise MalformedConnectionError(
            source, line_number, text.rstrip("\n"), f"expected 2 comma-separated fields, got {len(fields)}"
        )
    pair = []
    for field in fields:
        field = field.strip()
        if not (field.isascii() and field.isdigit()):
            raise MalformedConnectionError(
                source, line_number, text.rstrip("\n"), f"{field!r} is not an unsigned integer"
            )
        value = int(field)
        if value > MAX_INDEX:
            raise MalformedConnectionError(
                source, line_number, text.rstrip("\n"), f"{field} exceeds the largest index {MAX_INDEX}"
            )
        pair.append(value)
    return pair[0], pair[1]


def read_connections(source: Source) -> np.ndarray:
    """Parse ``a,b`` records into an ``(n, 2)`` array of zero-based indexes.

    Raises :class:`~nodeunion.errors.MalformedConnectionError` on the first bad
    record, naming its line.
    """
    pairs = [
        parse_connection(line, name, number)
        for name, number, line in _lines(source)
        if line.strip()
    ]
    logger.debug("Read %d connections", len(pairs))
    return np.asarray(pairs, dtype=np.int64).reshape(-1, 2)
