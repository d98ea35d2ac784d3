"""Exceptions raised by nodeunion."""

from __future__ import annotations

from typing import Iterable


class NodeUnionError(Exception):
    """Base class for every error raised by the package."""


class UnknownNameError(NodeUnionError, KeyError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown node name {self.name!r}"


class PositionOutOfRangeError(NodeUnionError, IndexError):
    def __init__(self, position: int, count: int, detail: str = "") -> None:
        message = f"position {position} is outside 1..{count}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.position = position
        self.count = count


class MalformedConnectionError(NodeUnionError, ValueError):
    def __init__(self, source: str, line_number: int, text: str, reason: str) -> None:
        super().__init__(f"{source}:{line_number}: {reason}: {text!r}")
        self.source = source
        self.line_number = line_number
        self.text = text
        self.reason = reason


class SourceDecodeError(NodeUnionError, ValueError):
    def __init__(self, source: str, line_number: int, encoding: str) -> None:
        super().__init__(f"{source}:{line_number}: not valid {encoding} text (at or after this line)")
        self.source = source
        self.line_number = line_number
        self.encoding = encoding


class DuplicateNameError(NodeUnionError, ValueError):
    def __init__(self, names: Iterable[str]) -> None:
        self.names = sorted(set(names))
        shown = ", ".join(repr(n) for n in self.names[:5])
        if len(self.names) > 5:
            shown += f", ... ({len(self.names)} total)"
        super().__init__(f"duplicate node names in batch: {shown}")
