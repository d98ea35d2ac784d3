"""nodeunion: connectivity tracking over named nodes."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = ["BulkConnection", "StoreConfig", "UnionFindClient"]

_EXPORTS = {
    "BulkConnection": "nodeunion.union_find",
    "UnionFindClient": "nodeunion.union_find",
    "StoreConfig": "nodeunion.config",
}


def __getattr__(name: str) -> Any:  # pragma: no cover - simple lazy import shim
    if name in _EXPORTS:
        module = import_module(_EXPORTS[name])
        return getattr(module, name)
    raise AttributeError(f"module 'nodeunion' has no attribute {name!r}")


def __dir__() -> list[str]:  # pragma: no cover - cosmetic helper
    return sorted(__all__)
