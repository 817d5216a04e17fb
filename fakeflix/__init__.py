"""Fakeflix catalog retrieval package."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = ["Catalog", "open_catalog"]


def __getattr__(name: str) -> Any:
    if name in __all__:
        module = import_module("fakeflix.main")
        return getattr(module, name)
    raise AttributeError(f"module 'fakeflix' has no attribute {name}")
