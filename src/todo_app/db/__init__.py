"""Document store helpers."""

from __future__ import annotations

from .store import DocumentStore, StoreConfigurationError

__all__ = ["DocumentStore", "StoreConfigurationError"]
