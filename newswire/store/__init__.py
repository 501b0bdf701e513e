"""Persisted key-value store adapters."""

from . import keys
from .base import ChangeHandler, KeyValueStore
from .memory import MemoryStore
from .postgres import PostgresStore

__all__ = ["ChangeHandler", "KeyValueStore", "MemoryStore", "PostgresStore", "keys"]
