"""In-process key-value store."""

import copy
from typing import Any, Dict, Optional, Tuple

from .base import KeyValueStore


class MemoryStore(KeyValueStore):
    """Dictionary-backed store. Values are copied in and out."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        """Initialize store with optional initial values."""
        super().__init__()
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def _read(self, key: str) -> Tuple[bool, Any]:
        if key not in self._data:
            return False, None
        return True, copy.deepcopy(self._data[key])

    async def _write(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)
