"""Key-value store contract with change subscriptions."""

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, Optional, Set, Tuple, Union

logger = logging.getLogger(__name__)

ChangeHandler = Callable[[Any], Union[None, Awaitable[None]]]


class KeyValueStore(ABC):
    """Abstract key-value store.

    Values are JSON-compatible. One change handler may be registered per
    key; it is dispatched in its own task after a successful write, with the
    new value. A handler that raises is logged and never propagates to the
    writer.
    """

    def __init__(self) -> None:
        """Initialize handler registry."""
        self._handlers: Dict[str, ChangeHandler] = {}
        self._dispatches: Set[asyncio.Task] = set()

    @abstractmethod
    async def _read(self, key: str) -> Tuple[bool, Any]:
        """
        Read a raw value.

        Returns:
            Tuple of (found, value)
        """
        pass

    @abstractmethod
    async def _write(self, key: str, value: Any) -> None:
        """Persist a value."""
        pass

    async def get(self, key: str, default: Any = None) -> Any:
        """Get the value stored under ``key``, or ``default`` if unset."""
        found, value = await self._read(key)
        return value if found else default

    async def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` and notify the key's handler."""
        await self._write(key, value)
        self.notify(key, value)

    def subscribe(self, key: str, handler: ChangeHandler) -> None:
        """Register the change handler for ``key``, replacing any previous one."""
        self._handlers[key] = handler

    def unsubscribe(self, key: str) -> None:
        self._handlers.pop(key, None)

    def notify(self, key: str, value: Any) -> Optional[asyncio.Task]:
        """Dispatch ``value`` to the handler for ``key`` in a new task."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        task = asyncio.get_running_loop().create_task(self._dispatch(key, handler, value))
        self._dispatches.add(task)
        task.add_done_callback(self._dispatches.discard)
        return task

    async def _dispatch(self, key: str, handler: ChangeHandler, value: Any) -> None:
        try:
            result = handler(value)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("Change handler for %s failed", key)

    async def drain(self) -> None:
        """Wait until every pending handler dispatch has finished."""
        while self._dispatches:
            await asyncio.gather(*list(self._dispatches), return_exceptions=True)

    async def close(self) -> None:
        """Release backend resources."""
        for task in list(self._dispatches):
            task.cancel()
        await asyncio.gather(*list(self._dispatches), return_exceptions=True)
