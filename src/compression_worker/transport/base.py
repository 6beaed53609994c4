from __future__ import annotations

import abc
from typing import Any, AsyncIterator, Dict, Optional


class Transport(abc.ABC):
    """Message channel between callers and the worker.

    Requests flow caller -> worker through ``submit``/``receive``; replies flow
    worker -> caller through ``send``/``replies``. Each direction is reliable
    and in order.
    """

    @abc.abstractmethod
    async def receive(self, timeout: float) -> Optional[Dict[str, Any]]:
        """Next inbound request, or None when ``timeout`` seconds pass."""
        raise NotImplementedError

    @abc.abstractmethod
    async def send(self, message: Dict[str, Any]) -> None:
        """Emit a reply."""
        raise NotImplementedError

    @abc.abstractmethod
    async def submit(self, message: Dict[str, Any]) -> None:
        """Enqueue a request."""
        raise NotImplementedError

    @abc.abstractmethod
    async def subscribe(self) -> AsyncIterator[Dict[str, Any]]:
        """Start listening for replies; iterate the result to read them.

        Replies emitted after this returns are never missed.
        """
        raise NotImplementedError

    async def close(self) -> None:
        return None
