from __future__ import annotations

import asyncio
from typing import Any, AsyncIterator, Dict, Optional

from .base import Transport


class MemoryTransport(Transport):
    """In-process transport over two asyncio queues.

    Payloads are passed as-is, so binary blobs need no base64 step.
    """

    def __init__(self) -> None:
        self._requests: asyncio.Queue[Dict[str, Any]] = asyncio.Queue()
        self._replies: asyncio.Queue[Dict[str, Any]] = asyncio.Queue()

    async def receive(self, timeout: float) -> Optional[Dict[str, Any]]:
        try:
            return await asyncio.wait_for(self._requests.get(), timeout=timeout)
        except asyncio.TimeoutError:
            return None

    async def send(self, message: Dict[str, Any]) -> None:
        await self._replies.put(message)

    async def submit(self, message: Dict[str, Any]) -> None:
        await self._requests.put(message)

    async def subscribe(self) -> AsyncIterator[Dict[str, Any]]:
        return self._iter_replies()

    async def _iter_replies(self) -> AsyncIterator[Dict[str, Any]]:
        while True:
            yield await self._replies.get()

    async def next_reply(self, timeout: float = 1.0) -> Dict[str, Any]:
        return await asyncio.wait_for(self._replies.get(), timeout=timeout)

    @property
    def pending_requests(self) -> int:
        return self._requests.qsize()
