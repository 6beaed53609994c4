from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Set

from .errors import UncaughtFault, UnhandledAsyncRejection
from .models.messages import TransformReply
from .transport.base import Transport

DEFAULT_REJECTION_MESSAGE = "Unhandled asynchronous rejection"


class FaultReporter:
    """Turns faults that belong to no request into id-less failure replies."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport
        self.logger = logging.getLogger(__name__)
        self._pending: Set[asyncio.Task] = set()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._previous_handler = None

    async def report_fault(self, error: BaseException) -> TransformReply:
        fault = error if isinstance(error, UncaughtFault) else UncaughtFault(str(error) or type(error).__name__)
        self.logger.error(f"Compression worker error: {fault}", exc_info=error)
        return await self._emit(str(fault))

    async def report_rejection(self, reason: Optional[BaseException] = None) -> TransformReply:
        message = str(reason) if reason is not None else ""
        rejection = UnhandledAsyncRejection(message or DEFAULT_REJECTION_MESSAGE)
        self.logger.error(f"Compression worker unhandled rejection: {rejection}", exc_info=reason)
        return await self._emit(str(rejection))

    def schedule_rejection(self, reason: Optional[BaseException] = None) -> asyncio.Task:
        """Report from synchronous code such as loop callbacks."""
        task = asyncio.get_running_loop().create_task(self.report_rejection(reason))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def install(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """Route exceptions nobody retrieved on ``loop`` to ``report_rejection``."""
        self._loop = loop or asyncio.get_running_loop()
        self._previous_handler = self._loop.get_exception_handler()
        self._loop.set_exception_handler(self._handle_loop_exception)

    def uninstall(self) -> None:
        if self._loop is not None:
            self._loop.set_exception_handler(self._previous_handler)
            self._loop = None
            self._previous_handler = None

    async def drain(self) -> None:
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _handle_loop_exception(self, loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        exc = context.get("exception")
        if exc is None:
            loop.default_exception_handler(context)
            return
        self.schedule_rejection(exc)

    async def _emit(self, message: str) -> TransformReply:
        reply = TransformReply.fault(message)
        try:
            await self.transport.send(reply.to_message())
        except Exception:
            self.logger.error("Failed to deliver fault reply", exc_info=True)
        return reply
