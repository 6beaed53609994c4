from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Set

from .audio.pipeline import AudioPipeline
from .dispatcher import RequestDispatcher
from .errors import MessageSerializationError
from .faults import FaultReporter
from .image.pipeline import ImagePipeline
from .settings import Settings, WorkerSettings
from .transport.base import Transport
from .transport.redis_transport import RedisTransport


class CompressionService:
    """
    Receives compression requests from the transport and runs each one in its
    own task, so audio requests interleave while they wait on decode/render.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        dispatcher: Optional[RequestDispatcher] = None,
        fault_reporter: Optional[FaultReporter] = None,
        poll_timeout: float = 1.0,
        max_concurrency: int = 0,
        error_backoff: float = 0.5,
    ):
        self.transport = transport
        self.dispatcher = dispatcher or RequestDispatcher(transport)
        self.fault_reporter = fault_reporter or FaultReporter(transport)
        self.poll_timeout = poll_timeout
        self.error_backoff = error_backoff
        self.logger = logging.getLogger(__name__)
        self.task: Optional[asyncio.Task] = None
        self._running = False
        self._in_flight: Set[asyncio.Task] = set()
        self._slots = asyncio.Semaphore(max_concurrency) if max_concurrency > 0 else None

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[Transport] = None) -> "CompressionService":
        transport = transport or RedisTransport.from_settings(settings.redis, settings.worker)
        dispatcher = RequestDispatcher(
            transport,
            image_pipeline=ImagePipeline(),
            audio_pipeline=AudioPipeline(preserve_duration=settings.audio.preserve_duration),
        )
        worker: WorkerSettings = settings.worker
        return cls(
            transport,
            dispatcher=dispatcher,
            poll_timeout=worker.poll_timeout,
            max_concurrency=worker.max_concurrency,
        )

    @property
    def running(self) -> bool:
        return self._running

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    async def start(self):
        """
        Starts the compression service and begins listening for requests.
        """
        self.logger.info("Starting compression service...")
        self._running = True
        self.fault_reporter.install()
        self.task = asyncio.create_task(self._listen_for_requests())
        self.logger.info("Compression service started.")

    async def stop(self):
        """
        Stops listening, waits for in-flight requests, then closes the transport.
        """
        self.logger.info("Stopping compression service...")
        self._running = False
        if self.task:
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass
        if self._in_flight:
            self.logger.info(f"Waiting for {len(self._in_flight)} in-flight request(s)...")
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)
        await self.fault_reporter.drain()
        self.fault_reporter.uninstall()
        await self.transport.close()
        self.logger.info("Compression service stopped.")

    async def _listen_for_requests(self):
        while self._running:
            try:
                message = await self.transport.receive(timeout=self.poll_timeout)
                if message is None:
                    continue
                await self._submit(message)
            except asyncio.CancelledError:
                break
            except MessageSerializationError as e:
                await self.fault_reporter.report_fault(e)
            except Exception as e:
                await self.fault_reporter.report_fault(e)
                await asyncio.sleep(self.error_backoff)

    async def _submit(self, message: Dict[str, Any]) -> asyncio.Task:
        if self._slots is not None:
            await self._slots.acquire()
        task = asyncio.create_task(self._process(message))
        self._in_flight.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    async def _process(self, message: Dict[str, Any]) -> None:
        try:
            await self.dispatcher.handle(message)
        finally:
            if self._slots is not None:
                self._slots.release()

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._in_flight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.fault_reporter.schedule_rejection(exc)
