from __future__ import annotations

import asyncio
import base64
import logging
import uuid
from typing import Any, AsyncIterator, Callable, Dict, Mapping, Optional, Union

from .audio.types import AudioBuffer
from .errors import (
    AudioCompressionError,
    CompressionTimeoutError,
    CompressionWorkerError,
    ImageCompressionError,
)
from .models.messages import AUDIO_TRANSFORM, IMAGE_TRANSFORM, TransformReply
from .models.payloads import decode_audio_result
from .settings import Settings
from .transport.base import Transport
from .transport.redis_transport import RedisTransport

FaultCallback = Callable[[TransformReply], None]


def _encode_blob(value: Union[bytes, str, Mapping[str, Any]]) -> Union[str, Dict[str, Any]]:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, Mapping):
        pixels = dict(value)
        if isinstance(pixels.get("data"), (bytes, bytearray, memoryview)):
            pixels["data"] = base64.b64encode(bytes(pixels["data"])).decode("ascii")
        return pixels
    return value


class CompressionClient:
    """Submits requests to the worker and matches replies back by id."""

    def __init__(
        self,
        transport: Transport,
        *,
        timeout: float = 30.0,
        on_fault: Optional[FaultCallback] = None,
        owns_transport: bool = False,
    ) -> None:
        self.transport = transport
        self.owns_transport = owns_transport
        self.timeout = timeout
        self.on_fault = on_fault
        self.logger = logging.getLogger(__name__)
        self._pending: Dict[Any, asyncio.Future] = {}
        self._listener: Optional[asyncio.Task] = None

    @classmethod
    def from_settings(cls, settings: Settings, *, on_fault: Optional[FaultCallback] = None) -> "CompressionClient":
        transport = RedisTransport.from_settings(settings.redis, settings.worker)
        return cls(transport, timeout=settings.client.timeout_seconds, on_fault=on_fault, owns_transport=True)

    async def start(self) -> None:
        if self._listener is not None:
            return
        replies = await self.transport.subscribe()
        self._listener = asyncio.create_task(self._listen(replies))

    async def close(self) -> None:
        if self._listener is not None:
            self._listener.cancel()
            try:
                await self._listener
            except asyncio.CancelledError:
                pass
            self._listener = None
        for future in self._pending.values():
            if not future.done():
                future.set_exception(CompressionWorkerError("client closed"))
        self._pending.clear()
        if self.owns_transport:
            await self.transport.close()

    async def __aenter__(self) -> "CompressionClient":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def request(
        self,
        kind: str,
        config: Mapping[str, Any],
        *,
        image_data: Any = None,
        audio_data: Any = None,
        timeout: Optional[float] = None,
        request_id: Any = None,
    ) -> TransformReply:
        """Send one request and wait for the reply carrying its id.

        A timeout stops the wait only; the worker still finishes the job.
        """
        if self._listener is None:
            await self.start()
        request_id = request_id if request_id is not None else uuid.uuid4().hex
        if request_id in self._pending:
            raise ValueError(f"request id already in flight: {request_id}")

        message: Dict[str, Any] = {"id": request_id, "type": kind, "config": dict(config)}
        if image_data is not None:
            message["imageData"] = _encode_blob(image_data)
        if audio_data is not None:
            message["audioData"] = _encode_blob(audio_data)

        future = asyncio.get_running_loop().create_future()
        self._pending[request_id] = future
        wait_for = self.timeout if timeout is None else timeout
        try:
            await self.transport.submit(message)
            return await asyncio.wait_for(future, timeout=wait_for)
        except asyncio.TimeoutError:
            raise CompressionTimeoutError(f"{kind} request {request_id} timed out after {wait_for}s") from None
        finally:
            self._pending.pop(request_id, None)

    async def compress_image(
        self,
        image: Union[bytes, Mapping[str, Any]],
        config: Mapping[str, Any],
        *,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        reply = await self.request(IMAGE_TRANSFORM, config, image_data=image, timeout=timeout)
        if not reply.success:
            raise ImageCompressionError(reply.error)
        result = dict(reply.result)
        result["data"] = base64.b64decode(result["data"])
        return result

    async def compress_audio(
        self,
        audio: bytes,
        config: Mapping[str, Any],
        *,
        timeout: Optional[float] = None,
    ) -> AudioBuffer:
        reply = await self.request(AUDIO_TRANSFORM, config, audio_data=audio, timeout=timeout)
        if not reply.success:
            raise AudioCompressionError(reply.error)
        return decode_audio_result(reply.result)

    async def _listen(self, replies: AsyncIterator[Dict[str, Any]]) -> None:
        async for message in replies:
            try:
                reply = TransformReply.model_validate(message)
            except ValueError as e:
                self.logger.warning(f"Ignoring malformed reply: {e}")
                continue
            if "id" not in message:
                self.logger.error(f"Compression worker fault: {reply.error}")
                if self.on_fault is not None:
                    self.on_fault(reply)
                continue
            future = self._pending.get(reply.id)
            if future is None:
                # Replies for other clients share the channel
                self.logger.debug(f"No pending request for reply {reply.id}")
                continue
            if not future.done():
                future.set_result(reply)
