from __future__ import annotations

import logging
import time
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from pydantic import ValidationError

from .audio.pipeline import AudioPipeline
from .errors import CompressionWorkerError, UnknownTransformKind
from .image.pipeline import ImagePipeline
from .models.messages import (
    AUDIO_TRANSFORM,
    IMAGE_TRANSFORM,
    TransformReply,
    TransformRequest,
    describe_validation_error,
)
from .models.payloads import encode_audio_result, encode_image_result
from .transport.base import Transport

Handler = Callable[[TransformRequest], Awaitable[Any]]


class RequestDispatcher:
    """Routes requests to their pipeline and turns the outcome into one reply."""

    def __init__(
        self,
        transport: Transport,
        *,
        image_pipeline: Optional[ImagePipeline] = None,
        audio_pipeline: Optional[AudioPipeline] = None,
    ) -> None:
        self.transport = transport
        self.image_pipeline = image_pipeline or ImagePipeline()
        self.audio_pipeline = audio_pipeline or AudioPipeline()
        self.logger = logging.getLogger(__name__)
        self._routes: Dict[str, Handler] = {
            IMAGE_TRANSFORM: self._compress_image,
            AUDIO_TRANSFORM: self._compress_audio,
        }

    @property
    def kinds(self) -> list[str]:
        return list(self._routes)

    async def handle(self, message: Mapping[str, Any]) -> TransformReply:
        """Dispatch ``message`` and send its reply."""
        reply = await self.dispatch(message)
        await self.transport.send(reply.to_message())
        if reply.success:
            self.logger.info(f"Request {reply.id} completed")
        return reply

    async def dispatch(self, message: Mapping[str, Any]) -> TransformReply:
        """Process one request; failures come back as ``success=False`` replies."""
        try:
            request = TransformRequest.model_validate(message)
        except ValidationError as e:
            error = f"Invalid request: {describe_validation_error(e)}"
            self.logger.warning(error)
            if isinstance(message, Mapping) and "id" in message:
                return TransformReply.failed(message["id"], error)
            return TransformReply.fault(error)

        self.logger.debug(f"Received request {request.id} ({request.kind})")
        # Route before anything looks at config
        handler = self._routes.get(request.kind) if isinstance(request.kind, str) else None
        try:
            if handler is None:
                raise UnknownTransformKind(request.kind)
            result = await handler(request)
        except CompressionWorkerError as e:
            self.logger.warning(f"Request {request.id} failed: {e}")
            return self._failed(request, str(e))
        except Exception as e:
            self.logger.error(f"Unexpected error processing request {request.id}: {e}", exc_info=True)
            return self._failed(request, str(e) or type(e).__name__)
        return TransformReply.completed(request.id, result)

    @staticmethod
    def _failed(request: TransformRequest, error: str) -> TransformReply:
        if "id" in request.model_fields_set:
            return TransformReply.failed(request.id, error)
        return TransformReply.fault(error)

    async def _compress_image(self, request: TransformRequest) -> Dict[str, Any]:
        start_time = time.perf_counter()
        image = await self.image_pipeline.compress(request.image_data, request.config)
        return encode_image_result(image, time.perf_counter() - start_time)

    async def _compress_audio(self, request: TransformRequest) -> Dict[str, Any]:
        start_time = time.perf_counter()
        buffer = await self.audio_pipeline.compress(request.audio_data, request.config)
        return encode_audio_result(buffer, time.perf_counter() - start_time)
