from __future__ import annotations

import base64
import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from ..errors import ImageCompressionError
from ..models.config import ImageConfig
from ..models.messages import RawPixels, describe_validation_error
from .canvas import Canvas, ImageSource, PillowCanvas
from .dimensions import plan_dimensions
from .types import CompressedImage

logger = logging.getLogger(__name__)


def decode_image_source(value: Any) -> ImageSource:
    """Turn a wire ``imageData`` value into bytes or raw pixels."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return base64.b64decode(value, validate=True)
    if isinstance(value, RawPixels):
        pixels = value
    elif isinstance(value, Mapping):
        pixels = RawPixels.model_validate(value)
    else:
        raise ValueError("imageData must be an encoded image or a {width, height, data} pixel buffer")
    data = pixels.data
    if isinstance(data, str):
        data = base64.b64decode(data, validate=True)
    data = bytes(data)
    expected = pixels.width * pixels.height * 4
    if len(data) != expected:
        raise ValueError(f"pixel buffer holds {len(data)} bytes, expected {expected}")
    return RawPixels(width=pixels.width, height=pixels.height, data=data)


class ImagePipeline:
    """Scales an image into its planned dimensions and re-encodes it."""

    def __init__(self, *, canvas: Optional[Canvas] = None) -> None:
        self._canvas = canvas or PillowCanvas()

    @property
    def canvas(self) -> Canvas:
        return self._canvas

    async def compress(self, source: Any, config: Mapping[str, Any] | ImageConfig) -> CompressedImage:
        # No suspension points: the whole transformation runs before returning.
        try:
            return self._compress(source, config)
        except ImageCompressionError:
            raise
        except ValidationError as exc:
            raise ImageCompressionError(f"Image compression failed: {describe_validation_error(exc)}") from exc
        except Exception as exc:
            raise ImageCompressionError(f"Image compression failed: {exc}") from exc

    def _compress(self, source: Any, config: Mapping[str, Any] | ImageConfig) -> CompressedImage:
        cfg = config if isinstance(config, ImageConfig) else ImageConfig.model_validate(config)
        if source is None:
            raise ValueError("missing imageData")

        surface = self._canvas.open(decode_image_source(source))
        scaled = None
        try:
            source_width, source_height = self._canvas.size(surface)
            width, height = plan_dimensions(source_width, source_height, cfg.max_width, cfg.max_height)
            scaled = self._canvas.draw(surface, width, height)
            data = self._canvas.encode(scaled, format=cfg.format, quality=cfg.quality)
        finally:
            if scaled is not None and scaled is not surface:
                self._canvas.discard(scaled)
            self._canvas.discard(surface)

        logger.debug(f"Encoded {source_width}x{source_height} -> {width}x{height} {cfg.format} ({len(data)} bytes)")
        return CompressedImage(
            data=data,
            format=cfg.format,
            width=width,
            height=height,
            original_width=source_width,
            original_height=source_height,
        )
