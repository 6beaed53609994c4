from __future__ import annotations

import base64
import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from ..errors import AudioCompressionError
from ..models.config import AudioConfig
from ..models.messages import describe_validation_error
from .codec import AudioDecoder, AudioRenderer, ChannelMixRenderer, SoundfileDecoder
from .resampler import resample
from .types import AudioBuffer

logger = logging.getLogger(__name__)


def decode_audio_source(value: Any) -> bytes:
    """Turn a wire ``audioData`` value into encoded audio bytes."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return base64.b64decode(value, validate=True)
    raise ValueError("audioData must be base64 encoded audio bytes")


class AudioPipeline:
    """Decode -> offline render -> resample.

    The result is a raw sample buffer. Encoding into a compressed container
    (mp3, ogg, ...) is not implemented here.
    """

    def __init__(
        self,
        *,
        decoder: Optional[AudioDecoder] = None,
        renderer: Optional[AudioRenderer] = None,
        preserve_duration: bool = True,
    ) -> None:
        self._decoder = decoder or SoundfileDecoder()
        self._renderer = renderer or ChannelMixRenderer()
        self._preserve_duration = preserve_duration

    async def compress(self, source: Any, config: Mapping[str, Any] | AudioConfig) -> AudioBuffer:
        try:
            cfg = config if isinstance(config, AudioConfig) else AudioConfig.model_validate(config)
            if source is None:
                raise ValueError("missing audioData")
            data = decode_audio_source(source)

            decoded = await self._decoder.decode(data, sample_rate=cfg.sample_rate)
            rendered = await self._renderer.render(
                decoded,
                channels=cfg.channels,
                length=decoded.length,
                sample_rate=cfg.sample_rate,
            )
            result = resample(
                rendered,
                cfg.sample_rate,
                cfg.channels,
                preserve_duration=self._preserve_duration,
            )
        except ValidationError as exc:
            raise AudioCompressionError(f"Audio compression failed: {describe_validation_error(exc)}") from exc
        except Exception as exc:
            raise AudioCompressionError(f"Audio compression failed: {exc}") from exc

        logger.debug(
            f"Resampled {decoded.channels}ch@{decoded.sample_rate}Hz -> {result.channels}ch@{result.sample_rate}Hz "
            f"({decoded.length} -> {result.length} samples)"
        )
        return result
