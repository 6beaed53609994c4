from __future__ import annotations

import abc
import asyncio
import io
import logging

import numpy as np
import soundfile as sf

from .types import AudioBuffer

logger = logging.getLogger(__name__)

# Output channels that receive a mono source, per speaker layout
_MONO_TARGETS = {2: [0, 1], 4: [0, 1], 6: [2]}


class AudioDecoder(abc.ABC):
    """Interface for turning encoded audio bytes into samples."""

    @abc.abstractmethod
    async def decode(self, data: bytes, *, sample_rate: int) -> AudioBuffer:
        """Decode ``data``; ``sample_rate`` is the rate the caller is working at."""
        raise NotImplementedError


class AudioRenderer(abc.ABC):
    """Interface for the offline render pass run before resampling."""

    @abc.abstractmethod
    async def render(self, buffer: AudioBuffer, *, channels: int, length: int, sample_rate: int) -> AudioBuffer:
        raise NotImplementedError


class SoundfileDecoder(AudioDecoder):
    """Decodes any container libsndfile understands (WAV, FLAC, OGG, ...).

    Samples come back at the file's own rate; rate conversion is left to the
    resampler.
    """

    async def decode(self, data: bytes, *, sample_rate: int) -> AudioBuffer:
        if not data:
            raise ValueError("empty audio payload")
        return await asyncio.to_thread(self._read, bytes(data))

    def _read(self, data: bytes) -> AudioBuffer:
        try:
            frames, rate = sf.read(io.BytesIO(data), dtype="float32", always_2d=True)
        except Exception as exc:
            raise ValueError(f"unsupported audio encoding: {exc}") from exc
        return AudioBuffer(samples=np.ascontiguousarray(frames.T), sample_rate=int(rate))


class ChannelMixRenderer(AudioRenderer):
    """Renders a buffer into a fixed channel layout and length.

    Mono up-mixes with the speaker rules: stereo and quad get it on left and
    right, 5.1 on the centre channel, and any other layout on the first
    channel only. Mixing down to mono averages every channel, which matches
    the speaker rules for stereo and quad but not the weighted 5.1 down-mix.
    Other layouts map channel to channel. The buffer keeps its own sample rate.
    """

    async def render(self, buffer: AudioBuffer, *, channels: int, length: int, sample_rate: int) -> AudioBuffer:
        if channels <= 0:
            raise ValueError("render channel count must be positive")
        if length < 0:
            raise ValueError("render length cannot be negative")
        if buffer.sample_rate != sample_rate:
            logger.debug(f"Rendering at {buffer.sample_rate} Hz, resampler converts to {sample_rate} Hz")
        return await asyncio.to_thread(self._mix, buffer, channels, length)

    def _mix(self, buffer: AudioBuffer, channels: int, length: int) -> AudioBuffer:
        source = buffer.samples[:, :length]
        out = np.zeros((channels, length), dtype=np.float32)
        copied = source.shape[1]

        if buffer.channels == channels:
            out[:, :copied] = source
        elif buffer.channels == 1:
            out[_MONO_TARGETS.get(channels, [0]), :copied] = source[0]
        elif channels == 1:
            out[0, :copied] = source.mean(axis=0, dtype=np.float32)
        else:
            shared = min(buffer.channels, channels)
            out[:shared, :copied] = source[:shared]
        return AudioBuffer(samples=out, sample_rate=buffer.sample_rate)
