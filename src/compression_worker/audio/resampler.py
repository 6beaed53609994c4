from __future__ import annotations

import numpy as np

from .types import AudioBuffer


def resampled_length(length: int, source_rate: int, target_rate: int, *, preserve_duration: bool = True) -> int:
    """Number of output samples for a rate change.

    With ``preserve_duration`` the output plays for as long as the input;
    without it the sample count is kept and the playback duration changes.
    """
    if not preserve_duration or source_rate == target_rate:
        return length
    return int(np.floor(length * target_rate / source_rate + 0.5))


def _interpolate(source: np.ndarray, ratio: float, length: int) -> np.ndarray:
    count = source.shape[0]
    if count == 0:
        return np.zeros(length, dtype=np.float32)
    positions = np.arange(length, dtype=np.float64) * ratio
    floor_idx = np.floor(positions).astype(np.int64)
    frac = positions - floor_idx
    # Positions past the end hold the last sample
    floor_idx = np.minimum(floor_idx, count - 1)
    ceil_idx = np.minimum(floor_idx + 1, count - 1)
    lower = source[floor_idx].astype(np.float64)
    upper = source[ceil_idx].astype(np.float64)
    return (lower * (1.0 - frac) + upper * frac).astype(np.float32)


def resample(
    buffer: AudioBuffer,
    target_rate: int,
    target_channels: int,
    *,
    preserve_duration: bool = True,
) -> AudioBuffer:
    """Linear-interpolation resample of ``buffer`` to ``target_rate``.

    The output always has ``target_channels`` channels. Only the first
    ``min(buffer.channels, target_channels)`` carry signal; the rest stay
    silent. Samples are not clipped after interpolation.
    """
    if target_rate <= 0:
        raise ValueError("target sample rate must be positive")
    if target_channels <= 0:
        raise ValueError("target channel count must be positive")

    source_rate = buffer.sample_rate
    length = resampled_length(buffer.length, source_rate, target_rate, preserve_duration=preserve_duration)
    output = AudioBuffer.silence(target_channels, length, target_rate)
    ratio = source_rate / target_rate

    for channel in range(min(buffer.channels, target_channels)):
        source = buffer.channel_data(channel)
        if source_rate == target_rate:
            output.samples[channel, :] = source[:length]
        else:
            output.samples[channel, :] = _interpolate(source, ratio, length)
    return output
