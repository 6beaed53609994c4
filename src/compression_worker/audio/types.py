from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(slots=True)
class AudioBuffer:
    """Planar float32 samples, shaped (channels, length)."""

    samples: np.ndarray
    sample_rate: int

    def __post_init__(self) -> None:
        samples = np.asarray(self.samples, dtype=np.float32)
        if samples.ndim == 1:
            samples = samples[None, :]
        if samples.ndim != 2:
            raise ValueError("audio samples must be shaped (channels, length)")
        if self.sample_rate <= 0:
            raise ValueError("sample rate must be positive")
        self.samples = samples

    @classmethod
    def silence(cls, channels: int, length: int, sample_rate: int) -> "AudioBuffer":
        return cls(samples=np.zeros((channels, length), dtype=np.float32), sample_rate=sample_rate)

    @property
    def channels(self) -> int:
        return int(self.samples.shape[0])

    @property
    def length(self) -> int:
        return int(self.samples.shape[1])

    @property
    def duration(self) -> float:
        return self.length / float(self.sample_rate)

    def channel_data(self, channel: int) -> np.ndarray:
        return self.samples[channel]
