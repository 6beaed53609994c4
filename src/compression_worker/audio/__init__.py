"""Audio decode, render and resample pipeline."""

from .codec import AudioDecoder, AudioRenderer, ChannelMixRenderer, SoundfileDecoder
from .pipeline import AudioPipeline, decode_audio_source
from .resampler import resample, resampled_length
from .types import AudioBuffer

__all__ = [
    "AudioDecoder",
    "AudioRenderer",
    "ChannelMixRenderer",
    "SoundfileDecoder",
    "AudioPipeline",
    "decode_audio_source",
    "resample",
    "resampled_length",
    "AudioBuffer",
]
