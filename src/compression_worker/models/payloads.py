"""
JSON-safe result payloads for successful replies.
"""
import base64
from typing import Any, Dict

import numpy as np

from ..audio.types import AudioBuffer
from ..image.types import CompressedImage


def encode_image_result(image: CompressedImage, processing_time: float) -> Dict[str, Any]:
    return {
        "format": image.format,
        "width": image.width,
        "height": image.height,
        "originalWidth": image.original_width,
        "originalHeight": image.original_height,
        "data": base64.b64encode(image.data).decode("ascii"),
        "originalSize": image.original_size,
        "compressedSize": image.compressed_size,
        "compressionRatio": image.compression_ratio,
        "processingTime": processing_time,
    }


def encode_audio_result(buffer: AudioBuffer, processing_time: float) -> Dict[str, Any]:
    channel_data = [
        base64.b64encode(np.ascontiguousarray(buffer.channel_data(c), dtype="<f4").tobytes()).decode("ascii")
        for c in range(buffer.channels)
    ]
    return {
        "sampleRate": buffer.sample_rate,
        "channels": buffer.channels,
        "length": buffer.length,
        "duration": buffer.duration,
        "encoding": "float32le",
        "channelData": channel_data,
        "processingTime": processing_time,
    }


def decode_audio_result(payload: Dict[str, Any]) -> AudioBuffer:
    """Rebuild an AudioBuffer from an ``encode_audio_result`` payload."""
    channels = [np.frombuffer(base64.b64decode(data), dtype="<f4") for data in payload["channelData"]]
    samples = np.stack(channels) if channels else np.zeros((0, 0), dtype=np.float32)
    return AudioBuffer(samples=samples, sample_rate=int(payload["sampleRate"]))
