from .config import AUDIO_PRESETS, QUALITY_LEVELS, SUPPORTED_FORMATS, AudioConfig, ImageConfig
from .messages import (
    AUDIO_TRANSFORM,
    IMAGE_TRANSFORM,
    RawPixels,
    TransformReply,
    TransformRequest,
    describe_validation_error,
)

__all__ = [
    "AUDIO_PRESETS",
    "QUALITY_LEVELS",
    "SUPPORTED_FORMATS",
    "AudioConfig",
    "ImageConfig",
    "AUDIO_TRANSFORM",
    "IMAGE_TRANSFORM",
    "RawPixels",
    "TransformReply",
    "TransformRequest",
    "describe_validation_error",
]
