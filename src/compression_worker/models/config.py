"""
Per-kind transformation options carried in a request's ``config`` field.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


QUALITY_LEVELS: Dict[str, float] = {
    "low": 0.3,
    "medium": 0.6,
    "high": 0.8,
    "ultra": 0.95,
    "lossless": 1.0,
}

SUPPORTED_FORMATS = ("webp", "jpeg", "png", "avif")

_FORMAT_ALIASES = {"jpg": "jpeg"}

AUDIO_PRESETS: Dict[str, Dict[str, int]] = {
    "low": {"sampleRate": 22050, "channels": 1},
    "medium": {"sampleRate": 44100, "channels": 2},
    "high": {"sampleRate": 48000, "channels": 2},
    "ultra": {"sampleRate": 48000, "channels": 2},
    "lossless": {"sampleRate": 48000, "channels": 2},
}


class ImageConfig(BaseModel):
    """compressImage options"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    max_width: Optional[int] = Field(default=None, alias="maxWidth", ge=1, description="Width bound in pixels")
    max_height: Optional[int] = Field(default=None, alias="maxHeight", ge=1, description="Height bound in pixels")
    format: str = Field(description="Target encoder format: webp|jpeg|png|avif")
    quality: float = Field(ge=0.0, le=1.0, description="Encoder quality in [0, 1] or a named level")

    @field_validator("format", mode="before")
    @classmethod
    def _normalize_format(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        name = value.strip().lower()
        if name.startswith("image/"):
            name = name[len("image/"):]
        name = _FORMAT_ALIASES.get(name, name)
        if name not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported format: {value}")
        return name

    @field_validator("quality", mode="before")
    @classmethod
    def _resolve_quality_level(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip().lower() in QUALITY_LEVELS:
            return QUALITY_LEVELS[value.strip().lower()]
        return value


class AudioConfig(BaseModel):
    """compressAudio options"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    sample_rate: int = Field(alias="sampleRate", ge=1, description="Target sample rate in Hz")
    channels: int = Field(ge=1, description="Target channel count")
    preset: Optional[str] = Field(default=None, description="Named preset filling missing values")

    @model_validator(mode="before")
    @classmethod
    def _apply_preset(cls, data: Any) -> Any:
        if not isinstance(data, dict) or not data.get("preset"):
            return data
        name = str(data["preset"]).strip().lower()
        preset = AUDIO_PRESETS.get(name)
        if preset is None:
            raise ValueError(f"Unknown audio preset: {data['preset']}")
        merged = dict(data)
        if "sampleRate" not in merged and "sample_rate" not in merged:
            merged["sampleRate"] = preset["sampleRate"]
        if "channels" not in merged:
            merged["channels"] = preset["channels"]
        merged["preset"] = name
        return merged
