from __future__ import annotations

import abc
import io
from typing import Any, Tuple, Union

from PIL import Image

from ..models.messages import RawPixels

ImageSource = Union[bytes, RawPixels]

_PIL_FORMATS = {
    "webp": "WEBP",
    "jpeg": "JPEG",
    "png": "PNG",
    "avif": "AVIF",
}

# Encoders that cannot store an alpha channel
_OPAQUE_FORMATS = {"jpeg"}


class Canvas(abc.ABC):
    """Drawing surface + encoder the image pipeline draws through."""

    @abc.abstractmethod
    def open(self, source: ImageSource) -> Any:
        """Load a pixel source into a surface."""
        raise NotImplementedError

    @abc.abstractmethod
    def size(self, surface: Any) -> Tuple[int, int]:
        raise NotImplementedError

    @abc.abstractmethod
    def draw(self, surface: Any, width: int, height: int) -> Any:
        """Return a new surface with ``surface`` scaled to width x height."""
        raise NotImplementedError

    @abc.abstractmethod
    def encode(self, surface: Any, *, format: str, quality: float) -> bytes:
        raise NotImplementedError

    def discard(self, surface: Any) -> None:
        """Release a temporary surface."""


class PillowCanvas(Canvas):
    """Canvas backed by Pillow images."""

    def __init__(self, *, resample: int = Image.Resampling.LANCZOS) -> None:
        self._resample = resample

    def open(self, source: ImageSource) -> Image.Image:
        if isinstance(source, RawPixels):
            return Image.frombytes("RGBA", (source.width, source.height), source.data)
        image = Image.open(io.BytesIO(source))
        image.load()
        return image

    def size(self, surface: Image.Image) -> Tuple[int, int]:
        return surface.size

    def draw(self, surface: Image.Image, width: int, height: int) -> Image.Image:
        if surface.mode not in ("RGB", "RGBA"):
            surface = surface.convert("RGBA")
        return surface.resize((width, height), resample=self._resample)

    def encode(self, surface: Image.Image, *, format: str, quality: float) -> bytes:
        pil_format = _PIL_FORMATS.get(format)
        if pil_format is None:
            raise ValueError(f"Unsupported format: {format}")
        if not 0.0 <= quality <= 1.0:
            raise ValueError(f"Invalid quality: {quality}")

        if format in _OPAQUE_FORMATS and surface.mode != "RGB":
            surface = surface.convert("RGB")

        params = {}
        if format != "png":
            params["quality"] = int(round(quality * 100))
        if format == "webp" and quality >= 1.0:
            params["lossless"] = True

        buf = io.BytesIO()
        surface.save(buf, format=pil_format, **params)
        return buf.getvalue()

    def discard(self, surface: Image.Image) -> None:
        surface.close()
