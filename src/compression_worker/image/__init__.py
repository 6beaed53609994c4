"""Image resize + re-encode pipeline."""

from .canvas import Canvas, PillowCanvas
from .dimensions import plan_dimensions
from .pipeline import ImagePipeline, decode_image_source
from .types import CompressedImage

__all__ = [
    "Canvas",
    "PillowCanvas",
    "plan_dimensions",
    "ImagePipeline",
    "decode_image_source",
    "CompressedImage",
]
