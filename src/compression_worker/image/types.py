from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class CompressedImage:
    """Encoded image produced by the image pipeline."""

    data: bytes
    format: str
    width: int
    height: int
    original_width: int
    original_height: int

    @property
    def original_size(self) -> int:
        # RGBA bytes of the decoded source
        return self.original_width * self.original_height * 4

    @property
    def compressed_size(self) -> int:
        return len(self.data)

    @property
    def compression_ratio(self) -> float:
        if self.original_size <= 0:
            return 0.0
        return 1 - (self.compressed_size / self.original_size)
