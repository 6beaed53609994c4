from __future__ import annotations

import math
from typing import Optional, Tuple


def _round_half_up(value: float) -> int:
    return max(1, int(math.floor(value + 0.5)))


def plan_dimensions(
    source_width: int,
    source_height: int,
    max_width: Optional[int] = None,
    max_height: Optional[int] = None,
) -> Tuple[int, int]:
    """Return the target (width, height) for a source, keeping aspect ratio.

    The width bound is checked first and wins outright when it applies; the
    height bound is only consulted when the width bound is unset or not
    exceeded. This is a precedence rule, not a fit inside both bounds.
    """
    if max_width and source_width > max_width:
        ratio = max_width / source_width
        return max_width, _round_half_up(source_height * ratio)
    if max_height and source_height > max_height:
        ratio = max_height / source_height
        return _round_half_up(source_width * ratio), max_height
    return source_width, source_height
