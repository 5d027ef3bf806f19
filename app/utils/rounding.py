from __future__ import annotations

import math


def round_half_away(value: float, ndigits: int = 0) -> float:
    """
    Round half away from zero, unlike the builtin round() which rounds half to even.

    The value is scaled before rounding so 1.05 at one decimal gives 1.1.
    """
    factor = 10 ** ndigits
    scaled = abs(value) * factor
    rounded = math.floor(scaled + 0.5) / factor
    return math.copysign(rounded, value) if rounded else 0.0


def round_percentage(ratio: float) -> int:
    """Convert a 0..1 ratio into a whole percentage clamped to [0, 100]."""
    pct = int(round_half_away(ratio * 100))
    return max(0, min(100, pct))
