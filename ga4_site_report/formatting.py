from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    # Non-negative inputs only; halves go up (59.5 -> 60), unlike round().
    return int(math.floor(float(value) + 0.5))


def format_duration(seconds: float) -> str:
    """Render a duration as ``"45s"`` or ``"2m 6s"`` after whole-second rounding."""
    rounded = round_half_up(seconds)
    if rounded < 60:
        return f"{rounded}s"
    minutes, remaining = divmod(rounded, 60)
    return f"{minutes}m {remaining}s"
