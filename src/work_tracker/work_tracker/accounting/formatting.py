from __future__ import annotations

import math


def format_hours_minutes(total_minutes: float) -> str:
    """480 -> '8h 0min' (floored)."""
    total = max(0, math.floor(total_minutes))
    return f"{total // 60}h {total % 60}min"


def format_live_hours(hours: float) -> str:
    """Running-clock display: '7h 45min', or just '45min' under an hour."""
    whole = math.floor(hours)
    minutes = round((hours - whole) * 60)
    if minutes == 60:
        whole, minutes = whole + 1, 0
    if whole > 0:
        return f"{whole}h {minutes}min"
    return f"{minutes}min"
