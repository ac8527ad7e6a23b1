from __future__ import annotations

from typing import Iterable


SCORE_FLOOR = 0.0
SCORE_CEILING = 100.0


def clamp(value: float, lower: float = SCORE_FLOOR, upper: float = SCORE_CEILING) -> float:
    return max(lower, min(upper, value))


def mean(values: Iterable[float]) -> float:
    items = list(values)
    if not items:
        return 0.0
    return sum(items) / len(items)


def saturating_ratio(count: float, saturation: float) -> float:
    """Scale ``count`` onto 0-100, reaching 100 at ``saturation``."""
    return clamp(count / saturation * 100)


def round_score(value: float) -> float:
    return round(value, 2)


def score_band(score: float) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    return "Fair"


def format_compact_currency(amount: float) -> str:
    magnitude = abs(amount)
    sign = "-" if amount < 0 else ""
    if magnitude >= 1_000_000:
        return f"{sign}${magnitude / 1_000_000:.1f}M"
    if magnitude >= 1_000:
        return f"{sign}${magnitude / 1_000:.0f}K"
    return f"{sign}${magnitude:.0f}"
