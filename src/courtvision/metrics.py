"""
Closed-form shooting efficiency metrics.

PER is deliberately absent: its value is whatever the model reports.
"""

from typing import Optional

from .models import AdvancedMetrics, EntityStat


def true_shooting_pct(points: float, fga: float, fta: float) -> Optional[float]:
    """
    TS% = PTS / (2 * (FGA + 0.44 * FTA)).

    Returns None when there were no shooting attempts.
    """
    denominator = 2 * (fga + 0.44 * fta)
    if denominator <= 0:
        return None
    return points / denominator


def effective_fg_pct(fgm: float, tpm: float, fga: float) -> Optional[float]:
    """eFG% = (FGM + 0.5 * 3PM) / FGA, or None without field-goal attempts."""
    if fga <= 0:
        return None
    return (fgm + 0.5 * tpm) / fga


def fill_advanced(entry: EntityStat) -> EntityStat:
    """
    Return a copy of `entry` with missing TS% / eFG% derived from its box score.

    Values already present are left exactly as the model sent them.
    """
    advanced = entry.advanced.model_copy() if entry.advanced else AdvancedMetrics()

    if advanced.ts_pct is None and entry.fga is not None and entry.fta is not None:
        advanced.ts_pct = true_shooting_pct(entry.pts, entry.fga, entry.fta)

    if (
        advanced.efg_pct is None
        and entry.fgm is not None
        and entry.tpm is not None
        and entry.fga is not None
    ):
        advanced.efg_pct = effective_fg_pct(entry.fgm, entry.tpm, entry.fga)

    if entry.advanced is None and advanced == AdvancedMetrics():
        return entry.model_copy()
    return entry.model_copy(update={"advanced": advanced})
