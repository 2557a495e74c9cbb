"""
Summary statistics and trend signal over a list of readings.

Readings are expected newest-first, the order ReadingStore.query returns.
"""
import enum
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from bp_tracker.models.reading import isoformat_utc
from bp_tracker.utils.classifier import BPCategory, classify_bp

TREND_MIN_READINGS = 6
TREND_GROUP_SIZE = 3
TREND_THRESHOLD = 5


class Trend(enum.Enum):
    IMPROVING = 'improving'
    STABLE = 'stable'
    WORSENING = 'worsening'


@dataclass
class ReadingStats:
    avg_systolic: int = 0
    avg_diastolic: int = 0
    avg_heart_rate: int = 0
    count: int = 0
    first_recorded_at: Optional[datetime] = None
    last_recorded_at: Optional[datetime] = None
    latest: Any = None
    latest_category: Optional[BPCategory] = None
    trend: Trend = Trend.STABLE

    def to_dict(self) -> Dict[str, Any]:
        return {
            'avg_systolic': self.avg_systolic,
            'avg_diastolic': self.avg_diastolic,
            'avg_heart_rate': self.avg_heart_rate,
            'count': self.count,
            'date_range': {
                'start': isoformat_utc(self.first_recorded_at),
                'end': isoformat_utc(self.last_recorded_at),
            },
            'latest': self.latest.to_dict() if self.latest is not None else None,
            'latest_category': self.latest_category.label if self.latest_category else None,
            'trend': self.trend.value,
        }


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _mean(values: List[int]) -> float:
    return sum(values) / len(values)


def compute_trend(readings: list) -> Trend:
    """Compare mean systolic of the newest group against the group from the midpoint."""
    n = len(readings)
    if n < TREND_MIN_READINGS:
        return Trend.STABLE

    half = n // 2
    recent = readings[:min(TREND_GROUP_SIZE, half)]
    older = readings[half:half + TREND_GROUP_SIZE]

    diff = _mean([r.systolic for r in recent]) - _mean([r.systolic for r in older])
    if diff < -TREND_THRESHOLD:
        return Trend.IMPROVING
    if diff > TREND_THRESHOLD:
        return Trend.WORSENING
    return Trend.STABLE


def summarize(readings: list) -> ReadingStats:
    """Averages, date range, latest reading and trend.

    "Latest" is readings[0]; passing readings in any other order than
    newest-first changes what latest and trend mean.

    Systolic and diastolic are averaged over every reading. The heart-rate
    average only counts readings that have one (stored 0 is "not recorded"),
    so it is not dragged toward zero; it is 0 when no reading has one.
    """
    if not readings:
        return ReadingStats()

    heart_rates = [r.heart_rate for r in readings if r.heart_rate]
    timestamps = [r.recorded_at for r in readings if r.recorded_at is not None]
    latest = readings[0]

    return ReadingStats(
        avg_systolic=round_half_up(_mean([r.systolic for r in readings])),
        avg_diastolic=round_half_up(_mean([r.diastolic for r in readings])),
        avg_heart_rate=round_half_up(_mean(heart_rates)) if heart_rates else 0,
        count=len(readings),
        first_recorded_at=min(timestamps) if timestamps else None,
        last_recorded_at=max(timestamps) if timestamps else None,
        latest=latest,
        latest_category=classify_bp(latest.systolic, latest.diastolic),
        trend=compute_trend(readings),
    )


def chart_series(readings: list) -> List[Dict[str, Any]]:
    """Oldest-first points for a trend chart."""
    ordered = sorted(readings, key=lambda r: (r.recorded_at, r.id or 0))
    return [
        {
            'date': isoformat_utc(r.recorded_at),
            'systolic': r.systolic,
            'diastolic': r.diastolic,
            'heart_rate': r.heart_rate_or_none,
        }
        for r in ordered
    ]
