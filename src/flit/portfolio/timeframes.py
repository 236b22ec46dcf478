"""Chart helpers: timeframe windows, normalization and downsampling."""

import math
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Union

from ..exceptions import ValidationException
from .models import PortfolioSnapshot, TimeFrame

TIME_FRAME_WINDOWS = {
    TimeFrame.ONE_DAY: timedelta(days=1),
    TimeFrame.ONE_WEEK: timedelta(days=7),
    TimeFrame.ONE_MONTH: timedelta(days=30),
    TimeFrame.THREE_MONTHS: timedelta(days=90),
    TimeFrame.ONE_YEAR: timedelta(days=365),
    TimeFrame.FIVE_YEARS: timedelta(days=1825),
}


def _as_time_frame(frame: Union[TimeFrame, str]) -> TimeFrame:
    try:
        return TimeFrame(frame)
    except ValueError:
        raise ValidationException(
            f"Unknown time frame '{frame}'",
            field_errors={"timeFrame": ", ".join(f.value for f in TimeFrame)},
        )


def filter_data_by_time_frame(
    series: Sequence[PortfolioSnapshot],
    frame: Union[TimeFrame, str],
    now: Optional[datetime] = None,
) -> Sequence[PortfolioSnapshot]:
    """
    Points of ``series`` inside the window of ``frame``.

    ``ALL`` returns the input itself. ``YTD`` keeps points from January 1 of
    the current year; every other frame keeps ``timestamp >= now - window``.
    """
    frame = _as_time_frame(frame)
    if frame == TimeFrame.ALL:
        return series

    now = now or datetime.now()
    if frame == TimeFrame.YEAR_TO_DATE:
        cutoff = now.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
    else:
        cutoff = now - TIME_FRAME_WINDOWS[frame]
    return [point for point in series if point.timestamp >= cutoff]


def normalize_data(series: Sequence[PortfolioSnapshot]) -> List[PortfolioSnapshot]:
    """Rescale to percent change from the first point."""
    if not series:
        return []
    base = series[0].value
    if not base:
        return [PortfolioSnapshot(timestamp=p.timestamp, value=0.0) for p in series]
    return [
        PortfolioSnapshot(timestamp=p.timestamp, value=(p.value - base) / base * 100)
        for p in series
    ]


def sample_data(
    series: Sequence[PortfolioSnapshot], max_points: int
) -> Sequence[PortfolioSnapshot]:
    """
    Downsample by a fixed stride of ``ceil(len / max_points)``.

    The original final point is always the last output point.
    """
    if max_points < 1:
        raise ValidationException("max_points must be at least 1")
    if len(series) <= max_points:
        return series

    stride = math.ceil(len(series) / max_points)
    sampled = list(series[::stride])
    if sampled[-1] is not series[-1]:
        sampled.append(series[-1])
    return sampled
