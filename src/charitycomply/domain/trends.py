"""Score trend against the last persisted snapshot."""

from typing import Optional

from charitycomply.domain.entities import ScoreSnapshot, Trend, TrendDirection


def calculate_trend(current: int, snapshot: Optional[ScoreSnapshot]) -> Trend:
    """Compare the current overall percentage with a previous snapshot."""
    if snapshot is None:
        return Trend()

    change = current - snapshot.overall_score
    if change > 0:
        direction = TrendDirection.UP
    elif change < 0:
        direction = TrendDirection.DOWN
    else:
        direction = TrendDirection.FLAT

    return Trend(direction=direction, change=change, last_month=snapshot.overall_score)
