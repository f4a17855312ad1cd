from collections.abc import Sequence
from fractions import Fraction

from esg_risk_core.domain import TrendDirection, TrendResult


def least_squares_slope(values: Sequence[float]) -> float:
    """Slope of an ordinary least-squares fit of ``values`` against x = 1..n.

    The sums are exact, so a flat series has a slope of exactly 0.0 whatever
    its float representation. Returns 0.0 for fewer than two points.
    """
    n = len(values)
    if n < 2:
        return 0.0

    ys = [Fraction(value) for value in values]
    sum_x = Fraction(n * (n + 1), 2)
    sum_x2 = Fraction(n * (n + 1) * (2 * n + 1), 6)
    sum_y = sum(ys)
    sum_xy = sum(x * y for x, y in enumerate(ys, start=1))

    return float((n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x))


def compute_trend(series: Sequence[float]) -> TrendResult:
    slope = least_squares_slope(series)

    if slope > 0:
        direction = TrendDirection.INCREASING
    elif slope < 0:
        direction = TrendDirection.DECREASING
    else:
        direction = TrendDirection.STABLE

    # raw slope scaled by 100, not relative to a baseline
    return TrendResult(slope=slope, direction=direction, magnitude_percent=abs(slope) * 100)
