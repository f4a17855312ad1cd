from esg_risk_core.analytics.emissions import EmissionTrendReport, emission_trend_report
from esg_risk_core.analytics.trend import compute_trend, least_squares_slope

__all__ = [
    "compute_trend",
    "least_squares_slope",
    "EmissionTrendReport",
    "emission_trend_report",
]
