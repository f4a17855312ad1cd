from collections.abc import Sequence
from dataclasses import dataclass

from esg_risk_core.analytics.trend import compute_trend
from esg_risk_core.domain import EmissionSample, TrendResult


@dataclass(frozen=True, slots=True)
class EmissionTrendReport:
    """Monthly emission totals for a period together with their trend."""

    samples: tuple[EmissionSample, ...]
    total_emissions: float
    average_monthly_emissions: float
    trend: TrendResult
    supplier_id: str | None = None


def emission_trend_report(
    samples: Sequence[EmissionSample],
    supplier_id: str | None = None,
) -> EmissionTrendReport:
    ordered = tuple(sorted(samples, key=lambda s: s.period_key))
    totals = [s.total_emissions for s in ordered]
    total = sum(totals)

    return EmissionTrendReport(
        samples=ordered,
        total_emissions=total,
        average_monthly_emissions=total / len(totals) if totals else 0.0,
        trend=compute_trend(totals),
        supplier_id=supplier_id,
    )
