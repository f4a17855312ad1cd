"""Narrative ESG analysis and fleet-level supplier summaries."""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from esg_risk_core.domain import RiskTier, SupplierSnapshot, utcnow
from esg_risk_core.risk.classifier import RiskClassifier

COMPLIANT_OVERALL_SCORE = 70


@dataclass(frozen=True, slots=True)
class ESGAnalysis:
    supplier_id: str
    environmental: float
    social: float
    governance: float
    overall_score: float
    rating: str
    tier: RiskTier
    strengths: tuple[str, ...] = ()
    improvement_areas: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    benchmark: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class SupplierDashboard:
    total: int
    compliant: int
    non_compliant: int
    average_esg_score: float
    by_tier: dict[RiskTier, int]
    upcoming_audits: int
    overdue_audits: int


def _strengths(snapshot: SupplierSnapshot) -> list[str]:
    strengths: list[str] = []
    if snapshot.environmental >= 80:
        strengths.append("Excellent environmental performance")
    if snapshot.social >= 80:
        strengths.append("Strong social responsibility practices")
    if snapshot.governance >= 80:
        strengths.append("Robust governance framework")
    if snapshot.has_renewable_energy_program:
        strengths.append("Renewable energy program in place")
    if snapshot.has_fair_labor_certification:
        strengths.append("Fair labor certification achieved")
    if snapshot.has_carbon_neutrality_plan:
        strengths.append("Carbon neutrality plan implemented")
    return strengths


def _improvement_areas(snapshot: SupplierSnapshot) -> list[str]:
    areas: list[str] = []
    if snapshot.environmental < 60:
        areas.append("Environmental performance needs improvement")
    if snapshot.social < 60:
        areas.append("Social responsibility practices require attention")
    if snapshot.governance < 60:
        areas.append("Governance framework needs strengthening")
    if not snapshot.has_renewable_energy_program:
        areas.append("Implement renewable energy program")
    if not snapshot.has_fair_labor_certification:
        areas.append("Obtain fair labor certification")
    if not snapshot.has_carbon_neutrality_plan:
        areas.append("Develop carbon neutrality plan")
    return areas


def _recommendations(snapshot: SupplierSnapshot, tier: RiskTier, now: datetime) -> list[str]:
    recommendations: list[str] = []
    if snapshot.environmental < 70:
        recommendations.append("Invest in environmental management systems and green technologies")
    if snapshot.social < 70:
        recommendations.append("Enhance worker safety programs and community engagement initiatives")
    if snapshot.governance < 70:
        recommendations.append("Strengthen board oversight and transparency reporting")
    if tier >= RiskTier.HIGH:
        recommendations.append("Immediate action required to address high-risk factors")
    if snapshot.next_audit_date < now + timedelta(days=90):
        recommendations.append("Schedule comprehensive ESG audit within the next quarter")
    return recommendations


def analyze_supplier(
    snapshot: SupplierSnapshot,
    industry_average: float | None = None,
    now: datetime | None = None,
    classifier: RiskClassifier | None = None,
) -> ESGAnalysis:
    now = now or utcnow()
    classifier = classifier or RiskClassifier()
    classification = classifier.classify(snapshot, now)
    overall = snapshot.overall_score

    benchmark: dict[str, float] = {"supplier_score": overall}
    if industry_average is not None:
        benchmark["industry_average"] = industry_average
        benchmark["difference"] = overall - industry_average

    return ESGAnalysis(
        supplier_id=snapshot.supplier_id,
        environmental=snapshot.environmental,
        social=snapshot.social,
        governance=snapshot.governance,
        overall_score=overall,
        rating=classification.rating,
        tier=classification.tier,
        strengths=tuple(_strengths(snapshot)),
        improvement_areas=tuple(_improvement_areas(snapshot)),
        recommendations=tuple(_recommendations(snapshot, classification.tier, now)),
        benchmark=benchmark,
    )


def summarize_suppliers(
    snapshots: Sequence[SupplierSnapshot],
    now: datetime | None = None,
    upcoming_audit_days: int = 30,
    classifier: RiskClassifier | None = None,
) -> SupplierDashboard:
    now = now or utcnow()
    classifier = classifier or RiskClassifier()
    horizon = now + timedelta(days=upcoming_audit_days)

    tiers = [classifier.classify(s, now).tier for s in snapshots]
    by_tier = Counter(tiers)

    compliant = sum(
        1
        for snapshot, tier in zip(snapshots, tiers)
        if snapshot.overall_score >= COMPLIANT_OVERALL_SCORE and tier <= RiskTier.MEDIUM
    )
    average = (
        round(sum(s.overall_score for s in snapshots) / len(snapshots), 2) if snapshots else 0.0
    )

    return SupplierDashboard(
        total=len(snapshots),
        compliant=compliant,
        non_compliant=len(snapshots) - compliant,
        average_esg_score=average,
        by_tier={tier: by_tier.get(tier, 0) for tier in RiskTier},
        upcoming_audits=sum(1 for s in snapshots if now <= s.next_audit_date <= horizon),
        overdue_audits=sum(1 for s in snapshots if s.next_audit_date < now),
    )
