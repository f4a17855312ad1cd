from datetime import datetime
from typing import ClassVar

from esg_risk_core.domain import Classification, RiskTier, SupplierSnapshot, utcnow


class RiskClassifier:
    """Maps a supplier snapshot to a risk tier and ESG letter rating."""

    name: str = "risk_classifier"

    # (exclusive upper bound on overall score, risk points)
    _score_bands: ClassVar[list[tuple[float, int]]] = [
        (40, 3),
        (60, 2),
        (80, 1),
    ]

    # (inclusive upper bound on risk points, tier)
    _tier_buckets: ClassVar[list[tuple[int, RiskTier]]] = [
        (2, RiskTier.LOW),
        (5, RiskTier.MEDIUM),
        (8, RiskTier.HIGH),
    ]

    _ratings: ClassVar[list[tuple[float, str]]] = [
        (90, "A+"),
        (80, "A"),
        (70, "B+"),
        (60, "B"),
        (50, "C+"),
        (40, "C"),
        (30, "D"),
    ]

    def risk_factor_score(self, snapshot: SupplierSnapshot, now: datetime | None = None) -> int:
        now = now or utcnow()
        score = 0

        overall = snapshot.overall_score
        for upper, points in self._score_bands:
            if overall < upper:
                score += points
                break

        if not snapshot.certifications:
            score += 1

        if not snapshot.has_fair_labor_certification:
            score += 1
        if not snapshot.has_child_labor_policy:
            score += 2
        if not snapshot.has_safe_working_conditions:
            score += 2

        if not snapshot.has_renewable_energy_program:
            score += 1
        if not snapshot.has_carbon_neutrality_plan:
            score += 1

        if snapshot.next_audit_date < now:
            score += 2

        return score

    def tier_for(self, risk_factor_score: int) -> RiskTier:
        for upper, tier in self._tier_buckets:
            if risk_factor_score <= upper:
                return tier
        return RiskTier.CRITICAL

    def esg_rating(self, overall_score: float) -> str:
        for lower, rating in self._ratings:
            if overall_score >= lower:
                return rating
        return "F"

    def classify(self, snapshot: SupplierSnapshot, now: datetime | None = None) -> Classification:
        score = self.risk_factor_score(snapshot, now)
        return Classification(
            tier=self.tier_for(score),
            rating=self.esg_rating(snapshot.overall_score),
            risk_factor_score=score,
        )

    def validate(self, snapshot: SupplierSnapshot, now: datetime | None = None) -> bool:
        """Acceptance check: at least 5 of the 7 criteria must hold."""
        now = now or utcnow()
        criteria = (
            snapshot.environmental >= 50,
            snapshot.social >= 50,
            snapshot.governance >= 50,
            snapshot.has_child_labor_policy,
            snapshot.has_safe_working_conditions,
            snapshot.next_audit_date > now,
            self.classify(snapshot, now).tier <= RiskTier.MEDIUM,
        )
        return sum(criteria) >= 5


_default_classifier = RiskClassifier()


def classify(snapshot: SupplierSnapshot, now: datetime | None = None) -> Classification:
    return _default_classifier.classify(snapshot, now)


def esg_rating(overall_score: float) -> str:
    return _default_classifier.esg_rating(overall_score)


def validate(snapshot: SupplierSnapshot, now: datetime | None = None) -> bool:
    return _default_classifier.validate(snapshot, now)
