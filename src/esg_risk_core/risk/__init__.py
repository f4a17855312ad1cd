from esg_risk_core.risk.analysis import (
    ESGAnalysis,
    SupplierDashboard,
    analyze_supplier,
    summarize_suppliers,
)
from esg_risk_core.risk.classifier import RiskClassifier, classify, esg_rating, validate

__all__ = [
    "RiskClassifier",
    "classify",
    "esg_rating",
    "validate",
    "ESGAnalysis",
    "SupplierDashboard",
    "analyze_supplier",
    "summarize_suppliers",
]
