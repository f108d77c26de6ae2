"""Safety services package: risk classification and crisis escalation."""

from zenstudent.services.safety.risk_classifier import RISK_KEYWORDS, RiskClassifier, classify
from zenstudent.services.safety.crisis_controller import CrisisEscalationController

__all__ = [
    # Classification
    "RISK_KEYWORDS",
    "RiskClassifier",
    "classify",
    # Escalation
    "CrisisEscalationController",
]
