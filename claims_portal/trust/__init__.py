"""Trust score engine for insurance policyholders."""

from .engine import compute_trust_score
from .models import (
    ClaimRecord,
    ClaimStatus,
    FraudIndicators,
    HolderProfile,
    PaymentHistory,
    Policy,
    PolicyStatus,
    ScoreBreakdown,
    ScoreComponent,
    TrustCategory,
    TrustScoreResult,
    VerificationStatus,
)
from .suggestions import build_improvement_suggestions
from .thresholds import ScoreCapPolicy, ThresholdConfig
from .validation import InvalidHolderInputError, validate_holder_inputs

__all__ = [
    "compute_trust_score",
    "build_improvement_suggestions",
    "validate_holder_inputs",
    "InvalidHolderInputError",
    "ClaimRecord",
    "ClaimStatus",
    "FraudIndicators",
    "HolderProfile",
    "PaymentHistory",
    "Policy",
    "PolicyStatus",
    "ScoreBreakdown",
    "ScoreComponent",
    "ScoreCapPolicy",
    "ThresholdConfig",
    "TrustCategory",
    "TrustScoreResult",
    "VerificationStatus",
]
