"""Data models for the trust score engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any


class PolicyStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class ClaimStatus(str, Enum):
    """Lifecycle states a claim can be in."""

    PENDING = "Pending"
    GUARANTEED = "Insurance Claim Guaranteed"
    MANUAL_REVIEW = "Manual Review"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    SETTLED = "Settled"


class TrustCategory(str, Enum):
    HIGHLY_TRUSTED = "Highly Trusted"
    TRUSTED = "Trusted"
    MODERATE_RISK = "Moderate Risk"
    HIGH_RISK = "High Risk"


@dataclass(frozen=True)
class VerificationStatus:
    aadhaar: bool = False
    pan: bool = False
    mobile: bool = False
    policy_document: bool = False
    bank_proof: bool = False


@dataclass(frozen=True)
class Policy:
    policy_id: str
    status: PolicyStatus
    start_date: date
    provider: str = ""
    policy_number: str = ""
    coverage: float = 0.0
    end_date: date | None = None


@dataclass(frozen=True)
class PaymentHistory:
    on_time_ratio: float
    missed_payments: int = 0
    consistency_duration: int = 0  # months


@dataclass(frozen=True)
class FraudIndicators:
    past_fraud_alerts: bool = False
    active_investigation: bool = False
    misrepresentation_flags: bool = False


@dataclass(frozen=True)
class HolderProfile:
    """Snapshot of a policyholder as seen by the scoring rules."""

    holder_id: str
    verification: VerificationStatus
    payment_history: PaymentHistory
    fraud_indicators: FraudIndicators = field(default_factory=FraudIndicators)
    policies: tuple[Policy, ...] = ()
    name: str = ""

    @property
    def active_policy(self) -> Policy | None:
        for policy in self.policies:
            if policy.status == PolicyStatus.ACTIVE:
                return policy
        return None


@dataclass(frozen=True)
class ClaimRecord:
    claim_id: str
    status: ClaimStatus
    claim_amount: float = 0.0
    diagnosis: str = ""
    submission_date: date | None = None


@dataclass(frozen=True)
class ScoreComponent:
    """Result of a single scoring rule."""

    name: str
    score: int
    explanation: str
    highlights: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScoreBreakdown:
    identity: ScoreComponent
    policy_health: ScoreComponent
    payment_behavior: ScoreComponent
    claim_behavior: ScoreComponent
    document_completeness: ScoreComponent
    fraud_penalties: ScoreComponent

    def components(self) -> tuple[ScoreComponent, ...]:
        return (
            self.identity,
            self.policy_health,
            self.payment_behavior,
            self.claim_behavior,
            self.document_completeness,
            self.fraud_penalties,
        )

    @property
    def total(self) -> int:
        return sum(c.score for c in self.components())

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {
            c.name: {"score": c.score, "explanation": c.explanation}
            for c in self.components()
        }


@dataclass(frozen=True)
class TrustScoreResult:
    final_score: int
    category: TrustCategory
    breakdown: ScoreBreakdown
    explanation_points: list[str]
    raw_score: int
    max_score: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "final_score": self.final_score,
            "category": self.category.value,
            "breakdown": self.breakdown.to_dict(),
            "explanation_points": list(self.explanation_points),
            "raw_score": self.raw_score,
            "max_score": self.max_score,
        }


@dataclass(frozen=True)
class ScoringContext:
    """Inputs required to evaluate the scoring rules."""

    holder: HolderProfile
    claims: tuple[ClaimRecord, ...]
    evaluated_at: date

    @property
    def rejected_claims(self) -> int:
        return sum(1 for c in self.claims if c.status == ClaimStatus.REJECTED)
