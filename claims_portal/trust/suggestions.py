"""Actionable suggestions for raising a holder's trust score."""

from __future__ import annotations

from collections.abc import Iterable

from .categories.claim_rules import LOW_FREQUENCY_LIMIT
from .categories.payment_rules import PAYMENT_BANDS
from .categories.policy_rules import POLICY_HEALTH_MAX
from .models import ClaimRecord, ClaimStatus, HolderProfile, TrustScoreResult

DEFAULT_SUGGESTION_LIMIT = 3


def _missing(flags: Iterable[tuple[str, bool]]) -> list[str]:
    return [label for label, verified in flags if not verified]


def build_improvement_suggestions(
    holder: HolderProfile,
    claims: Iterable[ClaimRecord],
    result: TrustScoreResult,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[str]:
    """Suggest the next steps that would lift the score, in rule order.

    Only components below their maximum produce a suggestion, and at most
    ``limit`` suggestions are returned.
    """
    claims = tuple(claims)
    verification = holder.verification
    breakdown = result.breakdown
    suggestions: list[str] = []

    missing_ids = _missing(
        [
            ("Aadhaar", verification.aadhaar),
            ("PAN", verification.pan),
            ("mobile number", verification.mobile),
        ]
    )
    if missing_ids:
        suggestions.append(
            f"Verify your {', '.join(missing_ids)} to strengthen identity checks."
        )

    if holder.active_policy is None:
        suggestions.append("Keep an active policy in force to earn policy health points.")
    elif breakdown.policy_health.score < POLICY_HEALTH_MAX:
        suggestions.append("Renew your policy without a break to build tenure.")

    top_ratio, top_points = PAYMENT_BANDS[0]
    if breakdown.payment_behavior.score < top_points:
        suggestions.append(
            "Pay premiums by the due date to reach a "
            f"{round(top_ratio * 100)}% on-time record."
        )

    if any(c.status == ClaimStatus.REJECTED for c in claims):
        suggestions.append("Submit complete documentation with claims to avoid rejections.")
    elif len(claims) >= LOW_FREQUENCY_LIMIT:
        suggestions.append("File claims only for covered treatment to keep claim frequency low.")

    missing_docs = _missing(
        [
            ("policy document", verification.policy_document),
            ("bank proof", verification.bank_proof),
            ("Aadhaar", verification.aadhaar),
        ]
    )
    if missing_docs:
        suggestions.append(
            f"Upload your {', '.join(missing_docs)} to complete mandatory documents."
        )

    if breakdown.fraud_penalties.score < 0:
        suggestions.append(
            "Contact your insurer to resolve open fraud alerts or investigations."
        )

    return suggestions[:limit]
