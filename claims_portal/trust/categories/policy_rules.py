"""Policy health rules."""

from __future__ import annotations

from ...utils.date_parser import whole_months_between
from ..models import ScoreComponent, ScoringContext

POLICY_HEALTH_MAX = 20
ACTIVE_POLICY_POINTS = 10
LONG_TENURE_MONTHS = 24
ESTABLISHED_TENURE_MONTHS = 12
LONG_TENURE_POINTS = 10
ESTABLISHED_TENURE_POINTS = 7
NEW_POLICY_POINTS = 4


def policy_health_rule(context: ScoringContext) -> ScoreComponent:
    """Score the holder's active policy and how long it has been in force."""
    policy = context.holder.active_policy
    score = 0
    highlights: list[str] = []

    if policy is not None:
        score += ACTIVE_POLICY_POINTS
        tenure_months = whole_months_between(policy.start_date, context.evaluated_at)

        if tenure_months >= LONG_TENURE_MONTHS:
            score += LONG_TENURE_POINTS
            highlights.append(f"Long policy tenure of {tenure_months // 12} years.")
        elif tenure_months >= ESTABLISHED_TENURE_MONTHS:
            score += ESTABLISHED_TENURE_POINTS
            highlights.append("Policy has been active for over a year.")
        else:
            score += NEW_POLICY_POINTS

    return ScoreComponent(
        name="policy_health",
        score=score,
        explanation=f"Scored {score}/{POLICY_HEALTH_MAX} for policy health.",
        highlights=tuple(highlights),
    )
