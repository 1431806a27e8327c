"""Fraud and risk penalty rules."""

from __future__ import annotations

from ..models import ScoreComponent, ScoringContext

PAST_FRAUD_ALERT_PENALTY = -10
ACTIVE_INVESTIGATION_PENALTY = -15


def fraud_penalty_rule(context: ScoringContext) -> ScoreComponent:
    """Deduct points for past fraud alerts and open investigations."""
    indicators = context.holder.fraud_indicators
    score = 0
    if indicators.past_fraud_alerts:
        score += PAST_FRAUD_ALERT_PENALTY
    if indicators.active_investigation:
        score += ACTIVE_INVESTIGATION_PENALTY

    highlights: tuple[str, ...] = ()
    if score == 0:
        highlights = ("No past fraud flags or investigations.",)

    return ScoreComponent(
        name="fraud_penalties",
        score=score,
        explanation=f"Applied {score} points in fraud penalties.",
        highlights=highlights,
    )
