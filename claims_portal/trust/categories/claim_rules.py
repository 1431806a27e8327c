"""Claim history rules."""

from __future__ import annotations

from ..models import ScoreComponent, ScoringContext

CLAIM_BEHAVIOR_MAX = 20
CLEAN_HISTORY_POINTS = 10
REJECTION_PENALTY = -10
LOW_FREQUENCY_POINTS = 10
# Fewer claims than this counts as low frequency
LOW_FREQUENCY_LIMIT = 3


def claim_behavior_rule(context: ScoringContext) -> ScoreComponent:
    """Reward a clean, low-frequency claim history.

    Rejections and claim frequency are scored independently; the combined
    component never drops below zero.
    """
    score = 0
    highlights: list[str] = []

    if context.rejected_claims == 0:
        score += CLEAN_HISTORY_POINTS
        highlights.append("No history of rejected claims.")
    else:
        score += REJECTION_PENALTY

    if len(context.claims) < LOW_FREQUENCY_LIMIT:
        score += LOW_FREQUENCY_POINTS
        highlights.append("Low frequency of claims filed.")

    score = max(0, score)

    return ScoreComponent(
        name="claim_behavior",
        score=score,
        explanation=f"Scored {score}/{CLAIM_BEHAVIOR_MAX} for claim behavior.",
        highlights=tuple(highlights),
    )
