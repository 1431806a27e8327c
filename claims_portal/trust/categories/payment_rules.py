"""Premium payment behavior rules."""

from __future__ import annotations

from ..models import ScoreComponent, ScoringContext

PAYMENT_BEHAVIOR_MAX = 25

# (minimum on-time ratio, points), checked from the top band down
PAYMENT_BANDS: tuple[tuple[float, int], ...] = (
    (0.95, 25),
    (0.80, 18),
    (0.60, 10),
)


def payment_behavior_rule(context: ScoringContext) -> ScoreComponent:
    """Score the share of premiums paid on time."""
    ratio = context.holder.payment_history.on_time_ratio
    score = 0
    for minimum, points in PAYMENT_BANDS:
        if ratio >= minimum:
            score = points
            break

    highlights: tuple[str, ...] = ()
    if score == PAYMENT_BEHAVIOR_MAX:
        highlights = ("Excellent history of on-time premium payments.",)

    return ScoreComponent(
        name="payment_behavior",
        score=score,
        explanation=f"Scored {score}/{PAYMENT_BEHAVIOR_MAX} for payment behavior.",
        highlights=highlights,
    )
