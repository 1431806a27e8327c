"""Core trust score evaluation engine."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, timezone

from .models import ClaimRecord, HolderProfile, ScoringContext, TrustScoreResult
from .ruleset import DEFAULT_RULE_SET, RuleSet
from .thresholds import ThresholdConfig
from .validation import validate_holder_inputs

logger = logging.getLogger(__name__)

MAX_EXPLANATION_POINTS = 5


def compute_trust_score(
    holder: HolderProfile,
    claims: Iterable[ClaimRecord],
    now: date | datetime | None = None,
    threshold_config: ThresholdConfig | None = None,
    rule_set: RuleSet | None = None,
) -> TrustScoreResult:
    """Score a holder from their profile and claim history.

    ``now`` fixes the evaluation instant used for policy tenure and defaults
    to the current UTC time. ``threshold_config`` carries the score cap and
    category bands; the default clamps to 0-100. ``rule_set`` defaults to
    the six standard rules.

    Raises:
        InvalidHolderInputError: if the payment ratio or counts are malformed, or a
            claim carries an unknown status.
    """
    threshold_config = threshold_config or ThresholdConfig()
    rule_set = rule_set or DEFAULT_RULE_SET
    if now is None:
        now = datetime.now(timezone.utc)
    evaluated_at = now.date() if isinstance(now, datetime) else now

    claims = tuple(claims)
    validate_holder_inputs(holder, claims)

    context = ScoringContext(holder=holder, claims=claims, evaluated_at=evaluated_at)
    breakdown, explanation_points = rule_set.evaluate(context)

    raw_score = breakdown.total
    final_score = threshold_config.clamp_score(raw_score)
    category = threshold_config.category(final_score)

    logger.debug(
        f"Trust score for holder {holder.holder_id}: raw={raw_score} "
        f"final={final_score} cap={threshold_config.max_score} category={category.value}"
    )

    return TrustScoreResult(
        final_score=final_score,
        category=category,
        breakdown=breakdown,
        explanation_points=explanation_points[:MAX_EXPLANATION_POINTS],
        raw_score=raw_score,
        max_score=threshold_config.max_score,
    )
