"""Trust score rule set.

Each rule fills exactly one field of ``ScoreBreakdown``. Rules run in the
breakdown's field order, and that order decides the order of explanation
points in the result.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import fields

from .categories import (
    claim_behavior_rule,
    document_completeness_rule,
    fraud_penalty_rule,
    identity_rule,
    payment_behavior_rule,
    policy_health_rule,
)
from .models import ScoreBreakdown, ScoreComponent, ScoringContext

ScoringRule = Callable[[ScoringContext], ScoreComponent]

# Breakdown fields in evaluation order
COMPONENT_NAMES: tuple[str, ...] = tuple(f.name for f in fields(ScoreBreakdown))


class RuleSet:
    """Immutable mapping of breakdown field to the rule that scores it."""

    def __init__(self, rules: Mapping[str, ScoringRule]) -> None:
        missing = [name for name in COMPONENT_NAMES if name not in rules]
        unknown = sorted(set(rules) - set(COMPONENT_NAMES))
        if missing or unknown:
            raise ValueError(
                f"Rule set must cover every breakdown field exactly "
                f"(missing: {missing}, unknown: {unknown})"
            )
        self._rules: tuple[tuple[str, ScoringRule], ...] = tuple(
            (name, rules[name]) for name in COMPONENT_NAMES
        )

    def __iter__(self):
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def evaluate(self, context: ScoringContext) -> tuple[ScoreBreakdown, list[str]]:
        """Run every rule and return the breakdown plus highlights in rule order.

        Raises:
            ValueError: if a rule returns a component for a different field.
        """
        components: dict[str, ScoreComponent] = {}
        highlights: list[str] = []
        for name, rule in self._rules:
            component = rule(context)
            if component.name != name:
                raise ValueError(
                    f"Rule {rule.__name__} scored {component.name!r}, expected {name!r}"
                )
            components[name] = component
            highlights.extend(component.highlights)
        return ScoreBreakdown(**components), highlights


DEFAULT_RULE_SET = RuleSet(
    {
        "identity": identity_rule,
        "policy_health": policy_health_rule,
        "payment_behavior": payment_behavior_rule,
        "claim_behavior": claim_behavior_rule,
        "document_completeness": document_completeness_rule,
        "fraud_penalties": fraud_penalty_rule,
    }
)


__all__ = ["COMPONENT_NAMES", "DEFAULT_RULE_SET", "RuleSet", "ScoringRule"]
