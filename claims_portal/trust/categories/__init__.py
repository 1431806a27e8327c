"""Trust score rules organized by category."""

from __future__ import annotations

from .claim_rules import claim_behavior_rule
from .fraud_rules import fraud_penalty_rule
from .payment_rules import payment_behavior_rule
from .policy_rules import policy_health_rule
from .verification_rules import document_completeness_rule, identity_rule

__all__ = [
    "identity_rule",
    "policy_health_rule",
    "payment_behavior_rule",
    "claim_behavior_rule",
    "document_completeness_rule",
    "fraud_penalty_rule",
]
