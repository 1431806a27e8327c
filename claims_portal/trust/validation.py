"""Boundary checks on holder and claim inputs."""

from __future__ import annotations

import math
from collections.abc import Iterable

from .models import ClaimRecord, ClaimStatus, HolderProfile


class InvalidHolderInputError(ValueError):
    """Raised when holder or claim data is outside the domain the rules accept."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors))


def validate_holder_inputs(
    holder: HolderProfile, claims: Iterable[ClaimRecord]
) -> None:
    """Reject malformed numeric inputs before any scoring happens."""
    errors: list[str] = []
    payments = holder.payment_history

    ratio = payments.on_time_ratio
    if isinstance(ratio, bool) or not isinstance(ratio, (int, float)):
        errors.append(f"on_time_ratio must be a number, got {ratio!r}")
    elif math.isnan(ratio) or ratio < 0.0 or ratio > 1.0:
        errors.append(f"on_time_ratio must be between 0 and 1, got {ratio}")

    if payments.missed_payments < 0:
        errors.append(
            f"missed_payments cannot be negative, got {payments.missed_payments}"
        )
    if payments.consistency_duration < 0:
        errors.append(
            "consistency_duration cannot be negative, "
            f"got {payments.consistency_duration}"
        )

    for claim in claims:
        if not isinstance(claim.status, ClaimStatus):
            errors.append(f"Claim {claim.claim_id} has unknown status {claim.status!r}")

    if errors:
        raise InvalidHolderInputError(errors)
