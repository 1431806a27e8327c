"""Identity verification and document completeness rules."""

from __future__ import annotations

from ..models import ScoreComponent, ScoringContext

AADHAAR_POINTS = 8
PAN_POINTS = 8
MOBILE_POINTS = 4
IDENTITY_MAX = AADHAAR_POINTS + PAN_POINTS + MOBILE_POINTS

DOCUMENTS_COMPLETE_POINTS = 10
DOCUMENTS_INCOMPLETE_PENALTY = -5


def identity_rule(context: ScoringContext) -> ScoreComponent:
    """Award points for each verified identity proof (Aadhaar, PAN, mobile)."""
    verification = context.holder.verification
    score = 0
    if verification.aadhaar:
        score += AADHAAR_POINTS
    if verification.pan:
        score += PAN_POINTS
    if verification.mobile:
        score += MOBILE_POINTS

    highlights: tuple[str, ...] = ()
    if score == IDENTITY_MAX:
        highlights = ("All identity documents are fully verified.",)

    return ScoreComponent(
        name="identity",
        score=score,
        explanation=f"Scored {score}/{IDENTITY_MAX} for identity verification.",
        highlights=highlights,
    )


def document_completeness_rule(context: ScoringContext) -> ScoreComponent:
    """Check that the policy document, bank proof and Aadhaar are all on file.

    A missing mandatory document costs points rather than scoring zero, so
    this component can be negative.
    """
    verification = context.holder.verification
    complete = (
        verification.policy_document
        and verification.bank_proof
        and verification.aadhaar
    )

    if complete:
        score = DOCUMENTS_COMPLETE_POINTS
        highlights: tuple[str, ...] = ("All mandatory documents are complete.",)
    else:
        score = DOCUMENTS_INCOMPLETE_PENALTY
        highlights = ()

    return ScoreComponent(
        name="document_completeness",
        score=score,
        explanation=(
            f"Scored {score}/{DOCUMENTS_COMPLETE_POINTS} for document completeness."
        ),
        highlights=highlights,
    )
