"""Trust score routes.

Each call site picks its scoring cap explicitly:
- POST /api/trust-score and GET /api/holders/{id}/trust-score take a
  ``cap_policy`` query parameter, defaulting to TRUST_SCORE_CAP_POLICY.
- GET /api/holders/{id}/trust-score/operational always caps at 85 for
  insurer auto-approval screens.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from claims_portal.config import TRUST_SCORE_CAP_POLICY
from claims_portal.routes.audit import AuditAction, record_event
from claims_portal.schemas import TrustScoreRequest, TrustScoreResponse
from claims_portal.storage import HolderStore, get_holder_store
from claims_portal.trust import (
    ClaimRecord,
    HolderProfile,
    InvalidHolderInputError,
    ScoreCapPolicy,
    ThresholdConfig,
    build_improvement_suggestions,
    compute_trust_score,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["trust-score"])


def _resolve_policy(cap_policy: ScoreCapPolicy | None) -> ScoreCapPolicy:
    return cap_policy or ScoreCapPolicy(TRUST_SCORE_CAP_POLICY)


def _score(
    holder: HolderProfile,
    claims: Sequence[ClaimRecord],
    cap_policy: ScoreCapPolicy,
    request: Request,
    evaluated_at: datetime | None = None,
) -> TrustScoreResponse:
    evaluated_at = evaluated_at or datetime.now(timezone.utc)

    try:
        result = compute_trust_score(
            holder,
            claims,
            now=evaluated_at,
            threshold_config=ThresholdConfig.for_policy(cap_policy),
        )
    except InvalidHolderInputError as e:
        logger.warning(f"Rejected trust score input for holder {holder.holder_id}: {e}")
        raise HTTPException(status_code=422, detail=e.errors)

    record_event(
        AuditAction.TRUST_SCORE_COMPUTE,
        resource_type="holder",
        resource_id=holder.holder_id,
        ip_address=request.client.host if request.client else None,
        details={
            "final_score": result.final_score,
            "raw_score": result.raw_score,
            "category": result.category.value,
            "cap_policy": cap_policy.value,
        },
    )

    return TrustScoreResponse(
        holder_id=holder.holder_id,
        cap_policy=cap_policy.value,
        suggestions=build_improvement_suggestions(holder, claims, result),
        evaluated_at=evaluated_at.isoformat(),
        **result.to_dict(),
    )


def _load_holder(store: HolderStore, holder_id: str) -> tuple[HolderProfile, list[ClaimRecord]]:
    holder = store.get_holder(holder_id)
    if holder is None:
        raise HTTPException(status_code=404, detail=f"Holder {holder_id} not found")
    return holder, store.list_claims(holder_id)


@router.post("/trust-score", response_model=TrustScoreResponse)
async def score_submitted_holder(
    payload: TrustScoreRequest,
    request: Request,
    cap_policy: ScoreCapPolicy | None = Query(
        default=None, description="Score cap: 'standard' (100) or 'operational' (85)"
    ),
):
    """Score a holder profile supplied in the request body."""
    try:
        holder = payload.holder.to_profile()
        claims = [c.to_record() for c in payload.claims]
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return _score(holder, claims, _resolve_policy(cap_policy), request, payload.evaluated_at)


@router.get("/holders/{holder_id}/trust-score", response_model=TrustScoreResponse)
async def score_stored_holder(
    holder_id: str,
    request: Request,
    cap_policy: ScoreCapPolicy | None = Query(
        default=None, description="Score cap: 'standard' (100) or 'operational' (85)"
    ),
    store: HolderStore = Depends(get_holder_store),
):
    """Score a stored holder against their stored claim history."""
    holder, claims = _load_holder(store, holder_id)
    return _score(holder, claims, _resolve_policy(cap_policy), request)


@router.get(
    "/holders/{holder_id}/trust-score/operational", response_model=TrustScoreResponse
)
async def score_stored_holder_operational(
    holder_id: str,
    request: Request,
    store: HolderStore = Depends(get_holder_store),
):
    """Score a stored holder with the 85-point operational cap."""
    holder, claims = _load_holder(store, holder_id)
    return _score(holder, claims, ScoreCapPolicy.OPERATIONAL, request)
