"""Claim narrative routes backed by the narrative generator.

These endpoints call an external text-generation service, so they are
rate-limited: 10 requests/minute for explanations, 5/minute for bill reviews.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from claims_portal.narrator_client import (
    ClaimDecisionFacts,
    NarrativeGenerator,
    get_narrator,
)
from claims_portal.routes.audit import AuditAction, record_event
from claims_portal.schemas import BillAnomalyRequest, ClaimDecisionRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/narratives", tags=["narratives"])

limiter = Limiter(key_func=get_remote_address)


@router.post("/claim-decision")
@limiter.limit("10/minute")
async def explain_claim_decision(
    request: Request,
    payload: ClaimDecisionRequest,
    narrator: NarrativeGenerator = Depends(get_narrator),
):
    """Explain why a claim was auto-approved or held for review."""
    facts = ClaimDecisionFacts(**payload.model_dump(exclude={"claim_id"}))
    explanation = narrator.explain_claim_decision(facts)

    record_event(
        AuditAction.CLAIM_EXPLAIN,
        resource_type="claim",
        resource_id=payload.claim_id,
        ip_address=request.client.host if request.client else None,
        details={"model": explanation.model, "auto_approve": payload.auto_approve},
        status="error" if explanation.model == "error" else "success",
    )

    return {"claim_id": payload.claim_id, **explanation.to_dict()}


@router.post("/bill-anomalies")
@limiter.limit("5/minute")
async def detect_bill_anomalies(
    request: Request,
    payload: BillAnomalyRequest,
    narrator: NarrativeGenerator = Depends(get_narrator),
):
    """Review a medical bill for duplicate items or inflated costs."""
    try:
        report = narrator.detect_anomalous_bill(payload.bill_data_uri)
    except ValueError as e:
        logger.warning(f"Rejected bill for claim {payload.claim_id}: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    record_event(
        AuditAction.BILL_ANALYZE,
        resource_type="claim",
        resource_id=payload.claim_id,
        ip_address=request.client.host if request.client else None,
        details={"model": report.model, "is_anomalous": report.is_anomalous},
        status="error" if report.model == "error" else "success",
    )

    return {"claim_id": payload.claim_id, **report.to_dict()}
