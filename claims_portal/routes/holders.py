"""Holder profile and claim history routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from claims_portal.routes.audit import AuditAction, record_event
from claims_portal.schemas import ClaimModel, HolderModel
from claims_portal.storage import (
    HolderStore,
    claim_to_document,
    get_holder_store,
    holder_to_document,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/holders", tags=["holders"])


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


@router.get("")
async def list_holders(store: HolderStore = Depends(get_holder_store)):
    """List the ids of all stored holders."""
    holder_ids = store.list_holder_ids()
    return {"holder_ids": holder_ids, "total": len(holder_ids)}


@router.put("/{holder_id}")
async def save_holder(
    holder_id: str,
    holder: HolderModel,
    request: Request,
    store: HolderStore = Depends(get_holder_store),
):
    """Create or replace a holder profile. The path id wins over the body."""
    try:
        profile = holder.to_profile(holder_id=holder_id)
    except ValueError as e:
        logger.warning(f"Rejected profile for holder {holder_id}: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    store.save_holder(profile)
    record_event(
        AuditAction.HOLDER_SAVE,
        resource_type="holder",
        resource_id=holder_id,
        ip_address=_client_ip(request),
        details={"policies_count": len(profile.policies)},
    )
    return holder_to_document(profile)


@router.get("/{holder_id}")
async def get_holder(
    holder_id: str,
    request: Request,
    store: HolderStore = Depends(get_holder_store),
):
    """Load a holder profile by id."""
    profile = store.get_holder(holder_id)
    if profile is None:
        raise HTTPException(status_code=404, detail=f"Holder {holder_id} not found")

    record_event(
        AuditAction.HOLDER_VIEW,
        resource_type="holder",
        resource_id=holder_id,
        ip_address=_client_ip(request),
    )
    return holder_to_document(profile)


@router.delete("/{holder_id}")
async def delete_holder(holder_id: str, store: HolderStore = Depends(get_holder_store)):
    """Delete a holder profile and its claim history."""
    if not store.delete_holder(holder_id):
        raise HTTPException(status_code=404, detail=f"Holder {holder_id} not found")
    return {"holder_id": holder_id, "deleted": True}


@router.post("/{holder_id}/claims")
async def add_claim(
    holder_id: str,
    claim: ClaimModel,
    request: Request,
    store: HolderStore = Depends(get_holder_store),
):
    """Add or update a claim in a holder's history."""
    if store.get_holder(holder_id) is None:
        raise HTTPException(status_code=404, detail=f"Holder {holder_id} not found")

    record = claim.to_record()
    store.save_claim(holder_id, record)
    record_event(
        AuditAction.CLAIM_SAVE,
        resource_type="claim",
        resource_id=record.claim_id,
        ip_address=_client_ip(request),
        details={"holder_id": holder_id, "status": record.status.value},
    )
    return claim_to_document(record)


@router.get("/{holder_id}/claims")
async def list_claims(holder_id: str, store: HolderStore = Depends(get_holder_store)):
    """List a holder's claims in submission order."""
    if store.get_holder(holder_id) is None:
        raise HTTPException(status_code=404, detail=f"Holder {holder_id} not found")

    claims = store.list_claims(holder_id)
    return {
        "holder_id": holder_id,
        "claims": [claim_to_document(c) for c in claims],
        "total": len(claims),
    }
