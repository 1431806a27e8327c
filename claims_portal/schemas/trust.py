"""Pydantic schemas for holder profiles and trust score endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator

from claims_portal.storage import claim_from_document, holder_from_document
from claims_portal.trust.models import (
    ClaimRecord,
    ClaimStatus,
    HolderProfile,
    PolicyStatus,
)
from claims_portal.utils.date_parser import parse_flexible_date


def _normalize_date(value: str | None) -> str | None:
    if value is None or value == "":
        return None
    parsed = parse_flexible_date(value)
    if parsed is None:
        raise ValueError(f"Invalid date: {value!r}. Use YYYY-MM-DD or DD/MM/YYYY.")
    return parsed.isoformat()


class VerificationModel(BaseModel):
    aadhaar: bool = False
    pan: bool = False
    mobile: bool = False
    policy_document: bool = False
    bank_proof: bool = False


class PolicyModel(BaseModel):
    policy_id: str
    status: PolicyStatus
    start_date: str
    end_date: str | None = None
    provider: str = ""
    policy_number: str = ""
    coverage: float = 0.0

    @field_validator("start_date")
    @classmethod
    def validate_start_date(cls, v: str) -> str:
        normalized = _normalize_date(v)
        if normalized is None:
            raise ValueError("start_date is required")
        return normalized

    @field_validator("end_date")
    @classmethod
    def validate_end_date(cls, v: str | None) -> str | None:
        return _normalize_date(v)


class PaymentHistoryModel(BaseModel):
    # Range is checked by the engine so API and library callers get the same error
    on_time_ratio: float
    missed_payments: int = 0
    consistency_duration: int = 0


class FraudIndicatorsModel(BaseModel):
    past_fraud_alerts: bool = False
    active_investigation: bool = False
    misrepresentation_flags: bool = False


class HolderModel(BaseModel):
    """Holder profile as submitted by the portal."""

    holder_id: str = "anonymous"
    name: str = ""
    verification: VerificationModel = VerificationModel()
    policies: list[PolicyModel] = []
    payment_history: PaymentHistoryModel
    fraud_indicators: FraudIndicatorsModel = FraudIndicatorsModel()

    def to_profile(self, holder_id: str | None = None) -> HolderProfile:
        document = self.model_dump(mode="json")
        if holder_id is not None:
            document["holder_id"] = holder_id
        return holder_from_document(document)


class ClaimModel(BaseModel):
    claim_id: str
    status: ClaimStatus
    claim_amount: float = 0.0
    diagnosis: str = ""
    submission_date: str | None = None

    @field_validator("submission_date")
    @classmethod
    def validate_submission_date(cls, v: str | None) -> str | None:
        return _normalize_date(v)

    def to_record(self) -> ClaimRecord:
        return claim_from_document(self.model_dump(mode="json"))


class TrustScoreRequest(BaseModel):
    """Ad-hoc scoring request carrying the holder and their claims."""

    holder: HolderModel
    claims: list[ClaimModel] = []
    evaluated_at: datetime | None = None


class TrustScoreResponse(BaseModel):
    holder_id: str
    final_score: int
    category: str
    breakdown: dict[str, dict[str, Any]]
    explanation_points: list[str]
    raw_score: int
    max_score: int
    cap_policy: str
    suggestions: list[str]
    evaluated_at: str
