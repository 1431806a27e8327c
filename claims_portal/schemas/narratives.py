"""Pydantic schemas for narrative endpoints."""

from pydantic import BaseModel, Field, field_validator


class ClaimDecisionRequest(BaseModel):
    """Facts a claim decision explanation is generated from."""

    claim_id: str | None = None
    holder_trust_score: int = Field(ge=0, le=100)
    hospital_trust_score: int = Field(ge=0, le=100)
    policy_active: bool
    claim_amount: float = Field(ge=0)
    safety_cap: float = Field(ge=0)
    fraud_flags: bool
    auto_approve: bool
    medical_documents: str = ""
    bills: str = ""
    doctor_notes: str = ""


class BillAnomalyRequest(BaseModel):
    """Medical bill submitted as a base64 data URI."""

    bill_data_uri: str
    claim_id: str | None = None

    @field_validator("bill_data_uri")
    @classmethod
    def validate_data_uri_prefix(cls, v: str) -> str:
        if not v.startswith("data:"):
            raise ValueError(
                "bill_data_uri must look like 'data:<mimetype>;base64,<encoded_data>'"
            )
        return v
