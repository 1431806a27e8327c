"""Shared Pydantic schemas for the claims portal backend.

This module centralizes request/response models used across multiple routers
to prevent drift between duplicate definitions.
"""

from .narratives import BillAnomalyRequest, ClaimDecisionRequest
from .trust import (
    ClaimModel,
    HolderModel,
    TrustScoreRequest,
    TrustScoreResponse,
)

__all__ = [
    "BillAnomalyRequest",
    "ClaimDecisionRequest",
    "ClaimModel",
    "HolderModel",
    "TrustScoreRequest",
    "TrustScoreResponse",
]
