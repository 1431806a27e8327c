"""Pytest configuration and fixtures."""

from __future__ import annotations

import atexit
import os
import tempfile
from collections.abc import Callable
from datetime import date
from typing import Any

import pytest

# Set test database path before importing app
_temp_db = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
_temp_db_path = _temp_db.name
_temp_db.close()
os.environ["DB_PATH"] = _temp_db_path
os.environ.pop("ANTHROPIC_API_KEY", None)

from claims_portal.trust import (  # noqa: E402
    ClaimRecord,
    ClaimStatus,
    FraudIndicators,
    HolderProfile,
    PaymentHistory,
    Policy,
    PolicyStatus,
    VerificationStatus,
)

# Fixed evaluation instant so tenure-based rules are reproducible
EVALUATED_AT = date(2024, 7, 1)


def _cleanup_test_db() -> None:
    """Clean up temporary test database file."""
    if os.path.exists(_temp_db_path):
        try:
            os.unlink(_temp_db_path)
        except OSError:
            pass  # File may already be deleted or locked


atexit.register(_cleanup_test_db)


@pytest.fixture(scope="session", autouse=True)
def cleanup_test_db() -> None:
    """Pytest fixture to ensure test database cleanup after session."""
    yield
    _cleanup_test_db()


@pytest.fixture
def evaluated_at() -> date:
    return EVALUATED_AT


@pytest.fixture
def holder_factory() -> Callable[..., HolderProfile]:
    """Build holders that are fully verified and clean unless overridden."""

    def _make(
        holder_id: str = "holder-001",
        aadhaar: bool = True,
        pan: bool = True,
        mobile: bool = True,
        policy_document: bool = True,
        bank_proof: bool = True,
        policy_start: date | None = date(2022, 1, 1),
        policy_status: PolicyStatus = PolicyStatus.ACTIVE,
        on_time_ratio: float = 0.97,
        past_fraud_alerts: bool = False,
        active_investigation: bool = False,
    ) -> HolderProfile:
        policies: tuple[Policy, ...] = ()
        if policy_start is not None:
            policies = (
                Policy(
                    policy_id="policy-01",
                    status=policy_status,
                    start_date=policy_start,
                    provider="HealthSecure India",
                    policy_number="HS-987654321",
                    coverage=500000,
                ),
            )
        return HolderProfile(
            holder_id=holder_id,
            name="Insurance Holder",
            verification=VerificationStatus(
                aadhaar=aadhaar,
                pan=pan,
                mobile=mobile,
                policy_document=policy_document,
                bank_proof=bank_proof,
            ),
            payment_history=PaymentHistory(on_time_ratio=on_time_ratio),
            fraud_indicators=FraudIndicators(
                past_fraud_alerts=past_fraud_alerts,
                active_investigation=active_investigation,
            ),
            policies=policies,
        )

    return _make


@pytest.fixture
def claims_factory() -> Callable[..., list[ClaimRecord]]:
    """Build a claim history with the given number of rejected and other claims."""

    def _make(rejected: int = 0, approved: int = 0) -> list[ClaimRecord]:
        claims = [
            ClaimRecord(claim_id=f"CLM-R{i:03d}", status=ClaimStatus.REJECTED)
            for i in range(rejected)
        ]
        claims.extend(
            ClaimRecord(claim_id=f"CLM-A{i:03d}", status=ClaimStatus.APPROVED)
            for i in range(approved)
        )
        return claims

    return _make


@pytest.fixture
def holder_payload() -> dict[str, Any]:
    """Holder profile as the portal submits it."""
    return {
        "holder_id": "user-001",
        "name": "Insurance Holder",
        "verification": {
            "aadhaar": True,
            "pan": True,
            "mobile": True,
            "policy_document": True,
            "bank_proof": True,
        },
        "policies": [
            {
                "policy_id": "policy-01",
                "provider": "HealthSecure India",
                "policy_number": "HS-987654321",
                "status": "Active",
                "coverage": 500000,
                "start_date": "2021-01-01",
                "end_date": "2026-12-31",
            },
            {
                "policy_id": "policy-02",
                "provider": "LifeGuard Insurance",
                "policy_number": "LG-112233445",
                "status": "Inactive",
                "coverage": 1000000,
                "start_date": "2020-06-01",
                "end_date": "2023-05-31",
            },
        ],
        "payment_history": {
            "on_time_ratio": 0.98,
            "missed_payments": 1,
            "consistency_duration": 36,
        },
        "fraud_indicators": {
            "past_fraud_alerts": False,
            "active_investigation": False,
            "misrepresentation_flags": False,
        },
    }
