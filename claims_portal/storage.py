"""Persistence for holder profiles and claim histories.

Profiles and claims are stored as JSON documents keyed by id, so the
scoring engine always receives explicit values instead of shared state.

Usage:
    store = HolderStore(db_path)
    store.save_holder(holder)
    holder = store.get_holder(holder_id)
    claims = store.list_claims(holder_id)
"""

from __future__ import annotations

import json
import logging
import os
import sqlite3
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from .config import DB_PATH
from .trust.models import (
    ClaimRecord,
    ClaimStatus,
    FraudIndicators,
    HolderProfile,
    PaymentHistory,
    Policy,
    PolicyStatus,
    VerificationStatus,
)
from .utils.date_parser import parse_flexible_date

logger = logging.getLogger(__name__)


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value else None


def _required_date(value: Any, label: str) -> date:
    parsed = parse_flexible_date(value)
    if parsed is None:
        raise ValueError(f"{label} is not a valid date: {value!r}")
    return parsed


def holder_to_document(holder: HolderProfile) -> dict[str, Any]:
    """Convert a holder profile to a JSON-serializable document."""
    verification = holder.verification
    payments = holder.payment_history
    fraud = holder.fraud_indicators
    return {
        "holder_id": holder.holder_id,
        "name": holder.name,
        "verification": {
            "aadhaar": verification.aadhaar,
            "pan": verification.pan,
            "mobile": verification.mobile,
            "policy_document": verification.policy_document,
            "bank_proof": verification.bank_proof,
        },
        "policies": [
            {
                "policy_id": p.policy_id,
                "provider": p.provider,
                "policy_number": p.policy_number,
                "status": p.status.value,
                "coverage": p.coverage,
                "start_date": _iso(p.start_date),
                "end_date": _iso(p.end_date),
            }
            for p in holder.policies
        ],
        "payment_history": {
            "on_time_ratio": payments.on_time_ratio,
            "missed_payments": payments.missed_payments,
            "consistency_duration": payments.consistency_duration,
        },
        "fraud_indicators": {
            "past_fraud_alerts": fraud.past_fraud_alerts,
            "active_investigation": fraud.active_investigation,
            "misrepresentation_flags": fraud.misrepresentation_flags,
        },
    }


def holder_from_document(document: dict[str, Any]) -> HolderProfile:
    """Build a holder profile from a stored or submitted document.

    Raises:
        ValueError: if a policy status or start date cannot be parsed.
    """
    verification = document.get("verification") or {}
    payments = document.get("payment_history") or {}
    fraud = document.get("fraud_indicators") or {}

    policies = []
    for entry in document.get("policies") or []:
        policy_id = str(entry.get("policy_id", ""))
        policies.append(
            Policy(
                policy_id=policy_id,
                status=PolicyStatus(entry.get("status", PolicyStatus.INACTIVE.value)),
                start_date=_required_date(
                    entry.get("start_date"), f"Policy {policy_id} start_date"
                ),
                provider=entry.get("provider") or "",
                policy_number=entry.get("policy_number") or "",
                coverage=float(entry.get("coverage") or 0.0),
                end_date=parse_flexible_date(entry.get("end_date")),
            )
        )

    return HolderProfile(
        holder_id=str(document["holder_id"]),
        name=document.get("name") or "",
        verification=VerificationStatus(
            aadhaar=bool(verification.get("aadhaar", False)),
            pan=bool(verification.get("pan", False)),
            mobile=bool(verification.get("mobile", False)),
            policy_document=bool(verification.get("policy_document", False)),
            bank_proof=bool(verification.get("bank_proof", False)),
        ),
        payment_history=PaymentHistory(
            on_time_ratio=float(payments.get("on_time_ratio", 0.0)),
            missed_payments=int(payments.get("missed_payments", 0)),
            consistency_duration=int(payments.get("consistency_duration", 0)),
        ),
        fraud_indicators=FraudIndicators(
            past_fraud_alerts=bool(fraud.get("past_fraud_alerts", False)),
            active_investigation=bool(fraud.get("active_investigation", False)),
            misrepresentation_flags=bool(fraud.get("misrepresentation_flags", False)),
        ),
        policies=tuple(policies),
    )


def claim_to_document(claim: ClaimRecord) -> dict[str, Any]:
    return {
        "claim_id": claim.claim_id,
        "status": claim.status.value,
        "claim_amount": claim.claim_amount,
        "diagnosis": claim.diagnosis,
        "submission_date": _iso(claim.submission_date),
    }


def claim_from_document(document: dict[str, Any]) -> ClaimRecord:
    """Build a claim record; unknown statuses raise ``ValueError``."""
    return ClaimRecord(
        claim_id=str(document["claim_id"]),
        status=ClaimStatus(document["status"]),
        claim_amount=float(document.get("claim_amount") or 0.0),
        diagnosis=document.get("diagnosis") or "",
        submission_date=parse_flexible_date(document.get("submission_date")),
    )


class HolderStore:
    """SQLite-backed store for holder profiles and their claims.

    Attributes:
        db_path: Path to the SQLite database
    """

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        self._init_tables()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _init_tables(self) -> None:
        """Initialize database tables if they don't exist."""
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS holders (
                    holder_id TEXT PRIMARY KEY,
                    profile TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS claims (
                    claim_id TEXT NOT NULL,
                    holder_id TEXT NOT NULL,
                    status TEXT NOT NULL,
                    record TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    PRIMARY KEY (holder_id, claim_id),
                    FOREIGN KEY (holder_id) REFERENCES holders(holder_id)
                )
            """)
            conn.commit()

    def save_holder(self, holder: HolderProfile) -> None:
        """Insert or replace a holder profile."""
        document = holder_to_document(holder)
        with self._connect() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO holders (holder_id, profile, updated_at) VALUES (?, ?, ?)",
                (
                    holder.holder_id,
                    json.dumps(document),
                    datetime.now(timezone.utc).isoformat(),
                ),
            )
            conn.commit()
        logger.info(f"Saved holder profile {holder.holder_id}")

    def get_holder(self, holder_id: str) -> HolderProfile | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT profile FROM holders WHERE holder_id = ?", (holder_id,)
            ).fetchone()
        if not row:
            return None
        return holder_from_document(json.loads(row[0]))

    def delete_holder(self, holder_id: str) -> bool:
        """Delete a holder and their claims. Returns False if the holder was unknown."""
        with self._connect() as conn:
            conn.execute("DELETE FROM claims WHERE holder_id = ?", (holder_id,))
            cursor = conn.execute("DELETE FROM holders WHERE holder_id = ?", (holder_id,))
            conn.commit()
            return cursor.rowcount > 0

    def list_holder_ids(self) -> list[str]:
        with self._connect() as conn:
            rows = conn.execute("SELECT holder_id FROM holders ORDER BY holder_id").fetchall()
        return [row[0] for row in rows]

    def save_claim(self, holder_id: str, claim: ClaimRecord) -> None:
        """Insert a claim into a holder's history, or update it in place.

        Claim ids are scoped to their holder. An update keeps the claim's
        original ``created_at`` so its position in the history is unchanged.
        """
        with self._connect() as conn:
            conn.execute(
                """INSERT INTO claims
                   (claim_id, holder_id, status, record, created_at)
                   VALUES (?, ?, ?, ?, ?)
                   ON CONFLICT (holder_id, claim_id) DO UPDATE SET
                       status = excluded.status,
                       record = excluded.record""",
                (
                    claim.claim_id,
                    holder_id,
                    claim.status.value,
                    json.dumps(claim_to_document(claim)),
                    datetime.now(timezone.utc).isoformat(),
                ),
            )
            conn.commit()

    def list_claims(self, holder_id: str) -> list[ClaimRecord]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT record FROM claims WHERE holder_id = ? ORDER BY created_at, rowid",
                (holder_id,),
            ).fetchall()
        return [claim_from_document(json.loads(row[0])) for row in rows]


def get_holder_store() -> HolderStore:
    """Return a store on the configured database; routes use this as a dependency."""
    return HolderStore(os.environ.get("DB_PATH", DB_PATH))
