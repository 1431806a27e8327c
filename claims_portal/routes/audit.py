"""Audit trail for trust scoring and claim narration.

Every trust score computation, holder update and narrative call is recorded,
so insurers can trace which inputs produced a score shown to a reviewer.

Endpoints:
- GET /api/audit: entries, newest first, filterable by action, resource and status
- GET /api/audit/stats: counts by action and status
- GET /api/audit/actions: the auditable action types
"""

from __future__ import annotations

import json
import os
import sqlite3
import threading
import uuid
from collections import Counter
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from fastapi import APIRouter, Query
from pydantic import BaseModel

from claims_portal.config import AUDIT_MAX_LIST_ROWS, DB_PATH

router = APIRouter(prefix="/api/audit", tags=["audit"])

# Schema check runs once per process
_audit_table_initialized = False
_audit_table_lock = threading.Lock()

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS audit_logs (
        id TEXT PRIMARY KEY,
        created_at TEXT NOT NULL,
        action TEXT NOT NULL,
        actor_id TEXT,
        resource_type TEXT,
        resource_id TEXT,
        details TEXT,
        ip_address TEXT,
        status TEXT NOT NULL DEFAULT 'success',
        error_message TEXT
    );
    CREATE INDEX IF NOT EXISTS idx_audit_created ON audit_logs(created_at);
    CREATE INDEX IF NOT EXISTS idx_audit_resource
        ON audit_logs(resource_type, resource_id);
"""

_ENTRY_COLUMNS = (
    "id, created_at, action, actor_id, resource_type, resource_id, "
    "details, ip_address, status, error_message"
)


class AuditAction(str, Enum):
    TRUST_SCORE_COMPUTE = "trust_score.compute"
    HOLDER_SAVE = "holder.save"
    HOLDER_VIEW = "holder.view"
    CLAIM_SAVE = "claim.save"
    CLAIM_EXPLAIN = "claim.explain"
    BILL_ANALYZE = "bill.analyze"


class AuditLogEntry(BaseModel):
    id: str
    timestamp: str
    action: str
    actor_id: str | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    details: dict[str, Any] | None = None
    ip_address: str | None = None
    status: str = "success"
    error_message: str | None = None


class AuditLogListResponse(BaseModel):
    entries: list[AuditLogEntry]
    total: int
    limit: int
    offset: int
    filters_applied: dict[str, Any]


class AuditStats(BaseModel):
    total_entries: int
    entries_by_action: dict[str, int]
    entries_by_status: dict[str, int]
    date_range: dict[str, str]


def get_db() -> sqlite3.Connection:
    """Open a connection to the configured database with named-column rows."""
    conn = sqlite3.connect(os.environ.get("DB_PATH", DB_PATH), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


def init_audit_table(conn: sqlite3.Connection) -> None:
    """Create the audit table and indexes the first time this process needs them."""
    global _audit_table_initialized

    if _audit_table_initialized:
        return

    with _audit_table_lock:
        if not _audit_table_initialized:
            conn.executescript(_SCHEMA)
            _audit_table_initialized = True


def log_audit_event(
    conn: sqlite3.Connection,
    action: str,
    actor_id: str | None = None,
    resource_type: str | None = None,
    resource_id: str | None = None,
    details: dict[str, Any] | None = None,
    ip_address: str | None = None,
    status: str = "success",
    error_message: str | None = None,
) -> str:
    """Write one audit event on an open connection and return its id."""
    init_audit_table(conn)

    event_id = str(uuid.uuid4())
    conn.execute(
        f"INSERT INTO audit_logs ({_ENTRY_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
        (
            event_id,
            datetime.now(timezone.utc).isoformat(),
            action,
            actor_id,
            resource_type,
            resource_id,
            json.dumps(details) if details else None,
            ip_address,
            status,
            error_message,
        ),
    )
    conn.commit()
    return event_id


def record_event(action: AuditAction, **kwargs: Any) -> str:
    """Open a connection, log one event and close it again."""
    conn = get_db()
    try:
        return log_audit_event(conn, action=action.value, **kwargs)
    finally:
        conn.close()


def _where_clause(filters: dict[str, str | None]) -> tuple[str, list[str]]:
    # Column names come from the fixed filter keys; values are bound
    active = {column: value for column, value in filters.items() if value}
    if not active:
        return "", []
    return "WHERE " + " AND ".join(f"{column} = ?" for column in active), list(
        active.values()
    )


def _decode_details(raw: str | None) -> dict[str, Any] | None:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return {"raw": raw}


def _row_to_entry(row: sqlite3.Row) -> AuditLogEntry:
    return AuditLogEntry(
        id=row["id"],
        timestamp=row["created_at"],
        action=row["action"],
        actor_id=row["actor_id"],
        resource_type=row["resource_type"],
        resource_id=row["resource_id"],
        details=_decode_details(row["details"]),
        ip_address=row["ip_address"],
        status=row["status"],
        error_message=row["error_message"],
    )


@router.get("", response_model=AuditLogListResponse)
async def list_audit_logs(
    limit: int = Query(default=50, ge=1, le=AUDIT_MAX_LIST_ROWS),
    offset: int = Query(default=0, ge=0),
    action: str | None = Query(default=None, description="Filter by action type"),
    resource_type: str | None = Query(default=None, description="Filter by resource type"),
    resource_id: str | None = Query(default=None, description="Filter by resource ID"),
    status: str | None = Query(default=None, description="Filter by status (success/error)"),
) -> AuditLogListResponse:
    """List audit entries, newest first."""
    filters = {
        "action": action,
        "resource_type": resource_type,
        "resource_id": resource_id,
        "status": status,
    }
    where, params = _where_clause(filters)

    conn = get_db()
    try:
        init_audit_table(conn)
        total = conn.execute(f"SELECT COUNT(*) FROM audit_logs {where}", params).fetchone()[0]
        rows = conn.execute(
            f"SELECT {_ENTRY_COLUMNS} FROM audit_logs {where} "
            "ORDER BY created_at DESC LIMIT ? OFFSET ?",
            [*params, limit, offset],
        ).fetchall()
    finally:
        conn.close()

    return AuditLogListResponse(
        entries=[_row_to_entry(row) for row in rows],
        total=total,
        limit=limit,
        offset=offset,
        filters_applied=filters,
    )


@router.get("/stats", response_model=AuditStats)
async def get_audit_stats() -> AuditStats:
    """Count entries by action and by status."""
    conn = get_db()
    try:
        init_audit_table(conn)
        groups = conn.execute(
            """
            SELECT action, status, COUNT(*) AS n,
                   MIN(created_at) AS first_seen, MAX(created_at) AS last_seen
            FROM audit_logs
            GROUP BY action, status
            """
        ).fetchall()
    finally:
        conn.close()

    by_action: Counter[str] = Counter()
    by_status: Counter[str] = Counter()
    for group in groups:
        by_action[group["action"]] += group["n"]
        by_status[group["status"]] += group["n"]

    return AuditStats(
        total_entries=sum(by_action.values()),
        entries_by_action=dict(by_action),
        entries_by_status=dict(by_status),
        date_range={
            "earliest": min((g["first_seen"] for g in groups), default=""),
            "latest": max((g["last_seen"] for g in groups), default=""),
        },
    )


@router.get("/actions")
async def list_audit_actions():
    """List the auditable action types."""
    return {"actions": [a.value for a in AuditAction]}
