"""FastAPI backend for the insurance claims portal."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from claims_portal import __version__
from claims_portal.config import DB_PATH, TRUST_SCORE_CAP_POLICY
from claims_portal.routes import (
    audit_router,
    holders_router,
    narratives_router,
    trust_score_router,
)
from claims_portal.routes.audit import get_db, init_audit_table
from claims_portal.routes.narratives import limiter
from claims_portal.storage import HolderStore
from claims_portal.trust import ScoreCapPolicy

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create the holder, claim and audit tables."""
    HolderStore(os.environ.get("DB_PATH", DB_PATH))
    conn = get_db()
    try:
        init_audit_table(conn)
    finally:
        conn.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize resources on startup."""
    init_db()
    # Fail fast on a misconfigured default cap instead of on the first request
    ScoreCapPolicy(TRUST_SCORE_CAP_POLICY)
    logger.info(f"Claims portal started (default cap policy: {TRUST_SCORE_CAP_POLICY})")
    yield


app = FastAPI(
    title="Insurance Claims Portal",
    description="Holder trust scoring and claim narratives",
    version=__version__,
    lifespan=lifespan,
)

# Rate limiting for LLM-backed endpoints
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS configuration
CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:9002",
    "http://127.0.0.1:9002",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API routers
app.include_router(holders_router)
app.include_router(trust_score_router)
app.include_router(narratives_router)
app.include_router(audit_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "default_cap_policy": TRUST_SCORE_CAP_POLICY,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8080)
