"""Insurance claims portal backend.

Usage:
    # Development (from project root):
    uvicorn claims_portal.app:app --reload --port 8080

    # Or directly:
    python -m claims_portal.app

Modules:
    app: FastAPI application entry point
    trust: Rules-based holder trust scoring
    storage: Holder profile and claim persistence
    narrator_client: Claude-backed claim narratives
"""

__version__ = "0.1.0"
