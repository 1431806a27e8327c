"""API route modules for the claims portal.

This package contains focused routers that are registered with the main FastAPI app.

Routers:
- holders: holder profile and claim history storage
- trust_score: rules-based trust scoring with an explicit cap policy
- narratives: claim decision explanations and bill anomaly reviews
- audit: audit log listing and statistics
"""

from .audit import router as audit_router
from .holders import router as holders_router
from .narratives import router as narratives_router
from .trust_score import router as trust_score_router

__all__ = ["audit_router", "holders_router", "narratives_router", "trust_score_router"]
