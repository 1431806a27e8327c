"""Shared configuration for the claims portal backend.

This module centralizes environment variable access and default values
to prevent drift between modules.
"""

import os

# Database configuration
DB_PATH = os.getenv("DB_PATH", "./data/portal.db")

# Scoring cap used when a caller does not pick one ("standard" or "operational")
TRUST_SCORE_CAP_POLICY = os.getenv("TRUST_SCORE_CAP_POLICY", "standard")

# Maximum audit rows returned by a single listing request
AUDIT_MAX_LIST_ROWS = int(os.getenv("AUDIT_MAX_LIST_ROWS", "1000"))
