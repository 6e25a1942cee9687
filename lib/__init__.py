# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains infrastructure helpers:
# - database.py: PostgreSQL connection pool lifecycle
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.database import close_pool, open_pool

__all__ = [
    "open_pool",
    "close_pool",
]
