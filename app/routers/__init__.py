# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - mail.py: Contact-form reply
# - apps.py: App record CRUD
# - projects.py: Project record CRUD
# - public.py: Uploaded file serving and the catch-all 404
# - common.py: Helpers shared by the record routers
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import mail
from . import apps
from . import projects
from . import public

__all__ = [
    "health",
    "mail",
    "apps",
    "projects",
    "public",
]
