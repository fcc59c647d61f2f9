"""
Top‑level router for version 1 of the API.

When new endpoint modules are added, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import apps, upload

router = APIRouter()

router.include_router(apps.router, prefix="/apps", tags=["apps"])
# The upload router defines its own "/upload" path.
router.include_router(upload.router, tags=["upload"])
