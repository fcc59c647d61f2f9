"""FastAPI dependencies shared by the v1 endpoints."""

from fastapi import Request

from app_catalog_api.app.services.app_service import AppService


def get_app_service(request: Request) -> AppService:
    """Return the service created for this application during startup."""
    return request.app.state.app_service
