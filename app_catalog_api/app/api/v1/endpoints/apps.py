"""
App listing and lookup endpoints for API v1.

All listings share one ordering: newest upload first.  ``/featured``
and ``/recent`` return the first 2 and 4 records of that ordering.
These routes must be registered before ``/{app_id}`` so that the
literal paths are not captured as identifiers.
"""

from typing import Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app_catalog_api.app.api.v1.deps import get_app_service
from app_catalog_api.app.api.v1.responses import ERROR_RESPONSES, catalog_error_response
from app_catalog_api.app.core.errors import Err
from app_catalog_api.app.schemas.app import AppDetailResponse, AppListResponse
from app_catalog_api.app.services.app_service import AppService

router = APIRouter()


@router.get("", response_model=AppListResponse, responses={500: ERROR_RESPONSES[500]})
async def list_apps(
    service: AppService = Depends(get_app_service),
) -> Union[AppListResponse, JSONResponse]:
    """Return every app, most recently uploaded first.

    An empty catalog is a successful, empty list.
    """
    result = await service.list_apps()
    if isinstance(result, Err):
        return catalog_error_response(result.error)
    return AppListResponse(data=result.value)


@router.get("/featured", response_model=AppListResponse, responses={500: ERROR_RESPONSES[500]})
async def list_featured_apps(
    service: AppService = Depends(get_app_service),
) -> Union[AppListResponse, JSONResponse]:
    """Return the two most recently uploaded apps."""
    result = await service.list_featured()
    if isinstance(result, Err):
        return catalog_error_response(result.error)
    return AppListResponse(data=result.value)


@router.get("/recent", response_model=AppListResponse, responses={500: ERROR_RESPONSES[500]})
async def list_recent_apps(
    service: AppService = Depends(get_app_service),
) -> Union[AppListResponse, JSONResponse]:
    """Return the four most recently uploaded apps."""
    result = await service.list_recent()
    if isinstance(result, Err):
        return catalog_error_response(result.error)
    return AppListResponse(data=result.value)


@router.get(
    "/{app_id}",
    response_model=AppDetailResponse,
    responses={404: ERROR_RESPONSES[404], 500: ERROR_RESPONSES[500]},
)
async def get_app(
    app_id: str,
    service: AppService = Depends(get_app_service),
) -> Union[AppDetailResponse, JSONResponse]:
    """Retrieve a single app by ID.

    Returns HTTP 404 if no app has this ID, including IDs that are not
    well formed.
    """
    result = await service.get_app(app_id)
    if isinstance(result, Err):
        return catalog_error_response(result.error)
    return AppDetailResponse(data=result.value)
