"""
Helpers for building the ``{success: false, message}`` error envelope.
"""

from fastapi.responses import JSONResponse

from app_catalog_api.app.core.errors import CatalogError
from app_catalog_api.app.schemas.app import ErrorResponse

# OpenAPI documentation for the error envelope, keyed by status code.
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing file or required fields"},
    404: {"model": ErrorResponse, "description": "App not found"},
    500: {"model": ErrorResponse, "description": "Document store failure"},
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def catalog_error_response(error: CatalogError) -> JSONResponse:
    return error_response(error.status_code, error.message)
