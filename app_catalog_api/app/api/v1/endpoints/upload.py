"""
Upload endpoint for API v1.

Accepts a multipart form with the package file in the ``apk`` field
and the ``name``, ``description``, ``version`` and ``githubLink`` text
fields.  The file is read into memory; only its name and a synthesized
storage path are persisted with the record.  An ``apk`` part sent
without a filename arrives as text and is treated as no file at all.
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile as StarletteUploadFile

from app_catalog_api.app.api.v1.deps import get_app_service
from app_catalog_api.app.api.v1.responses import ERROR_RESPONSES, catalog_error_response
from app_catalog_api.app.core.errors import Err
from app_catalog_api.app.schemas.app import AppUploadResponse
from app_catalog_api.app.services.app_service import AppService
from app_catalog_api.app.services.blob_storage import UploadedFile

router = APIRouter()


@router.post(
    "/upload",
    response_model=AppUploadResponse,
    responses={400: ERROR_RESPONSES[400], 500: ERROR_RESPONSES[500]},
)
async def upload_app(
    apk: Union[UploadFile, str, None] = File(None),
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    version: Optional[str] = Form(None),
    github_link: Optional[str] = Form(None, alias="githubLink"),
    service: AppService = Depends(get_app_service),
) -> Union[AppUploadResponse, JSONResponse]:
    """Store metadata for an uploaded app package.

    Returns HTTP 400 when the file or any text field is missing and
    HTTP 500 when the record cannot be saved.
    """
    uploaded = None
    # A plain text part named "apk" carries no file.
    if isinstance(apk, StarletteUploadFile):
        uploaded = UploadedFile(
            filename=apk.filename or "",
            content=await apk.read(),
            content_type=apk.content_type,
        )
    result = await service.create_app(
        uploaded,
        name=name,
        description=description,
        version=version,
        github_link=github_link,
    )
    if isinstance(result, Err):
        return catalog_error_response(result.error)
    return AppUploadResponse(data=result.value)
