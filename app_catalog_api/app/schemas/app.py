"""
Pydantic models for app records.

``AppCreate`` is what the service hands to the store: the four client
supplied text fields plus the ``ApkFile`` sub‑record describing the
uploaded package.  ``AppRecord`` adds the store‑assigned ``id``.  The
response envelopes wrap records in the ``{success, data}`` shape
returned by every endpoint.
"""

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ApkFile(BaseModel):
    """Metadata about the uploaded package file."""

    filename: str = Field(..., examples=["app.apk"])
    storage_path: str = Field(..., alias="storagePath", examples=["/apps/1735689600000_app.apk"])
    upload_date: datetime = Field(default_factory=utcnow, alias="uploadDate")

    model_config = {
        "populate_by_name": True,
    }


class AppBase(BaseModel):
    name: str = Field(..., examples=["Foo"])
    description: str = Field(..., examples=["A sample application"])
    version: str = Field(..., examples=["1.0"])
    github_link: str = Field(..., alias="githubLink", examples=["https://github.com/example/foo"])

    model_config = {
        "populate_by_name": True,
    }


class AppCreate(AppBase):
    """Schema for a record about to be inserted."""

    apk_file: ApkFile = Field(..., alias="apkFile")


class AppRecord(AppCreate):
    """Schema for a persisted record."""

    id: str


class AppListResponse(BaseModel):
    success: bool = True
    data: List[AppRecord]


class AppDetailResponse(BaseModel):
    success: bool = True
    data: AppRecord


class AppUploadResponse(BaseModel):
    success: bool = True
    message: str = "App metadata saved successfully"
    data: AppRecord


class ErrorResponse(BaseModel):
    """Envelope returned for every failed request."""

    success: bool = False
    message: str
