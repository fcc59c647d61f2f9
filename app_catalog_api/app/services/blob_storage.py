"""
Binary transfer layer for uploaded package files.

Uploaded bytes are held in memory for the duration of the request.
Durable storage is represented only by a synthesized locator of the
form ``/apps/<upload-epoch-millis>_<original filename>``; no external
blob service is contacted.  ``BlobStorage`` is the seam where a real
backend would plug in.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class UploadedFile:
    """A package file received with an upload request."""

    filename: str
    content: bytes = b""
    content_type: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.content)


class BlobStorage(abc.ABC):
    @abc.abstractmethod
    async def store(self, upload: UploadedFile, uploaded_at: datetime) -> str:
        """Store ``upload`` and return its storage path."""


class SyntheticBlobStorage(BlobStorage):
    """Returns a pseudo‑unique path without persisting the bytes anywhere."""

    def __init__(self, prefix: str = "/apps"):
        self.prefix = prefix.rstrip("/")

    async def store(self, upload: UploadedFile, uploaded_at: datetime) -> str:
        return build_storage_path(upload.filename, uploaded_at, self.prefix)


def build_storage_path(filename: str, uploaded_at: datetime, prefix: str = "/apps") -> str:
    """``/apps/<epoch-millis>_<filename>``; the filename is used verbatim."""
    millis = int(uploaded_at.timestamp() * 1000)
    return f"{prefix}/{millis}_{filename}"
