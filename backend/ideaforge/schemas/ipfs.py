"""Content-storage request and result models."""

from __future__ import annotations

import base64
import binascii
from typing import Any

from pydantic import Field

from .common import CamelModel


class EncodedFile(CamelModel):
    """A base64 payload; subclasses expose ``file_name`` and ``mime_type``."""

    content: str

    def decode(self) -> bytes:
        """Return the raw bytes; raises ``ValueError`` on malformed base64."""

        try:
            return base64.b64decode(self.content, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"{self.file_name}: content is not valid base64") from exc


class IdeaFile(EncodedFile):
    name: str = Field(min_length=1)
    type: str = Field(min_length=1)

    @property
    def file_name(self) -> str:
        return self.name

    @property
    def mime_type(self) -> str:
        return self.type


class UploadFileRequest(EncodedFile):
    filename: str = Field(min_length=1)
    content_type: str = Field(min_length=1)

    @property
    def file_name(self) -> str:
        return self.filename

    @property
    def mime_type(self) -> str:
        return self.content_type


class UploadJSONRequest(CamelModel):
    metadata: Any


class PinRequest(CamelModel):
    hash: str = Field(min_length=1)


class UploadResult(CamelModel):
    hash: str
    size: int
    url: str
    pin_size: int
    timestamp: int


class PinResponse(CamelModel):
    hash: str
    pinned: bool


class UnpinResponse(CamelModel):
    hash: str
    unpinned: bool


class VerifyResponse(CamelModel):
    hash: str
    exists: bool


class FileInfo(CamelModel):
    hash: str
    size: int
    type: str
    pinned: bool
