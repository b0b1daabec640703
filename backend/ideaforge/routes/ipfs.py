"""Direct content-storage operations: uploads, pins and gateway probes."""

import logging

from fastapi import APIRouter, Depends, Path

from .. import schemas
from ..config import Settings
from ..dependencies import get_settings, get_storage
from ..errors import ValidationFailed
from ..services.content_storage import ContentStorageGateway

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ipfs", tags=["ipfs"])


def decode_upload(upload: schemas.EncodedFile, settings: Settings) -> tuple[bytes, str, str]:
    """Decode a base64 upload and enforce the size and MIME allow-list."""

    try:
        data = upload.decode()
    except ValueError as exc:
        logger.info("Rejected upload: %s", exc)
        raise ValidationFailed() from exc
    if len(data) > settings.max_file_size:
        logger.info("Rejected upload %s: %s bytes exceeds %s", upload.file_name, len(data), settings.max_file_size)
        raise ValidationFailed()
    if upload.mime_type not in settings.allowed_file_types:
        logger.info("Rejected upload %s: type %s not allowed", upload.file_name, upload.mime_type)
        raise ValidationFailed()
    return data, upload.file_name, upload.mime_type


@router.post("/upload-file")
def upload_file(
    payload: schemas.UploadFileRequest,
    storage: ContentStorageGateway = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    data, filename, content_type = decode_upload(payload, settings)
    return schemas.ok(storage.upload_file(data, filename, content_type))


@router.post("/upload-json")
def upload_json(
    payload: schemas.UploadJSONRequest,
    storage: ContentStorageGateway = Depends(get_storage),
):
    return schemas.ok(storage.upload_json(payload.metadata))


@router.post("/pin")
def pin_hash(
    payload: schemas.PinRequest,
    storage: ContentStorageGateway = Depends(get_storage),
):
    pinned = storage.pin_hash(payload.hash)
    return schemas.ok(schemas.PinResponse(hash=payload.hash, pinned=pinned))


@router.delete("/pin/{cid}")
def unpin_hash(
    cid: str = Path(min_length=1),
    storage: ContentStorageGateway = Depends(get_storage),
):
    unpinned = storage.unpin_hash(cid)
    return schemas.ok(schemas.UnpinResponse(hash=cid, unpinned=unpinned))


@router.get("/verify/{cid}")
def verify_hash(
    cid: str = Path(min_length=1),
    storage: ContentStorageGateway = Depends(get_storage),
):
    exists = storage.verify_hash(cid)
    return schemas.ok(schemas.VerifyResponse(hash=cid, exists=exists))


@router.get("/info/{cid}")
def file_info(
    cid: str = Path(min_length=1),
    storage: ContentStorageGateway = Depends(get_storage),
):
    return schemas.ok(storage.get_file_info(cid))
