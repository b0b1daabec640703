"""Idea lifecycle: submit, approve, mint and read back."""

import logging

from fastapi import APIRouter, Depends, Path
from starlette.concurrency import run_in_threadpool

from .. import schemas
from ..config import Settings
from ..dependencies import get_chain, get_settings, get_storage
from ..errors import ValidationFailed
from ..services.chain import ChainGateway
from ..services.content_storage import ContentStorageGateway
from .ipfs import decode_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ideas", tags=["ideas"])


@router.post("/submit")
async def submit_idea(
    payload: schemas.SubmitIdeaRequest,
    chain: ChainGateway = Depends(get_chain),
    storage: ContentStorageGateway = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    files = [decode_upload(upload, settings) for upload in payload.files]

    content_hash = ""
    if files:
        uploads = await storage.upload_multiple_files(files)
        # the first file is the primary content
        content_hash = uploads[0].hash

    metadata = {
        "title": payload.title,
        "description": payload.description,
        "category": payload.category,
    }
    if payload.content is not None:
        metadata["content"] = payload.content
    metadata["submittedAt"] = schemas.now_ms()
    metadata["version"] = "1.0"
    metadata_result = await run_in_threadpool(storage.upload_json, metadata)

    receipt = await run_in_threadpool(
        chain.submit_idea,
        payload.title,
        payload.description,
        payload.category,
        content_hash,
        metadata_result.hash,
        settings.min_submission_fee,
    )
    return schemas.ok(
        schemas.SubmitIdeaResponse(
            idea_id=receipt.idea_id,
            tx_hash=receipt.tx_hash,
            content_hash=content_hash,
            metadata_hash=metadata_result.hash,
        )
    )


@router.post("/approve")
def approve_idea(
    payload: schemas.ApproveIdeaRequest,
    chain: ChainGateway = Depends(get_chain),
    settings: Settings = Depends(get_settings),
):
    score = payload.ai_credibility_score
    if not settings.ai_min_score <= score <= settings.ai_max_score:
        logger.info(
            "Approval of idea %s rejected: score %s outside [%s, %s]",
            payload.idea_id,
            score,
            settings.ai_min_score,
            settings.ai_max_score,
        )
        raise ValidationFailed()
    tx_hash = chain.approve_idea(payload.idea_id, score, payload.validation_notes)
    return schemas.ok(schemas.ApproveIdeaResponse(idea_id=payload.idea_id, tx_hash=tx_hash))


@router.post("/mint-ipnft")
def mint_ipnft(
    payload: schemas.MintIPNFTRequest,
    chain: ChainGateway = Depends(get_chain),
):
    receipt = chain.mint_ipnft(payload.idea_id, payload.token_uri, payload.royalty_fee)
    return schemas.ok(
        schemas.MintIPNFTResponse(
            idea_id=payload.idea_id,
            token_id=receipt.token_id,
            token_id_found=receipt.token_id_found,
            tx_hash=receipt.tx_hash,
        )
    )


@router.get("/user/{address}")
def user_submissions(
    address: str = Path(pattern=schemas.ADDRESS_PATTERN),
    chain: ChainGateway = Depends(get_chain),
):
    return schemas.ok(chain.get_user_submissions(address))


@router.get("/{idea_id}")
def get_idea(
    idea_id: int = Path(ge=0),
    chain: ChainGateway = Depends(get_chain),
):
    return schemas.ok(chain.get_idea_submission(idea_id))
