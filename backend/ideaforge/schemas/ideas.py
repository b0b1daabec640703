"""Idea submission, approval and minting contracts."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from .common import CamelModel, UrlString
from .ipfs import IdeaFile


class SubmitIdeaRequest(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=10, max_length=2000)
    category: str = Field(min_length=1, max_length=50)
    content: Optional[str] = None
    files: list[IdeaFile] = Field(default_factory=list)


class SubmitIdeaResponse(CamelModel):
    idea_id: int
    tx_hash: str
    content_hash: str
    metadata_hash: str


class ApproveIdeaRequest(CamelModel):
    idea_id: int = Field(ge=0)
    ai_credibility_score: int = Field(ge=0, le=100)
    validation_notes: str = Field(min_length=1, max_length=1000)


class ApproveIdeaResponse(CamelModel):
    idea_id: int
    tx_hash: str


class MintIPNFTRequest(CamelModel):
    idea_id: int = Field(ge=0)
    token_uri: UrlString = Field(alias="tokenURI")
    royalty_fee: int = Field(ge=0, le=1000)


class MintIPNFTResponse(CamelModel):
    idea_id: int
    token_id: int
    token_id_found: bool
    tx_hash: str


class IdeaSubmissionView(CamelModel):
    """On-chain idea record as returned by ``getIdeaSubmission``."""

    idea_id: int
    submitter: str
    title: str
    description: str
    category: str
    content_hash: str
    metadata_hash: str
    submission_time: int
    ai_credibility_score: int
    is_approved: bool
    is_minted: bool
    validator: str
    validation_notes: str
    minted_token_id: int
