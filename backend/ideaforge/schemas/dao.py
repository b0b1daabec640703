"""Governance proposal and voting contracts."""

from __future__ import annotations

from enum import IntEnum
from typing import Annotated, Literal, Optional

from pydantic import Field, StringConstraints

from .common import ADDRESS_PATTERN, CamelModel, UrlString

Address = Annotated[str, StringConstraints(pattern=ADDRESS_PATTERN)]
UintString = Annotated[str, StringConstraints(pattern=r"^\d+$")]
HexData = Annotated[str, StringConstraints(pattern=r"^0x([a-fA-F0-9]{2})*$")]


class ProposalType(IntEnum):
    GENERAL = 0
    TREASURY = 1
    PLATFORM = 2
    CATEGORY = 3
    EMERGENCY = 4


class CreateProposalRequest(CamelModel):
    # lengths must agree; the DAO contract enforces it
    targets: list[Address]
    values: list[UintString]
    calldatas: list[HexData]
    description: str = Field(min_length=1, max_length=1000)
    proposal_type: ProposalType
    title: str = Field(min_length=1, max_length=200)
    external_link: Optional[UrlString] = None


class CreateProposalResponse(CamelModel):
    proposal_id: int
    tx_hash: str


class VoteRequest(CamelModel):
    proposal_id: int = Field(ge=0)
    # 0 against, 1 for, 2 abstain
    support: Literal[0, 1, 2]


class VoteResponse(CamelModel):
    proposal_id: int
    support: int
    tx_hash: str


class ProposalStateResponse(CamelModel):
    proposal_id: int
    state: int


class VotingPowerResponse(CamelModel):
    address: str
    voting_power: str


class DAOParameters(CamelModel):
    quorum_percentage: int
    voting_delay: int
    voting_period: int
