"""Governance: proposals, votes and the published DAO parameters."""

from fastapi import APIRouter, Depends, Path

from .. import schemas
from ..config import Settings
from ..dependencies import get_chain, get_settings
from ..services.chain import ChainGateway

router = APIRouter(prefix="/api/dao", tags=["dao"])


@router.post("/proposals")
def create_proposal(
    payload: schemas.CreateProposalRequest,
    chain: ChainGateway = Depends(get_chain),
):
    receipt = chain.create_dao_proposal(
        payload.targets,
        payload.values,
        payload.calldatas,
        payload.description,
        int(payload.proposal_type),
        payload.title,
        payload.external_link or "",
    )
    return schemas.ok(
        schemas.CreateProposalResponse(proposal_id=receipt.proposal_id, tx_hash=receipt.tx_hash)
    )


@router.post("/vote")
def vote(
    payload: schemas.VoteRequest,
    chain: ChainGateway = Depends(get_chain),
):
    tx_hash = chain.vote_on_proposal(payload.proposal_id, payload.support)
    return schemas.ok(
        schemas.VoteResponse(proposal_id=payload.proposal_id, support=payload.support, tx_hash=tx_hash)
    )


@router.get("/proposals/{proposal_id}/state")
def proposal_state(
    proposal_id: int = Path(ge=0),
    chain: ChainGateway = Depends(get_chain),
):
    state = chain.get_proposal_state(proposal_id)
    return schemas.ok(schemas.ProposalStateResponse(proposal_id=proposal_id, state=state))


@router.get("/voting-power/{address}")
def voting_power(
    address: str = Path(pattern=schemas.ADDRESS_PATTERN),
    chain: ChainGateway = Depends(get_chain),
):
    power = chain.get_voting_power(address)
    return schemas.ok(schemas.VotingPowerResponse(address=address, voting_power=power))


@router.get("/parameters")
def parameters(settings: Settings = Depends(get_settings)):
    return schemas.ok(
        schemas.DAOParameters(
            quorum_percentage=settings.dao_quorum_percentage,
            voting_delay=settings.dao_voting_delay,
            voting_period=settings.dao_voting_period,
        )
    )
