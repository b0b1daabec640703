from fastapi import APIRouter, Depends, Path

from .. import schemas
from ..config import Settings
from ..dependencies import get_chain, get_settings
from ..services.chain import ChainGateway

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.get("/earnings/{address}")
def creator_earnings(
    address: str = Path(pattern=schemas.ADDRESS_PATTERN),
    chain: ChainGateway = Depends(get_chain),
):
    earnings = chain.get_creator_earnings(address)
    return schemas.ok(schemas.EarningsResponse(address=address, earnings=earnings))


@router.get("/balance/{address}")
def forge_balance(
    address: str = Path(pattern=schemas.ADDRESS_PATTERN),
    chain: ChainGateway = Depends(get_chain),
):
    balance = chain.get_forge_token_balance(address)
    return schemas.ok(schemas.BalanceResponse(address=address, balance=balance))


@router.get("/fees")
def platform_fees(settings: Settings = Depends(get_settings)):
    return schemas.ok(
        schemas.FeesResponse(
            platform_fee_percentage=settings.platform_fee_percentage,
            submission_fee=settings.min_submission_fee,
        )
    )


@router.post("/claim-earnings")
def claim_earnings(
    payload: schemas.ClaimEarningsRequest,
    chain: ChainGateway = Depends(get_chain),
):
    tx_hash = chain.claim_creator_earnings(payload.amount)
    return schemas.ok(schemas.ClaimEarningsResponse(amount=payload.amount, tx_hash=tx_hash))
