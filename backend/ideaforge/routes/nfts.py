from fastapi import APIRouter, Depends, Path

from .. import schemas
from ..dependencies import get_chain
from ..services.chain import ChainGateway

router = APIRouter(prefix="/api/nfts", tags=["nfts"])


@router.get("/creator/{address}")
def creator_tokens(
    address: str = Path(pattern=schemas.ADDRESS_PATTERN),
    chain: ChainGateway = Depends(get_chain),
):
    return schemas.ok(chain.get_creator_tokens(address))


@router.post("/license")
def license_ip(
    payload: schemas.LicenseIPRequest,
    chain: ChainGateway = Depends(get_chain),
):
    tx_hash = chain.license_ip(payload.token_id, payload.price)
    return schemas.ok(
        schemas.LicenseIPResponse(token_id=payload.token_id, price=payload.price, tx_hash=tx_hash)
    )


@router.get("/{token_id}")
def get_ipnft(
    token_id: int = Path(ge=0),
    chain: ChainGateway = Depends(get_chain),
):
    return schemas.ok(chain.get_ipnft_data(token_id))
