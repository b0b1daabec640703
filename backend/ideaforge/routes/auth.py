import os

from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from .. import schemas
from ..auth import create_access_token, get_current_wallet, verify_wallet_signature
from ..config import Settings
from ..dependencies import get_settings
from ..errors import Unauthorized

limiter = Limiter(key_func=get_remote_address)
testing = os.getenv("TESTING") == "1"


def rate_limit(limit: str):
    if testing:
        def wrapper(func):
            return func
        return wrapper
    return limiter.limit(limit)


router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/wallet")
@rate_limit("10/minute")
async def wallet_login(
    request: Request,
    payload: schemas.WalletAuthRequest,
    settings: Settings = Depends(get_settings),
):
    if not verify_wallet_signature(payload.address, payload.message, payload.signature):
        raise Unauthorized("Signature does not match address")
    token = create_access_token(payload.address, settings)
    return schemas.ok(
        schemas.WalletAuthResponse(
            token=token,
            user=schemas.WalletUser(address=payload.address, authenticated=True),
        )
    )


@router.get("/verify")
def verify_token(address: str = Depends(get_current_wallet)):
    return schemas.ok(
        schemas.VerifyTokenResponse(valid=True, user=schemas.VerifiedUser(address=address))
    )
