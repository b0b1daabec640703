"""Wallet signature login and bearer-token verification."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

import jwt
from eth_account import Account
from eth_account.messages import encode_defunct
from fastapi import Depends, Header
from web3 import Web3

from .config import Settings
from .dependencies import get_settings
from .errors import Unauthorized

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def verify_wallet_signature(address: str, message: str, signature: str) -> bool:
    """True when ``signature`` is an EIP-191 personal signature of ``message`` by ``address``."""

    try:
        signer = Account.recover_message(encode_defunct(text=message), signature=signature)
    except Exception as exc:
        logger.info("Signature recovery failed for %s: %s", address, exc)
        return False
    return signer.lower() == address.lower()


def create_access_token(address: str, settings: Settings) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "sub": Web3.to_checksum_address(address),
        "iat": now,
        "exp": now + settings.token_lifetime,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> str:
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError as exc:
        raise Unauthorized("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise Unauthorized("Invalid token") from exc
    address = claims.get("sub")
    if not address:
        raise Unauthorized("Invalid token")
    return address


def get_current_wallet(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> str:
    if not authorization:
        raise Unauthorized("Missing authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthorized("Invalid authorization header")
    return decode_access_token(token.strip(), settings)
