"""Wallet login payloads."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .common import ADDRESS_PATTERN, CamelModel


class WalletAuthRequest(CamelModel):
    address: str = Field(pattern=ADDRESS_PATTERN)
    signature: str = Field(min_length=1)
    message: str = Field(min_length=1)


class WalletUser(BaseModel):
    address: str
    authenticated: bool = True


class WalletAuthResponse(BaseModel):
    token: str
    user: WalletUser


class VerifiedUser(BaseModel):
    address: str


class VerifyTokenResponse(BaseModel):
    valid: bool
    user: VerifiedUser
