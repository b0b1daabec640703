"""IP-NFT views and licensing."""

from __future__ import annotations

from pydantic import Field

from .common import DECIMAL_AMOUNT_PATTERN, CamelModel


class IPNFTView(CamelModel):
    token_id: int
    creator: str
    creation_time: int
    ai_score: int
    category: str
    description: str
    is_licensed: bool
    # wei
    license_price: int
    # basis points
    royalty_fee: int


class LicenseIPRequest(CamelModel):
    token_id: int = Field(ge=0)
    price: str = Field(pattern=DECIMAL_AMOUNT_PATTERN)


class LicenseIPResponse(CamelModel):
    token_id: int
    price: str
    tx_hash: str
