"""Creator earnings, balances and platform fees."""

from __future__ import annotations

from pydantic import Field

from .common import DECIMAL_AMOUNT_PATTERN, CamelModel


class EarningsResponse(CamelModel):
    address: str
    earnings: str


class BalanceResponse(CamelModel):
    address: str
    balance: str


class FeesResponse(CamelModel):
    platform_fee_percentage: float
    submission_fee: str


class ClaimEarningsRequest(CamelModel):
    amount: str = Field(pattern=DECIMAL_AMOUNT_PATTERN)


class ClaimEarningsResponse(CamelModel):
    amount: str
    tx_hash: str
