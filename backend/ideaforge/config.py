"""Environment-driven settings for the IdeaForge API."""

from __future__ import annotations

import os
import re
from datetime import timedelta
from typing import Mapping, Optional

from pydantic import BaseModel, Field

# purpose: load every provider credential and platform knob once at startup
# status: active

ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")
_DURATION_RE = re.compile(r"^(\d+)([smhd]?)$")
_DURATION_UNITS = {"s": "seconds", "m": "minutes", "h": "hours", "d": "days", "": "seconds"}

REQUIRED_ENV_VARS = (
    "POLYGON_RPC_URL",
    "PRIVATE_KEY",
    "ANTHROPIC_API_KEY",
    "PINATA_API_KEY",
    "PINATA_SECRET_KEY",
    "FORGE_TOKEN_ADDRESS",
    "IP_NFT_ADDRESS",
    "IDEA_FORGE_CORE_ADDRESS",
    "DAO_ADDRESS",
    "REVENUE_SPLITTER_ADDRESS",
)

DEFAULT_ALLOWED_FILE_TYPES = [
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "application/pdf",
    "text/plain",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
]


class ConfigurationError(RuntimeError):
    """Raised when the environment cannot produce a usable configuration."""


class Settings(BaseModel):
    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = 3001
    allowed_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    sentry_dsn: Optional[str] = None

    # chain
    rpc_url: str
    private_key: str
    forge_token_address: str
    ip_nft_address: str
    idea_forge_core_address: str
    dao_address: str
    revenue_splitter_address: str

    # inference
    llm_api_key: str
    llm_model: str = "claude-3-5-haiku-20241022"

    # content storage
    pinata_api_key: str
    pinata_secret_key: str
    pinata_api_url: str = "https://api.pinata.cloud"
    ipfs_gateway_url: str = "https://gateway.pinata.cloud/ipfs/"

    # payments
    stripe_secret_key: Optional[str] = None
    stripe_webhook_secret: Optional[str] = None

    # auth
    jwt_secret: str = "change-me"
    jwt_expires_in: str = "7d"

    rate_limit_window_ms: int = 900_000
    rate_limit_max_requests: int = 100

    max_file_size: int = 10 * 1024 * 1024
    allowed_file_types: list[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_FILE_TYPES))

    ai_min_score: int = 50
    ai_max_score: int = 100

    platform_fee_percentage: float = 2.5
    min_submission_fee: str = "0.001"

    dao_quorum_percentage: int = 4
    dao_voting_delay: int = 1
    dao_voting_period: int = 172_800

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def token_lifetime(self) -> timedelta:
        return parse_duration(self.jwt_expires_in)

    @property
    def rate_limit(self) -> str:
        """Render the configured window in the `limits` string syntax."""

        window_seconds = max(1, self.rate_limit_window_ms // 1000)
        return f"{self.rate_limit_max_requests}/{window_seconds} seconds"

    def contract_addresses(self) -> dict[str, str]:
        return {
            "forgeToken": self.forge_token_address,
            "ipNFT": self.ip_nft_address,
            "ideaForgeCore": self.idea_forge_core_address,
            "dao": self.dao_address,
            "revenueSplitter": self.revenue_splitter_address,
        }

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        missing = [name for name in REQUIRED_ENV_VARS if not env.get(name)]
        if missing:
            raise ConfigurationError(
                "Missing required environment variable(s): " + ", ".join(missing)
            )

        settings = cls(
            environment=env.get("ENVIRONMENT", "development"),
            host=env.get("HOST", "0.0.0.0"),
            port=_int(env, "PORT", 3001),
            allowed_origins=_csv(env.get("ALLOWED_ORIGINS")) or ["http://localhost:3000"],
            sentry_dsn=env.get("SENTRY_DSN") or None,
            rpc_url=env["POLYGON_RPC_URL"],
            private_key=env["PRIVATE_KEY"],
            forge_token_address=env["FORGE_TOKEN_ADDRESS"],
            ip_nft_address=env["IP_NFT_ADDRESS"],
            idea_forge_core_address=env["IDEA_FORGE_CORE_ADDRESS"],
            dao_address=env["DAO_ADDRESS"],
            revenue_splitter_address=env["REVENUE_SPLITTER_ADDRESS"],
            llm_api_key=env["ANTHROPIC_API_KEY"],
            llm_model=env.get("LLM_MODEL", "claude-3-5-haiku-20241022"),
            pinata_api_key=env["PINATA_API_KEY"],
            pinata_secret_key=env["PINATA_SECRET_KEY"],
            pinata_api_url=env.get("PINATA_API_URL", "https://api.pinata.cloud"),
            ipfs_gateway_url=env.get("IPFS_GATEWAY_URL", "https://gateway.pinata.cloud/ipfs/"),
            stripe_secret_key=env.get("STRIPE_SECRET_KEY") or None,
            stripe_webhook_secret=env.get("STRIPE_WEBHOOK_SECRET") or None,
            jwt_secret=env.get("JWT_SECRET", "change-me"),
            jwt_expires_in=env.get("JWT_EXPIRES_IN", "7d"),
            rate_limit_window_ms=_int(env, "RATE_LIMIT_WINDOW_MS", 900_000),
            rate_limit_max_requests=_int(env, "RATE_LIMIT_MAX_REQUESTS", 100),
            max_file_size=_int(env, "MAX_FILE_SIZE", 10 * 1024 * 1024),
            allowed_file_types=_csv(env.get("ALLOWED_FILE_TYPES")) or list(DEFAULT_ALLOWED_FILE_TYPES),
            ai_min_score=_int(env, "AI_MIN_SCORE", 50),
            ai_max_score=_int(env, "AI_MAX_SCORE", 100),
            platform_fee_percentage=_float(env, "PLATFORM_FEE_PERCENTAGE", 2.5),
            min_submission_fee=env.get("MIN_SUBMISSION_FEE", "0.001"),
            dao_quorum_percentage=_int(env, "DAO_QUORUM_PERCENTAGE", 4),
            dao_voting_delay=_int(env, "DAO_VOTING_DELAY", 1),
            dao_voting_period=_int(env, "DAO_VOTING_PERIOD", 172_800),
        )

        bad = [
            name
            for name, address in settings.contract_addresses().items()
            if not ADDRESS_RE.match(address)
        ]
        if bad:
            raise ConfigurationError("Invalid contract address for: " + ", ".join(bad))
        parse_duration(settings.jwt_expires_in)
        return settings


def parse_duration(value: str) -> timedelta:
    """Parse ``7d``/``12h``/``30m``/``45s`` (bare numbers are seconds)."""

    match = _DURATION_RE.match(value.strip())
    if not match:
        raise ConfigurationError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


def _csv(raw: Optional[str]) -> list[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer") from exc


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw in (None, ""):
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number") from exc
