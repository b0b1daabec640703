from datetime import timedelta

import pytest

from ideaforge.config import ConfigurationError, Settings, parse_duration

from .conftest import TEST_ENV


def test_defaults():
    settings = Settings.from_env(TEST_ENV)
    assert settings.port == 3001
    assert settings.ipfs_gateway_url == "https://gateway.pinata.cloud/ipfs/"
    assert settings.min_submission_fee == "0.001"
    assert settings.rate_limit == "100/900 seconds"
    assert settings.allowed_origins == ["http://localhost:3000"]
    assert "application/pdf" in settings.allowed_file_types
    assert settings.contract_addresses()["dao"] == TEST_ENV["DAO_ADDRESS"]


def test_missing_variables_are_named():
    env = {k: v for k, v in TEST_ENV.items() if k not in ("PRIVATE_KEY", "DAO_ADDRESS")}
    with pytest.raises(ConfigurationError) as exc:
        Settings.from_env(env)
    assert "PRIVATE_KEY" in str(exc.value)
    assert "DAO_ADDRESS" in str(exc.value)


def test_invalid_address():
    with pytest.raises(ConfigurationError, match="dao"):
        Settings.from_env({**TEST_ENV, "DAO_ADDRESS": "0x1234"})


def test_overrides():
    settings = Settings.from_env(
        {
            **TEST_ENV,
            "ENVIRONMENT": "production",
            "ALLOWED_ORIGINS": "https://ideaforge.app, https://www.ideaforge.app",
            "AI_MIN_SCORE": "60",
            "PLATFORM_FEE_PERCENTAGE": "3.5",
            "RATE_LIMIT_WINDOW_MS": "60000",
            "RATE_LIMIT_MAX_REQUESTS": "20",
        }
    )
    assert settings.is_production
    assert settings.allowed_origins == ["https://ideaforge.app", "https://www.ideaforge.app"]
    assert settings.ai_min_score == 60
    assert settings.platform_fee_percentage == 3.5
    assert settings.rate_limit == "20/60 seconds"


def test_non_numeric_value():
    with pytest.raises(ConfigurationError, match="PORT"):
        Settings.from_env({**TEST_ENV, "PORT": "eighty"})


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("7d", timedelta(days=7)),
        ("12h", timedelta(hours=12)),
        ("30m", timedelta(minutes=30)),
        ("45", timedelta(seconds=45)),
    ],
)
def test_parse_duration(raw, expected):
    assert parse_duration(raw) == expected


def test_bad_duration():
    with pytest.raises(ConfigurationError):
        Settings.from_env({**TEST_ENV, "JWT_EXPIRES_IN": "soon"})
