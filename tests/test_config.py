"""Settings validation."""

import pytest
from pydantic import ValidationError

from lottohist.config import DEFAULT_JWT_SECRET, Settings


def test_default_secret_allowed_in_development():
    s = Settings(environment="development", jwt_secret=DEFAULT_JWT_SECRET)
    assert s.uses_default_secret


def test_default_secret_rejected_in_production():
    with pytest.raises(ValidationError, match="LOTTOHIST_JWT_SECRET"):
        Settings(environment="production", jwt_secret=DEFAULT_JWT_SECRET)


def test_custom_secret_in_production():
    s = Settings(environment="production", jwt_secret="s3cr3t-from-the-vault")
    assert not s.uses_default_secret
    assert s.token_expire_days == 7


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("LOTTOHIST_PORT", "8123")
    assert Settings().port == 8123
