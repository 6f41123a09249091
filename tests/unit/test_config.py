"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from src.marketplace.core.config import Settings

pytestmark = pytest.mark.unit

SECRET = "x" * 40


def make_settings(**overrides) -> Settings:
    values = {"database_url": "sqlite+aiosqlite:///:memory:", "jwt_secret_key": SECRET}
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[call-arg]


def test_defaults():
    settings = make_settings()
    assert settings.project_number_prefix == "REQ"
    assert settings.notification_body_max_length == 1000
    assert settings.is_sqlite


def test_short_secret_rejected():
    with pytest.raises(ValidationError):
        make_settings(jwt_secret_key="too-short")


def test_placeholder_secret_rejected():
    with pytest.raises(ValidationError):
        make_settings(jwt_secret_key="change-this-to-a-secure-random-string")


def test_wildcard_cors_rejected():
    with pytest.raises(ValidationError):
        make_settings(cors_origins=["*"])


def test_project_number_prefix_normalized():
    assert make_settings(project_number_prefix=" job ").project_number_prefix == "JOB"


def test_project_number_prefix_must_be_alphanumeric():
    with pytest.raises(ValidationError):
        make_settings(project_number_prefix="RE-Q")


def test_postgres_is_not_sqlite():
    assert not make_settings(database_url="postgresql+asyncpg://u:p@db/app").is_sqlite


@pytest.mark.parametrize("length", [0, 3, 1001])
def test_notification_body_max_length_bounded(length):
    with pytest.raises(ValidationError):
        make_settings(notification_body_max_length=length)


def test_notification_body_max_length_accepts_bounds():
    assert make_settings(notification_body_max_length=4).notification_body_max_length == 4
