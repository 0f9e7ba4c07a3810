"""
Unit tests for core.bootstrap startup checks.
"""
import logging
from app.config import Settings
from app.core.bootstrap import check_oauth_settings


def test_complete_settings_report_nothing():
    cfg = Settings(
        discord_client_id="id",
        discord_client_secret="secret",
        tinkerer_guild_id="123",
        env="dev",
    )
    assert check_oauth_settings(cfg) == []


def test_missing_credentials_and_guild_are_reported(caplog):
    cfg = Settings(discord_client_id="", discord_client_secret="", tinkerer_guild_id="", env="dev")
    with caplog.at_level(logging.WARNING, logger="uvicorn.error"):
        problems = check_oauth_settings(cfg)
    assert "DISCORD_CLIENT_ID/DISCORD_CLIENT_SECRET" in problems
    assert "TINKERER_GUILD_ID" in problems
    assert "TINKERER_GUILD_ID" in caplog.text


def test_default_jwt_secret_flagged_outside_dev(monkeypatch):
    monkeypatch.setattr("app.core.security.JWT_SECRET", "dev-secret")
    cfg = Settings(
        discord_client_id="id",
        discord_client_secret="secret",
        tinkerer_guild_id="123",
        env="production",
    )
    assert check_oauth_settings(cfg) == ["JWT_SECRET"]
