"""Tests for settings loading."""

import logging

from communique.config import CommuniqueSettings, load_settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("COMMUNIQUE_USER_AGENT", raising=False)
        settings = CommuniqueSettings(_env_file=None)
        assert settings.api_base_url == "https://www.nationstates.net/cgi-bin/api.cgi"
        assert settings.rate_limit_requests == 50
        assert settings.rate_limit_window_seconds == 30.0

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("COMMUNIQUE_USER_AGENT", "communique; nation=testlandia")
        monkeypatch.setenv("COMMUNIQUE_CACHE_TTL_SECONDS", "60")
        settings = CommuniqueSettings(_env_file=None)
        assert settings.user_agent == "communique; nation=testlandia"
        assert settings.cache_ttl_seconds == 60.0

    def test_warns_without_contact(self, monkeypatch, tmp_path, caplog):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("COMMUNIQUE_USER_AGENT", raising=False)
        with caplog.at_level(logging.WARNING, logger="communique.config"):
            load_settings()
        assert "COMMUNIQUE_USER_AGENT" in caplog.text

    def test_no_warning_with_contact(self, monkeypatch, tmp_path, caplog):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("COMMUNIQUE_USER_AGENT", "communique; nation=testlandia")
        with caplog.at_level(logging.WARNING, logger="communique.config"):
            load_settings()
        assert caplog.text == ""
