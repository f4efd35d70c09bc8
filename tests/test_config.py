"""Tests for layered settings and logging setup."""

import logging

import pytest

from page_objects.config import Settings, setup_logging


@pytest.fixture
def clean_env(monkeypatch):
    for key in ("BROWSER", "BROWSER_TIMEOUT", "BROWSER_HEADLESS", "BROWSER_SIZE",
                "APPLICATION_ENVIRONMENT", "STAGING_BASE_URL", "BASE_URL", "DEBUG", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestSettings:

    def test_defaults(self, clean_env):
        settings = Settings()
        assert settings.browser == "chromium"
        assert settings.headless is True
        assert settings.default_timeout == 10.0
        assert settings.viewport == {"width": 1920, "height": 1080}
        assert settings.retry_attempts == 3

    def test_environment_beats_defaults(self, clean_env):
        clean_env.setenv("BROWSER_TIMEOUT", "25")
        clean_env.setenv("BROWSER_HEADLESS", "false")
        settings = Settings()
        assert settings.default_timeout == 25.0
        assert settings.headless is False

    def test_override_beats_environment(self, clean_env):
        clean_env.setenv("BROWSER", "firefox")
        settings = Settings()
        settings.set_property("browser", "webkit")
        assert settings.browser == "webkit"
        settings.reset()
        assert settings.browser == "firefox"

    def test_blank_counts_as_missing(self, clean_env):
        clean_env.setenv("BROWSER", "  ")
        assert Settings().browser == "chromium"

    def test_typed_fallbacks(self, clean_env):
        settings = Settings({"test.retry.attempts": "many", "browser.size": "huge"})
        assert settings.retry_attempts == 3
        assert settings.viewport == {"width": 1920, "height": 1080}
        assert settings.get_int_property("missing.key", 7) == 7
        assert not settings.has_property("missing.key")

    def test_environment_specific_base_url(self, clean_env):
        clean_env.setenv("APPLICATION_ENVIRONMENT", "staging")
        clean_env.setenv("STAGING_BASE_URL", "https://staging.agoda.com")
        assert Settings().base_url == "https://staging.agoda.com"

    def test_debug_lowers_log_level(self, clean_env):
        settings = Settings()
        assert settings.log_level == "INFO"
        settings.set_property("debug", "true")
        assert settings.log_level == "DEBUG"

    def test_properties_with_prefix(self, clean_env):
        settings = Settings()
        browser = settings.properties_with_prefix("browser.")
        assert browser["browser.timeout"] == "10"
        assert "browser" not in browser

    def test_paths_are_resolved(self, clean_env, tmp_path):
        settings = Settings({"pages.dir": str(tmp_path / "pages")})
        assert settings.pages_dir == tmp_path / "pages"


class TestSetupLogging:

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        setup_logging("DEBUG", str(log_file))
        logger = logging.getLogger("page_objects.test")
        logger.debug("hello from the test")
        for handler in logging.getLogger("page_objects").handlers:
            handler.flush()
        assert "hello from the test" in log_file.read_text(encoding="utf-8")
        logging.getLogger("page_objects").propagate = True
