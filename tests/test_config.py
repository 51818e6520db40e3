"""Tests for environment-driven configuration."""

from udyam_form import config as config_module
from udyam_form.config import UdyamFormConfig, get_config, update_config


class TestUdyamFormConfig:
    """Tests for UdyamFormConfig."""

    def test_defaults(self):
        config = UdyamFormConfig()
        assert config.server_port == 4000
        assert config.database_url is None
        assert config.schema_cache_dir == "schema/generated"
        assert config.navigation_timeout_ms == 180_000
        assert config.escape_html is True

    def test_remote_extraction_is_opt_in(self, monkeypatch):
        assert UdyamFormConfig().extraction_url is None
        monkeypatch.setenv("UDYAM_EXTRACTION_URL", "http://extractor:4000")
        assert UdyamFormConfig.from_env().extraction_url == "http://extractor:4000"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "5001")
        monkeypatch.setenv("DATABASE_URL", "sqlite:///udyam.db")
        monkeypatch.setenv("UDYAM_CORS_ORIGINS", "http://localhost:3000, https://udyam.example")
        monkeypatch.setenv("UDYAM_HEADLESS", "false")
        monkeypatch.setenv("UDYAM_LOG_LEVEL", "debug")
        config = UdyamFormConfig.from_env()
        assert config.server_port == 5001
        assert config.database_url == "sqlite:///udyam.db"
        assert config.cors_origins == ["http://localhost:3000", "https://udyam.example"]
        assert config.headless is False
        assert config.log_level == "DEBUG"

    def test_empty_extraction_url_disables_remote(self, monkeypatch):
        monkeypatch.setenv("UDYAM_EXTRACTION_URL", "")
        assert UdyamFormConfig.from_env().extraction_url is None

    def test_empty_database_url_is_unset(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "")
        assert UdyamFormConfig.from_env().database_url is None


class TestConfigAccessors:
    """Tests for the module-level configuration helpers."""

    def test_update_config(self, monkeypatch):
        monkeypatch.setattr(config_module, "config", UdyamFormConfig())
        updated = update_config(server_port=9000, not_a_setting=True)
        assert updated.server_port == 9000
        assert not hasattr(updated, "not_a_setting")
        assert get_config() is updated
