"""Tests for environment configuration."""

import pytest

from figjam2pptx.config import MAX_DEPTH_LIMIT, Settings, _load_dotenv, get_settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch) -> None:
        for name in ("MAX_DEPTH", "DEFAULT_FORMAT", "JSON_INDENT", "DPI", "LOG_LEVEL"):
            monkeypatch.delenv(f"FIGJAM2PPTX_{name}", raising=False)

        settings = Settings()

        assert settings.max_depth == 100
        assert settings.default_format == "json"
        assert settings.json_indent == 2
        assert settings.dpi == 96
        assert settings.log_level == "WARNING"

    def test_environment_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("FIGJAM2PPTX_MAX_DEPTH", "5")
        monkeypatch.setenv("FIGJAM2PPTX_DEFAULT_FORMAT", "XML")
        monkeypatch.setenv("FIGJAM2PPTX_LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.max_depth == 5
        assert settings.default_format == "xml"
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("name", ["MAX_DEPTH", "DPI"])
    def test_rejects_non_positive(self, monkeypatch, name: str) -> None:
        monkeypatch.setenv(f"FIGJAM2PPTX_{name}", "0")
        with pytest.raises(ValueError):
            Settings()

    def test_rejects_max_depth_above_limit(self, monkeypatch) -> None:
        monkeypatch.setenv("FIGJAM2PPTX_MAX_DEPTH", str(MAX_DEPTH_LIMIT + 1))
        with pytest.raises(ValueError, match="MAX_DEPTH"):
            Settings()

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()


class TestLoadDotenv:
    """Tests for .env loading."""

    def test_does_not_override_environment(self, tmp_path, monkeypatch) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("# comment\nFIGJAM2PPTX_DPI=72\nFIGJAM2PPTX_JSON_INDENT=4\n")
        monkeypatch.setenv("FIGJAM2PPTX_JSON_INDENT", "1")
        # Registers the variable so teardown removes what _load_dotenv writes
        monkeypatch.setenv("FIGJAM2PPTX_DPI", "0")
        monkeypatch.delenv("FIGJAM2PPTX_DPI")

        _load_dotenv(env_file)
        settings = Settings()

        assert settings.dpi == 72
        assert settings.json_indent == 1

    def test_missing_file(self, tmp_path) -> None:
        _load_dotenv(tmp_path / ".env")
