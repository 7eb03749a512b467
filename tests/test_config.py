import pytest

from siteless.core import config


def setup_function(function):
    config.get_settings.cache_clear()


def teardown_function(function):
    config.get_settings.cache_clear()


def test_get_settings_reads_env(monkeypatch):
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "maps-key")
    monkeypatch.setenv("GROQ_API_KEY", "groq-key")
    monkeypatch.setenv("GROQ_MODEL", "llama-3.3-70b-versatile")
    monkeypatch.setenv("PITCH_LANGUAGE", "English")
    monkeypatch.setenv("REQUEST_TIMEOUT", "5")
    monkeypatch.setenv("DETAIL_FETCH_WORKERS", "3")
    monkeypatch.setenv("PORT", "9100")

    settings = config.get_settings()

    assert settings.google_maps_api_key == "maps-key"
    assert settings.groq_api_key == "groq-key"
    assert settings.groq_model == "llama-3.3-70b-versatile"
    assert settings.pitch_language == "English"
    assert settings.request_timeout == 5.0
    assert settings.detail_fetch_workers == 3
    assert settings.port == 9100
    assert settings.pitch_generation_enabled is True


def test_get_settings_warns_when_missing(monkeypatch, caplog):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    monkeypatch.delenv("GOOGLE_MAPS_API_KEY", raising=False)
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    monkeypatch.delenv("GROQ_MODEL", raising=False)
    monkeypatch.delenv("REQUEST_TIMEOUT", raising=False)

    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    assert "GOOGLE_MAPS_API_KEY is not configured" in " ".join(caplog.messages)
    assert "GROQ_API_KEY is not configured" in " ".join(caplog.messages)
    assert settings.google_maps_api_key == ""
    assert settings.groq_api_key is None
    assert settings.groq_model == config.DEFAULT_GROQ_MODEL
    assert settings.request_timeout == 10.0
    assert settings.pitch_generation_enabled is False


def test_require_google_api_key():
    with pytest.raises(config.ConfigError):
        config.require_google_api_key(config.Settings(google_maps_api_key=""))

    assert config.require_google_api_key(config.Settings(google_maps_api_key="abc")) == "abc"
