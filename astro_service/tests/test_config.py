from app.core.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("BOT_TOKEN", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)

    settings = Settings(_env_file=None)

    assert settings.api_prefix == "/api"
    assert settings.database_url == "sqlite://"
    assert settings.gemini_enabled is False
    assert settings.cors_origins == ["*"]


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.setenv("GEMINI_API_KEY", "secret")
    monkeypatch.setenv("APP_PORT", "8080")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")

    settings = Settings(_env_file=None)

    assert settings.app_port == 8080
    assert settings.gemini_enabled is True
    assert settings.telegram_api_url == "https://api.telegram.org/bot123:abc"
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
