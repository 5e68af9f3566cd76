from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    project_name: str = "Astrology Bot Backend"
    api_prefix: str = "/api"
    app_port: int = 3000
    log_level: str = "INFO"

    # In-memory SQLite: orders live as long as the process
    database_url: str = "sqlite://"

    # Telegram
    bot_token: Optional[str] = None
    bot_username: str = "your_bot"

    # Gemini
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-pro"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1"
    gemini_timeout: float = 30.0

    cors_allow_origins: str = "*"

    @property
    def telegram_api_url(self) -> str:
        return f"https://api.telegram.org/bot{self.bot_token}"

    @property
    def gemini_enabled(self) -> bool:
        return bool(self.gemini_api_key)

    @property
    def cors_origins(self) -> list:
        if self.cors_allow_origins.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]

    class Config:
        env_file = ".env"

settings = Settings()
