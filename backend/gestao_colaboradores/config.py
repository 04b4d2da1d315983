from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "API Gestão de Colaboradores"
    app_version: str = "1.0.0"
    description: str = "API REST para gestão de colaboradores"
    debug: bool = False
    environment: Literal["development", "test", "production"] = "development"
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    rate_limit_enabled: bool = True
    rate_limit_window_ms: int = 15 * 60 * 1000
    rate_limit_max: int = 100
    rate_limit_cleanup_probability: float = 0.01
    rate_limit_max_entries: int = 10_000

    strict_validation: bool = True

    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"

    contact_name: str = "Equipe de Desenvolvimento"
    support_email: str = "suporte@empresa.com"
    documentation_url: str = "https://github.com/DanielEloy/API_para_Gestao_de_Colaboradores"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
