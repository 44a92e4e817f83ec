from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", frozen=True
    )

    # Anthropic Messages API
    anthropic_api_key: str | None = None
    anthropic_base_url: str = "https://api.anthropic.com"
    anthropic_version: str = "2023-06-01"
    anthropic_model: str = "claude-sonnet-4-5-20250929"

    # Output token budgets per task (row lists run longer than one object)
    odds_max_tokens: int = 1500
    fair_value_max_tokens: int = 4000

    # No retries; this is the only bound on an upstream call
    upstream_timeout_seconds: float = 120.0

    # Inbound payload cap (base64 screenshots)
    max_request_bytes: int = 50 * 1024 * 1024

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Logging
    log_level: str = "INFO"

    @property
    def has_key(self) -> bool:
        return bool(self.anthropic_api_key)
