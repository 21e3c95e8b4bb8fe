from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # LLM API Keys
    openai_api_key: str = ""
    anthropic_api_key: str = ""

    # Fallback chat (used when no send-email intent is detected)
    fallback_model: str = "gpt-4o"
    fallback_max_tokens: int = 180
    fallback_temperature: float = 0.7
    fallback_history_window: int = 6

    # Langfuse
    langfuse_secret_key: str = ""
    langfuse_public_key: str = ""
    langfuse_host: str = "http://localhost:3000"

    # Browser sessions
    browser_headless: bool = True
    max_concurrent_sessions: int = 2
    automation_run_timeout_s: float = 180

    # Automation timings (ms)
    navigation_timeout_ms: int = 30_000
    email_settle_ms: int = 2_000
    password_field_timeout_ms: int = 8_000
    password_settle_ms: int = 4_000
    inbox_settle_ms: int = 4_000
    compose_settle_ms: int = 3_000
    overlay_dismiss_timeout_ms: int = 2_000
    field_visible_timeout_ms: int = 15_000
    field_action_timeout_ms: int = 3_000
    fill_attempts: int = 3
    fill_focus_pause_ms: int = 500
    fill_backoff_ms: int = 1_000
    send_settle_ms: int = 5_000

    # App
    app_env: str = "development"
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


settings = Settings()
