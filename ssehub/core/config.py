from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    # App
    APP_NAME: str = Field(default="sse-hub")
    LOG_LEVEL: str = Field(default="INFO")

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8080)
    SHUTDOWN_GRACE_SECONDS: int = Field(default=5)

    # Hub
    MAILBOX_CAPACITY: int = Field(default=100)  # per-subscriber, messages beyond it are dropped
    HEARTBEAT_SECONDS: float = Field(default=15.0)  # 0 disables keep-alive comments

    # CORS
    CORS_ALLOW_ORIGIN: str = Field(default="*")
    CORS_ALLOW_METHODS: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "OPTIONS"]
    )
    CORS_ALLOW_HEADERS: list[str] = Field(
        default_factory=lambda: ["Content-Type", "Authorization"]
    )


settings = Settings()
