from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Store
    mongodb_uri: str | None = Field(
        None,
        validation_alias=AliasChoices("mongodb_uri", "server_uri_mongodb"),
    )
    mongodb_db_name: str = "timsachnhabe"
    server_selection_timeout_ms: int = 5000
    socket_timeout_ms: int = 45000
    reconnect_delay_seconds: float = 5.0

    # JWT
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 30
    refresh_token_expire_days: int = 7

    # Seeding
    seed_user_password: str = "123456"

    # App
    app_name: str = "Tim Sach Nha Be API"
    version: str = "1.0.0"
    port: int = 3000
    url_deployment: str | None = None
    debug: bool = False
    log_level: str = "INFO"

    @property
    def base_url(self) -> str:
        """Public base URL, falling back to the local listening address."""
        return self.url_deployment or f"http://localhost:{self.port}"


settings = Settings()
