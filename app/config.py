from functools import lru_cache
from typing import Annotated, List

from pydantic import AliasChoices, AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = Field(default="Selling Infinity Reviews API")
    cors_origins: Annotated[List[AnyHttpUrl], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]
    )
    supabase_url: AnyHttpUrl | None = Field(
        default=None,
        validation_alias=AliasChoices("SITE_SUPABASE_URL", "SUPABASE_URL"),
    )
    supabase_service_role_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "SITE_SUPABASE_SERVICE_ROLE_KEY", "SUPABASE_SERVICE_ROLE_KEY"
        ),
    )
    supabase_timeout: float = Field(
        default=10.0
    )
    use_mock_data: bool = Field(
        default=True
    )
    reviews_table: str = Field(
        default="reviews"
    )
    calendar_events_table: str = Field(
        default="calendar_events"
    )
    app_public_url: AnyHttpUrl | None = Field(
        default=None
    )
    notification_timeout: float = Field(
        default=5.0
    )
    admin_api_key: str | None = Field(
        default=None
    )
    calendar_timezone: str = Field(
        default="UTC"
    )
    seed_sample_reviews: bool = Field(
        default=False
    )

    model_config = SettingsConfigDict(
        env_prefix="SITE_", case_sensitive=False, populate_by_name=True
    )

    @field_validator("cors_origins", mode="before")
    def _split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @property
    def mock_mode(self) -> bool:
        return self.use_mock_data or self.supabase_url is None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()
