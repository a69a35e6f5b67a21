"""Application configuration models."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Iterable, Literal

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .countries import COUNTRY_CODES


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="UNOGS Viewer", alias="APP_NAME")
    server_host: str = Field(default="0.0.0.0", alias="HOST")
    server_port: int = Field(default=3000, alias="PORT")

    data_base_url: HttpUrl | None = Field(default=None, alias="DATA_BASE_URL")
    data_dir: Path = Field(default=Path("data"), alias="DATA_DIR")
    entries_path: str = Field(default="data/unogs-data.json", alias="ENTRIES_PATH")
    metadata_path: str = Field(default="data/metadata.json", alias="METADATA_PATH")

    default_countries: Annotated[tuple[str, ...], NoDecode] = Field(
        default=COUNTRY_CODES,
        alias="DEFAULT_COUNTRIES",
    )

    environment: Literal["development", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )

    @field_validator("default_countries", mode="before")
    @classmethod
    def _parse_default_countries(cls, value: object) -> tuple[str, ...]:
        """Normalise the initial country selection from environment values."""

        if value is None:
            return COUNTRY_CODES
        if isinstance(value, str):
            raw_values = [part.strip() for part in value.split(",")]
        elif isinstance(value, Iterable):
            raw_values = [str(part).strip() for part in value]
        else:
            raise TypeError("DEFAULT_COUNTRIES must be a string or iterable of strings")

        cleaned: list[str] = []
        for entry in raw_values:
            if not entry:
                continue
            code = entry.upper()
            if code not in COUNTRY_CODES:
                raise ValueError("Unknown country codes configured")
            if code not in cleaned:
                cleaned.append(code)
        return tuple(cleaned)

    def resolve_data_base_url(self) -> str:
        """Return the URL the dataset is fetched from.

        Without ``DATA_BASE_URL`` the app fetches from itself, which serves
        ``DATA_DIR`` under ``/data``.
        """

        if self.data_base_url is not None:
            return str(self.data_base_url)
        return f"http://127.0.0.1:{self.server_port}/"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


settings = get_settings()
