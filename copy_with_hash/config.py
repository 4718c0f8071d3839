"""Configuration management using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from copy_with_hash.constants import MANIFEST_DEFAULT


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="COPY_WITH_HASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Publishing defaults (used when a config file leaves them out)
    manifest_name: str = Field(
        default=MANIFEST_DEFAULT,
        description="Manifest file name, relative to the output root"
    )
    add_hashes_to_file_names: bool = Field(
        default=True,
        description="Embed the content fingerprint in published file names"
    )


# Global settings instance
settings = Settings()
