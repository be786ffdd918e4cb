from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from typing import Optional, Union
import json
import logging

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "openai"
DEFAULT_STORAGE_PATH = "./generated-assets"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ASSETGEN__",
        extra="ignore",
    )

    host: str = Field("0.0.0.0", description="Interface the web server binds to.")
    port: int = Field(3000, description="Port the web server listens on.")
    debug: bool = False
    log_level: str = "INFO"
    config_path: str = Field(
        ".assetgen/config.json",
        description="Location of the stored provider/API key record.",
    )
    asset_storage_path: Optional[str] = Field(
        None,
        description="Directory for generated assets. Overrides the stored config.",
    )
    rate_limit_window_ms: int = Field(
        60000, ge=1000, description="Fixed window length in milliseconds, whole seconds only."
    )
    rate_limit_max_requests: int = Field(10, ge=1)
    request_timeout: float = Field(
        60.0, gt=0, description="Timeout in seconds for provider calls and downloads."
    )
    openai_image_model: str = "dall-e-2"
    openai_image_size: str = "1024x1024"
    openai_base_url: Optional[HttpUrl] = Field(
        None, description="Base URL for an OpenAI-compatible images endpoint."
    )
    max_content_length: int = 1024 * 1024

    @field_validator("rate_limit_window_ms")
    @classmethod
    def window_in_whole_seconds(cls, value: int) -> int:
        if value % 1000:
            raise ValueError(
                f"rate_limit_window_ms must be a multiple of 1000, got {value}"
            )
        return value


class StoredConfig(BaseModel):
    """The `{provider, apiKey, storagePath}` record written by the setup tool."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    provider: Optional[str] = DEFAULT_PROVIDER
    api_key: Optional[str] = Field(None, alias="apiKey")
    storage_path: str = Field(DEFAULT_STORAGE_PATH, alias="storagePath")

    @property
    def default_provider(self) -> str:
        return self.provider or DEFAULT_PROVIDER

    def default_api_key(self, provider: str) -> Optional[str]:
        # The stored key belongs to the stored provider only.
        if provider == self.provider:
            return self.api_key
        return None


def load_stored_config(path: Union[str, Path]) -> StoredConfig:
    config_path = Path(path)
    if not config_path.exists():
        logger.info(f"No configuration file found at {config_path}")
        return StoredConfig()
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
        stored = StoredConfig.model_validate(data)
    except (OSError, ValueError) as e:
        logger.error(f"Error loading configuration from {config_path}: {e}")
        return StoredConfig()
    logger.info(f"Loaded configuration from {config_path}")
    return stored


def resolve_storage_path(settings: Settings, stored_config: StoredConfig) -> Path:
    return Path(settings.asset_storage_path or stored_config.storage_path)
