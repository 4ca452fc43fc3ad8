"""Typed runtime settings with dotenv support and startup validation."""

from pathlib import Path
from uuid import uuid4

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


def _config_generate_client_id() -> str:
    return str(uuid4())


class AppSettings(BaseSettings):
    """Application settings for the status endpoint and bootstrap pipeline.

    Environment variable names map directly to field names in uppercase.
    Example: `server_token` reads from `SERVER_TOKEN`.

    Attributes:
        application_host: Host interface for web server binding.
        application_port: Web server port.
        server_token: Secret token passed to the tunnel service.
        api_password: Password passed to the reporting agent service.
        client_id: Runtime identity written into the generated proxy config.
            A fresh UUID is generated per process when unset.
        work_directory: Directory holding fetched artifacts and generated config.
        artifact_base_url: Base URL the three artifacts are downloaded from.
        agent_server_address: `host:port` the reporting agent connects to.
        log_level: Root logging level name.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=8080, ge=1, le=65535)
    server_token: str = Field(default="default_server_token", min_length=1)
    api_password: str = Field(default="default_api_password", min_length=1)
    client_id: str = Field(default_factory=_config_generate_client_id, min_length=1)
    work_directory: Path = Field(default=Path("."))
    artifact_base_url: str = Field(default="https://artifacts.example.invalid/fleet", min_length=1)
    agent_server_address: str = Field(default="agent.example.invalid:443", min_length=1)
    log_level: str = Field(default="INFO")

    @field_validator("server_token", "api_password", "client_id", "artifact_base_url", "agent_server_address")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unsupported log_level={value}")
        return normalized_value


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
