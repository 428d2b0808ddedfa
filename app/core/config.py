"""
Application settings.

Loaded with ``pydantic-settings`` from the environment and the project
``.env`` file. Fields without a default are required and must be non-empty;
``load_settings`` reports every missing one at once so the process stops
before serving.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import SecretStr, ValidationError, field_validator
from pydantic_core import PydanticCustomError
from pydantic_settings import BaseSettings, SettingsConfigDict

REQUIRED_VARS = [
    "AZURE_OPENAI_ENDPOINT",
    "AZURE_OPENAI_KEY",
    "AZURE_OPENAI_CHAT_DEPLOYMENT",
    "AZURE_OPENAI_EMBEDDING_DEPLOYMENT",
    "AZURE_SEARCH_ENDPOINT",
    "AZURE_SEARCH_KEY",
    "AZURE_SEARCH_INDEX",
    "AZURE_BLOB_CONN_STR",
    "AZURE_BLOB_CONTAINER",
]

MISSING_ERROR_TYPES = {"missing", "blank"}


class ConfigurationError(RuntimeError):
    """Raised when required settings are missing or invalid."""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Azure OpenAI ───────────────────────────────────────────────────
    AZURE_OPENAI_ENDPOINT: str
    AZURE_OPENAI_KEY: SecretStr
    AZURE_OPENAI_CHAT_DEPLOYMENT: str
    AZURE_OPENAI_EMBEDDING_DEPLOYMENT: str
    AZURE_OPENAI_API_VERSION: str = "2024-12-01-preview"

    # ── Azure AI Search ────────────────────────────────────────────────
    AZURE_SEARCH_ENDPOINT: str
    AZURE_SEARCH_KEY: SecretStr
    AZURE_SEARCH_INDEX: str

    # ── Azure Blob Storage ─────────────────────────────────────────────
    AZURE_BLOB_CONN_STR: SecretStr
    AZURE_BLOB_CONTAINER: str
    MACHINE_CATALOG_BLOB: str = "output_json/model_list.json"
    MAX_BLOB_BYTES: Optional[int] = 16 * 1024 * 1024

    # ── Server ─────────────────────────────────────────────────────────
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    ENV: Literal["dev", "prod"] = "dev"

    @field_validator(*REQUIRED_VARS, mode="before")
    @classmethod
    def _not_blank(cls, value):
        if value is None or not str(value).strip():
            raise PydanticCustomError("blank", "must not be empty")
        return value


def load_settings(env_file: Optional[str] = ".env") -> Settings:
    """Build settings, turning validation errors into a ``ConfigurationError``."""
    try:
        return Settings(_env_file=env_file)
    except ValidationError as exc:
        missing, invalid = [], []
        for error in exc.errors():
            name = str(error["loc"][0]) if error["loc"] else "?"
            bucket = missing if error["type"] in MISSING_ERROR_TYPES else invalid
            if name not in bucket:
                bucket.append(name)
        problems = []
        if missing:
            problems.append(f".env is missing: {', '.join(missing)}")
        if invalid:
            problems.append(f".env has invalid values: {', '.join(invalid)}")
        raise ConfigurationError("; ".join(problems)) from exc


@lru_cache
def get_settings() -> Settings:
    return load_settings()
