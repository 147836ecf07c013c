"""
AI and processing settings for the matching core

Values are read from the environment (a ``.env`` file is loaded first):

    OPENAI_API_KEY           - bearer token for the chat-completion provider
    AI_MODEL                 - model name (default gpt-3.5-turbo)
    AI_BASE_URL              - provider base URL (default https://api.openai.com/v1)
    AI_TEMPERATURE           - sampling temperature (default 0.7)
    AI_MAX_TOKENS            - completion token budget (default 1500)
    AI_TIMEOUT               - request timeout in seconds (default 30)
    MIN_TEXT_LENGTH          - shortest usable extracted text (default 100)
    MAX_FILE_SIZE            - largest accepted upload in bytes (default 10MB)
    MAX_CONCURRENT_ANALYSES  - background analyses allowed at once (default 5)
"""
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from jobai.utils.exceptions import ConfigurationError

DEFAULT_SYSTEM_PROMPT = (
    "You are an expert HR professional and resume analyst. "
    "Provide detailed, actionable feedback."
)


class LLMSettings(BaseModel):
    """Chat-completion provider configuration"""
    model_name: str = Field(default="gpt-3.5-turbo", description="Completion model name")
    base_url: str = Field(default="https://api.openai.com/v1", description="Provider base URL")
    api_key: Optional[str] = Field(default=None, description="Bearer token; analysis falls back when unset")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Generation temperature")
    max_tokens: int = Field(default=1500, ge=1, le=1500, description="Maximum completion tokens")
    timeout: float = Field(default=30, gt=0, le=300, description="Request timeout in seconds")
    system_prompt: str = Field(default=DEFAULT_SYSTEM_PROMPT, description="System role message")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    @field_validator("api_key")
    @classmethod
    def blank_key_is_missing(cls, v):
        if v is not None and not v.strip():
            return None
        return v


class ExtractionSettings(BaseModel):
    """Upload and text-extraction limits"""
    min_text_length: int = Field(default=100, ge=1, description="Minimum normalized text length")
    max_file_size: int = Field(default=10 * 1024 * 1024, ge=1, description="Maximum upload size in bytes")


class ProcessingSettings(BaseModel):
    """Background analysis configuration"""
    max_concurrent: int = Field(default=5, ge=1, le=20, description="Maximum concurrent analyses")


class AppSettings(BaseModel):
    """Complete matching core configuration"""
    llm_settings: LLMSettings = Field(default_factory=LLMSettings)
    extraction_settings: ExtractionSettings = Field(default_factory=ExtractionSettings)
    processing_settings: ProcessingSettings = Field(default_factory=ProcessingSettings)


def _env(name: str, default):
    value = os.getenv(name)
    return default if value is None or value == "" else value


def load_settings() -> AppSettings:
    """Build settings from the environment.

    Raises:
        ConfigurationError: an environment value fails validation
    """
    load_dotenv()
    try:
        return AppSettings(
            llm_settings=LLMSettings(
                model_name=_env("AI_MODEL", "gpt-3.5-turbo"),
                base_url=_env("AI_BASE_URL", "https://api.openai.com/v1"),
                api_key=os.getenv("OPENAI_API_KEY"),
                temperature=_env("AI_TEMPERATURE", 0.7),
                max_tokens=_env("AI_MAX_TOKENS", 1500),
                timeout=_env("AI_TIMEOUT", 30),
            ),
            extraction_settings=ExtractionSettings(
                min_text_length=_env("MIN_TEXT_LENGTH", 100),
                max_file_size=_env("MAX_FILE_SIZE", 10 * 1024 * 1024),
            ),
            processing_settings=ProcessingSettings(
                max_concurrent=_env("MAX_CONCURRENT_ANALYSES", 5),
            ),
        )
    except PydanticValidationError as e:
        field = ".".join(str(p) for p in e.errors()[0]["loc"]) if e.errors() else None
        raise ConfigurationError(
            f"Invalid configuration: {e.error_count()} errors", config_key=field, cause=e
        ) from e
