"""Configuration management for schema-bridge."""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.nodes import DEFAULT_MAX_DEPTH


class LoggingConfig(BaseModel): # Remains BaseModel, nested under Config (BaseSettings)
    """Configuration for logging."""

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(default="console", description="Log format ('console' or 'json')")
    file: Optional[Path] = Field(default=None, description="Log file path. Logs go to stderr when unset.")

class TranslatorConfig(BaseModel):
    """Configuration for parsing and translating schemas."""

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, le=200, description="Deepest schema nesting accepted by the parser and the translator.")

class OutputConfig(BaseModel):
    """Configuration for rendering descriptors as text."""

    indent: int = Field(default=2, ge=0, le=8, description="JSON indentation. 0 renders compact single-line output.")
    ensure_ascii: bool = Field(default=False, description="Escape non-ASCII characters in rendered output.")


class Config(BaseSettings):
    """Main configuration for schema-bridge. Loads from environment variables prefixed with SCHEMA_BRIDGE_."""

    model_config = SettingsConfigDict(
        env_prefix='SCHEMA_BRIDGE_',
        env_nested_delimiter='__', # e.g., SCHEMA_BRIDGE_TRANSLATOR__MAX_DEPTH
        extra='ignore', # Ignore extra fields from env/file if not defined in schema
        env_file='.env', # Optionally load a .env file
        env_file_encoding='utf-8'
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    translator: TranslatorConfig = Field(default_factory=TranslatorConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def from_file(cls, file_path: Path) -> "Config":
        """Create configuration strictly from a JSON file.
        Note: This does not layer with environment variables.
        """
        with open(file_path, encoding="utf-8") as f:
            config_data = json.load(f)
        return cls.model_validate(config_data)
