"""Configuration management for cityhash-tools."""

from __future__ import annotations

import codecs
import json
from pathlib import Path

import structlog
from pydantic import BaseModel, Field, field_validator

logger = structlog.get_logger()

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "cityhash-tools"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.json"


class AppConfig(BaseModel):
    """Application configuration."""

    # Input settings
    text_encoding: str = Field(
        default="utf-8",
        description="Encoding used to turn text arguments into bytes"
    )
    max_input_size: int = Field(
        default=256 * 1024 * 1024,  # 256MB
        description="Largest file accepted for hashing in bytes (0 = no limit)"
    )

    # Output settings
    output_format: str = Field(
        default="rich",
        description="Output format (rich, json, plain)"
    )
    digest_format: str = Field(
        default="hex",
        description="Digest rendering (hex, decimal)"
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    @classmethod
    def load(cls, config_file: Path | None = None) -> AppConfig:
        """Load configuration from file.

        Args:
            config_file: Path to config file, uses DEFAULT_CONFIG_FILE if None

        Returns:
            Application configuration
        """
        if config_file is None:
            config_file = DEFAULT_CONFIG_FILE

        if config_file.exists():
            with open(config_file) as f:
                data = json.load(f)
                return cls(**data)

        # Return defaults
        return cls()

    def save(self, config_file: Path | None = None) -> None:
        """Save configuration to file.

        Args:
            config_file: Path to config file, uses DEFAULT_CONFIG_FILE if None
        """
        if config_file is None:
            config_file = DEFAULT_CONFIG_FILE

        config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(config_file, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2, default=str)

        logger.info("config_saved", path=str(config_file))

    @field_validator("text_encoding")
    @classmethod
    def validate_text_encoding(cls, v: str) -> str:
        """Validate text encoding name."""
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown text encoding: {v}") from e
        return v

    @field_validator("max_input_size")
    @classmethod
    def validate_max_input_size(cls, v: int) -> int:
        """Validate max input size value."""
        if v < 0:
            raise ValueError("Max input size must be non-negative")
        return v

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        """Validate output format."""
        valid_formats = {"rich", "json", "plain"}
        if v not in valid_formats:
            raise ValueError(f"Invalid output format: {v}. Valid formats: {valid_formats}")
        return v

    @field_validator("digest_format")
    @classmethod
    def validate_digest_format(cls, v: str) -> str:
        """Validate digest format."""
        valid_formats = {"hex", "decimal"}
        if v not in valid_formats:
            raise ValueError(f"Invalid digest format: {v}. Valid formats: {valid_formats}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Valid levels: {valid_levels}")
        return v
