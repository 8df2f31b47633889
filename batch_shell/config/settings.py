"""Configuration settings models using Pydantic."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class ShellSettings(BaseModel):
    """Interpreter behaviour configuration."""

    prompt: str = Field(
        default="> ",
        description="Prompt written before each read in the top-level session",
    )
    not_found_exit_code: int = Field(
        default=127,
        description="Exit code reported when a program cannot be found",
    )
    not_executable_exit_code: int = Field(
        default=126,
        description="Exit code reported when a program cannot be executed",
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding of SERIAL/PARALLEL directive files",
    )
    decode_errors: Literal["strict", "replace", "ignore", "backslashreplace"] = Field(
        default="replace",
        description="How undecodable bytes in directive files are handled",
    )
    max_depth: int = Field(
        default=32,
        ge=1,
        description="Maximum nesting depth of directive files",
    )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Console logging level",
    )
    file: str | None = Field(
        default=None,
        description="Log file path (None disables file logging)",
    )
    rotation: str = Field(
        default="10 MB",
        description="Log rotation size",
    )
    retention: str = Field(
        default="7 days",
        description="Log retention period",
    )
    compression: bool = Field(
        default=True,
        description="Whether to compress old logs",
    )
    console_format: str = Field(
        default="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        description="Console log format",
    )


class Settings(BaseModel):
    """Main configuration settings."""

    version: str = Field(
        default="1.0",
        description="Configuration version",
    )
    shell: ShellSettings = Field(default_factory=ShellSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Validate configuration version."""
        supported_versions = ["1.0"]
        if v not in supported_versions:
            raise ValueError(f"Unsupported config version: {v}. Supported: {supported_versions}")
        return v
