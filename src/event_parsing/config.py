"""Configuration for the event parsing engine.

Uses Pydantic settings for environment-based configuration,
following the same pattern as the application settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EventParsingConfig(BaseSettings):
    """
    Configuration for the event parser.

    All settings can be overridden via environment variables with PARSER_ prefix.
    Example: PARSER_TRACE_RULES=true

    The rule tables themselves are fixed; only diagnostics are configurable.

    Attributes:
        trace_rules: Log every rule attempt and its outcome at DEBUG level.
    """

    model_config = SettingsConfigDict(
        env_prefix="PARSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    trace_rules: bool = Field(
        default=False,
        description="Log each date/time/duration rule attempt at DEBUG level.",
    )
