"""Desugarer settings."""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DesugarSettings(BaseSettings):
    """Names the desugarer synthesizes into core trees."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SUGARFREE_",
        case_sensitive=False,
        extra="ignore",
    )

    fresh_sigil: str = Field(default="$", min_length=1)
    default_prefix: str = Field(default="tmp", min_length=1)
    concat_function: str = Field(default="concat", min_length=1)
    cons_constructor: str = Field(default="Cons", min_length=1)
    nil_constructor: str = Field(default="Nil", min_length=1)


def load_settings(**overrides: Any) -> DesugarSettings:
    """Load settings from the environment with optional field overrides."""
    if not overrides:
        return DesugarSettings()
    return DesugarSettings(**overrides)
