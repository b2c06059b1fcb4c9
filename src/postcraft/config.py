"""Configuration for postcraft.

Settings come from three layers (highest to lowest priority):

1. Environment variables (``POSTCRAFT_SECTION__KEY``, e.g. ``POSTCRAFT_IMAGE__WIDTH``)
2. An optional TOML file (``postcraft.toml``)
3. Defaults
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from postcraft.exceptions import ConfigurationError
from postcraft.rendering.profiles import PROFILES

logger = logging.getLogger(__name__)

ENV_PREFIX = "POSTCRAFT_"
DEFAULT_CONFIG_FILENAME = "postcraft.toml"

DEFAULT_FALLBACK_IMAGES = [
    "https://images.unsplash.com/photo-1555066931-4365d14bab8c?w=800&h=400&fit=crop",
    "https://images.unsplash.com/photo-1484417894907-623942c8ee29?w=800&h=400&fit=crop",
    "https://images.unsplash.com/photo-1518432031352-d6fc5c10da5a?w=800&h=400&fit=crop",
]


class ImageSettings(BaseModel):
    """Title image generation defaults."""

    width: int = Field(default=900, gt=0, description="Default surface width in pixels")
    height: int = Field(default=400, gt=0, description="Default surface height in pixels")
    font_size: int = Field(default=48, gt=0, description="Starting font size in pixels")
    min_font_size: int = Field(default=24, gt=0, description="Font size floor; overflow is accepted below it")
    font_step: int = Field(default=2, gt=0, description="Font size decrement per wrapping attempt")
    font_path: str | None = Field(
        default=None,
        description="TrueType font to try before the built-in bold sans-serif candidates",
    )

    @model_validator(mode="after")
    def validate_font_floor(self) -> ImageSettings:
        if self.min_font_size > self.font_size:
            logger.warning(
                "image.min_font_size=%s exceeds image.font_size=%s; titles will never shrink",
                self.min_font_size,
                self.font_size,
            )
        return self


class RenderingSettings(BaseModel):
    """Markdown-lite rendering defaults."""

    profile: str = Field(default="basic", description="Styling profile name (basic or enhanced)")

    @field_validator("profile")
    @classmethod
    def validate_profile(cls, value: str) -> str:
        if value not in PROFILES:
            choices = ", ".join(sorted(PROFILES))
            msg = f"Unknown styling profile '{value}' (available: {choices})"
            raise ValueError(msg)
        return value


class PostcraftSettings(BaseSettings):
    """Root configuration.

    Supports environment variable overrides with the pattern
    ``POSTCRAFT_SECTION__KEY``.
    """

    image: ImageSettings = Field(default_factory=ImageSettings, description="Title image generation")
    rendering: RenderingSettings = Field(default_factory=RenderingSettings, description="Markdown rendering")
    fallback_images: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FALLBACK_IMAGES),
        description="Images used when a post has no usable featured or generated image",
    )

    model_config = SettingsConfigDict(
        extra="forbid",
        validate_assignment=True,
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
    )

    @field_validator("fallback_images")
    @classmethod
    def validate_fallback_images(cls, value: list[str]) -> list[str]:
        if not value:
            msg = "fallback_images must contain at least one URL"
            raise ValueError(msg)
        return value


def _collect_env_override_paths() -> set[tuple[str, ...]]:
    paths = set()
    for key in os.environ:
        if key.startswith(ENV_PREFIX):
            parts = key[len(ENV_PREFIX) :].lower().split("__")
            paths.add(tuple(parts))
    return paths


def _merge_config(
    base: dict[str, Any],
    overrides: dict[str, Any],
    env_paths: set[tuple[str, ...]],
    prefix: tuple[str, ...] = (),
) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        path = (*prefix, key)
        if path in env_paths:
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_config(merged[key], value, env_paths, path)
        else:
            merged[key] = value
    return merged


def load_settings(path: Path | None = None) -> PostcraftSettings:
    """Load settings from the environment and an optional TOML file.

    When ``path`` is None, ``postcraft.toml`` in the working directory is used
    if present.

    Raises:
        ConfigurationError: If the file cannot be read, parsed or validated.

    """
    try:
        base = PostcraftSettings()
    except ValidationError as e:
        msg = f"Invalid postcraft environment configuration: {e}"
        raise ConfigurationError(msg) from e

    if path is None:
        candidate = Path.cwd() / DEFAULT_CONFIG_FILENAME
        if not candidate.exists():
            return base
        path = candidate

    logger.debug("Loading config from %s", path)
    try:
        file_data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        msg = f"Cannot read config file {path}: {e}"
        raise ConfigurationError(msg) from e
    except tomllib.TOMLDecodeError as e:
        msg = f"Cannot parse config file {path}: {e}"
        raise ConfigurationError(msg) from e

    merged = _merge_config(base.model_dump(mode="json"), file_data, _collect_env_override_paths())
    try:
        return PostcraftSettings.model_validate(merged)
    except ValidationError as e:
        for error in e.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            logger.error("  %s: %s", loc, error["msg"])
        msg = f"Configuration validation failed for {path}"
        raise ConfigurationError(msg) from e


__all__ = [
    "DEFAULT_FALLBACK_IMAGES",
    "ImageSettings",
    "PostcraftSettings",
    "RenderingSettings",
    "load_settings",
]
