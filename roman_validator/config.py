"""
Process-wide default decode flags.

Defaults are resolved once, on first use, from the ROMAN_DEFAULT_FLAGS
environment variable (a JSON object such as '{"ignore_case": true}').
Entry points may also call configure_defaults() during start-up. Either
way the result is a frozen DecodeFlags that every decode call starts from
and then overrides with its own options.
"""

from __future__ import annotations

import json
import logging
import os

from pydantic import ValidationError

from .exceptions import ConfigurationError
from .models import DecodeFlags

logger = logging.getLogger(__name__)

DEFAULT_FLAGS_ENV_VAR = "ROMAN_DEFAULT_FLAGS"

_defaults: DecodeFlags | None = None


def load_default_flags(raw: str | None = None) -> DecodeFlags:
    """Parse default flags from a JSON object string.

    Args:
        raw: JSON text. Defaults to the ROMAN_DEFAULT_FLAGS environment
            variable; when that is unset or blank the built-in defaults apply.

    Raises:
        ConfigurationError: If the text isn't a JSON object of boolean flags.
    """
    if raw is None:
        raw = os.environ.get(DEFAULT_FLAGS_ENV_VAR)
    if raw is None or not raw.strip():
        return DecodeFlags()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{DEFAULT_FLAGS_ENV_VAR} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"{DEFAULT_FLAGS_ENV_VAR} must be a JSON object, got {type(data).__name__}"
        )

    try:
        flags = DecodeFlags.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid default flags in {DEFAULT_FLAGS_ENV_VAR}: {e}") from e

    logger.info("Default decode flags: %s", flags.model_dump())
    return flags


def configure_defaults(**flags: object) -> DecodeFlags:
    """Set the process-wide defaults. Meant to be called once at start-up.

    Unknown flag names are ignored, like per-call options.

    Raises:
        ConfigurationError: If a flag value isn't a boolean.
    """
    global _defaults  # noqa: PLW0603
    try:
        _defaults = DecodeFlags.model_validate(flags)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid default flags: {e}") from e
    return _defaults


def get_default_flags() -> DecodeFlags:
    """The process-wide defaults, resolved from the environment on first use."""
    global _defaults  # noqa: PLW0603
    if _defaults is None:
        _defaults = load_default_flags()
    return _defaults


def reset_defaults() -> None:
    """Forget the resolved defaults so the next call re-reads the environment."""
    global _defaults  # noqa: PLW0603
    _defaults = None
