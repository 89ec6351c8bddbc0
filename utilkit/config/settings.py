"""
Configuration settings for utilkit.

**Conceptual**: This module provides a strongly-typed settings object that
loads library defaults from environment variables (via .env files). Settings
are validated when constructed, so a bad value fails fast at startup instead
of surfacing as a strange timing bug later.

**What is configurable?**
  - Default debounce wait and throttle limit (used when a controller is
    constructed without an explicit duration).
  - An optional nesting limit for deep_equal/deep_clone traversals.
  - Log level used by setup_logging().

Every value can also be passed explicitly at the call site; settings only
supply defaults. Durations are in milliseconds.

This module uses python-dotenv to load .env files and dataclasses for type safety.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from project root (dev/local environments)
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


VALID_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def _parse_number(name: str, raw: str) -> float:
    """Parse a numeric environment variable, naming it in the error."""
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got: {raw}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got: {raw}")


@dataclass(frozen=True)
class Settings:
    """
    Library-wide default settings.

    **Conceptual**: A single immutable object holding the defaults that the
    rate controllers, deep traversals, and logging setup fall back to when the
    caller does not pass a value explicitly.

    **Usage pattern**:
      ```python
      from utilkit.config.settings import get_settings

      settings = get_settings()
      wait = settings.default_wait_ms
      ```

    Attributes:
        default_wait_ms: Debounce quiet period when none is given (default 250).
        default_limit_ms: Throttle window length when none is given (default 250).
        max_depth: Deepest nesting deep_equal/deep_clone will traverse before
                   raising InvalidArgument (default None, meaning unlimited).
        log_level: loguru level name used by setup_logging (default "WARNING").
    """
    default_wait_ms: float = 250
    default_limit_ms: float = 250
    max_depth: Optional[int] = None
    log_level: str = "WARNING"

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.default_wait_ms < 0:
            raise ValueError(
                f"default_wait_ms must be non-negative, got: {self.default_wait_ms}"
            )
        if self.default_limit_ms < 0:
            raise ValueError(
                f"default_limit_ms must be non-negative, got: {self.default_limit_ms}"
            )
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got: {self.max_depth}")
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}, got: {self.log_level}"
            )

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Load settings from environment variables.

        **Environment variables** (all optional):
          - UTILKIT_DEFAULT_WAIT_MS: Debounce default in ms (default 250).
          - UTILKIT_DEFAULT_LIMIT_MS: Throttle default in ms (default 250).
          - UTILKIT_MAX_DEPTH: Deep traversal depth limit (default unset, unlimited).
          - UTILKIT_LOG_LEVEL: Log level name (default "WARNING").

        Returns:
            Settings object with values loaded from environment.

        Raises:
            ValueError: If a variable cannot be parsed or fails validation.

        Usage example:
            >>> # In .env file:
            >>> # UTILKIT_DEFAULT_WAIT_MS=100
            >>>
            >>> settings = Settings.from_env()
            >>> print(settings.default_wait_ms)  # 100.0
        """
        wait_ms = _parse_number(
            "UTILKIT_DEFAULT_WAIT_MS", os.getenv("UTILKIT_DEFAULT_WAIT_MS", "250")
        )
        limit_ms = _parse_number(
            "UTILKIT_DEFAULT_LIMIT_MS", os.getenv("UTILKIT_DEFAULT_LIMIT_MS", "250")
        )
        raw_depth = os.getenv("UTILKIT_MAX_DEPTH", "").strip()
        max_depth = _parse_int("UTILKIT_MAX_DEPTH", raw_depth) if raw_depth else None
        log_level = os.getenv("UTILKIT_LOG_LEVEL", "WARNING").upper()

        return cls(
            default_wait_ms=wait_ms,
            default_limit_ms=limit_ms,
            max_depth=max_depth,
            log_level=log_level,
        )


# Lazily loaded singleton; tests can construct Settings(...) directly instead.
_default_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings singleton.

    Settings are loaded from environment on first call, then cached for reuse.
    Call reset_settings() to force a reload (tests do this after changing
    environment variables).

    Returns:
        Global Settings singleton.
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = Settings.from_env()

    return _default_settings


def reset_settings():
    """
    Reset the global settings singleton (for testing).

    **Testing pattern**:
      ```python
      def test_something(monkeypatch):
          monkeypatch.setenv("UTILKIT_MAX_DEPTH", "10")
          reset_settings()
          assert get_settings().max_depth == 10
      ```

    Returns:
        None (side effect: clears global settings cache).
    """
    global _default_settings
    _default_settings = None
