# matrix_rain/config.py
"""
Startup configuration, read once from the environment.

  TRAIL_DENSITY   cells per expected trail (positive integer, default 30)
  RAIN_CHARSET    glyphs to sample from (non-empty, default katakana + Latin)
  RAIN_LOG_FILE   optional path for debug logging
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigError
from .ui.theme import MATRIX_CHARS

DEFAULT_DENSITY = 30


@dataclass(frozen=True)
class RainConfig:
    density: int = DEFAULT_DENSITY
    charset: str = MATRIX_CHARS
    log_file: Optional[str] = None


def _parse_density(raw: Optional[str]) -> int:
    if raw is None:
        return DEFAULT_DENSITY
    try:
        density = int(raw.strip())
    except ValueError:
        raise ConfigError(f"TRAIL_DENSITY must be an integer, got {raw!r}") from None
    if density <= 0:
        raise ConfigError(f"TRAIL_DENSITY must be positive, got {density}")
    return density


def load_config(environ: Optional[Mapping[str, str]] = None) -> RainConfig:
    """
    Build a RainConfig from ``environ`` (defaults to ``os.environ``).

    An unset variable falls back to its default; a variable that is set but
    invalid (including an empty RAIN_CHARSET) raises ConfigError.
    """
    env = os.environ if environ is None else environ

    charset = env.get("RAIN_CHARSET")
    if charset is None:
        charset = MATRIX_CHARS
    elif not charset:
        raise ConfigError("RAIN_CHARSET must contain at least one character")

    return RainConfig(
        density=_parse_density(env.get("TRAIL_DENSITY")),
        charset=charset,
        log_file=env.get("RAIN_LOG_FILE") or None,
    )
