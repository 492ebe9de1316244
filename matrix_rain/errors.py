# matrix_rain/errors.py
from __future__ import annotations


class RainError(Exception):
    """Base class for every error raised by matrix-rain."""


class ConfigError(RainError):
    """Invalid startup configuration (charset, density or terminal size)."""


class TerminalError(RainError):
    """The terminal is unavailable or stopped responding."""
