"""
matrix-rain: a "digital rain" animation for the terminal.

The engine (Sampler, Trail, RainField, RainLoop) is independent of the
terminal; `matrix_rain.ui` holds the rich/termios collaborators.
"""

import logging

from .errors import ConfigError, RainError, TerminalError

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["ConfigError", "RainError", "TerminalError", "__version__"]
