from __future__ import annotations

import logging
import sys
from importlib import metadata
from typing import Optional

import typer

from .config import RainConfig, load_config
from .errors import ConfigError, TerminalError
from .field import RainField
from .loop import RainLoop
from .sampler import Sampler
from .ui.render import Renderer
from .ui.terminal import KeyReader, terminal_size
from .util.console import error

logger = logging.getLogger("matrix_rain")

app = typer.Typer(
    name="matrix-rain",
    help="Digital rain in your terminal. Press q to quit.",
    add_completion=False,
)


def _version_string() -> str:
    try:
        return metadata.version("matrix-rain")
    except metadata.PackageNotFoundError:  # pragma: no cover
        return "0.0.0"


def _setup_logging(log_file: Optional[str]) -> Optional[logging.Handler]:
    """Route package logs to ``log_file``; the terminal itself stays clean."""
    if not log_file:
        return None
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return handler


def _build_field(cfg: RainConfig) -> RainField:
    width, height = terminal_size()
    return RainField(width, height, cfg.density, Sampler(cfg.charset))


@app.command()
def rain() -> None:
    """
    Run the rain until q is pressed.

    Configuration comes from TRAIL_DENSITY and RAIN_CHARSET; a bad value
    exits with status 2 before the terminal is touched.
    """
    try:
        cfg = load_config()
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=2)

    try:
        handler = _setup_logging(cfg.log_file)
    except OSError as exc:
        error(f"cannot open log file: {exc}")
        raise typer.Exit(code=2)

    try:
        _run(cfg)
    finally:
        if handler is not None:
            logger.removeHandler(handler)
            handler.close()


def _run(cfg: RainConfig) -> None:
    try:
        field = _build_field(cfg)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=2)

    logger.debug("matrix-rain %s starting", _version_string())
    try:
        with KeyReader() as keys, Renderer(field.width, field.height) as renderer:
            frames = RainLoop(field, renderer, keys).run()
    except (TerminalError, OSError) as exc:
        logger.debug("terminal failure", exc_info=True)
        error(f"terminal error: {exc}")
        raise typer.Exit(code=1)
    logger.debug("exited cleanly after %d frames", frames)


def main() -> None:
    app()


if __name__ == "__main__":
    # When run as a module: python -m matrix_rain
    sys.exit(main())
