# matrix_rain/util/console.py
from __future__ import annotations

from rich.console import Console
from rich.markup import escape

# Messages go to stderr; stdout belongs to the animation.
console = Console(stderr=True)


def error(msg: str) -> None:
    console.print(f"[bold red]Error:[/] {escape(msg)}", highlight=False)
