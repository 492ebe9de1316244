# matrix_rain/ui/render.py

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from rich.console import Console
from rich.live import Live
from rich.text import Text

from ..trail import Cell
from .theme import style_for


def compose_frame(cells: Iterable[Cell], width: int, height: int) -> Text:
    """
    Lay the cells out on a ``width`` x ``height`` grid and return a Text.

    Where trails overlap the brighter cell wins. Adjacent cells sharing a
    style are emitted as a single run to keep the output small.
    """
    grid: Dict[Tuple[int, int], Cell] = {}
    for cell in cells:
        if not (0 <= cell.row < height and 0 <= cell.column < width):
            continue
        key = (cell.row, cell.column)
        current = grid.get(key)
        if current is None or cell.brightness > current.brightness:
            grid[key] = cell

    frame = Text(no_wrap=True, overflow="crop")
    for y in range(height):
        run: List[str] = []
        run_style: Optional[str] = None
        for x in range(width):
            cell = grid.get((y, x))
            if cell is None:
                ch, style = " ", None
            else:
                ch, style = cell.character, style_for(cell.brightness)
            if style != run_style and run:
                frame.append("".join(run), style=run_style)
                run.clear()
            run_style = style
            run.append(ch)
        if run:
            frame.append("".join(run), style=run_style)
        if y < height - 1:
            frame.append("\n")
    return frame


class Renderer:
    """
    Draws frames in the alternate screen through rich's Live display.

    Use as a context manager: entering switches to the alternate screen and
    hides the cursor, leaving restores both even when an error escapes.
    """

    def __init__(self, width: int, height: int, console: Optional[Console] = None) -> None:
        self.width = width
        self.height = height
        self.console = console or Console()
        self._live: Optional[Live] = None

    def __enter__(self) -> "Renderer":
        # pacing is driven by the main loop, not by Live's refresh thread
        self._live = Live(
            Text(),
            console=self.console,
            screen=True,
            auto_refresh=False,
            transient=True,
        )
        self._live.start()
        self.console.show_cursor(False)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._live is not None:
                self._live.stop()
        finally:
            self._live = None
            self.console.show_cursor(True)

    def draw(self, cells: Iterable[Cell]) -> None:
        if self._live is None:
            raise RuntimeError("Renderer.draw() called outside of its context")
        self._live.update(compose_frame(cells, self.width, self.height), refresh=True)

    def clear(self) -> None:
        if self._live is None:
            raise RuntimeError("Renderer.clear() called outside of its context")
        self._live.update(Text(), refresh=True)
