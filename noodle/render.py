"""Render sink contract and a canvas-style frame builder."""

from typing import Callable, Optional, Protocol


class RenderSink(Protocol):
    def clear(self) -> None: ...

    def draw_cell_fill(self, x: int, y: int, color: str) -> None: ...

    def draw_cell_border(self, x: int, y: int, color: str) -> None: ...

    def flush(self) -> None: ...


class CanvasFrame:
    """Collects cell draws as pixel rectangles, one list per frame.

    Each rect is `[px, py, w, h, color]`. A border paints the whole cell;
    a fill paints the cell inset by `border` pixels on every side.
    """

    def __init__(self, width: int, height: int, scale: int, border: int, background_color: str,
                 on_frame: Optional[Callable[[list[list]], None]] = None):
        self.width = width
        self.height = height
        self.scale = scale
        self.border = border
        self.background_color = background_color
        self.on_frame = on_frame
        self.rects: list[list] = []

    def clear(self):
        self.rects = [[0, 0, self.width * self.scale, self.height * self.scale, self.background_color]]

    def draw_cell_fill(self, x: int, y: int, color: str):
        inner = self.scale - self.border * 2
        self.rects.append([x * self.scale + self.border, y * self.scale + self.border, inner, inner, color])

    def draw_cell_border(self, x: int, y: int, color: str):
        self.rects.append([x * self.scale, y * self.scale, self.scale, self.scale, color])

    def flush(self):
        if self.on_frame is not None:
            self.on_frame(list(self.rects))
