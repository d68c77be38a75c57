"""Line charts and rectangles drawn on a character canvas."""

from __future__ import annotations

import math
from collections.abc import Sequence

from gputop.fields import MAX_LINES_PER_PLOT

PLOT_MAX_LEGEND_SIZE = 35

ULCORNER = "\u250c"
URCORNER = "\u2510"
LLCORNER = "\u2514"
LRCORNER = "\u2518"
HLINE = "\u2500"
VLINE = "\u2502"
TTEE = "\u252c"
BTEE = "\u2534"
PLUS = "\u253c"


class Canvas:
    """A grid of characters, each with a colour pair number (0 for none).

    Writes outside the grid are ignored.
    """

    def __init__(self, rows: int, cols: int) -> None:
        if rows < 0 or cols < 0:
            raise ValueError("canvas size must not be negative")
        self.rows = rows
        self.cols = cols
        self.chars = [[" "] * cols for _ in range(rows)]
        self.colors = [[0] * cols for _ in range(rows)]

    def put(self, y: int, x: int, char: str, color: int = 0) -> None:
        """Place one character."""
        if len(char) != 1:
            raise ValueError("put takes a single character")
        if 0 <= y < self.rows and 0 <= x < self.cols:
            self.chars[y][x] = char
            self.colors[y][x] = color

    def text(self, y: int, x: int, text: str, color: int = 0) -> None:
        """Write a string on one row, clipped at the right edge."""
        for offset, char in enumerate(text):
            self.put(y, x + offset, char, color)

    def _hline(self, y: int, x: int, length: int, color: int = 0) -> None:
        for offset in range(length):
            self.put(y, x + offset, HLINE, color)

    def _vline(self, y: int, x: int, length: int, color: int = 0) -> None:
        for offset in range(length):
            self.put(y + offset, x, VLINE, color)

    def lines(self) -> list[str]:
        """The rows of the canvas as strings."""
        return ["".join(row) for row in self.chars]


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def line_plot(
    canvas: Canvas,
    data: Sequence[float],
    num_lines: int,
    legend_left: bool,
    legends: Sequence[str],
) -> None:
    """Draw interleaved percentage series as step lines, with a legend per line.

    ``data`` holds ``num_lines`` values per column, one per line, in 0..100.
    Line ``k`` uses colour pair ``k + 1``.
    """
    if not data:
        return
    if not 1 <= num_lines <= MAX_LINES_PER_PLOT:
        raise ValueError(f"cannot plot more than {MAX_LINES_PER_PLOT} lines")
    if len(legends) < num_lines:
        raise ValueError("one legend is needed per line")
    rows = canvas.rows - 1
    if rows < 1:
        raise ValueError("canvas needs at least two rows")
    cols = canvas.cols
    increment = 100.0 / rows
    samples = list(data)

    def level(index: int) -> int:
        value = samples[index] if index < len(samples) else 0.0
        return int(rows - _round_half_away(value / increment))

    before = [level(k) for k in range(num_lines)]
    for i in range(0, max(len(samples), cols), num_lines):
        for k in range(num_lines):
            x = i + k
            now = level(x)
            color = k + 1
            if before[k] != now:
                # Row 0 is the top, so a rising value draws upwards.
                drawing_down = before[k] < now
                bottom = before[k] if drawing_down else now
                top = now if drawing_down else before[k]
                canvas.put(bottom, x, URCORNER if drawing_down else ULCORNER, color)
                canvas.put(top, x, LLCORNER if drawing_down else LRCORNER, color)
                canvas._vline(bottom + 1, x, top - bottom - 1, color)
                for j, other in enumerate(before):
                    if j == k:
                        continue
                    if other == top:
                        canvas.put(top, x, BTEE, color)
                    elif other == bottom:
                        canvas.put(bottom, x, TTEE, color)
                    elif bottom < other < top:
                        canvas.put(other, x, PLUS, color)
                    else:
                        canvas.put(other, x, HLINE, j + 1)
            else:
                canvas.put(now, x, HLINE, color)
                for j, other in enumerate(before):
                    if j != k and other != now:
                        canvas.put(other, x, HLINE, j + 1)
            before[k] = now

    for position, legend in enumerate(legends[:num_lines]):
        if position >= rows:
            break
        legend = legend[: PLOT_MAX_LEGEND_SIZE - 1]
        color = position + 1
        if legend_left:
            canvas.text(position, 0, legend[:cols], color)
        elif len(legend) <= cols:
            canvas.text(position, cols - len(legend), legend, color)
        else:
            canvas.text(position, 0, legend[: len(legend) - cols], color)


def draw_rectangle(canvas: Canvas, start_x: int, start_y: int, size_x: int, size_y: int) -> None:
    """Draw a box outline with its top-left corner at (start_x, start_y)."""
    canvas._hline(start_y, start_x + 1, size_x - 2)
    canvas._hline(start_y + size_y - 1, start_x + 1, size_x - 2)
    canvas._vline(start_y + 1, start_x, size_y - 2)
    canvas._vline(start_y + 1, start_x + size_x - 1, size_y - 2)
    canvas.put(start_y, start_x, ULCORNER)
    canvas.put(start_y, start_x + size_x - 1, URCORNER)
    canvas.put(start_y + size_y - 1, start_x, LLCORNER)
    canvas.put(start_y + size_y - 1, start_x + size_x - 1, LRCORNER)