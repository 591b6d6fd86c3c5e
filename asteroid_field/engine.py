"""
Rendering Engine
=================
Double-buffered terminal renderer with a braille sub-pixel canvas for
vector shapes (circles, lines).

World coordinates are playfield units; the renderer maps them onto
braille dots, ``units_per_dot`` world units per dot.
"""

from dataclasses import dataclass, field
from typing import List, Tuple
import math

try:
    from blessed import Terminal
except ImportError:
    raise ImportError("'blessed' library required. Install with: pip install blessed")


# ANSI 256 color constants
NEON_CYAN = 51
NEON_YELLOW = 226
NEON_ORANGE = 208
NEON_RED = 196

GRAY_LIGHT = 252
GRAY_MED = 245
GRAY_DARK = 238

WHITE = 255

HUD_ROWS = 1


@dataclass
class Cell:
    """A single cell in the render buffer."""
    char: str = ' '
    fg_color: int = 7

    def matches(self, other: 'Cell') -> bool:
        return self.char == other.char and self.fg_color == other.fg_color

    def reset(self):
        self.char = ' '
        self.fg_color = 7


class DoubleBuffer:
    """
    Character grid with a front (on screen) and back (being drawn) copy.

    ``present`` emits escape sequences only for cells that changed.
    """

    def __init__(self, term: Terminal):
        self.term = term
        self.width = term.width
        self.height = term.height
        self.front: List[List[Cell]] = self._blank()
        self.back: List[List[Cell]] = self._blank()

    def _blank(self) -> List[List[Cell]]:
        return [[Cell() for _ in range(self.width)] for _ in range(self.height)]

    def resize(self, width: int, height: int):
        self.width = width
        self.height = height
        self.front = self._blank()
        self.back = self._blank()

    def clear_back(self):
        for row in self.back:
            for cell in row:
                cell.reset()

    def put(self, x: int, y: int, char: str, fg_color: int = 7):
        if 0 <= x < self.width and 0 <= y < self.height:
            cell = self.back[y][x]
            cell.char = char
            cell.fg_color = fg_color

    def put_string(self, x: int, y: int, text: str, fg_color: int = 7):
        for i, char in enumerate(text):
            self.put(x + i, y, char, fg_color)

    def present(self) -> str:
        """Swap buffers and return output for the changed cells."""
        parts = []
        normal = self.term.normal
        for y in range(self.height):
            for x in range(self.width):
                back_cell = self.back[y][x]
                if back_cell.matches(self.front[y][x]):
                    continue
                parts.append(self.term.move_xy(x, y))
                parts.append(normal)
                parts.append(self.term.color(back_cell.fg_color))
                parts.append(back_cell.char or ' ')

        self.front, self.back = self.back, self.front
        return ''.join(parts)


class BrailleCanvas:
    """
    Sub-pixel canvas using Unicode braille patterns.

    Every character cell is a 2x4 grid of dots, so shapes are drawn at
    eight times the character resolution.
    """

    # (column, row) -> bit
    DOT_BITS = {
        (0, 0): 0x01, (0, 1): 0x02, (0, 2): 0x04, (0, 3): 0x40,
        (1, 0): 0x08, (1, 1): 0x10, (1, 2): 0x20, (1, 3): 0x80,
    }
    BASE = 0x2800

    def __init__(self, char_width: int, char_height: int):
        self.char_width = char_width
        self.char_height = char_height
        self.pixel_width = char_width * 2
        self.pixel_height = char_height * 4
        self.cells: List[List[int]] = []
        self.colors: List[List[int]] = []
        self.clear()

    def clear(self):
        self.cells = [[0] * self.char_width for _ in range(self.char_height)]
        self.colors = [[WHITE] * self.char_width for _ in range(self.char_height)]

    def set_pixel(self, px: int, py: int, color: int = WHITE):
        if 0 <= px < self.pixel_width and 0 <= py < self.pixel_height:
            cx, cy = px // 2, py // 4
            self.cells[cy][cx] |= self.DOT_BITS[(px % 2, py % 4)]
            self.colors[cy][cx] = color

    def draw_line(self, x0: float, y0: float, x1: float, y1: float,
                  color: int = WHITE):
        """Bresenham line between two dot coordinates."""
        x0, y0, x1, y1 = int(round(x0)), int(round(y0)), int(round(x1)), int(round(y1))
        dx = abs(x1 - x0)
        dy = -abs(y1 - y0)
        sx = 1 if x0 < x1 else -1
        sy = 1 if y0 < y1 else -1
        err = dx + dy
        while True:
            self.set_pixel(x0, y0, color)
            if x0 == x1 and y0 == y1:
                break
            e2 = 2 * err
            if e2 >= dy:
                err += dy
                x0 += sx
            if e2 <= dx:
                err += dx
                y0 += sy

    def draw_circle(self, cx: float, cy: float, radius: float,
                    color: int = WHITE):
        """Circle outline; the step count grows with the circumference."""
        if radius < 0.5:
            self.set_pixel(int(round(cx)), int(round(cy)), color)
            return
        steps = max(8, int(2 * math.pi * radius))
        for i in range(steps):
            angle = 2 * math.pi * i / steps
            self.set_pixel(
                int(round(cx + math.cos(angle) * radius)),
                int(round(cy + math.sin(angle) * radius)),
                color
            )

    def fill_disc(self, cx: float, cy: float, radius: float,
                  color: int = WHITE):
        r = max(0, int(math.ceil(radius)))
        for oy in range(-r, r + 1):
            for ox in range(-r, r + 1):
                if ox * ox + oy * oy <= radius * radius + 0.5:
                    self.set_pixel(int(round(cx)) + ox, int(round(cy)) + oy, color)

    def get_char(self, cx: int, cy: int) -> Tuple[str, int]:
        pattern = self.cells[cy][cx]
        if pattern:
            return chr(self.BASE + pattern), self.colors[cy][cx]
        return '', WHITE

    def blit_to_buffer(self, buffer: DoubleBuffer, offset_y: int = 0):
        """Copy dots onto the buffer without overwriting text."""
        for cy in range(self.char_height):
            for cx in range(self.char_width):
                char, color = self.get_char(cx, cy)
                if not char:
                    continue
                by = cy + offset_y
                if 0 <= by < buffer.height and buffer.back[by][cx].char == ' ':
                    buffer.put(cx, by, char, color)


@dataclass
class GameRenderer:
    """
    Maps playfield units to the terminal.

    The top ``HUD_ROWS`` rows are reserved for text; the playfield uses
    the rest of the screen.
    """
    term: Terminal
    units_per_dot: float = 4.0
    buffer: DoubleBuffer = field(init=False)
    canvas: BrailleCanvas = field(init=False)
    show_fps: bool = False
    current_fps: float = 60.0

    def __post_init__(self):
        self.buffer = DoubleBuffer(self.term)
        self.canvas = BrailleCanvas(self.term.width, self.game_height)

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height

    @property
    def game_height(self) -> int:
        return self.buffer.height - HUD_ROWS

    @property
    def world_size(self) -> Tuple[float, float]:
        """Playfield size in world units that fits the terminal."""
        return (
            self.width * 2 * self.units_per_dot,
            self.game_height * 4 * self.units_per_dot,
        )

    def to_dots(self, x: float, y: float) -> Tuple[float, float]:
        return x / self.units_per_dot, y / self.units_per_dot

    def to_cell(self, x: float, y: float) -> Tuple[int, int]:
        """World point -> character cell (screen row, HUD included)."""
        dx, dy = self.to_dots(x, y)
        return int(dx // 2), int(dy // 4) + HUD_ROWS

    def resize(self, width: int, height: int):
        self.buffer.resize(width, height)
        self.canvas = BrailleCanvas(width, height - HUD_ROWS)

    def begin_frame(self):
        self.buffer.clear_back()
        self.canvas.clear()

    def end_frame(self) -> str:
        self.canvas.blit_to_buffer(self.buffer, offset_y=HUD_ROWS)
        return self.buffer.present()

    # World-space drawing -----------------------------------------------------

    def circle(self, x: float, y: float, radius: float, color: int = WHITE):
        cx, cy = self.to_dots(x, y)
        self.canvas.draw_circle(cx, cy, radius / self.units_per_dot, color)

    def disc(self, x: float, y: float, radius: float, color: int = WHITE):
        cx, cy = self.to_dots(x, y)
        self.canvas.fill_disc(cx, cy, radius / self.units_per_dot, color)

    def polygon(self, points, color: int = WHITE):
        """Closed outline through points with ``.x``/``.y``."""
        for i, start in enumerate(points):
            end = points[(i + 1) % len(points)]
            x0, y0 = self.to_dots(start.x, start.y)
            x1, y1 = self.to_dots(end.x, end.y)
            self.canvas.draw_line(x0, y0, x1, y1, color)

    # Text ---------------------------------------------------------------------

    def text(self, x: int, y: int, text: str, color: int = WHITE):
        self.buffer.put_string(x, y, text, color)

    def centered_text(self, y: int, text: str, color: int = WHITE):
        self.buffer.put_string(self.width // 2 - len(text) // 2, y, text, color)

    def draw_box(self, x: int, y: int, w: int, h: int, color: int = WHITE):
        """Bordered box with a blanked interior (covers the field behind it)."""
        for j in range(h):
            for i in range(w):
                top_or_bottom = j in (0, h - 1)
                side = i in (0, w - 1)
                if top_or_bottom and side:
                    char = '+'
                elif top_or_bottom:
                    char = '-'
                elif side:
                    char = '|'
                else:
                    char = '\u2800'  # blank braille cell, survives the blit
                self.buffer.put(x + i, y + j, char, color)
