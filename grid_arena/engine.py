"""
Rendering Engine
=================
Double-buffered terminal renderer.
"""

from dataclasses import dataclass, field
from typing import List

try:
    from blessed import Terminal
except ImportError:
    raise ImportError("'blessed' library required. Install with: pip install blessed")


@dataclass
class Cell:
    """A single cell in the render buffer."""
    char: str = ' '
    fg_color: int = 7
    bold: bool = False

    def matches(self, other: 'Cell') -> bool:
        """Check if two cells are visually identical."""
        return (
            self.char == other.char and
            self.fg_color == other.fg_color and
            self.bold == other.bold
        )

    def reset(self):
        """Reset to empty state."""
        self.char = ' '
        self.fg_color = 7
        self.bold = False


class DoubleBuffer:
    """
    Double-buffered terminal renderer.

    Writes to a back buffer, then swaps to front buffer,
    only updating cells that changed. No screen clears needed.
    """

    def __init__(self, term: Terminal):
        self.term = term
        self.width = term.width
        self.height = term.height
        self.front: List[List[Cell]] = []
        self.back: List[List[Cell]] = []
        self._init_buffers()
        self._normal = term.normal  # Cache reset sequence

    def _init_buffers(self):
        """Initialize both buffers with empty cells."""
        self.front = [
            [Cell() for _ in range(self.width)]
            for _ in range(self.height)
        ]
        self.back = [
            [Cell() for _ in range(self.width)]
            for _ in range(self.height)
        ]

    def clear_back(self):
        """Clear the back buffer by resetting cells in-place."""
        for row in self.back:
            for cell in row:
                cell.reset()

    def put(self, x: int, y: int, char: str, fg_color: int = 7, bold: bool = False):
        """Put a character in the back buffer; off-screen writes are dropped."""
        if 0 <= x < self.width and 0 <= y < self.height:
            cell = self.back[y][x]
            cell.char = char
            cell.fg_color = fg_color
            cell.bold = bold

    def put_string(self, x: int, y: int, text: str, fg_color: int = 7, bold: bool = False):
        """Put a string in the back buffer."""
        for i, char in enumerate(text):
            self.put(x + i, y, char, fg_color, bold)

    def present(self) -> str:
        """
        Swap buffers and generate output for changed cells only.
        """
        output_parts = []
        normal = self._normal

        for y in range(self.height):
            for x in range(self.width):
                back_cell = self.back[y][x]
                front_cell = self.front[y][x]

                if not back_cell.matches(front_cell):
                    output_parts.append(self.term.move_xy(x, y))
                    # Reset attributes to prevent bleed
                    output_parts.append(normal)
                    if back_cell.bold:
                        output_parts.append(self.term.bold)
                    output_parts.append(self.term.color(back_cell.fg_color))
                    output_parts.append(back_cell.char if back_cell.char else ' ')

        # Swap: back becomes the new front, old front becomes next back
        self.front, self.back = self.back, self.front

        return ''.join(output_parts)


@dataclass
class GameRenderer:
    """
    High-level renderer: frame lifecycle plus centered text helpers.
    """
    term: Terminal
    buffer: DoubleBuffer = field(init=False)

    def __post_init__(self):
        self.buffer = DoubleBuffer(self.term)

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height

    def begin_frame(self):
        """Begin rendering a new frame."""
        self.buffer.clear_back()

    def end_frame(self) -> str:
        """Finalize frame and return the terminal output for changed cells."""
        return self.buffer.present()

    def put(self, x: int, y: int, char: str, fg_color: int = 7, bold: bool = False):
        self.buffer.put(x, y, char, fg_color, bold)

    def put_string(self, x: int, y: int, text: str, fg_color: int = 7, bold: bool = False):
        self.buffer.put_string(x, y, text, fg_color, bold)

    def put_centered(self, y: int, text: str, fg_color: int = 7, bold: bool = False):
        """Put a string horizontally centered on row y."""
        x = (self.width - len(text)) // 2
        self.buffer.put_string(x, y, text, fg_color, bold)
