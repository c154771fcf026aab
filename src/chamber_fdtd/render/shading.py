"""Pressure-to-intensity shading for chamber display.

The chamber hands out raw pressure values; how they become visual intensity
is decided here. Each cell is offset by a constant and used directly as a
grey level, so zero pressure shows as mid grey.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray
from rich.style import Style
from rich.text import Text

# Pressure offset so that a silent chamber renders as mid grey
GRAY_OFFSET = 0.5

# Glyph used for every cell; intensity is carried by the colour
CELL_GLYPH = "█"


def pressure_to_gray(
    pressure: ArrayLike, offset: float = GRAY_OFFSET
) -> NDArray[np.float64]:
    """Map pressure values to grey levels in [0, 1].

    Args:
        pressure: Pressure per cell
        offset: Constant added before clipping (default: 0.5)

    Returns:
        Array of grey levels, 0 = black, 1 = white
    """
    return np.clip(np.asarray(pressure, dtype=np.float64) + offset, 0.0, 1.0)


def _resample(values: NDArray[np.float64], width: int) -> NDArray[np.float64]:
    """Nearest-cell resampling of a field to a display width."""
    if width == len(values):
        return values
    idx = np.minimum((np.arange(width) * len(values)) // width, len(values) - 1)
    return values[idx]


def render_cells(
    pressure: ArrayLike,
    width: int | None = None,
    offset: float = GRAY_OFFSET,
) -> Text:
    """Render a pressure field as a row of shaded blocks.

    Args:
        pressure: Pressure per cell (typically chamber.cur)
        width: Number of glyphs to draw (default: one per cell)
        offset: Grey offset passed to pressure_to_gray

    Returns:
        Rich Text with one coloured glyph per displayed cell
    """
    gray = pressure_to_gray(pressure, offset=offset)
    if width is not None:
        if width < 1:
            raise ValueError(f"width must be >= 1, got {width}")
        gray = _resample(gray, width)

    text = Text()
    for level in gray:
        v = int(round(level * 255))
        text.append(CELL_GLYPH, style=Style(color=f"rgb({v},{v},{v})"))
    return text
