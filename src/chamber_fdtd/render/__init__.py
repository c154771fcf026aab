"""Display helpers for chamber pressure fields."""

from chamber_fdtd.render.shading import (
    CELL_GLYPH,
    GRAY_OFFSET,
    pressure_to_gray,
    render_cells,
)

__all__ = [
    "pressure_to_gray",
    "render_cells",
    "CELL_GLYPH",
    "GRAY_OFFSET",
]
