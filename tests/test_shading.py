"""Tests for terminal shading of pressure fields."""

import numpy as np
import pytest
from rich.text import Text

from chamber_fdtd import pressure_to_gray, render_cells
from chamber_fdtd.render import CELL_GLYPH


def test_pressure_to_gray_offsets_and_clips():
    gray = pressure_to_gray([0.0, 0.25, -0.5, -1.0, 2.0])
    np.testing.assert_allclose(gray, [0.5, 0.75, 0.0, 0.0, 1.0])


def test_pressure_to_gray_custom_offset():
    np.testing.assert_allclose(pressure_to_gray([0.1], offset=0.0), [0.1])


def test_render_one_glyph_per_cell():
    text = render_cells(np.zeros(5))
    assert isinstance(text, Text)
    assert text.plain == CELL_GLYPH * 5


def test_silent_cell_is_mid_gray():
    text = render_cells(np.zeros(3))
    assert text.spans[0].style.color.triplet == (128, 128, 128)


def test_extreme_cells_are_black_and_white():
    text = render_cells([-1.0, 1.0])
    assert text.spans[0].style.color.triplet == (0, 0, 0)
    assert text.spans[1].style.color.triplet == (255, 255, 255)


def test_resample_to_width():
    text = render_cells(np.linspace(-0.5, 0.5, 128), width=40)
    assert len(text.plain) == 40


def test_invalid_width():
    with pytest.raises(ValueError):
        render_cells(np.zeros(8), width=0)
