# Nonogram/render.py
from __future__ import annotations
import cv2
import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple

from .grid import FILLED, UNKNOWN, Grid

# --------------------------- Config ---------------------------

@dataclass
class RenderConfig:
    cell_size: int = 20               # px per cell
    margin: int = 10                  # px around the board
    major_every: int = 5              # heavier grid line every N cells

    # BGR colours
    filled_color: Tuple[int, int, int] = (40, 40, 40)
    blank_color: Tuple[int, int, int] = (255, 255, 255)
    unknown_color: Tuple[int, int, int] = (200, 200, 200)
    line_color: Tuple[int, int, int] = (150, 150, 150)
    major_line_color: Tuple[int, int, int] = (60, 60, 60)
    background: Tuple[int, int, int] = (255, 255, 255)

# --------------------------- Drawing ---------------------------

def _cell_states(grid: Grid) -> np.ndarray:
    """Grid contents as int8 UNKNOWN/BLANK/FILLED whatever the grid dtype."""
    data = grid.as_array()
    if data.dtype == bool:
        return data.astype(np.int8)
    return data.astype(np.int8, copy=False)


def draw_grid(grid: Grid, config: Optional[RenderConfig] = None) -> np.ndarray:
    """
    Draw a board as a BGR image.

    Filled cells are solid, blank cells empty, unknown cells gray with a
    diagonal hatch. Thin lines separate cells, heavier lines every
    `major_every` cells.
    """
    cfg = config or RenderConfig()
    cs, m = cfg.cell_size, cfg.margin
    states = _cell_states(grid)
    h_px = m * 2 + cs * grid.height
    w_px = m * 2 + cs * grid.width

    img = np.full((h_px, w_px, 3), cfg.background, dtype=np.uint8)

    for y in range(grid.height):
        for x in range(grid.width):
            x0, y0 = m + x * cs, m + y * cs
            x1, y1 = x0 + cs, y0 + cs
            state = states[y, x]
            if state == FILLED:
                color = cfg.filled_color
            elif state == UNKNOWN:
                color = cfg.unknown_color
            else:
                color = cfg.blank_color
            cv2.rectangle(img, (x0, y0), (x1, y1), color, -1)
            if state == UNKNOWN:
                cv2.line(img, (x0, y1), (x1, y0), cfg.line_color, 1)

    # thin lines first so the major lines stay on top
    for major in (False, True):
        color = cfg.major_line_color if major else cfg.line_color
        thickness = 2 if major else 1
        for x in range(grid.width + 1):
            is_major = x % cfg.major_every == 0 or x == grid.width
            if is_major == major:
                px = m + x * cs
                cv2.line(img, (px, m), (px, m + cs * grid.height), color, thickness)
        for y in range(grid.height + 1):
            is_major = y % cfg.major_every == 0 or y == grid.height
            if is_major == major:
                py = m + y * cs
                cv2.line(img, (m, py), (m + cs * grid.width, py), color, thickness)

    return img


def save_grid_image(grid: Grid, output_path: str, config: Optional[RenderConfig] = None) -> np.ndarray:
    """Draw the board and write it with cv2.imwrite; returns the image."""
    img = draw_grid(grid, config)
    if not cv2.imwrite(str(output_path), img):
        raise IOError(f"Failed to write image: {output_path}")
    return img
