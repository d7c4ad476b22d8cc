"""
renderer/hexboard.py — Hex cell layout, hit detection and drawing for Hexa.

HexLayout places up to seven flat-topped hexagons as a flower: cell 0 in
the middle, cells 1–6 around it clockwise starting at the top. The same
layout class drives both the big clickable board and the small pattern
indicator under the header; only the radius and centre differ.

Geometry is plain math so hit_test() works without a display. Drawing
functions take explicit data and write to the surface they are given.
"""

from __future__ import annotations
import math
import pygame

from settings import COLOR, HEX_GAP
from utils.color import RGBColor, darker

# Directions of the six neighbours, clockwise from the top (screen y grows down).
_NEIGHBOUR_ANGLES = (-90, -30, 30, 90, 150, 210)
MAX_CELLS = 1 + len(_NEIGHBOUR_ANGLES)

Point = tuple[float, float]


class HexLayout:
    """Pixel positions for a flower of flat-topped hexagons.

    Attributes:
        cx, cy: Centre of cell 0.
        radius: Centre-to-corner distance of each hexagon.
        gap:    Empty pixels between neighbouring cells.
        count:  Number of cells laid out.
    """

    def __init__(self, cx: float, cy: float, radius: float,
                 gap: float = HEX_GAP, count: int = MAX_CELLS) -> None:
        if not 1 <= count <= MAX_CELLS:
            raise ValueError(f"layout supports 1..{MAX_CELLS} cells, got {count}")
        self.cx = cx
        self.cy = cy
        self.radius = radius
        self.gap = gap
        self.count = count
        self._centres = self._compute_centres()

    def _compute_centres(self) -> list[Point]:
        # Flat-topped neighbours sit sqrt(3) * radius apart, plus the gap.
        step = math.sqrt(3) * self.radius + self.gap
        centres = [(self.cx, self.cy)]
        for angle in _NEIGHBOUR_ANGLES[: self.count - 1]:
            rad = math.radians(angle)
            centres.append((self.cx + step * math.cos(rad), self.cy + step * math.sin(rad)))
        return centres

    def centre(self, index: int) -> Point:
        return self._centres[index]

    def corners(self, index: int) -> list[Point]:
        """Return the six corners of cell index, clockwise from the right."""
        x, y = self._centres[index]
        return [
            (x + self.radius * math.cos(math.radians(60 * k)),
             y + self.radius * math.sin(math.radians(60 * k)))
            for k in range(6)
        ]

    def hit_test(self, px: float, py: float) -> int | None:
        """Return the index of the cell containing (px, py), or None."""
        for index in range(self.count):
            if _inside_convex(self.corners(index), px, py):
                return index
        return None


def _inside_convex(poly: list[Point], px: float, py: float) -> bool:
    # Inside when the point is on the same side of every edge.
    sign = 0
    for i, (x1, y1) in enumerate(poly):
        x2, y2 = poly[(i + 1) % len(poly)]
        cross = (x2 - x1) * (py - y1) - (y2 - y1) * (px - x1)
        if cross == 0:
            continue
        side = 1 if cross > 0 else -1
        if sign == 0:
            sign = side
        elif side != sign:
            return False
    return True


# ── Drawing ───────────────────────────────────────────────────────────────────

def draw_board(
    surface: pygame.Surface,
    layout: HexLayout,
    colors: list[RGBColor],
    selected: int | None = None,
    shaken: int | None = None,
    shake_offset: float = 0.0,
    frozen: frozenset[int] = frozenset(),
) -> None:
    """Draw every board cell.

    Args:
        surface:      Native game surface.
        layout:       Board layout.
        colors:       Fill per cell, already resolved through the theme.
        selected:     Cell to outline as a correct pick, if any.
        shaken:       Cell to draw displaced sideways, if any.
        shake_offset: Horizontal displacement of the shaken cell in pixels.
        frozen:       Cells to draw with the frozen overlay.
    """
    for index in range(layout.count):
        points = layout.corners(index)
        if index == shaken:
            points = [(x + shake_offset, y) for x, y in points]
        fill = colors[index] if index < len(colors) else COLOR["tile"]
        pygame.draw.polygon(surface, fill, points)
        if index == selected:
            pygame.draw.polygon(surface, COLOR["pass"], points, 5)
        elif index == shaken:
            pygame.draw.polygon(surface, COLOR["fail"], points, 4)
        else:
            pygame.draw.polygon(surface, darker(fill), points, 2)
        if index in frozen:
            pygame.draw.polygon(surface, COLOR["tile"], points, 3)


def draw_pattern_indicator(surface: pygame.Surface, layout: HexLayout, target: int) -> None:
    """Draw the small outline flower with the target cell filled in."""
    for index in range(layout.count):
        points = layout.corners(index)
        if index == target:
            pygame.draw.polygon(surface, COLOR["highlight"], points)
            pygame.draw.polygon(surface, COLOR["highlight"], points, 2)
        else:
            pygame.draw.polygon(surface, COLOR["outline"], points, 2)
