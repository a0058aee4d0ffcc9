"""Render pass for the star map.

:func:`render_frame` turns a snapshot of the catalog, constellation graph,
plotted objects and viewport into an ordered list of draw commands. It does
no I/O and mutates nothing, so it can be called from tests without a
display; :mod:`space_map.sky_view_2d` and :mod:`space_map.export` execute
the commands with ``QPainter``.

Colors are ``(r, g, b, alpha)`` tuples: integer channels 0..255, float
alpha 0..1.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .catalog import CelestialPoint, ConstellationEdge, PlottedObject
from .projection import ViewportState, is_visible, project, project_many, visible_mask
from .settings import DEFAULTS

Color = Tuple[int, int, int, float]

BACKGROUND_COLOR: Color = (0, 0, 0, 1.0)
CONSTELLATION_COLOR: Color = (102, 126, 234, 0.3)
MARKER_COLOR: Color = (255, 107, 107, 1.0)  # #ff6b6b
MARKER_OUTLINE: Color = (255, 255, 255, 1.0)
MARKER_RADIUS = 8.0
CROSSHAIR_HALF = 15.0
STAR_LABEL_OFFSET = (5.0, -5.0)
MARKER_LABEL_OFFSET = (12.0, -12.0)


@dataclass(frozen=True)
class FillRect:
    x: float
    y: float
    width: float
    height: float
    color: Color


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: Color
    width: float = 1.0


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    radius: float
    fill: Color
    stroke: Optional[Color] = None
    stroke_width: float = 0.0
    opacity: float = 1.0


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    color: Color
    size: int = 10
    bold: bool = False


DrawCommand = Union[FillRect, Line, Circle, Text]


def star_size(mag: float) -> float:
    # Brighter stars (smaller mag) are larger
    return max(0.5, (6.0 - mag) * 0.8)


def star_opacity(mag: float) -> float:
    return max(0.3, 1.0 - mag / 5.0)


def star_color(mag: float) -> Color:
    # Fainter stars shift towards yellow
    blue = int(round(float(np.clip(255 - max(0.0, mag) * 40, 0, 255))))
    return (255, 255, blue, 1.0)


def _edge_commands(edges, viewport, width, height) -> List[DrawCommand]:
    cmds: List[DrawCommand] = []
    for edge in edges:
        p1 = project(edge.a.ra_hours, edge.a.dec_deg, viewport, width, height)
        p2 = project(edge.b.ra_hours, edge.b.dec_deg, viewport, width, height)
        # keep lines whose far end is off screen
        if is_visible(p1, width, height) or is_visible(p2, width, height):
            cmds.append(Line(p1.x, p1.y, p2.x, p2.y, CONSTELLATION_COLOR, 1.0))
    return cmds


def _star_commands(catalog, viewport, width, height) -> List[DrawCommand]:
    if not catalog:
        return []
    label_threshold = float(DEFAULTS['mag_label_threshold'])
    xs, ys = project_many([s.ra_hours for s in catalog], [s.dec_deg for s in catalog],
                          viewport, width, height)
    mask = visible_mask(xs, ys, width, height)

    cmds: List[DrawCommand] = []
    for star, x, y, shown in zip(catalog, xs, ys, mask):
        if not shown:
            continue
        x = float(x)
        y = float(y)
        alpha = star_opacity(star.mag)
        cmds.append(Circle(x, y, star_size(star.mag), star_color(star.mag), opacity=alpha))
        if star.mag < label_threshold and not star.is_synthetic:
            dx, dy = STAR_LABEL_OFFSET
            cmds.append(Text(x + dx, y + dy, star.name, (255, 255, 255, alpha), size=10))
    return cmds


def _plotted_commands(plotted, viewport, width, height) -> List[DrawCommand]:
    cmds: List[DrawCommand] = []
    for obj in plotted:
        pos = project(obj.ra_hours, obj.dec_deg, viewport, width, height)
        if not is_visible(pos, width, height):
            continue
        x, y = pos
        cmds.append(Circle(x, y, MARKER_RADIUS, MARKER_COLOR,
                           stroke=MARKER_OUTLINE, stroke_width=2.0))
        cmds.append(Line(x - CROSSHAIR_HALF, y, x + CROSSHAIR_HALF, y, MARKER_OUTLINE, 2.0))
        cmds.append(Line(x, y - CROSSHAIR_HALF, x, y + CROSSHAIR_HALF, MARKER_OUTLINE, 2.0))
        dx, dy = MARKER_LABEL_OFFSET
        cmds.append(Text(x + dx, y + dy, obj.name, MARKER_COLOR, size=12, bold=True))
    return cmds


def render_frame(catalog: Sequence[CelestialPoint],
                 constellations: Sequence[ConstellationEdge],
                 plotted: Sequence[PlottedObject],
                 viewport: ViewportState,
                 canvas_size: Tuple[float, float]) -> List[DrawCommand]:
    """Return the draw commands for one frame, back to front.

    Order: background fill, constellation lines (if enabled), stars with
    labels for the bright named ones, then plotted-object markers. Stars,
    lines and markers outside the visibility margin are culled; a line is
    kept when either of its ends is visible.
    """
    width, height = float(canvas_size[0]), float(canvas_size[1])
    cmds: List[DrawCommand] = [FillRect(0.0, 0.0, width, height, BACKGROUND_COLOR)]
    if viewport.show_constellations:
        cmds.extend(_edge_commands(constellations, viewport, width, height))
    cmds.extend(_star_commands(catalog, viewport, width, height))
    cmds.extend(_plotted_commands(plotted, viewport, width, height))
    return cmds
