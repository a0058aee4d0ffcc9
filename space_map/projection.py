"""Sky projection and viewport math.

Pure functions shared by the interactive view, the render pass and the
PNG export. Nothing here keeps state; every call takes the viewport and
canvas size it should use.
"""

from dataclasses import dataclass, replace
from typing import NamedTuple

import numpy as np

MIN_ZOOM = 0.5
MAX_ZOOM = 5.0
# Pixels outside the canvas that still count as on screen.
VISIBILITY_MARGIN = 50.0
# Fraction of the canvas width covered by a unit circle at zoom 1.
PROJECTION_SCALE = 0.4


class ScreenPoint(NamedTuple):
    x: float
    y: float


@dataclass
class ViewportState:
    """Zoom, pan offset and overlay flags of a star-map view.

    Attributes
    - zoom: Scale factor, always within [MIN_ZOOM, MAX_ZOOM].
    - pan_x, pan_y: Pixel offset of the projection centre.
    - show_constellations: Draw constellation lines when true.
    """

    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    show_constellations: bool = True

    def copy(self) -> 'ViewportState':
        return replace(self)


def clamp_zoom(zoom: float) -> float:
    return float(np.clip(zoom, MIN_ZOOM, MAX_ZOOM))


def project(ra_hours: float, dec_deg: float, viewport: ViewportState,
            width: float, height: float) -> ScreenPoint:
    """Map RA/Dec onto canvas pixels.

    The projection centre is the canvas centre shifted by the viewport pan.
    RA 12h points straight up from it and 0h straight down; declination only
    shrinks the radius (``cos(dec)``), so both celestial poles collapse onto
    the centre itself.
    """
    ra_rad = np.radians(ra_hours * 15.0 - 180.0)
    cos_dec = np.cos(np.radians(dec_deg))
    scale = width * viewport.zoom * PROJECTION_SCALE
    x = width / 2.0 + viewport.pan_x + np.sin(ra_rad) * cos_dec * scale
    y = height / 2.0 + viewport.pan_y - np.cos(ra_rad) * cos_dec * scale
    return ScreenPoint(float(x), float(y))


def project_many(ra_hours, dec_deg, viewport: ViewportState,
                 width: float, height: float):
    """Vectorised :func:`project`. Returns ``(xs, ys)`` numpy arrays."""
    ra_rad = np.radians(np.asarray(ra_hours, dtype=float) * 15.0 - 180.0)
    cos_dec = np.cos(np.radians(np.asarray(dec_deg, dtype=float)))
    scale = width * viewport.zoom * PROJECTION_SCALE
    xs = width / 2.0 + viewport.pan_x + np.sin(ra_rad) * cos_dec * scale
    ys = height / 2.0 + viewport.pan_y - np.cos(ra_rad) * cos_dec * scale
    return xs, ys


def is_visible(point, width: float, height: float) -> bool:
    """True if `point` lies on the canvas or within the margin around it."""
    x, y = point
    return (-VISIBILITY_MARGIN < x < width + VISIBILITY_MARGIN
            and -VISIBILITY_MARGIN < y < height + VISIBILITY_MARGIN)


def visible_mask(xs, ys, width: float, height: float):
    """Vectorised :func:`is_visible` over coordinate arrays."""
    xs = np.asarray(xs)
    ys = np.asarray(ys)
    return ((xs > -VISIBILITY_MARGIN) & (xs < width + VISIBILITY_MARGIN)
            & (ys > -VISIBILITY_MARGIN) & (ys < height + VISIBILITY_MARGIN))
