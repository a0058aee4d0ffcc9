"""Interactive star-map state.

:class:`SkyView` owns the viewport (zoom, pan, overlay flags), the list of
plotted search results and the pointer drag state. It knows nothing about
Qt: the widget in :mod:`space_map.sky_view_2d` forwards its events to the
``on_*`` methods and repaints when a listener is notified.

All methods are expected to run on the GUI thread.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from .catalog import (CelestialPoint, ConstellationEdge, PlottedObject,
                      build_catalog, build_constellation_graph)
from .projection import ScreenPoint, ViewportState, clamp_zoom, is_visible, project
from .render import DrawCommand, render_frame
from .settings import DEFAULTS

logger = logging.getLogger(__name__)

# Zoom applied by plot_object when jumping to a result.
PLOT_ZOOM = 2.0
WHEEL_ZOOM_OUT = 0.9
WHEEL_ZOOM_IN = 1.1


class SkyView:
    def __init__(self, catalog: Optional[Sequence[CelestialPoint]] = None,
                 constellations: Optional[Sequence[ConstellationEdge]] = None,
                 canvas_size: Optional[Tuple[float, float]] = None) -> None:
        """Create a view over `catalog`.

        When `catalog` is None the default catalog is built; when
        `constellations` is None the graph is derived from the catalog.
        """
        if catalog is None:
            catalog = build_catalog()
        self.catalog: Tuple[CelestialPoint, ...] = tuple(catalog)
        if constellations is None:
            constellations = build_constellation_graph(self.catalog)
        self.constellations: Tuple[ConstellationEdge, ...] = tuple(constellations)

        if canvas_size is None:
            canvas_size = (DEFAULTS['canvas_width'], DEFAULTS['canvas_height'])
        self.width = float(canvas_size[0])
        self.height = float(canvas_size[1])

        self.viewport = ViewportState()
        self._plotted: List[PlottedObject] = []
        self._listeners: List[Callable[[], None]] = []

        # pointer state
        self._dragging = False
        self._last_x = 0.0
        self._last_y = 0.0

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, callback: Callable[[], None]) -> None:
        """Call `callback` with no arguments after every state change."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _changed(self) -> None:
        for cb in list(self._listeners):
            cb()

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    @property
    def canvas_size(self) -> Tuple[float, float]:
        return (self.width, self.height)

    @property
    def zoom(self) -> float:
        return self.viewport.zoom

    @property
    def show_constellations(self) -> bool:
        return self.viewport.show_constellations

    @property
    def dragging(self) -> bool:
        return self._dragging

    @property
    def plotted_objects(self) -> Tuple[PlottedObject, ...]:
        return tuple(self._plotted)

    def project(self, ra_hours: float, dec_deg: float) -> ScreenPoint:
        return project(ra_hours, dec_deg, self.viewport, self.width, self.height)

    def is_visible(self, point, width: Optional[float] = None,
                   height: Optional[float] = None) -> bool:
        if width is None:
            width = self.width
        if height is None:
            height = self.height
        return is_visible(point, width, height)

    # ------------------------------------------------------------------
    # Viewport
    # ------------------------------------------------------------------

    def set_zoom(self, factor: float) -> None:
        self.viewport.zoom = clamp_zoom(factor)
        self._changed()

    def zoom_by(self, multiplier: float) -> None:
        self.viewport.zoom = clamp_zoom(self.viewport.zoom * multiplier)
        self._changed()

    def zoom_in(self) -> None:
        self.zoom_by(float(DEFAULTS['zoom_step']))

    def zoom_out(self) -> None:
        self.zoom_by(1.0 / float(DEFAULTS['zoom_step']))

    def pan_by(self, dx: float, dy: float) -> None:
        self.viewport.pan_x += dx
        self.viewport.pan_y += dy
        self._changed()

    def reset_view(self) -> None:
        self.viewport.zoom = 1.0
        self.viewport.pan_x = 0.0
        self.viewport.pan_y = 0.0
        self._changed()

    def toggle_constellations(self) -> bool:
        self.viewport.show_constellations = not self.viewport.show_constellations
        self._changed()
        return self.viewport.show_constellations

    # ------------------------------------------------------------------
    # Plotted objects
    # ------------------------------------------------------------------

    def plot_object(self, name: str, ra_hours: float, dec_deg: float,
                    kind: str = 'Object') -> PlottedObject:
        """Pin `name` on the map and jump the view onto it.

        An earlier entry with the same name is replaced. The zoom is forced
        to 2 and the pan chosen so the object lands on the canvas centre.
        """
        self._plotted = [obj for obj in self._plotted if obj.name != name]
        obj = PlottedObject(name=name, ra_hours=float(ra_hours),
                            dec_deg=float(dec_deg), kind=kind)
        self._plotted.append(obj)

        self.viewport.zoom = PLOT_ZOOM
        pos = self.project(obj.ra_hours, obj.dec_deg)
        self.viewport.pan_x += self.width / 2.0 - pos.x
        self.viewport.pan_y += self.height / 2.0 - pos.y
        logger.info("Plotted %s (%s) at RA %.3fh Dec %.3f", name, kind,
                    obj.ra_hours, obj.dec_deg)
        self._changed()
        return obj

    def clear_plotted_objects(self) -> None:
        self._plotted = []
        self._changed()

    # ------------------------------------------------------------------
    # Input events
    # ------------------------------------------------------------------

    def on_pointer_down(self, x: float, y: float) -> None:
        self._dragging = True
        self._last_x = x
        self._last_y = y

    def on_pointer_move(self, x: float, y: float) -> None:
        if not self._dragging:
            return
        dx = x - self._last_x
        dy = y - self._last_y
        self._last_x = x
        self._last_y = y
        self.pan_by(dx, dy)

    def on_pointer_up(self) -> None:
        self._dragging = False

    def on_pointer_leave(self) -> None:
        self._dragging = False

    def on_wheel(self, delta_y: float) -> None:
        """Zoom for one wheel tick; positive `delta_y` scrolls down (zoom out)."""
        self.zoom_by(WHEEL_ZOOM_OUT if delta_y > 0 else WHEEL_ZOOM_IN)

    def on_resize(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)
        self._changed()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> List[DrawCommand]:
        """Draw commands for the current state and canvas size."""
        return render_frame(self.catalog, self.constellations, self.plotted_objects,
                            self.viewport.copy(), self.canvas_size)
