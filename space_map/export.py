import logging
from typing import Any

from PyQt5.QtCore import Qt, QRectF
from PyQt5.QtGui import QImage, QPainter

from .settings import DEFAULTS
from .sky_view import SkyView
from .sky_view_2d import paint_commands

logger = logging.getLogger(__name__)


def render_to_image(sky_view: SkyView, width: int, height: int) -> QImage:
    """Paint the current frame of `sky_view` into a new `QImage`.

    The frame is rendered at the live canvas size and scaled to fit the
    image, keeping its aspect ratio, so the export shows what is on screen.
    The live view is not modified.
    """
    image = QImage(int(width), int(height), QImage.Format_ARGB32)
    image.fill(Qt.black)
    canvas_w, canvas_h = sky_view.canvas_size
    scale = min(width / canvas_w, height / canvas_h) if canvas_w > 0 and canvas_h > 0 else 1.0

    painter = QPainter(image)
    try:
        painter.translate((width - canvas_w * scale) / 2.0, (height - canvas_h * scale) / 2.0)
        painter.scale(scale, scale)
        painter.setClipRect(QRectF(0.0, 0.0, canvas_w, canvas_h))
        paint_commands(painter, sky_view.render())
    finally:
        painter.end()
    return image


def export_view_to_png(view: Any, filename: str, size: int = None) -> None:
    """Export a star map to a square PNG file.

    Parameters
    - view: a :class:`SkyView`, or a widget exposing it as ``view.sky_view``
    - filename: output PNG path
    - size: pixel size (square). If None, uses DEFAULTS['export_default_size']

    Raises RuntimeError if `view` has no star map or the file cannot be
    written.
    """
    if size is None:
        size = int(DEFAULTS.get('export_default_size', 2000))

    sky_view = view if isinstance(view, SkyView) else getattr(view, 'sky_view', None)
    if not isinstance(sky_view, SkyView):
        raise RuntimeError('Unable to capture view for export')

    image = render_to_image(sky_view, size, size)
    if not image.save(str(filename), 'PNG'):
        raise RuntimeError(f'Unable to write PNG: {filename}')
    logger.info("Exported star map to %s (%dx%d)", filename, size, size)
