from PyQt5 import QtWidgets, sip
from PyQt5.QtCore import Qt, QPointF, QRectF
from PyQt5.QtGui import QFont, QPainter
import pyqtgraph as pg

from .render import Circle, FillRect, Line, Text
from .sky_view import SkyView


def _qcolor(color):
    r, g, b, a = color
    return pg.mkColor((int(r), int(g), int(b), int(round(a * 255))))


def paint_commands(painter: QPainter, commands) -> None:
    """Execute render commands on an active `QPainter`."""
    painter.setRenderHint(QPainter.Antialiasing, True)
    painter.setRenderHint(QPainter.TextAntialiasing, True)
    for cmd in commands:
        if isinstance(cmd, FillRect):
            painter.fillRect(QRectF(cmd.x, cmd.y, cmd.width, cmd.height), _qcolor(cmd.color))
        elif isinstance(cmd, Line):
            painter.setPen(pg.mkPen(_qcolor(cmd.color), width=cmd.width))
            painter.drawLine(QPointF(cmd.x1, cmd.y1), QPointF(cmd.x2, cmd.y2))
        elif isinstance(cmd, Circle):
            painter.save()
            painter.setOpacity(cmd.opacity)
            painter.setBrush(pg.mkBrush(_qcolor(cmd.fill)))
            if cmd.stroke is None:
                painter.setPen(Qt.NoPen)
            else:
                painter.setPen(pg.mkPen(_qcolor(cmd.stroke), width=cmd.stroke_width))
            painter.drawEllipse(QPointF(cmd.x, cmd.y), cmd.radius, cmd.radius)
            painter.restore()
        elif isinstance(cmd, Text):
            font = QFont('sans-serif')
            font.setPixelSize(int(cmd.size))
            font.setBold(cmd.bold)
            painter.setFont(font)
            painter.setPen(pg.mkPen(_qcolor(cmd.color)))
            painter.drawText(QPointF(cmd.x, cmd.y), cmd.text)


class SkyView2D(QtWidgets.QWidget):
    """Star-map widget.

    Thin adapter around :class:`SkyView`: mouse, wheel and resize events are
    forwarded to the view's input interface, and every paint executes the
    view's current draw commands.

    Drag to pan, scroll to zoom.
    """
    def __init__(self, sky_view: SkyView = None, parent=None):
        super().__init__(parent)
        self.sky_view = sky_view if sky_view is not None else SkyView()
        view, listener = self.sky_view, self._view_changed
        view.add_listener(listener)
        self.destroyed.connect(lambda *_: view.remove_listener(listener))
        self.setMinimumSize(320, 240)
        self.setCursor(Qt.OpenHandCursor)
        self.setFocusPolicy(Qt.StrongFocus)
        self.sky_view.on_resize(self.width(), self.height())

    def _view_changed(self):
        # the C++ widget can go away while the view is still shared
        if sip.isdeleted(self):
            self.sky_view.remove_listener(self._view_changed)
            return
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            paint_commands(painter, self.sky_view.render())
        finally:
            painter.end()

    def resizeEvent(self, event):
        size = event.size()
        self.sky_view.on_resize(size.width(), size.height())
        super().resizeEvent(event)

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.sky_view.on_pointer_down(event.x(), event.y())
            self.setCursor(Qt.ClosedHandCursor)
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        self.sky_view.on_pointer_move(event.x(), event.y())
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.sky_view.on_pointer_up()
            self.setCursor(Qt.OpenHandCursor)
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event):
        self.sky_view.on_pointer_leave()
        self.setCursor(Qt.OpenHandCursor)
        super().leaveEvent(event)

    def wheelEvent(self, event):
        delta = event.angleDelta().y()
        if delta == 0:
            # horizontal scrolling
            event.ignore()
            return
        # Qt reports wheel-up as positive; SkyView expects scroll-down positive
        self.sky_view.on_wheel(-delta)
        event.accept()

    def export_png(self, path, width: int = 2000, height: int = 2000):
        """Export the current map to a PNG at the requested resolution."""
        from .export import render_to_image
        image = render_to_image(self.sky_view, width, height)
        if not image.save(str(path), 'PNG'):
            raise RuntimeError(f'Unable to write PNG: {path}')
