import os
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt5 import QtWidgets, sip
from PyQt5.QtCore import QEvent, QPointF, Qt

from PyQt5.QtGui import QMouseEvent

from space_map.catalog import build_catalog
from space_map.main_window import MainWindow, TOGGLE_OFF_TEXT, TOGGLE_ON_TEXT
from space_map.sky_view import SkyView
from space_map.sky_view_2d import SkyView2D


def _app():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


def _mouse(kind, x, y, button=Qt.LeftButton):
    buttons = Qt.NoButton if kind == QEvent.MouseButtonRelease else Qt.LeftButton
    return QMouseEvent(kind, QPointF(x, y), button, buttons, Qt.NoModifier)


class TestSkyView2D(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = _app()

    def setUp(self):
        self.view = SkyView(build_catalog(background_count=20, seed=4))
        self.widget = SkyView2D(self.view)

    def tearDown(self):
        self.widget.close()
        self.widget.deleteLater()

    def test_resize_reaches_view(self):
        self.widget.resize(640, 360)
        self.widget.show()
        self.app.processEvents()
        self.assertEqual(self.view.canvas_size, (640.0, 360.0))

    def test_drag_pans_and_changes_cursor(self):
        self.widget.mousePressEvent(_mouse(QEvent.MouseButtonPress, 50, 50))
        self.assertTrue(self.view.dragging)
        self.assertEqual(self.widget.cursor().shape(), Qt.ClosedHandCursor)
        self.widget.mouseMoveEvent(_mouse(QEvent.MouseMove, 80, 40, Qt.NoButton))
        self.widget.mouseReleaseEvent(_mouse(QEvent.MouseButtonRelease, 80, 40))
        self.assertFalse(self.view.dragging)
        self.assertEqual(self.widget.cursor().shape(), Qt.OpenHandCursor)
        self.assertEqual((self.view.viewport.pan_x, self.view.viewport.pan_y), (30.0, -10.0))

    def test_right_button_does_not_drag(self):
        self.widget.mousePressEvent(_mouse(QEvent.MouseButtonPress, 50, 50, Qt.RightButton))
        self.assertFalse(self.view.dragging)

    def test_leave_stops_drag(self):
        self.widget.mousePressEvent(_mouse(QEvent.MouseButtonPress, 5, 5))
        self.widget.leaveEvent(QEvent(QEvent.Leave))
        self.assertFalse(self.view.dragging)

    def test_grab_paints_without_error(self):
        self.widget.resize(300, 200)
        self.view.plot_object('Vega', 18.62, 38.8, 'Star')
        pm = self.widget.grab()
        self.assertFalse(pm.isNull())

    def test_default_view_is_created(self):
        widget = SkyView2D()
        self.assertIsInstance(widget.sky_view, SkyView)
        widget.deleteLater()

    def test_deleted_widget_stops_listening(self):
        view = SkyView(build_catalog(background_count=5, seed=1))
        widget = SkyView2D(view)
        sip.delete(widget)
        view.plot_object('Vega', 18.62, 38.8, 'Star')
        view.zoom_by(1.1)
        self.assertEqual([p.name for p in view.plotted_objects], ['Vega'])
        self.assertAlmostEqual(view.zoom, 2.2)
        self.assertEqual(view._listeners, [])


class TestMainWindow(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = _app()

    def setUp(self):
        self.win = MainWindow(SkyView(build_catalog(background_count=20, seed=9)))
        self.view = self.win.sky_view

    def tearDown(self):
        self.win.close()
        self.win.deleteLater()

    def test_search_plots_best_match(self):
        self.win.search_edit.setText('vega')
        self.win.perform_search()
        self.assertEqual([o.name for o in self.view.plotted_objects], ['Vega'])
        self.assertEqual(self.view.zoom, 2.0)
        pt = self.view.project(18.62, 38.8)
        w, h = self.view.canvas_size
        self.assertAlmostEqual(pt.x, w / 2, places=6)
        self.assertAlmostEqual(pt.y, h / 2, places=6)
        self.assertIn('Vega', self.win.statusBar().currentMessage())

    def test_empty_search_reports_error(self):
        self.win.search_edit.setText('  ')
        self.win.perform_search()
        self.assertEqual(self.view.plotted_objects, ())
        self.assertIn('enter', self.win.statusBar().currentMessage())

    def test_unknown_search_reports_no_results(self):
        self.win.search_edit.setText('qqqqqqqqqqqqqqqqqqqq')
        self.win.perform_search()
        self.assertIn('Could not find', self.win.statusBar().currentMessage())

    def test_toggle_button_text(self):
        self.assertEqual(self.win.toggle_const_btn.text(), TOGGLE_ON_TEXT)
        self.win.toggle_const_btn.click()
        self.assertFalse(self.view.show_constellations)
        self.assertEqual(self.win.toggle_const_btn.text(), TOGGLE_OFF_TEXT)
        self.win.toggle_const_btn.click()
        self.assertEqual(self.win.toggle_const_btn.text(), TOGGLE_ON_TEXT)

    def test_zoom_reset_and_clear_buttons(self):
        self.win.zoom_in_btn.click()
        self.assertAlmostEqual(self.view.zoom, 1.2)
        self.win.zoom_out_btn.click()
        self.win.zoom_out_btn.click()
        self.assertAlmostEqual(self.view.zoom, 1 / 1.2)
        self.view.plot_object('X', 1.0, 1.0)
        self.win.clear_btn.click()
        self.assertEqual(self.view.plotted_objects, ())
        self.win.reset_btn.click()
        self.assertEqual(self.view.zoom, 1.0)
        self.assertEqual((self.view.viewport.pan_x, self.view.viewport.pan_y), (0.0, 0.0))


if __name__ == '__main__':
    unittest.main()
