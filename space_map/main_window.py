from PyQt5 import QtWidgets, QtCore
from PyQt5.QtGui import QKeySequence
from PyQt5.QtWidgets import QLineEdit, QPushButton, QHBoxLayout, QVBoxLayout, QWidget, QFileDialog

import logging

from .export import export_view_to_png
from .search import plot_search_results, search_catalog
from .settings import DEFAULTS
from .sky_view import SkyView
from .sky_view_2d import SkyView2D

logger = logging.getLogger(__name__)

TOGGLE_ON_TEXT = 'Toggle Constellations'
TOGGLE_OFF_TEXT = 'Show Constellations'


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, sky_view: SkyView = None):
        super().__init__()
        self.setWindowTitle('Space Map Explorer')
        self.resize(900, 700)
        self.setStyleSheet("""
            QMainWindow { background: #05070a; color: #d0d0d0; }
            QWidget { background: #0a0d12; color: #d0d0d0; }
            QPushButton, QLineEdit {
                background: #101218; color: #d0d0d0; border: 1px solid #1c2028; padding: 4px;
            }
            QStatusBar { color: #a0a0d0; }
        """)

        self.map_widget = SkyView2D(sky_view)
        self.map_widget.setMinimumHeight(int(DEFAULTS['canvas_height']))
        self.sky_view = self.map_widget.sky_view

        # Search row
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText('Search a star, e.g. Vega, Sirius, Betelgeuse')
        self.search_btn = QPushButton('Search')
        search_row = QHBoxLayout()
        search_row.addWidget(self.search_edit)
        search_row.addWidget(self.search_btn)

        # Map controls
        self.reset_btn = QPushButton('Reset View')
        self.toggle_const_btn = QPushButton(
            TOGGLE_ON_TEXT if self.sky_view.show_constellations else TOGGLE_OFF_TEXT)
        self.zoom_in_btn = QPushButton('Zoom In')
        self.zoom_out_btn = QPushButton('Zoom Out')
        self.clear_btn = QPushButton('Clear Plots')
        self.export_btn = QPushButton('Export PNG')
        controls = QHBoxLayout()
        for btn in (self.reset_btn, self.toggle_const_btn, self.zoom_in_btn,
                    self.zoom_out_btn, self.clear_btn, self.export_btn):
            controls.addWidget(btn)
        controls.addStretch(1)

        central = QWidget()
        v = QVBoxLayout()
        v.addLayout(search_row)
        v.addLayout(controls)
        v.addWidget(self.map_widget, 1)
        central.setLayout(v)
        self.setCentralWidget(central)

        # Connections
        self.search_btn.clicked.connect(self.perform_search)
        self.search_edit.returnPressed.connect(self.perform_search)
        self.reset_btn.clicked.connect(self.sky_view.reset_view)
        self.toggle_const_btn.clicked.connect(self.toggle_constellations)
        self.zoom_in_btn.clicked.connect(self.sky_view.zoom_in)
        self.zoom_out_btn.clicked.connect(self.sky_view.zoom_out)
        self.clear_btn.clicked.connect(self.sky_view.clear_plotted_objects)
        self.export_btn.clicked.connect(self.export_png)

        self._create_shortcuts()
        self.statusBar().showMessage('Drag to pan, scroll to zoom')

    def _create_shortcuts(self):
        bindings = {
            '+': self.sky_view.zoom_in,
            '=': self.sky_view.zoom_in,
            '-': self.sky_view.zoom_out,
            'R': self.sky_view.reset_view,
            'C': self.toggle_constellations,
        }
        self._shortcuts = []
        for key, slot in bindings.items():
            # only while the map has focus, so typing in the search box is unaffected
            sc = QtWidgets.QShortcut(QKeySequence(key), self.map_widget)
            sc.setContext(QtCore.Qt.WidgetShortcut)
            sc.activated.connect(slot)
            self._shortcuts.append(sc)

    def toggle_constellations(self):
        shown = self.sky_view.toggle_constellations()
        self.toggle_const_btn.setText(TOGGLE_ON_TEXT if shown else TOGGLE_OFF_TEXT)

    def perform_search(self):
        query = self.search_edit.text()
        try:
            results = search_catalog(self.sky_view.catalog, query)
        except ValueError as e:
            self.statusBar().showMessage(str(e))
            return
        if not results:
            self.statusBar().showMessage(f'Could not find "{query.strip()}" in the star catalog.')
            return
        best = results[0]
        plot_search_results(self.sky_view, [best])
        others = ', '.join(r.name for r in results[1:])
        msg = f'{best.name} ({best.kind}, {best.source})'
        if others:
            msg += f' - other matches: {others}'
        self.statusBar().showMessage(msg)

    def export_png(self):
        path, _ = QFileDialog.getSaveFileName(self, 'Export PNG', 'star_map.png', 'PNG Images (*.png)')
        if not path:
            return
        try:
            export_view_to_png(self.sky_view, path)
        except RuntimeError as e:
            logger.error("Export failed: %s", e)
            QtWidgets.QMessageBox.warning(self, 'Export failed', str(e))
            return
        self.statusBar().showMessage(f'Exported {path}')
