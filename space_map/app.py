"""Application entrypoint for Space Map Explorer.

Provides a `run()` function used by the console script and `python -m`.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

from PyQt5 import QtWidgets

from .main_window import MainWindow
from .settings import DEFAULTS

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def configure_logging(level: Optional[str] = None) -> None:
    """Install a stderr handler on the root logger.

    `level` defaults to DEFAULTS['log_level'] (overridable with the
    SPACE_MAP_LOG_LEVEL environment variable).
    """
    if level is None:
        level = DEFAULTS.get('log_level', 'INFO')
    logging.basicConfig(level=str(level).upper(), format=LOG_FORMAT)


def run(argv: Sequence[str] | None = None) -> int:
    """Run the Space Map Qt application.

    If `argv` is None, `sys.argv` will be used. Returns the process exit code.
    """
    args = sys.argv if argv is None else list(argv)
    configure_logging()
    # Create QApplication if not already present
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication(args)

    w = MainWindow()
    w.show()
    return app.exec_()


if __name__ == '__main__':
    raise SystemExit(run())
