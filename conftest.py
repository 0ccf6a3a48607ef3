"""Top-level pytest configuration.

Qt must be told to render offscreen before any test module imports PySide6,
including modules collected outside the ``tests`` directory. The concrete
QApplication fixture remains in ``tests/conftest.py``.
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
