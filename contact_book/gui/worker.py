"""
StoreWorker — runs one blocking PersonCache / PersonStore call in a background thread.

Usage (presentation layer)::

    self._thread = QThread()
    self._worker = StoreWorker(functools.partial(cache.add, *fields))
    self._worker.moveToThread(self._thread)
    self._thread.started.connect(self._worker.run)
    self._worker.finished.connect(self._thread.quit)
    self._worker.failed.connect(self._thread.quit)
    self._worker.finished.connect(self._on_person_added)
    self._worker.failed.connect(self._show_error)
    self._thread.start()

Signals
───────
finished(object) — the call's return value (e.g. the new PersonRecord)
failed(str)      — human-readable error message
"""

import logging
from typing import Any, Callable

from PyQt6.QtCore import QObject, pyqtSignal

__all__ = ["StoreWorker"]

logger = logging.getLogger(__name__)


class StoreWorker(QObject):
    """
    Wraps a zero-argument store call for execution in a QThread.

    Only one worker should be in flight per PersonCache; the cache itself
    does no locking.
    """

    finished = pyqtSignal(object)  # return value of the wrapped call
    failed   = pyqtSignal(str)     # error message

    def __init__(self, call: Callable[[], Any]) -> None:
        super().__init__()
        self._call = call

    def run(self) -> None:
        """Entry point — connect QThread.started to this slot."""
        try:
            result = self._call()
        except Exception as exc:  # noqa: BLE001
            logger.exception("StoreWorker.run() failed")
            self.failed.emit(str(exc))
            return
        self.finished.emit(result)
