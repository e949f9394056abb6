"""
gui — Qt glue for running contact-book store calls off the UI thread.

Public API
──────────
StoreWorker — QObject that runs one store call and reports via signals
"""

from contact_book.gui.worker import StoreWorker

__all__ = ["StoreWorker"]
