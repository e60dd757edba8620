"""
Development launcher: runs the app and restarts the process whenever a .py
file under the package changes.

    python -m sales_tracker.dev_launcher
"""
import logging
import os
import sys
import time
from pathlib import Path

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QApplication
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

_log = logging.getLogger(__name__)

PACKAGE_ROOT = Path(__file__).parent.resolve()


class Restarter(QObject):
    restart_signal = Signal()

    def __init__(self, path_to_watch: str, debounce_time: float = 1.0):
        super().__init__()
        self.path_to_watch = path_to_watch
        self.last_restart = 0.0
        self.debounce_time = debounce_time

        self.observer = Observer()
        self.event_handler = Handler(self.restart_signal)
        self.observer.schedule(self.event_handler, self.path_to_watch, recursive=True)
        self.observer.start()

    def should_restart(self, now: float) -> bool:
        return now - self.last_restart > self.debounce_time

    def stop(self):
        self.observer.stop()
        self.observer.join()


class Handler(FileSystemEventHandler):
    """Forwards .py modifications (outside caches) to the restart signal."""

    def __init__(self, restart_signal):
        self.restart_signal = restart_signal

    @staticmethod
    def is_relevant(src_path: str) -> bool:
        if not src_path.endswith(".py"):
            return False
        parts = Path(src_path).parts
        return "__pycache__" not in parts and ".git" not in parts

    def on_modified(self, event):
        if event.is_directory or not self.is_relevant(event.src_path):
            return
        _log.info("Change detected in: %s", event.src_path)
        self.restart_signal.emit()


def main():
    from .main import main as main_app
    from .utils.loggers import get_logger

    get_logger()
    app = QApplication(sys.argv)
    restarter = Restarter(path_to_watch=str(PACKAGE_ROOT))

    def trigger_restart():
        now = time.time()
        if not restarter.should_restart(now):
            return
        _log.info("Restarting application...")
        restarter.last_restart = now
        restarter.stop()
        app.quit()
        os.execv(sys.executable, [sys.executable, "-m", "sales_tracker.dev_launcher"] + sys.argv[1:])

    restarter.restart_signal.connect(trigger_restart)
    try:
        main_app()
    finally:
        restarter.stop()


if __name__ == "__main__":
    main()
