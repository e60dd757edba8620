"""Sales, inventory and lead tracker for small shops (PySide6 desktop app)."""

__version__ = "1.0.0"
