"""Terminal dashboard that groups Terminal.app and Ghostty tabs by git project."""

__version__ = "0.1.0"

__all__ = ["__version__"]