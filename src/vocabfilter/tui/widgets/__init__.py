"""TUI widget modules for the vocab filter interface."""

from .filter_panel import FilterPanel

__all__ = ["FilterPanel"]
