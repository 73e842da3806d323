"""taskboard: single-user task tracking with derived analytics."""

__version__ = "0.1.0"
