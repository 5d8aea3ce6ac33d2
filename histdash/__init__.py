"""histdash: shell command history analytics."""

__version__ = "0.1.0"
