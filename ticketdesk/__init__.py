"""In-memory ticket tracking service exposed over HTTP."""

__version__ = "0.1.0"
