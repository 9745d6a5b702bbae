"""hellod — a minimal HTTP responder."""

__version__ = "0.1.0"
