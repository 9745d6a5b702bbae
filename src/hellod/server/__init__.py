"""HTTP responder."""

from hellod.server.responder import BindError, Responder

__all__ = ["BindError", "Responder"]
