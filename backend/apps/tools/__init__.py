"""Tools module - tool-call interface for agents."""

from apps.tools.routes import router

__all__ = ["router"]
