"""Tool handlers."""

from apps.tools.handlers.call_tool import call_tool
from apps.tools.handlers.list_tools import list_tools

__all__ = [
    "call_tool",
    "list_tools",
]
