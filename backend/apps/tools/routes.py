"""Tool routes - registers all tool endpoints."""

from fastapi import APIRouter

from apps.tools.handlers import call_tool, list_tools
from apps.tools.handlers.list_tools import ToolListResponse

router = APIRouter(prefix="/tools", tags=["Tools"])

# GET /tools - List tools
router.get("", response_model=ToolListResponse)(list_tools)

# POST /tools/call - Call a tool
router.post("/call")(call_tool)
