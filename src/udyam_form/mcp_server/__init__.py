"""
MCP Server module for the Udyam form backend.

Provides Model Context Protocol server implementation
with stdio and SSE transport support.
"""

from udyam_form.mcp_server.server import create_mcp_server, dispatch_tool, run_mcp_server
from udyam_form.mcp_server.tools import get_mcp_tools

__all__ = [
    "create_mcp_server",
    "dispatch_tool",
    "run_mcp_server",
    "get_mcp_tools",
]
