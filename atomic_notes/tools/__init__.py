"""MCP tool definitions for Atomic Notes.

Importing this package registers every @mcp.tool() with the server.
"""

from atomic_notes.tools import vault_tools
from atomic_notes.tools import resolver_tools
from atomic_notes.tools import card_tools
from atomic_notes.tools import history_tools

__all__ = [
    "vault_tools",
    "resolver_tools",
    "card_tools",
    "history_tools",
]
