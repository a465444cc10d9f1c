"""Atomic Notes MCP Server

Resolves free-text concept names against the notes of an Obsidian vault and
keeps an undo/redo history of the files written for atomic cards.
"""

from atomic_notes.config import get_vault_configuration, load_vault_configuration
from atomic_notes.data_models import VaultMetadata, VaultConfiguration
from atomic_notes.session import resolve_vault, set_active_vault, get_active_vault
from atomic_notes.server import mcp, run_server

# Import tools to register them with the MCP server
from atomic_notes import tools  # noqa: F401

__version__ = "0.3.0"
__all__ = [
    "get_vault_configuration",
    "load_vault_configuration",
    "VaultMetadata",
    "VaultConfiguration",
    "resolve_vault",
    "set_active_vault",
    "get_active_vault",
    "mcp",
    "run_server",
]
