"""Base Pydantic models for MCP tool input validation.

Base Models:
- VaultScopedInput: Optional vault selection shared by every tool
- BaseNoteInput: Adds note identifier validation for note-scoped operations
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field, field_validator


def clean_note_identifier(value: str, label: str = "Note title") -> str:
    """Strip, reject traversal or absolute paths, and drop a trailing ``.md``."""
    cleaned = value.strip()

    if not cleaned:
        raise ValueError(
            f"{label} cannot be empty. "
            "Provide a valid note identifier like 'Reading/Design of Everyday Things'."
        )

    parts = cleaned.split("/")
    if any(part in {".", ".."} for part in parts):
        raise ValueError(
            f"{label} cannot contain '.' or '..' path segments. "
            f"Invalid value: '{cleaned}'"
        )

    if cleaned.startswith("/"):
        raise ValueError(
            f"{label} must be a relative path within the vault. "
            f"Invalid value: '{cleaned}'"
        )

    if cleaned.lower().endswith(".md"):
        cleaned = cleaned[:-3]

    if not cleaned or cleaned.endswith("/"):
        raise ValueError(f"{label} must name a note, not just '.md' or a folder.")

    return cleaned


class VaultScopedInput(BaseModel):
    """Base model for any tool that operates on a vault."""

    vault: Optional[str] = Field(
        None,
        description=(
            "Vault name (omit to use active vault). "
            "Use list_vaults() to discover available vaults."
        )
    )

    @field_validator('vault')
    @classmethod
    def validate_vault(cls, v: Optional[str]) -> Optional[str]:
        """Reject blank vault names; ``None`` means the active vault."""
        if v is not None and not v.strip():
            raise ValueError(
                "Vault name cannot be empty. "
                "Either omit the vault parameter to use the active vault, "
                "or provide a valid vault name from list_vaults()."
            )

        return v.strip() if v else None


class BaseNoteInput(VaultScopedInput):
    """Base model for operations on a single note."""

    title: str = Field(
        min_length=1,
        description=(
            "Note identifier (path without .md extension). "
            "Examples: 'Reading/Design of Everyday Things', 'Inbox/Meeting'. "
            "Forward slashes for folders, case-sensitive."
        ),
        examples=["Reading/Design of Everyday Things", "README"]
    )

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        return clean_note_identifier(v)
