"""Module-level constants for the Atomic Notes MCP server."""

from pathlib import Path

# Configuration
CONFIG_PATH = Path(__file__).parent.parent / "vaults.yaml"
CONFIG_ENV_VAR = "ATOMIC_NOTES_CONFIG"

# Concept resolution
SIMILARITY_THRESHOLD = 0.3
CONTAINMENT_SCORE = 0.9
MAX_MATCHES = 3
WORD_SPLIT_PATTERN = r"[\s\-_]+"

# Notes
NOTE_SUFFIX = ".md"
CARD_FOLDER_SUFFIX = "-atomic"

# Logging
LOG_LEVEL = "INFO"
