"""Configuration loading and vault registry."""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml

from atomic_notes.constants import CONFIG_ENV_VAR, CONFIG_PATH
from atomic_notes.data_models import CardSettings, VaultConfiguration, VaultMetadata

logger = logging.getLogger(__name__)


def default_config_path() -> Path:
    """Return the configuration path, honouring ``ATOMIC_NOTES_CONFIG`` when set."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return CONFIG_PATH


def _load_card_settings(raw_cards: object) -> CardSettings:
    if raw_cards is None:
        return CardSettings()
    if not isinstance(raw_cards, dict):
        raise ValueError("The 'cards' section must be a mapping of settings")

    default_folder = raw_cards.get("default_folder", "") or ""
    if not isinstance(default_folder, str):
        raise ValueError("'cards.default_folder' must be a string")

    add_banner = raw_cards.get("add_banner", True)
    if not isinstance(add_banner, bool):
        raise ValueError("'cards.add_banner' must be true or false")

    return CardSettings(default_folder=default_folder.strip().strip("/"), add_banner=add_banner)


def load_vault_configuration(config_path: Optional[Path] = None) -> VaultConfiguration:
    """Load and validate the vault configuration file.

    Args:
        config_path: Path to the YAML configuration file. Defaults to
            ``$ATOMIC_NOTES_CONFIG`` or ``vaults.yaml`` at the project root.

    Returns:
        A fully populated :class:`VaultConfiguration` containing normalized vault
        metadata, the configured default vault name and card settings.

    Raises:
        FileNotFoundError: If the configuration file is missing.
        ValueError: If the file exists but does not provide the expected structure
            (missing default, empty mapping, invalid entries, etc.).
    """
    config_path = config_path or default_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Vault configuration file not found at {config_path}")

    raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    vaults_section = raw_config.get("vaults")
    if not isinstance(vaults_section, dict) or not vaults_section:
        raise ValueError("Vault configuration must include a non-empty 'vaults' mapping")

    processed: dict[str, VaultMetadata] = {}
    for name, entry in vaults_section.items():
        if not isinstance(entry, dict):
            raise ValueError(f"Vault '{name}' must map to a dictionary of settings")

        raw_path = entry.get("path")
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ValueError(f"Vault '{name}' is missing a valid 'path' string")

        resolved_path = Path(raw_path).expanduser().resolve(strict=False)
        description = (entry.get("description") or "").strip()

        processed[name] = VaultMetadata(
            name=name,
            path=resolved_path,
            description=description,
            exists=resolved_path.is_dir(),
        )

    default_vault = raw_config.get("default")
    if not isinstance(default_vault, str) or default_vault not in processed:
        raise ValueError("Vault configuration must specify a 'default' vault present in the mapping")

    cards = _load_card_settings(raw_config.get("cards"))
    logger.debug("Loaded %d vault(s) from %s", len(processed), config_path)
    return VaultConfiguration(default_vault=default_vault, vaults=processed, cards=cards)


@lru_cache(maxsize=1)
def get_vault_configuration() -> VaultConfiguration:
    """Load the configuration once per process."""
    return load_vault_configuration()
