import pytest
from pathlib import Path

from atomic_notes.core.vault_storage import VaultStorage
from atomic_notes.data_models import VaultMetadata


@pytest.fixture
def vault_path(tmp_path) -> Path:
    path = tmp_path / "vault"
    path.mkdir()
    return path


@pytest.fixture
def storage(vault_path) -> VaultStorage:
    return VaultStorage(vault_path)


@pytest.fixture
def vault(vault_path) -> VaultMetadata:
    return VaultMetadata(name="test", path=vault_path, description="Test vault", exists=True)


def write_note(root: Path, relative: str, content: str = "") -> Path:
    """Create ``relative`` under ``root`` with ``content``, making folders as needed."""
    note_path = root / relative
    note_path.parent.mkdir(parents=True, exist_ok=True)
    note_path.write_text(content, encoding="utf-8")
    return note_path
