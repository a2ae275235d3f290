"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from docvault.core.service import DocVault

VAULT_ID = 7


@pytest.fixture
def base_dir(tmp_path):
    """Directory that holds all vaults under test."""
    return tmp_path / "data" / "docvaults"


@pytest.fixture
def vault_id():
    """Vault identifier used across tests."""
    return VAULT_ID


@pytest.fixture
def docvault(base_dir):
    """DocVault service over a temporary base directory."""
    return DocVault(base_dir, copy_suffix="copy")


@pytest.fixture
def vault_root(docvault, vault_id):
    """Initialized vault root directory."""
    return docvault.init(vault_id)


@pytest.fixture
def outside_dir(tmp_path):
    """A directory outside every vault, for imports and escape checks."""
    path = tmp_path / "outside"
    path.mkdir()
    return path


@pytest.fixture
def make_files():
    """Factory that lays out files and folders under a root.

    Keys ending in ``/`` are folders; other keys are files with the given
    text content.
    """

    def _make_files(root, layout: dict[str, str]):
        for relative, content in layout.items():
            target = root / relative
            if relative.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content, encoding="utf-8")
        return root

    return _make_files


@pytest.fixture
def require_symlinks(tmp_path):
    """Skip the test when the platform cannot create symlinks."""
    probe = tmp_path / "symlink-probe"
    try:
        probe.symlink_to(tmp_path)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")
    probe.unlink()
