"""Tests for the DocVault service object and its default instance."""

import pytest

import docvault.core.config as config
from docvault.core import DocVault as LazyDocVault
from docvault.core.service import DocVault, get_docvault, set_docvault


@pytest.fixture(autouse=True)
def reset_default():
    """Clear the default instance around each test."""
    set_docvault(None)
    yield
    set_docvault(None)


class TestDefaultInstance:
    """Tests for get_docvault / set_docvault."""

    def test_default_uses_config(self, monkeypatch, tmp_path):
        """The default instance is built from configuration."""
        monkeypatch.setattr(config, "DOCVAULTS_DIR", tmp_path / "vaults")
        monkeypatch.setattr(config, "COPY_SUFFIX", "kopie")

        docvault = get_docvault()

        assert docvault.base_dir == tmp_path / "vaults"
        assert docvault.copy_suffix == "kopie"

    def test_default_is_cached(self, monkeypatch, tmp_path):
        """Repeated calls return the same instance."""
        monkeypatch.setattr(config, "DOCVAULTS_DIR", tmp_path)

        assert get_docvault() is get_docvault()

    def test_set_docvault_overrides(self, docvault):
        """An injected instance is returned as the default."""
        set_docvault(docvault)

        assert get_docvault() is docvault


class TestDocVault:
    """Tests for DocVault construction."""

    def test_core_package_exports_service(self):
        """DocVault is importable from the core package."""
        assert LazyDocVault is DocVault

    def test_vaults_are_isolated(self, docvault):
        """Different vault ids never see each other's files."""
        docvault.write_text(1, "/a.md", "one")
        docvault.write_text(2, "/a.md", "two")

        assert docvault.read_text(1, "/a.md") == "one"
        assert docvault.read_text(2, "/a.md") == "two"
        assert [n.path for n in docvault.scan(1)] == ["/.attachments", "/a.md"]

    def test_repr(self, docvault, base_dir):
        """repr names the base directory."""
        assert str(base_dir) in repr(docvault)
