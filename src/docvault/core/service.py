"""DocVault - the per-project document vault service.

DocVault is the single object interfaces talk to. It owns a path resolver
bound to an explicit base directory and exposes every vault operation keyed
by an opaque integer vault id.
"""

import logging
from collections.abc import Callable
from pathlib import Path
from threading import Lock

from docvault.core.types import FileDescriptor, TreeNode
from docvault.vault import attachments, explorer, operations
from docvault.vault.layout import PathResolver
from docvault.vault.scanner import scan_tree

logger = logging.getLogger(__name__)


class DocVault:
    """Filesystem-backed document vaults under one base directory.

    Example:
        docvault = DocVault("~/.docvault/data/docvaults")
        docvault.init(7)
        docvault.write_text(7, "/notes/today.md", "# Today")
        tree = docvault.scan(7)

    No locking is done here: the filesystem is the source of truth, and
    concurrent calls on the same path race at the OS level.
    """

    def __init__(
        self,
        base_dir: Path | str,
        copy_suffix: str = "copy",
        launcher: Callable[..., object] | None = None,
    ):
        """Initialize the service.

        Args:
            base_dir: Directory holding one folder per vault
            copy_suffix: Word used when a copy needs a new name
            launcher: Process starter for the file browser (defaults to Popen)
        """
        self.resolver = PathResolver(base_dir)
        self.copy_suffix = copy_suffix
        self._launcher = launcher

    @property
    def base_dir(self) -> Path:
        return self.resolver.base_dir

    # --- Paths ---

    def vault_root(self, vault_id: int) -> Path:
        """Absolute root directory of a vault."""
        return self.resolver.vault_root(vault_id)

    def resolve(self, vault_id: int, path: str) -> Path:
        """Absolute, sandboxed path of a vault entry."""
        return self.resolver.resolve(vault_id, path)

    def absolute_path(self, vault_id: int, path: str) -> str:
        """Absolute path of a vault entry as a string, for external tooling."""
        return str(self.resolver.resolve(vault_id, path))

    def attachments_path(self, vault_id: int) -> Path:
        """Absolute path of the vault's attachments folder."""
        return self.resolver.attachments_path(vault_id)

    # --- Tree ---

    def scan(self, vault_id: int) -> list[TreeNode]:
        """Scan the whole vault into an ordered tree (empty if not initialized)."""
        return scan_tree(self.resolver.vault_root(vault_id))

    # --- Mutations ---

    def init(self, vault_id: int) -> Path:
        return operations.init_vault(self.resolver, vault_id)

    def create_folder(self, vault_id: int, folder_path: str) -> str:
        return operations.create_folder(self.resolver, vault_id, folder_path)

    def import_file(
        self, vault_id: int, source_path: str | Path, target_folder: str = "/"
    ) -> FileDescriptor:
        return operations.import_file(
            self.resolver, vault_id, source_path, target_folder
        )

    def rename(self, vault_id: int, old_path: str, new_path: str) -> str:
        return operations.rename_item(self.resolver, vault_id, old_path, new_path)

    def delete(self, vault_id: int, path: str) -> None:
        operations.delete_item(self.resolver, vault_id, path)

    def read_text(self, vault_id: int, path: str) -> str:
        return operations.read_text(self.resolver, vault_id, path)

    def read_binary(self, vault_id: int, path: str) -> bytes:
        return operations.read_binary(self.resolver, vault_id, path)

    def write_text(self, vault_id: int, path: str, content: str) -> None:
        operations.write_text(self.resolver, vault_id, path, content)

    def write_binary(self, vault_id: int, path: str, data: bytes) -> None:
        operations.write_binary(self.resolver, vault_id, path, data)

    def copy(self, vault_id: int, source_path: str, target_folder: str) -> str:
        return operations.copy_item(
            self.resolver, vault_id, source_path, target_folder, self.copy_suffix
        )

    def move(self, vault_id: int, source_path: str, target_folder: str) -> str:
        return operations.move_item(self.resolver, vault_id, source_path, target_folder)

    def file_info(self, vault_id: int, path: str) -> FileDescriptor:
        return operations.file_info(self.resolver, vault_id, path)

    # --- Attachments ---

    def save_attachment(self, vault_id: int, filename: str, data: bytes) -> str:
        return attachments.save_attachment(self.resolver, vault_id, filename, data)

    def list_attachments(self, vault_id: int) -> list[str]:
        return attachments.list_attachments(self.resolver, vault_id)

    def delete_attachment(self, vault_id: int, filename: str) -> bool:
        return attachments.delete_attachment(self.resolver, vault_id, filename)

    # --- OS integration ---

    def open_in_explorer(self, vault_id: int, path: str) -> list[str]:
        """Reveal an entry in the native file browser."""
        target = self.resolver.resolve(vault_id, path)
        if self._launcher is None:
            return explorer.open_in_explorer(target, path)
        return explorer.open_in_explorer(target, path, launcher=self._launcher)

    def __repr__(self) -> str:
        return f"DocVault({self.base_dir})"


_docvault: DocVault | None = None
_docvault_lock = Lock()


def get_docvault() -> DocVault:
    """Get or create the default DocVault built from configuration."""
    global _docvault
    if _docvault is None:
        with _docvault_lock:
            if _docvault is None:
                from docvault.core.config import COPY_SUFFIX, DOCVAULTS_DIR

                _docvault = DocVault(DOCVAULTS_DIR, copy_suffix=COPY_SUFFIX)
    return _docvault


def set_docvault(docvault: DocVault | None) -> None:
    """Set the default DocVault instance (for testing)."""
    global _docvault
    _docvault = docvault
