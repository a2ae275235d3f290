"""DocVault core library - configuration, errors, types and the service."""

from typing import TYPE_CHECKING

from docvault.core.errors import (
    DocVaultError,
    InvalidVaultPathError,
    PathTraversalError,
    VaultConflictError,
    VaultEncodingError,
    VaultIOError,
    VaultNotFoundError,
)
from docvault.core.types import (
    DirectoryNode,
    FileDescriptor,
    FileNode,
    FileType,
    TreeNode,
)

if TYPE_CHECKING:
    from docvault.core.service import DocVault, get_docvault, set_docvault

__all__ = [
    # Service
    "DocVault",
    "get_docvault",
    "set_docvault",
    # Types
    "DirectoryNode",
    "FileDescriptor",
    "FileNode",
    "FileType",
    "TreeNode",
    # Errors
    "DocVaultError",
    "InvalidVaultPathError",
    "PathTraversalError",
    "VaultConflictError",
    "VaultEncodingError",
    "VaultIOError",
    "VaultNotFoundError",
]


def __getattr__(name: str):
    if name in ("DocVault", "get_docvault", "set_docvault"):
        from docvault.core import service

        return getattr(service, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
