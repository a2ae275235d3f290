"""Attachment handling for the vault.

Attachments are binary assets (mostly pasted images) kept in the vault's
reserved ``.attachments`` folder and referenced from document content by
their vault-relative path.
"""

import logging
import os
from pathlib import Path

from docvault.core.errors import InvalidVaultPathError, PathTraversalError, io_errors
from docvault.vault.layout import ATTACHMENTS_DIR, PathResolver

logger = logging.getLogger(__name__)


def _attachment_file(
    resolver: PathResolver, vault_id: int, filename: str, operation: str
) -> Path:
    if filename == "..":
        raise PathTraversalError(operation, filename, "'..' is not a file name")
    if (
        not filename
        or filename == "."
        or "/" in filename
        or "\\" in filename
        or "\x00" in filename
    ):
        raise InvalidVaultPathError(
            operation, filename, "attachment name must be a single file name"
        )
    # Through the resolver so a symlinked folder or file cannot leave the vault
    return resolver.resolve(vault_id, f"{ATTACHMENTS_DIR}/{filename}")


def save_attachment(
    resolver: PathResolver, vault_id: int, filename: str, data: bytes
) -> str:
    """
    Save an attachment to the vault, replacing one with the same name.

    Args:
        resolver: Path resolver
        vault_id: Vault identifier
        filename: Attachment file name (no folders)
        data: File content

    Returns:
        Relative reference for embedding, e.g. ``.attachments/image.png``
    """
    target = _attachment_file(resolver, vault_id, filename, "save_attachment")
    with io_errors("save_attachment", filename):
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    logger.info(f"Saved attachment {filename} ({len(data)} bytes) in vault {vault_id}")
    return f"{ATTACHMENTS_DIR}/{filename}"


def list_attachments(resolver: PathResolver, vault_id: int) -> list[str]:
    """
    List attachment file names.

    Returns:
        Names sorted case-insensitively; empty if the folder is missing
    """
    directory = resolver.resolve(vault_id, ATTACHMENTS_DIR)
    if not directory.exists():
        return []

    with io_errors("list_attachments", ATTACHMENTS_DIR):
        with os.scandir(directory) as entries:
            names = [entry.name for entry in entries if entry.is_file()]
    return sorted(names, key=str.lower)


def delete_attachment(resolver: PathResolver, vault_id: int, filename: str) -> bool:
    """
    Delete an attachment.

    Returns:
        True if deleted, False if not found
    """
    target = _attachment_file(resolver, vault_id, filename, "delete_attachment")
    with io_errors("delete_attachment", filename):
        try:
            target.unlink()
        except FileNotFoundError:
            return False

    logger.info(f"Deleted attachment {filename} from vault {vault_id}")
    return True
