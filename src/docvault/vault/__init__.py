"""Vault filesystem layer.

A vault is a sandboxed directory tree exposed to users as a file/folder
hierarchy. This package holds its building blocks:
- layout: vault roots and sandboxed path resolution
- filetypes: extension classification and display helpers
- scanner: ordered recursive tree scans
- operations: create, import, rename, delete, read, write, copy, move
- attachments: the reserved ``.attachments`` folder
- explorer: reveal entries in the OS file browser
"""

from docvault.vault.filetypes import classify
from docvault.vault.layout import (
    ATTACHMENTS_DIR,
    PathResolver,
    ensure_vault_structure,
    normalize,
)
from docvault.vault.scanner import scan_tree

__all__ = [
    "ATTACHMENTS_DIR",
    "PathResolver",
    "classify",
    "ensure_vault_structure",
    "normalize",
    "scan_tree",
]
