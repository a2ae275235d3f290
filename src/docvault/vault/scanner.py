"""Recursive vault scanning into an ordered tree for UI rendering."""

import logging
import os
from pathlib import Path

from docvault.core.errors import VaultIOError
from docvault.core.types import DirectoryNode, FileNode, TreeNode
from docvault.vault.filetypes import classify, split_name
from docvault.vault.layout import ROOT_PATH

logger = logging.getLogger(__name__)

# OS housekeeping files never shown in the tree
IGNORED_NAMES = frozenset({".DS_Store", "Thumbs.db", "desktop.ini"})


def sort_key(node: TreeNode) -> tuple[int, str]:
    """
    Ordering key for sibling nodes.

    Directories come first with hidden directories after the visible ones,
    then files. Names compare case-insensitively inside each group; hidden
    files are not grouped separately.
    """
    if isinstance(node, DirectoryNode):
        group = 1 if node.name.startswith(".") else 0
    else:
        group = 2
    return group, node.name.lower()


def _child_path(parent: str, name: str) -> str:
    if parent == ROOT_PATH:
        return ROOT_PATH + name
    return f"{parent}/{name}"


def _file_node(entry: os.DirEntry, path: str) -> FileNode:
    stem, ext = split_name(entry.name)
    try:
        size = entry.stat().st_size
    except OSError as e:
        logger.debug(f"No size for {path}: {e}")
        size = None
    return FileNode(
        name=stem,
        path=path,
        file_type=classify(ext),
        ext=ext,
        size=size,
    )


def _scan_directory(directory: Path, vault_path: str) -> list[TreeNode]:
    nodes: list[TreeNode] = []

    try:
        with os.scandir(directory) as entries:
            listed = list(entries)
    except OSError as e:
        logger.error(f"Failed to read directory {vault_path}: {e}")
        raise VaultIOError("scan", vault_path, f"cannot read directory: {e}") from e

    for entry in listed:
        if entry.name in IGNORED_NAMES:
            continue

        path = _child_path(vault_path, entry.name)
        try:
            is_dir = entry.is_dir()
        except OSError:
            is_dir = False

        if is_dir:
            try:
                children = _scan_directory(Path(entry.path), path)
            except VaultIOError as e:
                if isinstance(e.__cause__, FileNotFoundError) and e.path == path:
                    # Removed underneath us after the parent was listed
                    logger.debug(f"Directory vanished during scan: {path}")
                    continue
                raise
            nodes.append(DirectoryNode(name=entry.name, path=path, children=children))
        else:
            nodes.append(_file_node(entry, path))

    nodes.sort(key=sort_key)
    return nodes


def scan_tree(root: Path) -> list[TreeNode]:
    """
    Scan a vault root into an ordered tree.

    Args:
        root: Absolute vault root directory

    Returns:
        Ordered top-level nodes; empty if the root does not exist

    Raises:
        VaultIOError: If any existing directory cannot be read
    """
    if not root.exists():
        logger.debug(f"Vault root {root} does not exist, empty tree")
        return []
    return _scan_directory(root, ROOT_PATH)
