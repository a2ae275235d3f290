"""Vault layout and path resolution.

Every vault lives in its own folder ``<base_dir>/<vault_id>``. Callers address
entries with forward-slash vault paths rooted at ``/``; this module is the only
place those are translated into host paths, and it guarantees the result never
leaves the vault root.
"""

import logging
import os
from pathlib import Path

from docvault.core.errors import InvalidVaultPathError, PathTraversalError

logger = logging.getLogger(__name__)

ATTACHMENTS_DIR = ".attachments"
ROOT_PATH = "/"


def split_segments(relative_path: str) -> list[str]:
    """
    Split a vault path into its name segments.

    Leading slashes are ignored, backslashes count as separators, and empty
    or ``.`` segments are dropped.

    Args:
        relative_path: Vault path such as ``/notes/today.md``

    Returns:
        List of name segments

    Raises:
        PathTraversalError: If any segment is ``..``
        InvalidVaultPathError: If the path contains a NUL character
    """
    if "\x00" in (relative_path or ""):
        raise InvalidVaultPathError(
            "resolve", relative_path, "path contains a NUL character"
        )

    segments = []
    for part in (relative_path or "").replace("\\", "/").split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            raise PathTraversalError(
                "resolve", relative_path, "'..' segments are not allowed"
            )
        segments.append(part)
    return segments


def normalize(relative_path: str) -> str:
    """Return the canonical ``/``-rooted form of a vault path."""
    return ROOT_PATH + "/".join(split_segments(relative_path))


class PathResolver:
    """Maps (vault id, vault path) pairs to absolute paths under a base directory.

    Example:
        resolver = PathResolver(Path("~/.docvault/data/docvaults"))
        resolver.resolve(3, "/notes/today.md")
        # -> ~/.docvault/data/docvaults/3/notes/today.md
    """

    def __init__(self, base_dir: Path | str):
        """Initialize resolver with the directory that holds all vaults.

        Args:
            base_dir: Parent directory of every vault root
        """
        self.base_dir = Path(base_dir).expanduser().absolute()

    def vault_root(self, vault_id: int) -> Path:
        """
        Get the root directory of a vault.

        Args:
            vault_id: Opaque integer vault identifier

        Returns:
            Absolute path to the vault root (may not exist yet)
        """
        if isinstance(vault_id, bool) or not isinstance(vault_id, int):
            raise TypeError(f"vault_id must be an int, got {type(vault_id).__name__}")
        return self.base_dir / str(vault_id)

    def attachments_path(self, vault_id: int) -> Path:
        """Get the attachments folder of a vault."""
        return self.vault_root(vault_id) / ATTACHMENTS_DIR

    def resolve(self, vault_id: int, relative_path: str) -> Path:
        """
        Resolve a vault path to an absolute path inside the vault.

        Args:
            vault_id: Opaque integer vault identifier
            relative_path: Forward-slash path, leading ``/`` optional

        Returns:
            Absolute path at or below the vault root

        Raises:
            PathTraversalError: If the path would escape the vault root
        """
        root = self.vault_root(vault_id)
        target = root.joinpath(*split_segments(relative_path))

        # Symlinks inside the vault must not lead outside of it either
        canonical_root = Path(os.path.realpath(root))
        canonical_target = Path(os.path.realpath(target))
        if not canonical_target.is_relative_to(canonical_root):
            logger.warning(
                f"Rejected path escaping vault {vault_id}: {relative_path!r}"
            )
            raise PathTraversalError(
                "resolve", relative_path, "path resolves outside the vault"
            )
        return target

    def to_vault_path(self, vault_id: int, absolute: Path | str) -> str:
        """
        Render an absolute path under the vault root as a vault path.

        Args:
            vault_id: Opaque integer vault identifier
            absolute: Absolute path at or below the vault root

        Returns:
            ``/``-rooted forward-slash vault path
        """
        root = self.vault_root(vault_id)
        try:
            relative = Path(absolute).relative_to(root)
        except ValueError as e:
            raise PathTraversalError(
                "to_vault_path", str(absolute), "path is outside the vault"
            ) from e
        return ROOT_PATH + "/".join(relative.parts)

    def __repr__(self) -> str:
        return f"PathResolver({self.base_dir})"


def ensure_vault_structure(resolver: PathResolver, vault_id: int) -> Path:
    """
    Ensure the vault root and its attachments folder exist.

    Safe to call multiple times.

    Returns:
        Path to the vault root
    """
    root = resolver.vault_root(vault_id)
    root.mkdir(parents=True, exist_ok=True)
    resolver.attachments_path(vault_id).mkdir(parents=True, exist_ok=True)
    return root
