"""Reveal vault entries in the operating system's file browser."""

import logging
import subprocess
import sys
from collections.abc import Callable
from pathlib import Path

from docvault.core.errors import VaultIOError, VaultNotFoundError

logger = logging.getLogger(__name__)


def explorer_command(target: Path, platform: str = sys.platform) -> list[str]:
    """
    Build the command that shows a path in the native file browser.

    Files are selected inside their folder where the platform supports it,
    otherwise their parent folder is opened.
    """
    is_file = target.is_file()

    if platform == "win32":
        if is_file:
            return ["explorer", "/select,", str(target)]
        return ["explorer", str(target)]

    if platform == "darwin":
        if is_file:
            return ["open", "-R", str(target)]
        return ["open", str(target)]

    folder = target.parent if is_file else target
    return ["xdg-open", str(folder)]


def open_in_explorer(
    target: Path,
    vault_path: str,
    launcher: Callable[..., object] = subprocess.Popen,
) -> list[str]:
    """
    Open an already-resolved vault entry in the file browser.

    Args:
        target: Absolute path produced by the path resolver
        vault_path: Vault path used for error messages
        launcher: Process starter, ``subprocess.Popen`` by default

    Returns:
        The command that was launched
    """
    if not target.exists():
        raise VaultNotFoundError("open_in_explorer", vault_path, "path does not exist")

    command = explorer_command(target)
    logger.debug(f"Launching file browser: {command}")
    try:
        launcher(command)
    except OSError as e:
        logger.error(f"Failed to open file browser for {vault_path}: {e}")
        raise VaultIOError(
            "open_in_explorer", vault_path, f"cannot start file browser: {e}"
        ) from e
    return command
