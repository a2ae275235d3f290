"""Error types raised by vault operations.

Every failure carries the operation name and the vault path it was working on
so interfaces can render a short user-facing message.
"""

import logging
from contextlib import contextmanager
from typing import Generator

logger = logging.getLogger(__name__)


class DocVaultError(Exception):
    """Base class for all vault failures."""

    kind = "error"

    def __init__(self, operation: str, path: str | None, message: str):
        self.operation = operation
        self.path = path
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.path:
            return f"{self.operation} failed for {self.path}: {self.message}"
        return f"{self.operation} failed: {self.message}"


class VaultNotFoundError(DocVaultError):
    """A path that must exist is absent."""

    kind = "not_found"


class PathTraversalError(DocVaultError):
    """A vault-relative path would resolve outside the vault root."""

    kind = "path_traversal"


class InvalidVaultPathError(DocVaultError):
    """A path is unusable for the requested operation."""

    kind = "invalid_path"


class VaultConflictError(DocVaultError):
    """A move destination is already occupied by a different entry."""

    kind = "conflict"


class VaultIOError(DocVaultError):
    """An underlying filesystem call failed."""

    kind = "io_error"


class VaultEncodingError(DocVaultError):
    """File content read as text is not valid UTF-8."""

    kind = "encoding_error"


@contextmanager
def io_errors(operation: str, path: str | None) -> Generator[None, None, None]:
    """Re-raise OS failures inside the block as VaultIOError."""
    try:
        yield
    except OSError as e:
        logger.error(f"{operation} failed for {path}: {e}")
        raise VaultIOError(operation, path, e.strerror or str(e)) from e
