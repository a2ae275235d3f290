"""Mutation and read operations on vault entries.

Every function takes the resolver and a vault id and addresses entries by
vault path. Paths are resolved (and sandboxed) independently for each
argument, so two-path operations cannot be used to escape the vault.
"""

import errno
import logging
import os
import shutil
from collections.abc import Iterator
from pathlib import Path

from docvault.core.errors import (
    InvalidVaultPathError,
    VaultConflictError,
    VaultEncodingError,
    VaultIOError,
    VaultNotFoundError,
    io_errors,
)
from docvault.core.types import FileDescriptor
from docvault.vault.filetypes import classify, split_name
from docvault.vault.layout import PathResolver, ensure_vault_structure

logger = logging.getLogger(__name__)


def _ensure_root(resolver: PathResolver, vault_id: int, operation: str) -> None:
    with io_errors(operation, "/"):
        ensure_vault_structure(resolver, vault_id)


def _resolve_entry(
    resolver: PathResolver, vault_id: int, path: str, operation: str
) -> Path:
    """Resolve a path that must name an entry below the root, not the root."""
    target = resolver.resolve(vault_id, path)
    if target == resolver.vault_root(vault_id):
        raise InvalidVaultPathError(operation, path, "the vault root cannot be used here")
    return target


def _describe(
    resolver: PathResolver, vault_id: int, target: Path, size: int
) -> FileDescriptor:
    stem, ext = split_name(target.name)
    return FileDescriptor(
        filename=stem,
        ext=ext or "",
        file_type=classify(ext),
        size=size,
        path=resolver.to_vault_path(vault_id, target),
    )


def init_vault(resolver: PathResolver, vault_id: int) -> Path:
    """
    Create the vault root and its attachments folder if absent.

    Returns:
        Path to the vault root
    """
    _ensure_root(resolver, vault_id, "init")
    logger.info(f"Vault {vault_id} initialized at {resolver.vault_root(vault_id)}")
    return resolver.vault_root(vault_id)


def create_folder(resolver: PathResolver, vault_id: int, folder_path: str) -> str:
    """
    Create a folder and any missing ancestors.

    Returns:
        Vault path of the folder
    """
    target = resolver.resolve(vault_id, folder_path)
    _ensure_root(resolver, vault_id, "create_folder")
    with io_errors("create_folder", folder_path):
        target.mkdir(parents=True, exist_ok=True)
    logger.info(f"Created folder {folder_path} in vault {vault_id}")
    return resolver.to_vault_path(vault_id, target)


def import_file(
    resolver: PathResolver,
    vault_id: int,
    source_path: str | Path,
    target_folder: str = "/",
) -> FileDescriptor:
    """
    Copy an external file into a vault folder under its original name.

    An existing file of the same name in the folder is overwritten.

    Args:
        resolver: Path resolver
        vault_id: Vault identifier
        source_path: Absolute path of the file outside the vault
        target_folder: Vault path of the destination folder (created if absent)

    Returns:
        FileDescriptor whose filename is the suggested document title

    Raises:
        VaultNotFoundError: If the source does not exist
        VaultIOError: If the source is not a file or copying fails
    """
    source = Path(source_path).expanduser()
    if not source.exists():
        raise VaultNotFoundError("import", str(source_path), "source file does not exist")
    if not source.is_file():
        raise VaultIOError("import", str(source_path), "source is not a regular file")

    target_dir = resolver.resolve(vault_id, target_folder)
    _ensure_root(resolver, vault_id, "import")
    with io_errors("import", str(source_path)):
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / source.name
        shutil.copy2(source, target)
        size = target.stat().st_size

    logger.info(f"Imported {source} into vault {vault_id} folder {target_folder}")
    return _describe(resolver, vault_id, target, size)


def rename_item(
    resolver: PathResolver, vault_id: int, old_path: str, new_path: str
) -> str:
    """
    Rename (or relocate) an entry, creating the new parent folders.

    Returns:
        Vault path of the renamed entry
    """
    old = _resolve_entry(resolver, vault_id, old_path, "rename")
    new = _resolve_entry(resolver, vault_id, new_path, "rename")
    if not os.path.lexists(old):
        raise VaultNotFoundError("rename", old_path, "source path does not exist")

    with io_errors("rename", old_path):
        new.parent.mkdir(parents=True, exist_ok=True)
        old.rename(new)

    logger.info(f"Renamed {old_path} -> {new_path} in vault {vault_id}")
    return resolver.to_vault_path(vault_id, new)


def delete_item(resolver: PathResolver, vault_id: int, path: str) -> None:
    """
    Delete a file, or a folder with everything in it.

    Deleting a path that does not exist succeeds.
    """
    target = _resolve_entry(resolver, vault_id, path, "delete")
    if not os.path.lexists(target):
        logger.debug(f"Nothing to delete at {path} in vault {vault_id}")
        return

    with io_errors("delete", path):
        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
        except FileNotFoundError:
            # Only a concurrent removal of the whole entry counts as done
            if os.path.lexists(target):
                raise

    logger.info(f"Deleted {path} from vault {vault_id}")


def _read_bytes(
    resolver: PathResolver, vault_id: int, path: str, operation: str
) -> bytes:
    target = resolver.resolve(vault_id, path)
    try:
        return target.read_bytes()
    except FileNotFoundError as e:
        raise VaultNotFoundError(operation, path, "file does not exist") from e
    except OSError as e:
        raise VaultIOError(operation, path, e.strerror or str(e)) from e


def read_binary(resolver: PathResolver, vault_id: int, path: str) -> bytes:
    """Read the full content of a file as bytes."""
    return _read_bytes(resolver, vault_id, path, "read_binary")


def read_text(resolver: PathResolver, vault_id: int, path: str) -> str:
    """Read the full content of a UTF-8 text file."""
    data = _read_bytes(resolver, vault_id, path, "read_text")
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise VaultEncodingError("read_text", path, "file is not valid UTF-8 text") from e


def write_binary(resolver: PathResolver, vault_id: int, path: str, data: bytes) -> None:
    """Write bytes to a file, creating parent folders and truncating old content."""
    target = resolver.resolve(vault_id, path)
    _ensure_root(resolver, vault_id, "write")
    with io_errors("write", path):
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    logger.debug(f"Wrote {len(data)} bytes to {path} in vault {vault_id}")


def write_text(resolver: PathResolver, vault_id: int, path: str, content: str) -> None:
    """Write text as UTF-8, byte for byte (no newline translation)."""
    write_binary(resolver, vault_id, path, content.encode("utf-8"))


def copy_candidates(name: str, stem: str, ext: str, suffix: str) -> Iterator[str]:
    """
    Yield destination names for a copy: the original, then numbered copies.

    ``note.md`` gives ``note.md``, ``note copy.md``, ``note copy 2.md``, ...
    """
    yield name
    counter = 1
    while True:
        label = suffix if counter == 1 else f"{suffix} {counter}"
        yield f"{stem} {label}{ext}"
        counter += 1


def _claim_destination(
    target_dir: Path, candidates: Iterator[str], is_dir: bool
) -> Path:
    """Atomically create the first free candidate so no copy overwrites another."""
    for candidate in candidates:
        destination = target_dir / candidate
        try:
            if is_dir:
                destination.mkdir()
            else:
                fd = os.open(destination, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
                os.close(fd)
        except FileExistsError:
            continue
        return destination
    raise RuntimeError("copy candidates exhausted")


def copy_item(
    resolver: PathResolver,
    vault_id: int,
    source_path: str,
    target_folder: str,
    suffix: str = "copy",
) -> str:
    """
    Copy a file or folder into a target folder without overwriting anything.

    A name collision at the destination is resolved by appending the copy
    suffix and an increasing counter.

    Returns:
        Vault path of the new copy

    Raises:
        VaultNotFoundError: If the source does not exist
        InvalidVaultPathError: If a folder would be copied into itself
        VaultIOError: If copying fails (a partial copy is left in place)
    """
    source = _resolve_entry(resolver, vault_id, source_path, "copy")
    if not source.exists():
        raise VaultNotFoundError("copy", source_path, "source path does not exist")

    target_dir = resolver.resolve(vault_id, target_folder)
    is_dir = source.is_dir()
    if is_dir and target_dir.is_relative_to(source):
        raise InvalidVaultPathError("copy", source_path, "cannot copy a folder into itself")

    if is_dir:
        stem, ext = source.name, ""
    else:
        stem, raw_ext = split_name(source.name)
        ext = f".{raw_ext}" if raw_ext is not None else ""

    _ensure_root(resolver, vault_id, "copy")
    with io_errors("copy", source_path):
        target_dir.mkdir(parents=True, exist_ok=True)
        destination = _claim_destination(
            target_dir, copy_candidates(source.name, stem, ext, suffix), is_dir
        )
        if is_dir:
            shutil.copytree(source, destination, dirs_exist_ok=True)
        else:
            try:
                shutil.copy2(source, destination)
            except OSError:
                destination.unlink(missing_ok=True)
                raise

    new_path = resolver.to_vault_path(vault_id, destination)
    logger.info(f"Copied {source_path} -> {new_path} in vault {vault_id}")
    return new_path


def _rename_no_replace(source: Path, destination: Path) -> None:
    """Rename source to destination, failing with FileExistsError if taken."""
    if source.is_file() and not source.is_symlink():
        try:
            # link() refuses an existing name atomically
            os.link(source, destination)
        except FileExistsError:
            # Must precede OSError: a taken name is a conflict, not a fallback
            raise
        except OSError as e:
            logger.debug(f"Hard link unavailable ({e}), falling back to rename")
        else:
            os.unlink(source)
            return

    if os.path.lexists(destination):
        raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(destination))
    os.rename(source, destination)


def move_item(
    resolver: PathResolver, vault_id: int, source_path: str, target_folder: str
) -> str:
    """
    Move an entry into a target folder under its current name.

    Returns:
        Vault path of the moved entry

    Raises:
        VaultNotFoundError: If the source does not exist
        VaultConflictError: If another entry already has that name in the folder
        InvalidVaultPathError: If a folder would be moved into itself
    """
    source = _resolve_entry(resolver, vault_id, source_path, "move")
    if not os.path.lexists(source):
        raise VaultNotFoundError("move", source_path, "source path does not exist")

    target_dir = resolver.resolve(vault_id, target_folder)
    destination = target_dir / source.name
    if destination == source:
        return resolver.to_vault_path(vault_id, source)
    if source.is_dir() and target_dir.is_relative_to(source):
        raise InvalidVaultPathError("move", source_path, "cannot move a folder into itself")

    _ensure_root(resolver, vault_id, "move")
    with io_errors("move", source_path):
        target_dir.mkdir(parents=True, exist_ok=True)
        try:
            _rename_no_replace(source, destination)
        except FileExistsError as e:
            logger.warning(f"Move conflict: {source.name} already in {target_folder}")
            raise VaultConflictError(
                "move",
                source_path,
                f"an entry named '{source.name}' already exists in the target folder",
            ) from e

    new_path = resolver.to_vault_path(vault_id, destination)
    logger.info(f"Moved {source_path} -> {new_path} in vault {vault_id}")
    return new_path


def file_info(resolver: PathResolver, vault_id: int, path: str) -> FileDescriptor:
    """
    Describe a single file.

    Raises:
        VaultNotFoundError: If the file does not exist
        InvalidVaultPathError: If the path names a folder
    """
    target = resolver.resolve(vault_id, path)
    try:
        stat = target.stat()
    except FileNotFoundError as e:
        raise VaultNotFoundError("file_info", path, "file does not exist") from e
    except OSError as e:
        raise VaultIOError("file_info", path, e.strerror or str(e)) from e

    if target.is_dir():
        raise InvalidVaultPathError("file_info", path, "path is a folder, not a file")
    return _describe(resolver, vault_id, target, stat.st_size)
