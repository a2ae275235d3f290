"""File and folder endpoints within a vault.

All paths are vault paths (forward slashes, rooted at ``/``). Handlers are
plain functions so FastAPI runs the blocking filesystem work in its
threadpool.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Query, Response
from pydantic import BaseModel, Field

from docvault.api.deps import DocVaultDep
from docvault.core.types import FileDescriptor
from docvault.vault.filetypes import mime_type, split_name

router = APIRouter()

VaultPath = Annotated[str, Query(description="Vault path, e.g. /notes/today.md")]


class PathResponse(BaseModel):
    """Response carrying the vault path an operation produced."""

    path: str


class FolderRequest(BaseModel):
    """Request to create a folder (with missing ancestors)."""

    path: str = Field(..., description="Vault path of the folder")


class ImportRequest(BaseModel):
    """Request to copy an external file into the vault."""

    source_path: str = Field(..., description="Absolute path outside the vault")
    target_folder: str = Field("/", description="Destination folder vault path")


class RenameRequest(BaseModel):
    """Request to rename or relocate an entry."""

    old_path: str
    new_path: str


class TransferRequest(BaseModel):
    """Request to copy or move an entry into a folder."""

    source_path: str
    target_folder: str = Field("/", description="Destination folder vault path")


class TextContent(BaseModel):
    """Text file content."""

    path: str
    content: str


@router.post("/vaults/{vault_id}/folders", response_model=PathResponse)
def create_folder(
    vault_id: int, request: FolderRequest, docvault: DocVaultDep
) -> PathResponse:
    """Create a folder, including any missing parents."""
    return PathResponse(path=docvault.create_folder(vault_id, request.path))


@router.post("/vaults/{vault_id}/import", response_model=FileDescriptor)
def import_file(
    vault_id: int, request: ImportRequest, docvault: DocVaultDep
) -> FileDescriptor:
    """
    Import an external file into a vault folder.

    The returned filename (without extension) is a suggested document title.
    """
    return docvault.import_file(vault_id, request.source_path, request.target_folder)


@router.post("/vaults/{vault_id}/rename", response_model=PathResponse)
def rename_item(
    vault_id: int, request: RenameRequest, docvault: DocVaultDep
) -> PathResponse:
    """Rename a file or folder."""
    return PathResponse(
        path=docvault.rename(vault_id, request.old_path, request.new_path)
    )


@router.delete("/vaults/{vault_id}/items")
def delete_item(vault_id: int, path: VaultPath, docvault: DocVaultDep) -> dict:
    """Delete a file or folder. Deleting a missing path succeeds."""
    docvault.delete(vault_id, path)
    return {"status": "ok"}


@router.post("/vaults/{vault_id}/copy", response_model=PathResponse)
def copy_item(
    vault_id: int, request: TransferRequest, docvault: DocVaultDep
) -> PathResponse:
    """Copy an entry into a folder, picking a new name on collision."""
    return PathResponse(
        path=docvault.copy(vault_id, request.source_path, request.target_folder)
    )


@router.post("/vaults/{vault_id}/move", response_model=PathResponse)
def move_item(
    vault_id: int, request: TransferRequest, docvault: DocVaultDep
) -> PathResponse:
    """Move an entry into a folder. Fails with 409 if the name is taken."""
    return PathResponse(
        path=docvault.move(vault_id, request.source_path, request.target_folder)
    )


@router.get("/vaults/{vault_id}/files/info", response_model=FileDescriptor)
def file_info(vault_id: int, path: VaultPath, docvault: DocVaultDep) -> FileDescriptor:
    """Get metadata for a single file."""
    return docvault.file_info(vault_id, path)


@router.get("/vaults/{vault_id}/files/absolute", response_model=PathResponse)
def absolute_path(vault_id: int, path: VaultPath, docvault: DocVaultDep) -> PathResponse:
    """Get the absolute on-disk path of an entry."""
    return PathResponse(path=docvault.absolute_path(vault_id, path))


@router.get("/vaults/{vault_id}/files/text", response_model=TextContent)
def read_text(vault_id: int, path: VaultPath, docvault: DocVaultDep) -> TextContent:
    """Read a UTF-8 text file."""
    return TextContent(path=path, content=docvault.read_text(vault_id, path))


@router.put("/vaults/{vault_id}/files/text")
def write_text(vault_id: int, request: TextContent, docvault: DocVaultDep) -> dict:
    """Write a text file, creating parent folders."""
    docvault.write_text(vault_id, request.path, request.content)
    return {"status": "ok"}


@router.get("/vaults/{vault_id}/files/binary")
def read_binary(vault_id: int, path: VaultPath, docvault: DocVaultDep) -> Response:
    """Read a file as raw bytes, served with a MIME type from its extension."""
    data = docvault.read_binary(vault_id, path)
    _, ext = split_name(path.rsplit("/", 1)[-1])
    return Response(content=data, media_type=mime_type(ext))


@router.put("/vaults/{vault_id}/files/binary")
def write_binary(
    vault_id: int,
    path: VaultPath,
    data: Annotated[bytes, Body(media_type="application/octet-stream")],
    docvault: DocVaultDep,
) -> dict:
    """Write raw bytes to a file, creating parent folders."""
    docvault.write_binary(vault_id, path, data)
    return {"status": "ok", "size": len(data)}
