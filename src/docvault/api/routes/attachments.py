"""Attachment endpoints."""

from typing import Annotated

from fastapi import APIRouter, Body, Query

from docvault.api.deps import DocVaultDep

router = APIRouter()


@router.post("/vaults/{vault_id}/attachments")
def save_attachment(
    vault_id: int,
    filename: Annotated[str, Query(description="Attachment file name")],
    data: Annotated[bytes, Body(media_type="application/octet-stream")],
    docvault: DocVaultDep,
) -> dict:
    """
    Store an attachment, replacing any with the same name.

    Returns the relative reference to embed in document content.
    """
    return {"path": docvault.save_attachment(vault_id, filename, data)}


@router.get("/vaults/{vault_id}/attachments")
def list_attachments(vault_id: int, docvault: DocVaultDep) -> dict:
    """List attachment names and the folder that holds them."""
    return {
        "directory": str(docvault.attachments_path(vault_id)),
        "attachments": docvault.list_attachments(vault_id),
    }


@router.delete("/vaults/{vault_id}/attachments/{filename}")
def delete_attachment(vault_id: int, filename: str, docvault: DocVaultDep) -> dict:
    """Delete an attachment. Reports whether it existed."""
    return {"deleted": docvault.delete_attachment(vault_id, filename)}
