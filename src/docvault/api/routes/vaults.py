"""Vault-level endpoints: initialization, layout and tree scans."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from docvault.api.deps import DocVaultDep
from docvault.core.service import DocVault
from docvault.core.types import TreeNode

router = APIRouter()


class VaultResponse(BaseModel):
    """Response model describing a vault's location on disk."""

    vault_id: int
    root: str
    attachments: str
    exists: bool


class OpenRequest(BaseModel):
    """Request to reveal an entry in the OS file browser."""

    path: str = Field("/", description="Vault path of the entry")


def _describe(docvault: DocVault, vault_id: int) -> VaultResponse:
    root = docvault.vault_root(vault_id)
    return VaultResponse(
        vault_id=vault_id,
        root=str(root),
        attachments=str(docvault.attachments_path(vault_id)),
        exists=root.is_dir(),
    )


@router.get("/vaults/{vault_id}", response_model=VaultResponse)
def get_vault(vault_id: int, docvault: DocVaultDep) -> VaultResponse:
    """Get the on-disk location of a vault."""
    return _describe(docvault, vault_id)


@router.post("/vaults/{vault_id}/init", response_model=VaultResponse)
def init_vault(vault_id: int, docvault: DocVaultDep) -> VaultResponse:
    """
    Create the vault root and its attachments folder.

    Safe to call repeatedly.
    """
    docvault.init(vault_id)
    return _describe(docvault, vault_id)


@router.get("/vaults/{vault_id}/tree")
def scan_vault(vault_id: int, docvault: DocVaultDep) -> list[TreeNode]:
    """
    Scan the vault into an ordered file tree.

    Folders come before files, hidden folders after visible ones. An
    uninitialized vault yields an empty list.
    """
    return docvault.scan(vault_id)


@router.post("/vaults/{vault_id}/open")
def open_in_explorer(
    vault_id: int, request: OpenRequest, docvault: DocVaultDep
) -> dict:
    """Reveal a vault entry in the native file browser of the host."""
    command = docvault.open_in_explorer(vault_id, request.path)
    return {"status": "ok", "command": command}
