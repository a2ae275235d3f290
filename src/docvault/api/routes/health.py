"""Health check endpoints."""

from typing import Any

from fastapi import APIRouter

from docvault.api.deps import DocVaultDep

router = APIRouter()


@router.get("/health")
async def health_check(docvault: DocVaultDep) -> dict[str, Any]:
    """
    Check that the vault base directory is usable.

    Returns:
        dict with status and base directory details
    """
    base_dir = docvault.base_dir
    usable = base_dir.is_dir() or not base_dir.exists()

    return {
        "status": "healthy" if usable else "degraded",
        "base_dir": str(base_dir),
        "exists": base_dir.exists(),
    }


@router.get("/health/live")
async def liveness_check() -> dict[str, str]:
    """
    Kubernetes-style liveness probe.

    Returns:
        Simple OK response if the service is running
    """
    return {"status": "ok"}
