"""FastAPI dependencies for the DocVault API."""

from typing import Annotated

from fastapi import Depends

from docvault.core.service import DocVault, get_docvault


async def get_docvault_instance() -> DocVault:
    """
    Get the DocVault service for request processing.

    Returns:
        DocVault instance
    """
    return get_docvault()


# Type aliases for dependency injection
DocVaultDep = Annotated[DocVault, Depends(get_docvault_instance)]
