"""API route modules."""

from docvault.api.routes import attachments, files, health, vaults

__all__ = ["attachments", "files", "health", "vaults"]
