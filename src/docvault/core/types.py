"""Shared types and data structures for DocVault."""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class FileType(StrEnum):
    """Coarse semantic type of a vault file, derived from its extension."""

    MARKDOWN = "markdown"
    PDF = "pdf"
    IMAGE = "image"
    TEXT = "text"
    CODE = "code"
    ARCHIVE = "archive"
    OFFICE = "office"
    AUDIO = "audio"
    VIDEO = "video"
    FILE = "file"


class FileDescriptor(BaseModel):
    """Metadata for a single file, returned by import and file-info calls.

    Derived from the filesystem at call time; never cached.
    """

    model_config = ConfigDict(frozen=True)

    filename: str = Field(..., description="File name without its extension")
    ext: str = Field("", description="Extension without the leading dot")
    file_type: FileType
    size: int
    path: str = Field(..., description="Vault path of the file")


class FileNode(BaseModel):
    """A file in a scanned vault tree."""

    model_config = ConfigDict(frozen=True)

    is_dir: Literal[False] = False
    name: str
    path: str
    file_type: FileType
    ext: str | None = None
    size: int | None = None


class DirectoryNode(BaseModel):
    """A directory in a scanned vault tree, with its ordered children."""

    model_config = ConfigDict(frozen=True)

    is_dir: Literal[True] = True
    name: str
    path: str
    children: list[TreeNode] = Field(default_factory=list)


TreeNode = DirectoryNode | FileNode

DirectoryNode.model_rebuild()

__all__ = [
    "DirectoryNode",
    "FileDescriptor",
    "FileNode",
    "FileType",
    "TreeNode",
]
