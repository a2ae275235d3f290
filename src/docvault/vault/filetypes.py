"""File type classification and display helpers."""

from docvault.core.types import FileType

_EXTENSIONS: dict[FileType, tuple[str, ...]] = {
    FileType.MARKDOWN: ("md", "markdown"),
    FileType.PDF: ("pdf",),
    FileType.IMAGE: ("png", "jpg", "jpeg", "gif", "webp", "svg", "bmp", "ico"),
    FileType.TEXT: (
        "txt", "log", "json", "xml", "yaml", "yml", "toml", "ini", "cfg", "conf",
    ),
    FileType.CODE: (
        "js", "ts", "jsx", "tsx", "vue", "html", "css", "scss", "less",
        "rs", "py", "java", "c", "cpp", "h", "hpp", "go", "rb", "php", "swift", "kt",
    ),
    FileType.ARCHIVE: ("zip", "rar", "7z", "tar", "gz", "bz2"),
    FileType.OFFICE: ("doc", "docx", "xls", "xlsx", "ppt", "pptx"),
    FileType.AUDIO: ("mp3", "wav", "ogg", "flac", "aac", "m4a"),
    FileType.VIDEO: ("mp4", "avi", "mkv", "mov", "wmv", "flv", "webm"),
}

_TYPE_BY_EXTENSION = {
    ext: file_type for file_type, exts in _EXTENSIONS.items() for ext in exts
}

_MIME_TYPES = {
    "md": "text/markdown",
    "markdown": "text/markdown",
    "pdf": "application/pdf",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    "bmp": "image/bmp",
    "ico": "image/x-icon",
}

IMPORTABLE_EXTENSIONS = frozenset(
    _EXTENSIONS[FileType.MARKDOWN]
    + _EXTENSIONS[FileType.PDF]
    + _EXTENSIONS[FileType.IMAGE]
)


def classify(ext: str | None) -> FileType:
    """
    Classify a file extension.

    Args:
        ext: Extension without the leading dot, any case

    Returns:
        FileType for the extension, FileType.FILE when unknown or empty
    """
    if not ext:
        return FileType.FILE
    return _TYPE_BY_EXTENSION.get(ext.lower(), FileType.FILE)


def split_name(filename: str) -> tuple[str, str | None]:
    """
    Split a file name into stem and extension.

    ``a.tar.gz`` gives ``("a.tar", "gz")``; dot-files such as ``.gitignore``
    and names without a dot have no extension.
    """
    index = filename.rfind(".")
    if index <= 0:
        return filename, None
    return filename[:index], filename[index + 1 :]


def mime_type(ext: str | None) -> str:
    """Get the MIME type used when serving a file with this extension."""
    if not ext:
        return "application/octet-stream"
    return _MIME_TYPES.get(ext.lower(), "application/octet-stream")


def is_editable(file_type: FileType) -> bool:
    """Whether the file type is edited in place as text."""
    return file_type == FileType.MARKDOWN


def is_previewable(file_type: FileType) -> bool:
    """Whether the file type has a built-in preview."""
    return file_type in (FileType.MARKDOWN, FileType.PDF, FileType.IMAGE)


def can_import(filename: str) -> bool:
    """Whether a file name carries an extension supported for import."""
    _, ext = split_name(filename)
    return bool(ext) and ext.lower() in IMPORTABLE_EXTENSIONS


def format_file_size(size: int | None) -> str:
    """Format a byte count for display (``1.5 KB``); empty for unknown."""
    if size is None:
        return ""
    if size == 0:
        return "0 B"

    units = ["B", "KB", "MB", "GB"]
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {units[index]}"
