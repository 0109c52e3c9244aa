# localnetviewer/core/file_type.py

import mimetypes
import os
from enum import IntEnum


class FileType(IntEnum):
    NONE = 0
    IMAGE = 1
    PDF = 2
    VIDEO = 3
    OTHER = 4


IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp", ".tiff")
VIDEO_EXTENSIONS = (".mp4", ".webm", ".mov", ".avi", ".mkv", ".wmv", ".m4v")

# mimetypes does not know these on every platform
MIME_TYPE_MAP = {
    ".mp4": "video/mp4", ".m4v": "video/mp4", ".webm": "video/webm",
    ".mkv": "video/x-matroska", ".avi": "video/x-msvideo",
    ".mov": "video/quicktime", ".wmv": "video/x-ms-wmv",
    ".pdf": "application/pdf",
}


def to_file_type(ext: str) -> FileType:
    """Classify a file by its extension (with the leading dot)."""
    lower_ext = ext.lower()
    if lower_ext in IMAGE_EXTENSIONS:
        return FileType.IMAGE
    if lower_ext in VIDEO_EXTENSIONS:
        return FileType.VIDEO
    if lower_ext == ".pdf":
        return FileType.PDF
    return FileType.OTHER


def file_type_of(path: str) -> FileType:
    return to_file_type(os.path.splitext(path)[1])


def get_mime_type(path: str) -> str:
    ext = os.path.splitext(path.lower())[1]
    if ext in MIME_TYPE_MAP:
        return MIME_TYPE_MAP[ext]
    mime_type, _ = mimetypes.guess_type(path)
    return mime_type or "application/octet-stream"
