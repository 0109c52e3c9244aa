# localnetviewer/core/position_manager.py
"""
Resolves "positions" to file system paths.

A position is a dash separated list of 1-based indexes, e.g. "2-5-1":
the 2nd drive, the 5th entry in it, the 1st entry in that. The entries of a
directory are its sub-directories sorted by name followed by its files
sorted by name. Nothing is cached; every call walks the live file system.
"""

import os
import platform
import string
from typing import List, Tuple

from localnetviewer.config import get_settings
from localnetviewer.core.file_type import FileType, file_type_of
from localnetviewer.core.models import FileInfo

MAX_CHILD_IMAGES = 4


class PositionError(Exception):
    pass


class InvalidPositionError(PositionError, ValueError):
    pass


class PositionNotFoundError(PositionError, LookupError):
    pass


class NotADirectoryPositionError(PositionNotFoundError):
    pass


def list_drives() -> List[str]:
    """Root directories addressed by the first index of a position."""
    roots = get_settings().get("roots") or []
    if roots:
        return [r for r in roots if os.path.isdir(r)]

    if platform.system() == "Windows":
        drives = [f"{letter}:\\" for letter in string.ascii_uppercase]
        return [d for d in drives if os.path.exists(d)]
    return ["/"]


def drive_name(root: str) -> str:
    # "C:\\" -> "C:", "/" stays "/"
    return root.rstrip("\\/") or root


def list_entries(path: str) -> Tuple[List[str], List[str]]:
    """Return (sub-directories, files) of *path* as sorted full paths.

    Entries that cannot be inspected are skipped. Failing to open *path*
    itself propagates.
    """
    dirs = []
    files = []
    with os.scandir(path) as it:
        for entry in it:
            try:
                if entry.is_dir():
                    dirs.append(entry.path)
                elif entry.is_file():
                    files.append(entry.path)
            except OSError:
                continue
    dirs.sort()
    files.sort()
    return dirs, files


def parse_position(position: str) -> List[int]:
    parts = [p for p in (position or "").split("-") if p]
    try:
        indexes = [int(p) for p in parts]
    except ValueError:
        raise InvalidPositionError(f"Invalid position: {position!r}")
    if not indexes:
        raise InvalidPositionError("Position is empty")
    return indexes


def get_path_by_position(position: str) -> str:
    indexes = parse_position(position)

    drives = list_drives()
    drive_index = indexes[0] - 1
    if drive_index < 0 or drive_index >= len(drives):
        raise PositionNotFoundError(f"Drive {indexes[0]} does not exist")

    current_path = drives[drive_index]

    for index in indexes[1:]:
        if not os.path.isdir(current_path):
            raise PositionNotFoundError(f"{current_path} is not a directory")
        dirs, files = list_entries(current_path)
        entries = dirs + files

        target = index - 1
        if target < 0 or target >= len(entries):
            raise PositionNotFoundError(f"{current_path} has no entry number {index}")
        current_path = entries[target]

    return current_path


def _child_image_positions(directory: str, position: str) -> List[str]:
    try:
        sub_dirs, files = list_entries(directory)
    except OSError:
        return []

    result = []
    for i, path in enumerate(files):
        if file_type_of(path) != FileType.IMAGE:
            continue
        result.append(f"{position}-{len(sub_dirs) + i + 1}")
        if len(result) == MAX_CHILD_IMAGES:
            break
    return result


def get_child_infos(position: str = "") -> List[FileInfo]:
    """List the drives (empty position) or the entries of a directory."""
    if not position:
        return [
            FileInfo(
                name=drive_name(root),
                position=str(i + 1),
                is_directory=True,
                file_type=FileType.NONE,
            )
            for i, root in enumerate(list_drives())
        ]

    directory_path = get_path_by_position(position)
    if not os.path.isdir(directory_path):
        raise NotADirectoryPositionError(f"{directory_path} is not a directory")

    dirs, files = list_entries(directory_path)
    result = []

    for i, path in enumerate(dirs):
        child_position = f"{position}-{i + 1}"
        result.append(FileInfo(
            name=os.path.basename(path),
            position=child_position,
            is_directory=True,
            file_type=FileType.NONE,
            child_image_positions=_child_image_positions(path, child_position),
        ))

    for i, path in enumerate(files):
        result.append(FileInfo(
            name=os.path.basename(path),
            position=f"{position}-{len(dirs) + i + 1}",
            is_directory=False,
            file_type=file_type_of(path),
        ))

    return result
