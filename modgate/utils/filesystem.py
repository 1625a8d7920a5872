"""
Filesystem helpers for modgate.

Read-only helpers used by the manifest loader. All filesystem errors are
normalized to :class:`~modgate.exceptions.FileOperationError`.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from modgate.utils.logger import get_logger
from modgate.constants import MAX_FILE_SIZE
from modgate.exceptions import FileOperationError

logger = get_logger("filesystem")

PathLike = Union[str, Path]


def _validated_file(path: Path) -> Path:
    """Ensure ``path`` is an existing regular file and resolve it."""
    if not path.exists():
        raise FileOperationError(
            f"File not found: {path}",
            file_path=str(path),
            operation="read",
        )
    if not path.is_file():
        raise FileOperationError(
            f"Not a file: {path}",
            file_path=str(path),
            operation="read",
        )
    return path.resolve()


def safe_read_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
    encoding: str = "utf-8-sig",
) -> str:
    """Read a text file with an optional size limit.

    The default encoding strips a UTF-8 byte order mark, which editors on
    Windows commonly add to JSON manifests.

    Args:
        file_path: Path to the file.
        max_size: Maximum allowed file size in bytes (None disables limit).
        encoding: Text encoding.

    Returns:
        File contents as a string.
    """
    path = _validated_file(Path(file_path))
    size = path.stat().st_size

    if max_size is not None and size > max_size:
        raise FileOperationError(
            f"File too large: {size} bytes (max {max_size})",
            file_path=str(path),
            operation="read",
        )

    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise FileOperationError(
            f"Failed to read file: {exc}",
            file_path=str(path),
            operation="read",
            original_error=exc,
        ) from exc


def list_subdirectories(directory: PathLike) -> List[Path]:
    """Return the immediate subdirectories of ``directory``, sorted by name.

    Raises:
        FileOperationError: ``directory`` is missing or unreadable.
    """
    path = Path(directory)
    if not path.is_dir():
        raise FileOperationError(
            f"Directory not found: {path}",
            file_path=str(path),
            operation="scan",
        )

    try:
        entries = sorted(entry for entry in path.iterdir() if entry.is_dir())
    except OSError as exc:
        raise FileOperationError(
            f"Failed to list directory: {exc}",
            file_path=str(path),
            operation="scan",
            original_error=exc,
        ) from exc

    logger.debug("Found %d subdirectories in %s", len(entries), path)
    return entries
