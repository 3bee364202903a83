"""
Devlog discovery service.

Locates devlog documents in a workspace and reads them. This is the only
place devlog text is read from disk; read failures are logged and reported
as ``None`` so callers can show a message instead of handling exceptions.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def find_devlog_dir(root: PathLike, directories: Iterable[str]) -> Optional[Path]:
    """
    Return the first candidate directory that exists under ``root``.

    Args:
        root: Workspace root
        directories: Candidate names or paths, in priority order. Absolute
            paths are used as-is.

    Returns:
        Path of the devlog directory, or None if no candidate exists
    """
    root_path = Path(root)
    for candidate in directories:
        path = Path(candidate).expanduser()
        if not path.is_absolute():
            path = root_path / path
        if path.is_dir():
            logger.debug(f"Using devlog directory {path}")
            return path

    logger.debug(f"No devlog directory found under {root_path}")
    return None


def list_devlog_files(directory: PathLike, extension: str = ".md") -> List[Path]:
    """
    List devlog documents in ``directory``, most recently modified first.

    Returns:
        Matching file paths; empty if the directory does not exist
    """
    dir_path = Path(directory)
    if not dir_path.is_dir():
        return []

    stamped = []
    for path in dir_path.iterdir():
        if path.suffix != extension or not path.is_file():
            continue
        try:
            mtime = path.stat().st_mtime
        except OSError as e:
            # Removed or renamed between listing and stat.
            logger.warning(f"Skipping devlog file {path}: {e}")
            continue
        stamped.append((mtime, path))

    # Ties on mtime fall back to name so the order is stable.
    stamped.sort(key=lambda item: (-item[0], item[1].name))
    return [path for _, path in stamped]


def latest_devlog_file(directory: PathLike, extension: str = ".md") -> Optional[Path]:
    """Return the most recently modified devlog document, or None."""
    files = list_devlog_files(directory, extension)
    return files[0] if files else None


def read_devlog_safe(path: PathLike) -> Optional[str]:
    """
    Read a devlog document as UTF-8 text.

    Returns:
        The document text, or None if it could not be read
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read devlog file {path}: {e}", exc_info=True)
        return None
