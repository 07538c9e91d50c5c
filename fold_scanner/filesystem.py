"""Filesystem helpers for fold-scanner."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, SUPPORTED_EXTENSIONS
from .exceptions import DocumentError, DocumentTooLargeError, UnsupportedDocumentError

MAX_FILE_SIZE_ENV_VAR = "FOLD_SCANNER_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["FOLD_SCANNER_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def contains_symlink(path: Path) -> bool:
    """Check whether a path or any parent directory is a symlink."""
    for candidate in (path, *path.parents):
        try:
            if candidate.is_symlink():
                return True
        except OSError:
            continue
    return False


def normalize_filepath(raw_path: str, base_dir: Path) -> Path:
    """Resolve and validate a source filepath under a base directory.

    Args:
        raw_path: User-supplied path to a script or stylesheet.
        base_dir: Working directory that constrains allowed paths.

    Returns:
        Path: Absolute path to the document.

    Raises:
        ValueError: If the path does not exist, is not a regular file, lies
            outside `base_dir`, or traverses a symlink.
        UnsupportedDocumentError: If the extension has no folding profile.

    Examples:
        normalize_filepath("static/app.js", Path.cwd())
    """
    path = Path(raw_path).expanduser()

    if contains_symlink(path):
        raise ValueError(f"Symlinks are not supported for security reasons: {path}")

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{path} does not exist.") from error
    except OSError as error:
        raise ValueError(f"Error resolving {path}: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")

    try:
        resolved.relative_to(base_dir)
    except ValueError as error:
        raise ValueError(f"{resolved} is outside of the working directory {base_dir}.") from error

    if resolved.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise UnsupportedDocumentError(resolved.suffix, SUPPORTED_EXTENSIONS)

    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a file while disallowing symlinks.

    Raises:
        IOError: If the path is inaccessible, a symlink, or not a regular file.
    """
    try:
        stat_result = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error

    if stat.S_ISLNK(stat_result.st_mode):
        raise IOError(f"Symlinks are not supported: {filepath}.")

    if not stat.S_ISREG(stat_result.st_mode):
        raise IOError(f"{filepath} is not a regular file.")

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against files that exceed the configured maximum size.

    Raises:
        DocumentTooLargeError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        raise DocumentTooLargeError(filepath, max_size)


def read_document(filepath: Path) -> str:
    """Read a document as UTF-8 text, keeping its original line endings.

    Newline translation is disabled so ``\\r\\n`` and ``\\r`` terminators reach
    the scanner unchanged.

    Args:
        filepath: Path to the document.

    Returns:
        str: Full document text.

    Raises:
        DocumentError: If the file cannot be opened or is not valid UTF-8.

    Examples:
        text = read_document(Path("app.js"))
    """
    try:
        with open(filepath, "r", encoding="UTF-8", newline="") as handle:
            return handle.read()
    except UnicodeDecodeError as error:
        raise DocumentError(f"Invalid UTF-8 sequence in {filepath}: {error}") from error
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        raise DocumentError(f"Error accessing {filepath}: {error}") from error
