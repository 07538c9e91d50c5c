"""Package-specific exception types."""

from __future__ import annotations

from pathlib import Path


class DocumentError(ValueError):
    """Base class for errors raised while loading a document to scan.

    The scanner never raises; these belong to the host layer that reads files
    and picks marker configuration.
    """


class DocumentTooLargeError(DocumentError):
    """Raised when a document exceeds the configured maximum size.

    Args:
        path: Path to the offending document.
        limit: Maximum allowed size in bytes.
    """

    def __init__(self, path: Path, limit: int):
        self.path = path
        self.limit = limit
        super().__init__(f"{path} exceeds the maximum allowed size of {limit} bytes.")


class UnsupportedDocumentError(DocumentError):
    """Raised when no marker profile exists for a document's extension.

    Args:
        suffix: File extension that was looked up, including the dot.
        supported: Extensions that do have a profile.
    """

    def __init__(self, suffix: str, supported: tuple[str, ...]):
        self.suffix = suffix
        self.supported = supported
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"No folding profile for {self.suffix or 'files without an extension'}.\n"
            f"Supported extensions are: {', '.join(self.supported)}"
        )
