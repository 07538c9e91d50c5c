"""
fold-scanner: folding-region detection for scripts and stylesheets.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    fold-scanner static/app.js

Library Usage:
    from fold_scanner import FoldScanner

    scanner = FoldScanner(
        source,
        region_pairs=["//#region", "//#endregion"],
        comment_pairs=["/*", "*/", "//", "//"],
        detect_functions=True,
    )
    for fold in scanner.generate_folds():
        print(fold.start_line, fold.last_line, fold.name)
"""

from .config import ConfigError, ScannerConfig, build_config, profile_config
from .exceptions import DocumentError, DocumentTooLargeError, UnsupportedDocumentError
from .models import FoldKind, FoldRegion, ScanState, detect_line_terminator
from .scanner import FoldScanner, generate_folds, truncate_name

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "FoldScanner",
    "generate_folds",
    "truncate_name",
    "detect_line_terminator",
    # Data models
    "FoldKind",
    "FoldRegion",
    "ScanState",
    # Configuration
    "ScannerConfig",
    "build_config",
    "profile_config",
    # Exceptions
    "ConfigError",
    "DocumentError",
    "DocumentTooLargeError",
    "UnsupportedDocumentError",
    # Version
    "__version__",
]
