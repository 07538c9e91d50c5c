"""Constants used across the fold-scanner package."""

from __future__ import annotations

# Name shaping
REGION_NAME_MAX = 40
TRUNCATE_LOOKBACK = 2  # first space may sit this far before the limit
TRUNCATE_LOOKAHEAD = 5  # ...and at most this far past it
EMPTY_FOLD_NAME = "..."
# A region name ends at the first closer on its marker line, e.g. `/*#region Foo */`
REGION_NAME_CLOSERS = ("*/", "-->")

# Brace/function pass
OPEN_BRACE = "{"
CLOSE_BRACE = "}"
FUNCTION_KEYWORD = "function"

NOT_FOUND = -1

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024

_SCRIPT_PROFILE = {
    "region_pairs": ["//#region", "//#endregion", "/*#region", "/*#endregion"],
    "comment_pairs": ["/*", "*/", "//", "//"],
    "detect_functions": True,
}
_STYLESHEET_PROFILE = {
    "region_pairs": ["/*#region", "/*#endregion"],
    "comment_pairs": ["/*", "*/"],
    "detect_functions": False,
}
_PREPROCESSED_STYLESHEET_PROFILE = {
    "region_pairs": ["//#region", "//#endregion", "/*#region", "/*#endregion"],
    "comment_pairs": ["/*", "*/", "//", "//"],
    "detect_functions": False,
}

# Default marker configuration per file extension
LANGUAGE_PROFILES = {
    ".js": _SCRIPT_PROFILE,
    ".mjs": _SCRIPT_PROFILE,
    ".cjs": _SCRIPT_PROFILE,
    ".ts": _SCRIPT_PROFILE,
    ".css": _STYLESHEET_PROFILE,
    ".less": _PREPROCESSED_STYLESHEET_PROFILE,
    ".scss": _PREPROCESSED_STYLESHEET_PROFILE,
}
SUPPORTED_EXTENSIONS = tuple(LANGUAGE_PROFILES)
