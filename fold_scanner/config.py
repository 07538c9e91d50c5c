"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_MAX_FILE_SIZE, LANGUAGE_PROFILES, SUPPORTED_EXTENSIONS
from .exceptions import UnsupportedDocumentError


@dataclass
class ScannerConfig:
    """Marker configuration and limits for scanning a document.

    Attributes:
        region_pairs: Flat ``[start, end, ...]`` named-region markers.
        comment_pairs: Flat ``[start, end, ...]`` comment markers; equal start
            and end markers fold runs of line comments.
        detect_functions: Whether brace-delimited function bodies are folded.
        max_file_size: Maximum file size in bytes that will be scanned.

    Examples:
        ScannerConfig(comment_pairs=["/*", "*/"], detect_functions=True)
    """

    region_pairs: list[str] = field(default_factory=list)
    comment_pairs: list[str] = field(default_factory=list)
    detect_functions: bool = False

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`region_pairs` must contain an even number of markers")
    """


def profile_config(suffix: str) -> ScannerConfig:
    """Return the default configuration for a file extension.

    Args:
        suffix: File extension including the leading dot (case-insensitive).

    Returns:
        ScannerConfig: Fresh configuration built from the language profile.

    Raises:
        UnsupportedDocumentError: If no profile exists for `suffix`.

    Examples:
        profile_config(".js").detect_functions  # True
    """
    profile = LANGUAGE_PROFILES.get(suffix.lower())
    if profile is None:
        raise UnsupportedDocumentError(suffix, SUPPORTED_EXTENSIONS)
    return ScannerConfig(
        region_pairs=list(profile["region_pairs"]),
        comment_pairs=list(profile["comment_pairs"]),
        detect_functions=profile["detect_functions"],
    )


def load_config(search_path: Path, base: ScannerConfig | None = None) -> ScannerConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.fold-scanner]`` table from `pyproject.toml` and the
    ``[fold-scanner]`` or ``[tool.fold-scanner]`` table from
    `.fold-scanner.toml`. Keys found in the table replace those of `base`; keys
    left out keep their `base` value. TOML files that cannot be read or decoded
    are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.
        base: Configuration the file values are layered on; defaults to
            `ScannerConfig()`.

    Returns:
        ScannerConfig: Loaded configuration, or `base` when no file is found.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("src"), profile_config(".css"))
    """
    base = base or ScannerConfig()
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", base, table_paths=[("tool", "fold-scanner")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".fold-scanner.toml",
            base,
            table_paths=[("fold-scanner",), ("tool", "fold-scanner")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return base


_MISSING = object()


def _load_from_file(
    config_file: Path, base: ScannerConfig, table_paths: list[tuple[str, ...]]
) -> ScannerConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, base, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, base: ScannerConfig, config_file: Path, table_path: tuple[str, ...]
) -> ScannerConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    try:
        return replace(base, **raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: ScannerConfig) -> None:
    """Validate a `ScannerConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If marker arrays are not even-length lists of non-empty
            strings, `detect_functions` is not a boolean, or `max_file_size` is
            not a positive integer.

    Examples:
        validate_config(ScannerConfig(region_pairs=["//#region", "//#endregion"]))
    """
    _ensure_marker_pairs("region_pairs", config.region_pairs)
    _ensure_marker_pairs("comment_pairs", config.comment_pairs)

    if not isinstance(config.detect_functions, bool):
        raise ConfigError("`detect_functions` must be a boolean")

    max_file_size = config.max_file_size
    if isinstance(max_file_size, bool) or not isinstance(max_file_size, int):
        raise ConfigError("`max_file_size` must be an integer")
    if max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: ScannerConfig, **overrides: object) -> ScannerConfig:
    """Apply override values to a `ScannerConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set
            to None are ignored.

    Returns:
        ScannerConfig: New configuration with the overrides applied, or the
        original configuration when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `ScannerConfig`.

    Examples:
        updated = apply_overrides(config, detect_functions=False)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, suffix: str, **overrides: object) -> ScannerConfig:
    """Resolve the configuration for a document.

    The language profile for `suffix` comes first, then any config file found
    from `search_path` upwards, then `overrides`.

    Args:
        search_path: Directory where configuration files are resolved.
        suffix: Extension of the document being scanned.
        overrides: Override values keyed by configuration attributes; None
            values are ignored.

    Returns:
        ScannerConfig: Validated configuration ready for scanning.

    Raises:
        ConfigError: If configuration loading or validation fails.
        UnsupportedDocumentError: If no profile exists for `suffix`.

    Examples:
        config = build_config(Path.cwd(), ".js", detect_functions=False)
    """
    config = load_config(search_path, profile_config(suffix))
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_marker_pairs(key: str, markers: object) -> None:
    if not isinstance(markers, list):
        raise ConfigError(f"`{key}` must be a list of strings")
    if len(markers) % 2:
        raise ConfigError(f"`{key}` must contain an even number of markers")
    for marker in markers:
        if not isinstance(marker, str) or not marker:
            raise ConfigError(f"`{key}` must contain only non-empty strings")
