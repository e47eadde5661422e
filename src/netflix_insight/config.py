"""Configuration loading and management for Netflix Insight.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in InsightConfig)
    2. Global config (~/.netflix-insight.toml)
    3. Project config (./netflix-insight.toml)
    4. Explicit config file
    5. Environment variables (NETFLIX_INSIGHT_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, top_n=10)
    >>> config.verbosity
    'verbose'
    >>> config.top_n
    10
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]
OutputFormat = Literal["rich", "json", "csv"]

ENV_PREFIX = "NETFLIX_INSIGHT_"

# Logical field names in the order the columns appear in a headerless file.
FIELD_ORDER = (
    "show_id",
    "type",
    "title",
    "director",
    "cast",
    "country",
    "date_added",
    "release_year",
    "rating",
    "duration",
    "genres",
    "description",
)


@dataclass(frozen=True)
class InsightConfig:
    """Configuration for loading the catalog and running queries.

    Attributes:
        Source format:
            delimiter: Single-character field delimiter
            encoding: Text encoding of the data file
            has_header: Whether the first row names the columns
            columns: Logical field -> source column name overrides

        Loading behaviour:
            strict: Propagate ParseError instead of skipping the bad cell/row
            require_rows: Raise EmptyInputError when nothing was loaded

        Query parameters:
            current_year: Reference year for "recent" windows (None = today)
            recent_years: Size of the genre growth window in years
            top_n: Row limit for ranked queries (growth, title lengths)
            documentary_threshold: Exclusive lower bound on documentary ratio

        Output control:
            output_format: Default formatter name
            verbosity: Logging verbosity level
    """

    # Source format
    delimiter: str = ","
    encoding: str = "utf-8-sig"
    has_header: bool = True
    columns: Dict[str, str] = field(default_factory=dict)

    # Loading behaviour
    strict: bool = False
    require_rows: bool = False

    # Query parameters
    current_year: Optional[int] = None
    recent_years: int = 5
    top_n: int = 5
    documentary_threshold: float = 0.70

    # Output control
    output_format: OutputFormat = "rich"
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if len(self.delimiter) != 1:
            raise InvalidConfigError("delimiter", self.delimiter, "must be a single character")

        unknown = sorted(set(self.columns) - set(FIELD_ORDER))
        if unknown:
            raise InvalidConfigError(
                "columns", ", ".join(unknown), f"unknown field(s); expected any of {', '.join(FIELD_ORDER)}"
            )

        if self.current_year is not None and not 1000 <= self.current_year <= 9999:
            raise InvalidConfigError("current_year", self.current_year, "must be a four-digit year")
        if self.recent_years < 0:
            raise InvalidConfigError("recent_years", self.recent_years, "must be non-negative")
        if self.top_n < 1:
            raise InvalidConfigError("top_n", self.top_n, "must be at least 1")
        if not 0.0 <= self.documentary_threshold <= 1.0:
            raise InvalidConfigError(
                "documentary_threshold", self.documentary_threshold, "must be between 0.0 and 1.0"
            )

        if self.output_format not in ("rich", "json", "csv"):
            raise InvalidConfigError("output_format", self.output_format, "expected rich, json or csv")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "expected quiet, normal or verbose")

    @property
    def reference_year(self) -> int:
        """Year used as "now" by time-windowed queries."""
        if self.current_year is not None:
            return self.current_year
        return date.today().year


DEFAULT_CONFIG = InsightConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> InsightConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options keep lower-priority values.

    Returns:
        Validated InsightConfig instance

    Raises:
        ConfigurationError: If a config file is missing or invalid
    """
    merged: dict = {}

    global_config = Path.home() / ".netflix-insight.toml"
    if global_config.exists():
        merged.update(_read_config_file(global_config, "global config"))

    project_config = Path.cwd() / "netflix-insight.toml"
    if project_config.exists():
        merged.update(_read_config_file(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_read_config_file(config_file, "config file"))

    merged.update(_load_env_vars())

    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    # Column overrides merge key-by-key rather than replacing the table
    columns = dict(merged.pop("columns", {}) or {})
    columns.update(overrides.pop("columns", {}) or {})

    merged.update(overrides)
    if columns:
        merged["columns"] = columns

    try:
        return InsightConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _read_config_file(path: Path, label: str) -> dict:
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {label} '{path}': {e}")

    columns = data.get("columns")
    if columns is not None and not isinstance(columns, dict):
        raise InvalidConfigError("columns", columns, "must be a table of field = column name")
    return data


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from NETFLIX_INSIGHT_* environment variables.

    Supported environment variables:
        NETFLIX_INSIGHT_DELIMITER: str
        NETFLIX_INSIGHT_ENCODING: str
        NETFLIX_INSIGHT_HAS_HEADER: bool (true/false/1/0)
        NETFLIX_INSIGHT_STRICT: bool
        NETFLIX_INSIGHT_REQUIRE_ROWS: bool
        NETFLIX_INSIGHT_CURRENT_YEAR: int
        NETFLIX_INSIGHT_RECENT_YEARS: int
        NETFLIX_INSIGHT_TOP_N: int
        NETFLIX_INSIGHT_DOCUMENTARY_THRESHOLD: float
        NETFLIX_INSIGHT_OUTPUT_FORMAT: rich/json/csv
        NETFLIX_INSIGHT_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any variables found.
    """
    type_hints = get_type_hints(InsightConfig)

    result: dict[str, Any] = {}

    for field_name in InsightConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Args:
        value: Raw string from environment
        type_hint: Type annotation from dataclass

    Returns:
        Parsed value or None if the type is not settable from the environment

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    # Mappings (columns) only come from TOML
    if origin is dict or type_hint is dict:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
