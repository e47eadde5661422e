"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import InsightConfig, load_config

console = Console()
err_console = Console(stderr=True)


def resolve_config(
    config: Optional[Path] = None,
    current_year: Optional[int] = None,
    top_n: Optional[int] = None,
    delimiter: Optional[str] = None,
    no_header: bool = False,
    strict: bool = False,
    output_format: Optional[str] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> InsightConfig:
    """Build configuration from CLI options."""
    overrides = {
        "current_year": current_year,
        "top_n": top_n,
        "delimiter": delimiter,
        "output_format": output_format,
    }
    if no_header:
        overrides["has_header"] = False
    if strict:
        overrides["strict"] = True
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)
