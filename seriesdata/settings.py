"""Package-level defaults for chart options.

Defaults can be overridden through environment variables so that a deployment
can change the house number/date formats without touching stored chart
configurations.
"""

from __future__ import annotations

import os


def _env_bool(name: str, *, default: bool) -> bool:
    """Parse a boolean environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed boolean value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_str(name: str, *, default: str) -> str:
    """Return a string environment variable, keeping `default` when unset."""

    raw = os.getenv(name)
    if raw is None:
        return default
    return raw


DEFAULT_NUMBER_FORMAT = _env_str("SERIESDATA_NUMBER_FORMAT", default="0,0[.]00000")
DEFAULT_PERCENT_FORMAT = _env_str("SERIESDATA_PERCENT_FORMAT", default="0[.]00%")
DEFAULT_DATETIME_FORMAT = _env_str("SERIESDATA_DATETIME_FORMAT", default="DD/MM/YYYY HH:mm")
DEFAULT_SORT_X = _env_bool("SERIESDATA_SORT_X", default=True)
