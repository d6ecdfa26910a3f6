"""Exceptions raised at the configuration boundary.

The transformation passes themselves never raise for data problems; a partial
chart is preferred over an error.
"""

from __future__ import annotations


class ChartOptionsError(ValueError):
    """Raised when a chart options payload cannot be decoded."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable failure description.
            source: Optional file path or payload origin.
        """

        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}{message}")
        self.source = source
