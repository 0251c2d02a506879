"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class FormUsageError(PackageError):
    """Raised on programmer errors, e.g. registering a field with no container.

    Usage errors are never folded into the validation error map.
    """

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message
