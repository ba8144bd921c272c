from __future__ import annotations


class RouletteError(Exception):
    """Base class for failures that render as a plain-text message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NoCandidatesMatched(RouletteError):
    """Filtering left nothing to pick from. Loosening the filters may help."""


class NoBuildingsSelected(RouletteError):
    """Building mode was requested without any building."""

    def __init__(self, message: str = "Select at least one building first") -> None:
        super().__init__(message)


class ExternalLookupFailed(RouletteError):
    """A call to the mapping provider did not succeed."""

    def __init__(self, operation: str, status: str, message: str | None = None) -> None:
        super().__init__(message or f"{operation} lookup failed ({status})")
        self.operation = operation
        self.status = status
