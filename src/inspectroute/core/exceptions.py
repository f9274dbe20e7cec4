"""InspectRoute exception hierarchy."""

from __future__ import annotations


class InspectRouteError(Exception):
    """Base exception for all InspectRoute errors."""


class StoreError(InspectRouteError):
    """Hosted relational store call failed."""


class ProfileNotFoundError(InspectRouteError):
    """No company profile exists for the requested code."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"No company profile with code {code!r}")


class CacheError(InspectRouteError):
    """Redis cache operation failed."""


class AuthenticationError(InspectRouteError):
    """Bearer token missing, invalid or expired."""


class WorkflowError(InspectRouteError):
    """External workflow service call failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class BillingError(InspectRouteError):
    """Payments provider call failed."""


class UnreadableFileError(InspectRouteError):
    """Uploaded spreadsheet could not be decoded."""


class InvalidUploadError(InspectRouteError):
    """Upload request rejected before reaching the workflow."""
