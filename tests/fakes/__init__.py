"""Shared test doubles: memory backends plus recording workflow/billing fakes."""

from __future__ import annotations

from typing import Any

from inspectroute.core.exceptions import StoreError, WorkflowError
from inspectroute.models.billing import SubscriptionStatus
from inspectroute.models.company_profile import CompanyProfile
from inspectroute.models.workflow import AuthenticatedUser, WorkflowResponse
from inspectroute.persistence.memory_backend import MemoryCacheBackend, MemoryProfileStore
from inspectroute.services.auth import StaticAuthVerifier


class FailingProfileStore(MemoryProfileStore):
    """Profile store whose catalog read always fails."""

    def list_profiles(self) -> list[CompanyProfile]:
        raise StoreError("connection refused")


class RecordingWorkflowClient:
    """IWorkflowClient that records calls and returns a canned response."""

    def __init__(self, response: WorkflowResponse | None = None, error: WorkflowError | None = None) -> None:
        self.response = response or WorkflowResponse(status_code=200, data={"success": True})
        self.error = error
        self.uploads: list[dict[str, Any]] = []
        self.queries: list[dict[str, Any]] = []

    async def submit_upload(
        self, user_id: str, filename: str, content: bytes, company_hint: str | None = None
    ) -> WorkflowResponse:
        self.uploads.append(
            {"user_id": user_id, "filename": filename, "content": content, "company": company_hint}
        )
        if self.error:
            raise self.error
        return self.response

    async def submit_route_query(self, user_id: str, payload: dict[str, Any]) -> WorkflowResponse:
        self.queries.append({"user_id": user_id, "payload": payload})
        if self.error:
            raise self.error
        return self.response


class StubBillingService:
    """IBillingService returning fixed values."""

    def __init__(self, status: SubscriptionStatus | None = None) -> None:
        self.status = status or SubscriptionStatus()
        self.checkouts: list[tuple[str, str, int, str | None]] = []
        self.portal_requests: list[tuple[str, str]] = []

    def check_subscription(self, email: str) -> SubscriptionStatus:
        return self.status

    def open_portal(self, email: str, return_url: str) -> str:
        self.portal_requests.append((email, return_url))
        return "https://billing.example/portal"

    def create_checkout(
        self, user: AuthenticatedUser, price_id: str, quantity: int, origin: str | None = None
    ) -> str:
        self.checkouts.append((user.id, price_id, quantity, origin))
        return "https://billing.example/checkout"


__all__ = [
    "FailingProfileStore",
    "MemoryCacheBackend",
    "MemoryProfileStore",
    "RecordingWorkflowClient",
    "StaticAuthVerifier",
    "StubBillingService",
]
