"""Protocol interfaces for the external collaborators.

Every hosted service (store, cache, auth, workflow, payments) is reached
through one of these Protocols, so tests can swap in the memory fakes.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from inspectroute.models.billing import SubscriptionStatus
from inspectroute.models.company_profile import CompanyProfile, CompanyProfileUpsert
from inspectroute.models.workflow import AuthenticatedUser, WorkflowResponse


# ---------------------------------------------------------------------------
# Persistence: Company Profile Store
# ---------------------------------------------------------------------------

@runtime_checkable
class ICompanyProfileStore(Protocol):
    """Hosted company_profiles table."""

    def list_profiles(self) -> list[CompanyProfile]: ...

    def get_profile(self, code: str) -> Optional[CompanyProfile]: ...

    def upsert_profile(self, params: CompanyProfileUpsert) -> CompanyProfile: ...


# ---------------------------------------------------------------------------
# Persistence: Cache Backend
# ---------------------------------------------------------------------------

@runtime_checkable
class ICacheBackend(Protocol):
    """Redis-compatible cache interface."""

    def get(self, key: str) -> str | None: ...

    def setex(self, key: str, ttl: int, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


# ---------------------------------------------------------------------------
# Hosted Auth
# ---------------------------------------------------------------------------

@runtime_checkable
class IAuthVerifier(Protocol):
    """Resolves a bearer token to the signed-in user."""

    def verify(self, token: str) -> AuthenticatedUser: ...


# ---------------------------------------------------------------------------
# External Workflow Service
# ---------------------------------------------------------------------------

@runtime_checkable
class IWorkflowClient(Protocol):
    """Opaque ingestion and route-query webhooks."""

    async def submit_upload(
        self,
        user_id: str,
        filename: str,
        content: bytes,
        company_hint: str | None = None,
    ) -> WorkflowResponse: ...

    async def submit_route_query(self, user_id: str, payload: dict[str, Any]) -> WorkflowResponse: ...


# ---------------------------------------------------------------------------
# Payments Provider
# ---------------------------------------------------------------------------

@runtime_checkable
class IBillingService(Protocol):
    """Subscription lookup, billing portal and checkout."""

    def check_subscription(self, email: str) -> SubscriptionStatus: ...

    def open_portal(self, email: str, return_url: str) -> str: ...

    def create_checkout(
        self, user: AuthenticatedUser, price_id: str, quantity: int, origin: str | None = None
    ) -> str: ...
