"""Subscription, billing portal and checkout endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from inspectroute.api.deps import current_user, get_billing
from inspectroute.core.exceptions import BillingError
from inspectroute.core.protocols import IBillingService
from inspectroute.models.billing import CheckoutRequest, RedirectUrl, SubscriptionStatus
from inspectroute.models.workflow import AuthenticatedUser

router = APIRouter(tags=["billing"])


def _origin(request: Request) -> str | None:
    return request.headers.get("origin")


@router.get("/subscription", response_model=SubscriptionStatus)
def check_subscription(
    billing: IBillingService = Depends(get_billing),
    user: AuthenticatedUser = Depends(current_user),
) -> SubscriptionStatus:
    if not user.email:
        raise BillingError("User email not available")
    return billing.check_subscription(user.email)


@router.post("/portal", response_model=RedirectUrl)
def open_portal(
    request: Request,
    billing: IBillingService = Depends(get_billing),
    user: AuthenticatedUser = Depends(current_user),
) -> RedirectUrl:
    if not user.email:
        raise BillingError("User email not available")
    origin = _origin(request) or str(request.base_url).rstrip("/")
    return RedirectUrl(url=billing.open_portal(user.email, f"{origin}/settings"))


@router.post("/checkout", response_model=RedirectUrl)
def create_checkout(
    body: CheckoutRequest,
    request: Request,
    billing: IBillingService = Depends(get_billing),
    user: AuthenticatedUser = Depends(current_user),
) -> RedirectUrl:
    url = billing.create_checkout(user, body.price_id, body.quantity, origin=_origin(request))
    return RedirectUrl(url=url)
