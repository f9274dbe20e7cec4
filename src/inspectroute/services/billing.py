"""Stripe-backed subscription checks, billing portal and checkout sessions."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import stripe

from inspectroute.core.config import StripeConfig
from inspectroute.core.exceptions import BillingError
from inspectroute.models.billing import SubscriptionStatus
from inspectroute.models.workflow import AuthenticatedUser

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = frozenset({"active", "trialing"})


def _iso(timestamp: Optional[int]) -> Optional[str]:
    if not timestamp:
        return None
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


class BillingService:
    """IBillingService over the Stripe API."""

    def __init__(self, config: StripeConfig) -> None:
        self._config = config
        self._tiers = {
            config.individual_product_id: "individual",
            config.team_product_id: "team",
        }

    def _api_key(self) -> str:
        if not self._config.secret_key:
            raise BillingError("Stripe secret key is not set")
        return self._config.secret_key

    def _find_customer_id(self, email: str) -> Optional[str]:
        customers = stripe.Customer.list(email=email, limit=1, api_key=self._api_key())
        data = customers["data"]
        return data[0]["id"] if data else None

    def check_subscription(self, email: str) -> SubscriptionStatus:
        try:
            customer_id = self._find_customer_id(email)
            if customer_id is None:
                logger.info("No Stripe customer, returning unsubscribed state")
                return SubscriptionStatus()

            subscriptions = stripe.Subscription.list(
                customer=customer_id, limit=1, api_key=self._api_key()
            )
        except stripe.StripeError as exc:
            raise BillingError(f"Subscription lookup failed: {exc}") from exc

        if not subscriptions["data"]:
            logger.info("No subscription found for customer %s", customer_id)
            return SubscriptionStatus()

        return self._to_status(subscriptions["data"][0])

    def _to_status(self, subscription: Any) -> SubscriptionStatus:
        item = subscription["items"]["data"][0]
        product_id = item["price"]["product"]
        status = subscription["status"]
        # Newer API versions carry the billing period on the item.
        period_end = item.get("current_period_end") or subscription.get("current_period_end")

        return SubscriptionStatus(
            subscribed=status in ACTIVE_STATUSES,
            status=status,
            product_id=product_id,
            tier=self._tiers.get(product_id),
            subscription_end=_iso(period_end),
            trial_end=_iso(subscription.get("trial_end")),
            seats=item.get("quantity") or 1,
        )

    def open_portal(self, email: str, return_url: str) -> str:
        try:
            customer_id = self._find_customer_id(email)
            if customer_id is None:
                raise BillingError("No billing account for this user")
            session = stripe.billing_portal.Session.create(
                customer=customer_id, return_url=return_url, api_key=self._api_key()
            )
        except stripe.StripeError as exc:
            raise BillingError(f"Opening billing portal failed: {exc}") from exc
        return session["url"]

    def _quantity_for(self, price_id: str, quantity: int) -> int:
        if price_id == self._config.team_price_id:
            return max(quantity, self._config.team_min_seats)
        if price_id == self._config.individual_price_id:
            return 1
        raise BillingError("Invalid price ID")

    def create_checkout(
        self, user: AuthenticatedUser, price_id: str, quantity: int, origin: str | None = None
    ) -> str:
        if not user.email:
            raise BillingError("User email not available")
        final_quantity = self._quantity_for(price_id, quantity)
        origin = (origin or self._config.default_origin).rstrip("/")

        try:
            customer_id = self._find_customer_id(user.email)
            session = stripe.checkout.Session.create(
                customer=customer_id,
                customer_email=None if customer_id else user.email,
                line_items=[{"price": price_id, "quantity": final_quantity}],
                mode="subscription",
                subscription_data={
                    "trial_period_days": self._config.trial_days,
                    "metadata": {"user_id": user.id},
                },
                success_url=f"{origin}/app?checkout=success",
                cancel_url=f"{origin}/app?checkout=canceled",
                api_key=self._api_key(),
            )
        except stripe.StripeError as exc:
            raise BillingError(f"Creating checkout session failed: {exc}") from exc

        logger.info("Checkout session created", extra={"user_id": user.id})
        return session["url"]
