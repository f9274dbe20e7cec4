"""Subscription and checkout models for the payments provider."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class SubscriptionStatus(BaseModel):
    """Current subscription state for a user."""

    subscribed: bool = False
    status: str = "none"
    product_id: Optional[str] = None
    tier: Optional[str] = None  # individual, team
    subscription_end: Optional[str] = None
    trial_end: Optional[str] = None
    seats: Optional[int] = None


class CheckoutRequest(BaseModel):
    price_id: str
    quantity: int = Field(default=1, ge=1)


class RedirectUrl(BaseModel):
    url: str
