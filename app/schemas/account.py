"""
app/schemas/account.py

Purpose: Profile and price-drop alert schemas
"""

from pydantic import BaseModel, Field
from typing import Optional

from utils.constants import ACTIVE_STATUS, FREE_PLAN


class Profile(BaseModel):
    """
    A row of the Supabase profiles table.
    """
    id: str
    email: Optional[str] = None
    username: Optional[str] = None
    subscription_status: Optional[str] = None
    stripe_customer_id: Optional[str] = None

    @property
    def plan(self) -> str:
        return self.subscription_status or FREE_PLAN

    @property
    def is_premium(self) -> bool:
        return self.subscription_status == ACTIVE_STATUS


class AccountResponse(BaseModel):
    id: str
    email: Optional[str] = None
    username: Optional[str] = None
    subscriptionStatus: Optional[str] = None
    stripeCustomerId: Optional[str] = None
    plan: str
    isPremium: bool

    @classmethod
    def from_profile(cls, profile: Profile) -> "AccountResponse":
        return cls(
            id=profile.id,
            email=profile.email,
            username=profile.username,
            subscriptionStatus=profile.subscription_status,
            stripeCustomerId=profile.stripe_customer_id,
            plan=profile.plan,
            isPremium=profile.is_premium,
        )


class PriceDropRequest(BaseModel):
    query: Optional[str] = Field(default=None, description="Product to watch, e.g. 'milk'")
    zip: Optional[str] = Field(default=None, description="Optional 5-digit ZIP")
