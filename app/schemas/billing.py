"""
app/schemas/billing.py

Purpose: Checkout, billing portal and plan schemas

Request fields keep the camelCase names the frontend sends. They are all
optional at the schema level; presence is checked by the route so that a
missing value produces the API's own 400 message.
"""

from pydantic import BaseModel
from typing import List, Optional


class CheckoutRequest(BaseModel):
    userId: Optional[str] = None
    email: Optional[str] = None
    plan: Optional[str] = None


class PortalRequest(BaseModel):
    customerId: Optional[str] = None


class Plan(BaseModel):
    id: str
    amount: int
    currency: str
    interval: str
    label: str


class PlansResponse(BaseModel):
    plans: List[Plan]
