"""
utils/constants.py

Purpose: Centralized static content

- Demo search catalogue
- Subscription plans and statuses
- User-facing error messages

(Prevents hardcoding across the codebase)
"""

# ============================================================
# DEMO SEARCH
# ============================================================

MAX_SEARCH_RESULTS = 12

DEMO_RESULTS = [
    {"id": 1, "title": "Whole Milk, 1 Gallon", "retailer": "MegaMart", "price": 3.49, "imageUrl": "", "productUrl": "#"},
    {"id": 2, "title": "Large Eggs, 12 ct", "retailer": "BudgetFoods", "price": 2.39, "imageUrl": "", "productUrl": "#"},
    {"id": 3, "title": "Chicken Breast, 1 lb", "retailer": "SuperSaver", "price": 2.99, "imageUrl": "", "productUrl": "#"},
]

# ============================================================
# PLANS & SUBSCRIPTION STATUS
# ============================================================

DEFAULT_PLAN = "monthly"

# Amounts in cents
PLANS = {
    "monthly": {"amount": 999, "interval": "month", "label": "$9.99/mo"},
    "yearly": {"amount": 9900, "interval": "year", "label": "$99/yr"},
}

ACTIVE_STATUS = "active"
FREE_PLAN = "free"

CHECKOUT_PAYMENT_METHODS = ["card", "link"]
CHECKOUT_SUCCESS_PATH = "/success"
CHECKOUT_CANCEL_PATH = "/canceled"
PORTAL_RETURN_PATH = "/account"

# ============================================================
# PROFILE STORE
# ============================================================

PROFILE_COLUMNS = "id,email,username,subscription_status,stripe_customer_id"

# ============================================================
# ERROR MESSAGES
# ============================================================

MISSING_CHECKOUT_FIELDS = "Missing userId or email"
MISSING_CUSTOMER_ID = "Missing customerId"
CHECKOUT_FAILED = "checkout failed"
PORTAL_FAILED = "portal failed"
INVALID_SEARCH = "Invalid search query"
MISSING_TOKEN = "Missing bearer token"
INVALID_TOKEN = "Invalid or expired session"
PROFILE_NOT_FOUND = "Profile not found"
INVALID_ALERT_QUERY = "Please enter a product to watch."
INVALID_ZIP = "ZIP must be 5 digits."
