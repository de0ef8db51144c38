from typing import Optional, Any

class SmartSaverError(Exception):
    """
    Base exception for the SmartSaver API.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class ValidationError(SmartSaverError):
    """
    Raised when request input is missing or malformed.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400, details=details)

class AuthenticationError(SmartSaverError):
    """
    Raised when the caller's access token is missing or rejected.
    """
    def __init__(self, message: str = "Authentication failed", details: Optional[Any] = None):
        super().__init__(message, code="AUTHENTICATION_FAILED", status_code=401, details=details)

class ResourceNotFoundError(SmartSaverError):
    """
    Raised when a requested resource is not found.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)

class WebhookVerificationError(SmartSaverError):
    """
    Raised when a Stripe webhook fails signature or payload checks.
    """
    def __init__(self, message: str = "webhook error", details: Optional[Any] = None):
        super().__init__(message, code="WEBHOOK_ERROR", status_code=400, details=details)

class PaymentProviderError(SmartSaverError):
    """
    Raised when a Stripe API call fails.
    """
    def __init__(self, message: str = "Payment provider error", details: Optional[Any] = None):
        super().__init__(message, code="PAYMENT_PROVIDER_ERROR", status_code=500, details=details)

class ProfileStoreError(SmartSaverError):
    """
    Raised when a Supabase read or write fails.
    """
    def __init__(self, message: str = "Profile store error", details: Optional[Any] = None):
        super().__init__(message, code="PROFILE_STORE_ERROR", status_code=500, details=details)
