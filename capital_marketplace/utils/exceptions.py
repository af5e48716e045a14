# capital_marketplace/utils/exceptions.py
"""Custom exceptions for Capital Marketplace"""


class MarketplaceException(Exception):
    """Base exception for Capital Marketplace"""

    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500):
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)


class ValidationError(MarketplaceException):
    """Validation error"""
    def __init__(self, message: str):
        super().__init__(message, "VALIDATION_ERROR", 400)


class NotFoundError(MarketplaceException):
    """Resource not found"""
    def __init__(self, message: str):
        super().__init__(message, "NOT_FOUND", 404)


class AlreadyDoneError(MarketplaceException):
    """Requested state change is already in effect"""
    def __init__(self, message: str):
        super().__init__(message, "ALREADY_DONE", 400)


class ConflictError(MarketplaceException):
    """Resource conflict (e.g., duplicate)"""
    def __init__(self, message: str):
        super().__init__(message, "CONFLICT", 409)


class TransientStoreError(MarketplaceException):
    """Backing store temporarily unavailable"""
    def __init__(self, message: str = "Data store temporarily unavailable"):
        super().__init__(message, "STORE_UNAVAILABLE", 503)
