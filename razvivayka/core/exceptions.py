from typing import Optional, Any


class RazvivaykaError(Exception):
    """
    Base exception for the reminder service.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ResourceNotFoundError(RazvivaykaError):
    """
    Raised when a requested resource is not found.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)


class ValidationError(RazvivaykaError):
    """
    Raised when input validation fails.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=422, details=details)


class StorageError(RazvivaykaError):
    """
    Raised when the user store cannot be written.
    """
    def __init__(self, message: str = "Storage error", details: Optional[Any] = None):
        super().__init__(message, code="STORAGE_ERROR", status_code=500, details=details)


class NotificationDeliveryError(RazvivaykaError):
    """
    Raised when Telegram rejects an outbound notification.
    """
    def __init__(self, message: str = "Failed to deliver notification", details: Optional[Any] = None):
        super().__init__(message, code="DELIVERY_FAILED", status_code=500, details=details)
