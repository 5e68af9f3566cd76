from typing import Any, Optional


class AstroError(Exception):
    """Base exception for errors surfaced to API clients"""

    def __init__(self, message: str = "An error occurred", status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class MissingParametersError(AstroError):
    """Required request fields are absent"""

    def __init__(self, message: str = "Missing required parameters"):
        super().__init__(message=message, status_code=400)


class UnknownServiceTypeError(AstroError):
    """The service type has no entry in the price table"""

    def __init__(self, service_type: Optional[str] = None):
        self.service_type = service_type
        super().__init__(message="Unknown service type", status_code=400)


class InvalidParameterError(AstroError):
    """A field is present but outside the accepted values"""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message=message, status_code=400)


class NotFoundError(AstroError):
    """Raised when an entity is not found"""

    def __init__(self, entity: str = "Order", id: Any = None):
        self.entity = entity
        self.id = id
        super().__init__(message=f"{entity} not found", status_code=404)


class PaymentRequiredError(AstroError):
    """The order exists but has not been paid yet"""

    def __init__(self, message: str = "Order is not paid"):
        super().__init__(message=message, status_code=402)
