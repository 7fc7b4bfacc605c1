"""
Base domain exceptions.
"""


class BoutiqueException(Exception):
    """Base exception for all Boutique domain errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class EntityNotFoundError(BoutiqueException):
    """Raised when entity is not found in repository."""

    def __init__(self, entity_type: str, entity_id: str):
        message = f"{entity_type} with id: {entity_id} was not found"
        super().__init__(message, code="ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


class ValidationError(BoutiqueException):
    """Raised when input data is invalid."""

    def __init__(self, field: str, reason: str):
        message = f"Validation failed for {field}: {reason}"
        super().__init__(message, code="INVALID_DATA")
        self.field = field
        self.reason = reason


class PermissionDeniedError(BoutiqueException):
    """Raised when the acting customer may not modify a resource."""

    def __init__(self, action: str, entity_type: str):
        message = f"You do not have permission to {action} this {entity_type}"
        super().__init__(message, code="NOT_ALLOWED")
