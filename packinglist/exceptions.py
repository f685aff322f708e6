"""Domain-specific exceptions with user-ready messages for packing lists."""

from collections.abc import Iterable


class BusinessLogicException(Exception):
    """Base exception class for business logic errors.

    All business logic exceptions include user-ready messages that can be
    returned to callers without further message construction.
    """

    def __init__(self, message: str, error_code: str) -> None:
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class RecordNotFoundException(BusinessLogicException):
    """Exception raised when a requested record is not found."""

    def __init__(self, resource_type: str, identifier: str | int) -> None:
        message = f"{resource_type} {identifier} was not found"
        super().__init__(message, error_code="RECORD_NOT_FOUND")


class DocumentValidationException(BusinessLogicException):
    """Base class for rejected packing list writes.

    ``field`` holds the dotted path of the offending value inside the
    submitted document, e.g. ``cartons.0.items.1.sizes.0.size_name``.
    """

    def __init__(self, message: str, error_code: str, field: str) -> None:
        self.field = field
        super().__init__(message, error_code)


class MissingFieldException(DocumentValidationException):
    """Exception raised when a required field is absent or empty."""

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} is required", "MISSING_FIELD", field)


class TypeMismatchException(DocumentValidationException):
    """Exception raised when a value has the wrong type or is out of range."""

    def __init__(self, field: str, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{field} is invalid: {detail}", "TYPE_MISMATCH", field)


class DuplicateKeyException(DocumentValidationException):
    """Exception raised when a unique key is already in use."""

    def __init__(self, resource_type: str, field: str, value: str | None) -> None:
        self.resource_type = resource_type
        self.value = value
        if value is None:
            message = f"A {resource_type.lower()} with this number already exists"
        else:
            message = f"A {resource_type.lower()} with number {value} already exists"
        super().__init__(message, "DUPLICATE_KEY", field)


class SizeNotAvailableException(DocumentValidationException):
    """Exception raised when an item uses a size the packing list does not offer."""

    def __init__(self, field: str, size_name: str, available_sizes: Iterable[str]) -> None:
        self.size_name = size_name
        self.available_sizes = list(available_sizes)
        available = ", ".join(self.available_sizes) or "none"
        message = f"Size {size_name} is not available in the packing list (available: {available})"
        super().__init__(message, "SIZE_NOT_AVAILABLE", field)


class InvalidWeightException(DocumentValidationException):
    """Exception raised when a carton's gross weight is below its net weight."""

    def __init__(self, field: str, net_weight: float, gross_weight: float) -> None:
        message = f"Gross weight {gross_weight} cannot be less than net weight {net_weight}"
        super().__init__(message, "INVALID_WEIGHT", field)
