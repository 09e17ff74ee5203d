"""
Validation-related domain exceptions.
"""


class ValidationError(Exception):
    """Base exception for input validation errors."""

    pass


class RequiredFieldError(ValidationError):
    """Raised when a required filter or field is missing."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"{field_name} is required")


class OutOfRangeError(ValidationError):
    """Raised when a numeric field falls outside its allowed range."""

    def __init__(self, field_name: str, minimum: int, maximum: int):
        self.field_name = field_name
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(f"{field_name} must be between {minimum} and {maximum}")
