"""
Error taxonomy for slider extraction.

Fatal conditions raise one of these exceptions; nothing is returned when they
do, so a caller can keep its previously loaded shader active. Recoverable
problems (unknown settings, malformed vec3 initializers) are only logged.

Hierarchy:
    ExtractError
    ├── ParseError
    └── ParamFieldError
        ├── UnsupportedFieldTypeError
        └── NonConstantExpressionError
"""

from typing import Optional


class ExtractError(Exception):
    """Base class for every fatal extraction failure."""
    def __init__(self, message: str, location: Optional[tuple] = None):
        self.message = message
        self.location = location
        if location:
            line, col = location
            super().__init__(f"{message} at line {line+1}, column {col+1}")
        else:
            super().__init__(message)


class ParseError(ExtractError):
    """Raised when the input is not valid GLSL."""


class ParamFieldError(ExtractError):
    """Raised when a field of the params block cannot become a slider."""


class UnsupportedFieldTypeError(ParamFieldError):
    """Raised for a params field whose base type has no slider kind."""


class NonConstantExpressionError(ParamFieldError):
    """Raised when a numeric literal was required but something else was found."""
