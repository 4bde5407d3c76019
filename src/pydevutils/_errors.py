"""Exception hierarchy for the base and time converters."""


class ConversionError(Exception):
    """Base exception for converter errors.

    Provides dual messaging: a sanitized user-facing message and
    internal details for logging (CWE-209 prevention).
    """

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped

    def internal(self) -> str:
        return self.internal_details


class InvalidArgumentError(ConversionError):
    """Raised when a caller passes an argument outside its domain."""


class InvalidBaseError(InvalidArgumentError):
    """Raised when a radix is not an integer in [2, 36]."""


class UnsupportedFormatError(InvalidArgumentError):
    """Raised when a time input format is unknown."""


class ParseError(ConversionError):
    """Raised when input text cannot be parsed."""


class InvalidDigitError(ParseError):
    """Raised when a numeric string contains digits invalid for its base."""


class InvalidExpressionError(ParseError):
    """Raised when an arithmetic expression is malformed or not finite."""


class UnsupportedExpressionError(ParseError):
    """Raised when an expression uses anything beyond plain arithmetic."""


class MaxDepthExceededError(ParseError):
    """Raised when expression nesting exceeds the recursion limit."""


class MaxExpressionLengthExceededError(ParseError):
    """Raised when an expression is longer than the allowed maximum."""


class InvalidTimestampError(ParseError):
    """Raised when a timestamp is unparseable or out of range."""


# Sanitized user-facing error message constants
ERR_MSG_INVALID_INPUT = "Invalid input"
ERR_MSG_INVALID_BASE = "base must be an integer between 2 and 36"
ERR_MSG_INVALID_DIGITS = "invalid digits for base"
ERR_MSG_INVALID_EXPRESSION = "invalid arithmetic expression"
ERR_MSG_UNSUPPORTED_EXPRESSION = "unsupported expression"
ERR_MSG_INVALID_TIMESTAMP = "invalid timestamp"
ERR_MSG_UNSUPPORTED_FORMAT = "unsupported input format"
