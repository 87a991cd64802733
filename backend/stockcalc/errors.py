from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    MISSING_SYMBOL = "MISSING_SYMBOL"
    INVALID_SYMBOL = "INVALID_SYMBOL"
    API_UNAVAILABLE = "API_UNAVAILABLE"
    SYMBOL_NOT_FOUND = "SYMBOL_NOT_FOUND"
    NETWORK_ERROR = "NETWORK_ERROR"
    # Reserved: only the client message table knows it, the handler never emits it.
    RATE_LIMITED = "RATE_LIMITED"


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.MISSING_SYMBOL: "Stock symbol is required",
    ErrorCode.INVALID_SYMBOL: "Please enter a valid stock symbol (1-5 letters)",
    ErrorCode.API_UNAVAILABLE: (
        "Stock data service is temporarily unavailable. Please try again later."
    ),
    ErrorCode.SYMBOL_NOT_FOUND: (
        "Stock symbol not found. Please check the symbol and try again."
    ),
    ErrorCode.NETWORK_ERROR: (
        "Network connection error. Please check your internet connection."
    ),
    ErrorCode.RATE_LIMITED: (
        "Too many requests. Please wait a moment before searching again."
    ),
}


UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."

# Messages shown to the user; wording differs from the API only for MISSING_SYMBOL.
DISPLAY_MESSAGES: dict[str, str] = {code.value: message for code, message in ERROR_MESSAGES.items()}
DISPLAY_MESSAGES[ErrorCode.MISSING_SYMBOL.value] = "Please enter a stock symbol"


def error_message(code: ErrorCode | str | None) -> str:
    if code is None:
        return UNEXPECTED_ERROR_MESSAGE
    key = code.value if isinstance(code, ErrorCode) else code
    return DISPLAY_MESSAGES.get(key, UNEXPECTED_ERROR_MESSAGE)


class QuoteLookupError(Exception):
    """Raised inside the quote handler; converted to an error response at its boundary."""

    def __init__(self, code: ErrorCode, status_code: int) -> None:
        self.code = code
        self.status_code = status_code
        self.message = ERROR_MESSAGES[code]
        super().__init__(f"{code.value}: {self.message}")
