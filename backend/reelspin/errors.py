"""Error codes and exceptions for the wallet, bet selector and spin controller."""
from enum import Enum

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from reelspin.config import settings


class ErrorCode(str, Enum):
    """Error codes surfaced to the UI layer."""

    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_DENOMINATION = "INVALID_DENOMINATION"
    INVALID_GEOMETRY = "INVALID_GEOMETRY"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    SESSION_BUSY = "SESSION_BUSY"
    INTERNAL_ERROR = "INTERNAL_ERROR"


ERROR_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.INVALID_AMOUNT: 400,
    ErrorCode.INVALID_DENOMINATION: 400,
    ErrorCode.INVALID_GEOMETRY: 400,
    ErrorCode.INSUFFICIENT_FUNDS: 402,
    ErrorCode.SESSION_BUSY: 409,
    ErrorCode.INTERNAL_ERROR: 500,
}

# Recoverable: retrying later (or after a credit) can succeed without a code change.
ERROR_RECOVERABLE: dict[ErrorCode, bool] = {
    ErrorCode.INVALID_REQUEST: False,
    ErrorCode.INVALID_AMOUNT: False,
    ErrorCode.INVALID_DENOMINATION: False,
    ErrorCode.INVALID_GEOMETRY: False,
    ErrorCode.INSUFFICIENT_FUNDS: True,
    ErrorCode.SESSION_BUSY: True,
    ErrorCode.INTERNAL_ERROR: True,
}


class ErrorBody(BaseModel):
    """Error body shape."""

    code: str
    message: str
    recoverable: bool


class ErrorResponse(BaseModel):
    """Full error response."""

    protocolVersion: str = settings.protocol_version
    error: ErrorBody


class GameError(Exception):
    """Base game error that maps to protocol error response."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, code: ErrorCode | None = None, message: str | None = None):
        if code is not None:
            self.code = code
        self.message = message or f"Error: {self.code.value}"
        self.status_code = ERROR_HTTP_STATUS[self.code]
        self.recoverable = ERROR_RECOVERABLE[self.code]
        super().__init__(self.message)

    def to_response(self) -> JSONResponse:
        """Convert to JSONResponse."""
        return JSONResponse(
            status_code=self.status_code,
            content=ErrorResponse(
                error=ErrorBody(
                    code=self.code.value,
                    message=self.message,
                    recoverable=self.recoverable,
                )
            ).model_dump(),
        )


class InsufficientFunds(GameError):
    """Debit exceeds the current balance."""

    code = ErrorCode.INSUFFICIENT_FUNDS

    def __init__(self, amount: int, balance: int):
        self.amount = amount
        self.balance = balance
        super().__init__(
            message=f"Insufficient balance: cannot debit {amount} from {balance}."
        )


class InvalidAmount(GameError):
    """Debit/credit amount is not a positive integer."""

    code = ErrorCode.INVALID_AMOUNT

    def __init__(self, amount: object):
        self.amount = amount
        super().__init__(message=f"Amount must be a positive integer, got {amount!r}.")


class InvalidDenomination(GameError):
    """Bet amount is not one of the offered denominations."""

    code = ErrorCode.INVALID_DENOMINATION

    def __init__(self, amount: object, allowed: list[int]):
        self.amount = amount
        self.allowed = allowed
        super().__init__(
            message=f"Bet amount {amount!r} not allowed. Allowed: {allowed}"
        )


class InvalidGeometry(GameError):
    """Column or row count outside its option set."""

    code = ErrorCode.INVALID_GEOMETRY

    def __init__(self, dimension: str, value: object, allowed: list[int]):
        self.dimension = dimension
        self.value = value
        self.allowed = allowed
        super().__init__(
            message=f"{dimension} {value!r} not allowed. Allowed: {allowed}"
        )


class SessionBusy(GameError):
    """Mutating request while a spin session is active."""

    code = ErrorCode.SESSION_BUSY

    def __init__(self, action: str):
        self.action = action
        super().__init__(message=f"Cannot {action} while a spin is in progress.")
