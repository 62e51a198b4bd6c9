"""
Domain exceptions raised by the service layer.

The error handling layer turns these into HTTP responses using
``status_code`` and ``error_type``.
"""


class TrackerError(Exception):
    """Base class for business rule violations"""

    status_code = 400
    error_type = "TRACKER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TrackerError):
    status_code = 404
    error_type = "RESOURCE_NOT_FOUND"


class ConflictError(TrackerError):
    status_code = 409
    error_type = "CONFLICT"


class NoPendingBalanceError(ConflictError):
    error_type = "NO_PENDING_BALANCE"


class InsufficientFundsError(ConflictError):
    error_type = "INSUFFICIENT_FUNDS"

    def __init__(self, message: str, balance=None, amount=None, floor=None):
        super().__init__(message)
        self.balance = balance
        self.amount = amount
        self.floor = floor
