"""
Exception hierarchy for restock_alert.

Catch `RestockAlertError` to handle every failure raised by the library, or a
subclass when finer control is needed.
"""

from typing import Optional


class RestockAlertError(Exception):
    """
    Base exception for all restock_alert errors.
    """

    #: Stable identifier for programmatic handling.
    code: str = "restock_alert_error"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "An unspecified restock_alert error occurred."
        super().__init__(message)


class InvalidCountError(RestockAlertError, ValueError):
    """
    Raised when a stock count is negative or not an integer.

    The subject's state is left untouched when this is raised.

    Example
    -------
    >>> try:
    ...     await subject.set_count(-1)
    ... except InvalidCountError:
    ...     reject_update()
    """

    code: str = "invalid_count"

    def __init__(self, count: object) -> None:
        self.count = count
        super().__init__(
            f"Stock count must be a non-negative integer, got {count!r}"
        )


class DeliveryFailure(RestockAlertError):
    """
    Raised by a subscriber when its sink could not deliver an alert.

    The subject catches this (and any other error from a subscriber) per
    delivery and logs it; it never reaches the caller that changed the count.
    """

    code: str = "delivery_failure"

    def __init__(self, target: str, message: Optional[str] = None) -> None:
        self.target = target
        super().__init__(message or f"Failed to deliver alert to {target!r}")
