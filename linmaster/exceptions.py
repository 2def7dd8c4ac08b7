"""
Exception hierarchy for linmaster.

All exceptions inherit from LinError. The hierarchy keeps three families
apart:

1. Runtime bus conditions reported by a driver (TimeoutError, PhysicalBusError)
2. Protocol violations detected by the core (ChecksumError, FrameError, ...)
3. Caller contract violations (OutOfRangeError), which are also ValueErrors
"""

from __future__ import annotations

from typing import Final


class LinError(Exception):
    """
    Base exception for all linmaster errors.

    Catch this to handle every error raised by the library or by a driver
    implementation with a single except clause.
    """

    pass


class ProtocolError(LinError):
    """
    Protocol-level error.

    Raised when received data violates the LIN protocol, such as:
    - A PID byte with wrong parity bits
    - An unexpected transport PCI or service identifier
    - A diagnostic response addressed to the wrong node
    """

    pass


class ChecksumError(ProtocolError):
    """
    Checksum validation failure.

    Raised by a master read transaction when the checksum byte received from
    the bus disagrees with the one recomputed over the received data. The
    transaction is not retried; the caller may issue it again.
    """

    def __init__(
        self,
        message: str = "Checksum validation failed",
        *,
        expected: int | None = None,
        received: int | None = None,
    ) -> None:
        super().__init__(message)
        self.expected = expected
        self.received = received

    def __str__(self) -> str:
        base = super().__str__()
        if self.expected is not None and self.received is not None:
            return f"{base} (expected 0x{self.expected:02X}, got 0x{self.received:02X})"
        return base


class FrameError(ProtocolError):
    """
    Frame structure error.

    Raised when a received frame cannot be interpreted, such as:
    - Fewer bytes received than requested
    - A transport PDU that is not exactly 8 bytes long
    - A single-frame length outside the legal range
    """

    pass


class NegativeResponseError(ProtocolError):
    """
    Negative diagnostic response from a slave node.

    Raised when a slave answers a diagnostic request with RSID 0x7F. The
    rejected service identifier and the slave's error code are preserved.
    """

    def __init__(self, service_id: int, error_code: int) -> None:
        self.service_id = service_id
        self.error_code = error_code
        self.reason = ERROR_MESSAGES.get(error_code, "Unknown error")
        super().__init__(
            f"Negative response to SID 0x{service_id:02X}: "
            f"0x{error_code:02X} ({self.reason})"
        )


class TimeoutError(LinError):  # noqa: A001 - intentionally shadows builtin
    """
    Bus timeout reported by a driver.

    Raised when a slave does not answer within the driver's deadline. The
    core never retries; the error reaches the caller unchanged.
    """

    def __init__(
        self,
        message: str = "Bus timeout",
        *,
        timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(message)
        self.timeout_seconds = timeout_seconds

    def __str__(self) -> str:
        base = super().__str__()
        if self.timeout_seconds is not None:
            return f"{base} (after {self.timeout_seconds:.3f}s)"
        return base


class PhysicalBusError(LinError):
    """
    Physical bus error reported by a driver.

    Raised for low-level failures:
    - Serial port cannot be opened or used
    - Read-back of transmitted bytes does not match (bus collision)
    - Driver used while closed
    """

    pass


class OutOfRangeError(LinError, ValueError):
    """
    Caller contract violation.

    Raised when an argument is outside the range the protocol allows, for
    example an identifier >= 64, a payload longer than 8 bytes or a bit field
    that does not fit the payload. These are programming errors and are
    rejected before any bus traffic happens.
    """

    pass


# Negative response codes defined for LIN diagnostic services
ERROR_MESSAGES: Final[dict[int, str]] = {
    0x11: "Service not supported",
    0x12: "Sub-function not supported",
    0x13: "Incorrect message length or invalid format",
    0x22: "Conditions not correct",
    0x31: "Request out of range",
    0x78: "Response pending",
}
