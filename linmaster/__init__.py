"""
linmaster - Python library for the master side of a LIN bus.

This library builds and validates LIN frames, computes the classic and
enhanced checksums, decodes signals packed into frame data and runs
Read By Identifier diagnostics over an injected bus driver.

Example:
    >>> from linmaster import Master, PID
    >>> from linmaster.driver import SerialDriver
    >>>
    >>> with SerialDriver("/dev/ttyUSB0") as driver:
    ...     master = Master(driver)
    ...     frame = master.read_frame(PID.from_identifier(0x10), 4)
    ...     print(frame.decode(0, 10))
"""

from linmaster.driver import AbstractDriver, MockDriver, SerialDriver
from linmaster.exceptions import (
    ChecksumError,
    FrameError,
    LinError,
    NegativeResponseError,
    OutOfRangeError,
    PhysicalBusError,
    ProtocolError,
    TimeoutError,
)
from linmaster.master import Master
from linmaster.models.records import (
    DiagnosticIdentifier,
    IdentifierKind,
    NodeAttributes,
    ProductId,
    SerialNumber,
)
from linmaster.protocol.checksums import classic_checksum, enhanced_checksum
from linmaster.protocol.frame import Frame, UnsignedType, frame_from_data
from linmaster.protocol.pid import PID, pid_from_identifier

__version__ = "0.1.0"
__all__ = [
    # Master
    "Master",
    # Protocol
    "PID",
    "pid_from_identifier",
    "Frame",
    "UnsignedType",
    "frame_from_data",
    "enhanced_checksum",
    "classic_checksum",
    # Models
    "NodeAttributes",
    "DiagnosticIdentifier",
    "IdentifierKind",
    "ProductId",
    "SerialNumber",
    # Exceptions
    "LinError",
    "ProtocolError",
    "ChecksumError",
    "FrameError",
    "NegativeResponseError",
    "TimeoutError",
    "PhysicalBusError",
    "OutOfRangeError",
    # Drivers
    "AbstractDriver",
    "MockDriver",
    "SerialDriver",
    # Version
    "__version__",
]
