"""
Abstract LIN driver interface.

A driver binds the master to the physical bus. It is the only component that
performs I/O or timing; the protocol logic depends solely on the four
operations defined here, so a UART, an SPI bridge or a simulated bus can be
swapped in without changing the master.

The driver is responsible for:
- Generating the wakeup pulse
- Transmitting break, sync and PID of a header
- Reading and writing raw response bytes
- Enforcing timeouts

Implementations:
- SerialDriver: pyserial based UART binding
- MockDriver: For testing without hardware
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types import TracebackType

    from linmaster.protocol.pid import PID


class AbstractDriver(ABC):
    """
    Abstract base class for LIN master drivers.

    All operations block until complete. Failures are reported by raising
    linmaster.exceptions.TimeoutError or PhysicalBusError (or any other
    LinError); the master passes them to its caller unchanged.

    Drivers that own a resource override open() and close() and can be used
    as context managers:

        with SerialDriver("/dev/ttyUSB0") as driver:
            master = Master(driver)
            frame = master.read_frame(pid, 4)
    """

    def open(self) -> None:
        """Acquire the bus. The default implementation does nothing."""

    def close(self) -> None:
        """Release the bus. Safe to call multiple times."""

    @abstractmethod
    def send_wakeup(self) -> None:
        """
        Send a wakeup signal on the bus.

        Raises:
            PhysicalBusError: If the pulse cannot be generated.
        """
        ...

    @abstractmethod
    def send_header(self, pid: PID) -> None:
        """
        Transmit a frame header: break, sync byte and PID.

        Args:
            pid: Protected identifier of the frame.

        Raises:
            PhysicalBusError: If the header cannot be transmitted.
        """
        ...

    @abstractmethod
    def read(self, size: int) -> bytes:
        """
        Read exactly `size` response bytes from the bus.

        Args:
            size: Number of bytes to read.

        Returns:
            Exactly `size` bytes.

        Raises:
            TimeoutError: If the bytes do not arrive in time.
            PhysicalBusError: If the read fails.
        """
        ...

    @abstractmethod
    def write(self, data: bytes) -> None:
        """
        Transmit response bytes onto the bus.

        Args:
            data: Data and checksum bytes following a header.

        Raises:
            PhysicalBusError: If the write fails.
        """
        ...

    def __enter__(self) -> AbstractDriver:
        """Context manager entry - opens the driver."""
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Context manager exit - closes the driver."""
        self.close()
