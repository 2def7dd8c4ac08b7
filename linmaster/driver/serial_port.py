"""
Serial LIN driver using pyserial.

This module binds the master to a LIN transceiver attached to a UART, such
as a TJA1020/TJA1021 behind a USB serial adapter.

Serial configuration:
- Baud rate: 19200 (default)
- Data bits: 8
- Parity: None
- Stop bits: 1

A UART cannot emit a LIN break directly. The break is generated by sending
0x00 at half the bus baud rate, which holds the bus dominant for 18 bit
times (the minimum is 13). The wakeup signal holds the break condition for
the configured pulse length.

LIN is a single-wire bus: the transceiver echoes every byte the master
transmits. With echo checking enabled the driver reads back each transmitted
byte and reports a mismatch as a bus error.

Example:
    >>> with SerialDriver("/dev/ttyUSB0") as driver:
    ...     master = Master(driver)
    ...     frame = master.read_frame(PID.from_identifier(0x10), 4)
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

import serial

from linmaster.driver.abc import AbstractDriver
from linmaster.exceptions import PhysicalBusError, TimeoutError
from linmaster.protocol.constants import ProtocolConstants

if TYPE_CHECKING:
    from linmaster.protocol.pid import PID

logger = logging.getLogger(__name__)


class SerialDriver(AbstractDriver):
    """
    LIN master driver for a UART-attached transceiver.

    The port is opened with serial.serial_for_url(), so pyserial URLs such as
    "loop://" or "socket://host:port" work as well as device paths.

    Attributes:
        port_name: Serial port path or URL.
        is_open: Whether the port is currently open.
    """

    def __init__(
        self,
        port: str,
        baudrate: int = ProtocolConstants.DEFAULT_BAUD_RATE,
        timeout: float = ProtocolConstants.DEFAULT_RECEIVE_TIMEOUT,
        *,
        echo: bool = True,
        wakeup_pulse: float = ProtocolConstants.WAKEUP_PULSE,
        wakeup_delay: float = ProtocolConstants.WAKEUP_DELAY,
    ) -> None:
        """
        Initialize the serial driver.

        Args:
            port: Serial port path or pyserial URL (e.g., "/dev/ttyUSB0").
            baudrate: Bus baud rate (default: 19200).
            timeout: Read timeout in seconds for slave responses.
            echo: Read back and verify transmitted bytes.
            wakeup_pulse: Dominant wakeup pulse length in seconds.
            wakeup_delay: Wait after the wakeup pulse in seconds.
        """
        self._port = port
        self._baudrate = baudrate
        self._timeout = timeout
        self._echo = echo
        self._wakeup_pulse = wakeup_pulse
        self._wakeup_delay = wakeup_delay
        self._serial: serial.SerialBase | None = None

    @property
    def is_open(self) -> bool:
        """Check if the serial port is currently open."""
        return self._serial is not None and self._serial.is_open

    @property
    def port_name(self) -> str:
        """Get the serial port path."""
        return self._port

    @property
    def baudrate(self) -> int:
        """Get the configured baud rate."""
        return self._baudrate

    def open(self) -> None:
        """
        Open the serial port.

        Raises:
            PhysicalBusError: If the port cannot be opened.
        """
        if self.is_open:
            return

        try:
            self._serial = serial.serial_for_url(
                self._port,
                baudrate=self._baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=self._timeout,
            )
        except (serial.SerialException, OSError) as e:
            raise PhysicalBusError(f"Failed to open serial port {self._port}: {e}") from e

        logger.debug("Opened %s at %d baud", self._port, self._baudrate)

    def close(self) -> None:
        """Close the serial port. Safe to call multiple times."""
        if self._serial is not None:
            self._serial.close()
            logger.debug("Closed %s", self._port)
        self._serial = None

    def send_wakeup(self) -> None:
        """
        Hold the bus dominant for the wakeup pulse, then wait for slaves.

        Raises:
            PhysicalBusError: If the port is not open or the break fails.
        """
        port = self._ensure_open()
        try:
            port.break_condition = True
            time.sleep(self._wakeup_pulse)
            port.break_condition = False
        except (serial.SerialException, OSError) as e:
            raise PhysicalBusError(f"Wakeup failed: {e}") from e
        time.sleep(self._wakeup_delay)

    def send_header(self, pid: PID) -> None:
        """
        Transmit break, sync byte and PID.

        Raises:
            PhysicalBusError: If the port is not open, the write fails or the
                echo does not match.
        """
        port = self._ensure_open()
        self._send_break(port)
        self._transmit(port, bytes([ProtocolConstants.SYNC_BYTE, pid.value]))

    def read(self, size: int) -> bytes:
        """
        Read exactly `size` bytes from the bus.

        Raises:
            TimeoutError: If fewer than `size` bytes arrive within the timeout.
            PhysicalBusError: If the port is not open or the read fails.
        """
        port = self._ensure_open()
        try:
            data = port.read(size)
        except (serial.SerialException, OSError) as e:
            raise PhysicalBusError(f"Read failed: {e}") from e

        if len(data) < size:
            raise TimeoutError(
                f"Timeout waiting for {size} bytes, got {len(data)}",
                timeout_seconds=self._timeout,
            )
        return bytes(data)

    def write(self, data: bytes) -> None:
        """
        Transmit response bytes.

        Raises:
            PhysicalBusError: If the port is not open, the write fails or the
                echo does not match.
        """
        self._transmit(self._ensure_open(), bytes(data))

    def _send_break(self, port: serial.SerialBase) -> None:
        try:
            port.reset_input_buffer()
            port.baudrate = self._baudrate // 2
            port.write(b"\x00")
            port.flush()
            if self._echo:
                port.read(1)
        except (serial.SerialException, OSError) as e:
            raise PhysicalBusError(f"Break failed: {e}") from e
        finally:
            port.baudrate = self._baudrate

    def _transmit(self, port: serial.SerialBase, data: bytes) -> None:
        try:
            port.write(data)
            port.flush()
            echoed = port.read(len(data)) if self._echo else data
        except (serial.SerialException, OSError) as e:
            raise PhysicalBusError(f"Write failed: {e}") from e

        if echoed != data:
            raise PhysicalBusError(
                f"Bus collision: sent {data.hex()}, read back {bytes(echoed).hex()}"
            )

    def _ensure_open(self) -> serial.SerialBase:
        if self._serial is None or not self._serial.is_open:
            raise PhysicalBusError("Serial port is not open")
        return self._serial

    def __repr__(self) -> str:
        status = "open" if self.is_open else "closed"
        return f"SerialDriver({self._port!r}, baudrate={self._baudrate}, {status})"
