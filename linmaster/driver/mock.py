"""
Mock driver for testing.

This module provides a driver that simulates the bus without hardware.
Slave responses can be queued up front or generated per header with a
callback. Every header, write and wakeup is recorded for verification.

Example:
    >>> from linmaster import Master
    >>> from linmaster.driver import MockDriver
    >>>
    >>> mock = MockDriver()
    >>> mock.add_response(bytes([0x01, 0x21]))
    >>> frame = Master(mock).read_frame(PID.from_identifier(29), 1)
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Callable

from linmaster.driver.abc import AbstractDriver
from linmaster.exceptions import PhysicalBusError, TimeoutError

if TYPE_CHECKING:
    from linmaster.protocol.frame import Frame
    from linmaster.protocol.pid import PID


class MockDriver(AbstractDriver):
    """
    Mock driver for testing without hardware.

    Attributes:
        headers: PIDs of all headers sent, in order.
        written_data: All byte strings written, in order.
        wakeup_count: Number of wakeup signals sent.

    Example:
        >>> mock = MockDriver()
        >>> mock.add_response(b"\\x55\\xDD")
        >>> mock.send_header(PID.from_identifier(1))
        >>> mock.read(2)
        b'U\\xdd'
        >>> mock.headers
        [PID(0xC1, id=1)]
    """

    def __init__(self) -> None:
        self._is_open = True
        self._responses: deque[bytes] = deque()
        self._read_buffer = bytearray()
        self._headers: list[PID] = []
        self._written_data: list[bytes] = []
        self._wakeup_count = 0
        self._response_callback: Callable[[PID], bytes | None] | None = None

    @property
    def is_open(self) -> bool:
        """Check if the mock driver is open."""
        return self._is_open

    @property
    def headers(self) -> list[PID]:
        """Get all headers sent."""
        return self._headers.copy()

    @property
    def written_data(self) -> list[bytes]:
        """Get all data written."""
        return self._written_data.copy()

    @property
    def last_written(self) -> bytes | None:
        """Get the most recently written data."""
        return self._written_data[-1] if self._written_data else None

    @property
    def wakeup_count(self) -> int:
        """Get the number of wakeup signals sent."""
        return self._wakeup_count

    def add_response(self, response: bytes) -> None:
        """
        Queue bytes to be returned by read operations.

        Responses are consumed in FIFO order.
        """
        self._responses.append(bytes(response))

    def add_responses(self, *responses: bytes) -> None:
        """Queue multiple responses."""
        for response in responses:
            self.add_response(response)

    def add_frame_response(self, frame: Frame) -> None:
        """Queue the data and checksum of a frame as a slave response."""
        self.add_response(frame.data_with_checksum)

    def set_response_callback(self, callback: Callable[[PID], bytes | None] | None) -> None:
        """
        Set a callback that answers headers.

        The callback receives the PID of each header sent and returns the
        bytes the slave responds with, or None for no response.
        """
        self._response_callback = callback

    def clear(self) -> None:
        """Clear recorded traffic and pending responses."""
        self._responses.clear()
        self._read_buffer.clear()
        self._headers.clear()
        self._written_data.clear()
        self._wakeup_count = 0

    def open(self) -> None:
        """Open the mock driver."""
        self._is_open = True

    def close(self) -> None:
        """Close the mock driver."""
        self._is_open = False

    def send_wakeup(self) -> None:
        """Record a wakeup signal."""
        self._ensure_open()
        self._wakeup_count += 1

    def send_header(self, pid: PID) -> None:
        """
        Record a header and run the response callback, if any.

        Raises:
            PhysicalBusError: If the driver is closed.
        """
        self._ensure_open()
        self._headers.append(pid)

        if self._response_callback:
            response = self._response_callback(pid)
            if response is not None:
                self._read_buffer.extend(response)

    def read(self, size: int) -> bytes:
        """
        Read exactly `size` bytes from the queued responses.

        Raises:
            TimeoutError: If not enough data is queued.
            PhysicalBusError: If the driver is closed.
        """
        self._ensure_open()

        while len(self._read_buffer) < size and self._responses:
            self._read_buffer.extend(self._responses.popleft())

        if len(self._read_buffer) < size:
            raise TimeoutError(
                f"Not enough mock data: need {size}, have {len(self._read_buffer)}"
            )

        result = bytes(self._read_buffer[:size])
        del self._read_buffer[:size]
        return result

    def write(self, data: bytes) -> None:
        """
        Record written data.

        Raises:
            PhysicalBusError: If the driver is closed.
        """
        self._ensure_open()
        self._written_data.append(bytes(data))

    def assert_written(self, expected: bytes, index: int = -1) -> None:
        """
        Assert that specific data was written.

        Raises:
            AssertionError: If data doesn't match.
        """
        if not self._written_data:
            raise AssertionError("No data written to mock driver")

        actual = self._written_data[index]
        if actual != expected:
            raise AssertionError(f"Written data mismatch: expected {expected!r}, got {actual!r}")

    def _ensure_open(self) -> None:
        if not self._is_open:
            raise PhysicalBusError("Mock driver not open")


class ScriptedMockDriver(MockDriver):
    """
    Mock driver with scripted header/response pairs.

    Each header sent consumes the next script step. The step's response is
    made available for reading; if the step names a PID, the header must
    match it.

    Example:
        >>> mock = ScriptedMockDriver()
        >>> mock.expect(response=b"", pid=MASTER_REQUEST_PID)
        >>> mock.expect(response=slave_bytes, pid=SLAVE_RESPONSE_PID)
    """

    def __init__(self) -> None:
        super().__init__()
        self._script: list[tuple[PID | None, bytes]] = []
        self._script_index = 0

    def expect(self, response: bytes, pid: PID | None = None) -> None:
        """
        Add a script step.

        Args:
            response: Bytes the slave answers with (empty for none).
            pid: Expected header PID (None to match any).
        """
        self._script.append((pid, bytes(response)))

    @property
    def script_done(self) -> bool:
        """Whether every scripted step has been consumed."""
        return self._script_index >= len(self._script)

    def send_header(self, pid: PID) -> None:
        """Send a header with script validation."""
        self._ensure_open()
        self._headers.append(pid)

        if self._script_index < len(self._script):
            expected_pid, response = self._script[self._script_index]

            if expected_pid is not None and pid != expected_pid:
                raise AssertionError(
                    f"Script mismatch at step {self._script_index}: "
                    f"expected {expected_pid!r}, got {pid!r}"
                )

            self._read_buffer.extend(response)
            self._script_index += 1

    def reset_script(self) -> None:
        """Reset script to beginning."""
        self._script_index = 0
        self._read_buffer.clear()
