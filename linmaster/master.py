"""
LIN master transactions.

The master drives each frame slot on the bus:

    write:  send_header(pid) -> write(data + checksum)
    read:   send_header(pid) -> read(n + 1) -> verify checksum

Diagnostic reads combine both: the request is written on the master request
frame (0x3C), then the answer is read on the slave response frame (0x3D).

Transactions keep no state between calls and are never retried. Driver
errors reach the caller unchanged; a bad checksum raises ChecksumError.

Example:
    >>> from linmaster import Master, PID
    >>> from linmaster.driver import SerialDriver
    >>>
    >>> with SerialDriver("/dev/ttyUSB0") as driver:
    ...     master = Master(driver)
    ...     master.send_wakeup()
    ...     frame = master.read_frame(PID.from_identifier(0x10), 4)
    ...     print(frame.decode(0, 10))
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from linmaster.diagnostic import (
    create_read_by_identifier_frame_from_node_attributes,
    decode_read_by_identifier_response,
)
from linmaster.exceptions import ChecksumError, FrameError, OutOfRangeError
from linmaster.models.records import DiagnosticIdentifier, ProductId, SerialNumber
from linmaster.protocol.checksums import calculate_checksum
from linmaster.protocol.constants import ProtocolConstants
from linmaster.protocol.frame import Frame
from linmaster.protocol.pid import SLAVE_RESPONSE_PID
from linmaster.protocol.transport import parse_single_frame

if TYPE_CHECKING:
    from linmaster.driver.abc import AbstractDriver
    from linmaster.models.records import NodeAttributes
    from linmaster.protocol.pid import PID

# Module logger
logger = logging.getLogger(__name__)


class Master:
    """
    LIN bus master.

    Wraps a driver and runs write and read transactions on it. The driver
    must have exclusive access to the bus; one transaction completes before
    the next begins.

    Attributes:
        driver: The underlying driver.
    """

    def __init__(self, driver: AbstractDriver) -> None:
        """
        Initialize the master.

        Args:
            driver: Driver for the physical bus.
        """
        self._driver = driver

    @property
    def driver(self) -> AbstractDriver:
        """Get the underlying driver."""
        return self._driver

    def send_wakeup(self) -> None:
        """Send a wakeup signal to the cluster."""
        logger.debug("Sending wakeup")
        self._driver.send_wakeup()

    def write_frame(self, frame: Frame) -> None:
        """
        Publish a frame: send its header, then its data and checksum.

        Args:
            frame: Frame to transmit.
        """
        logger.debug("Writing %r", frame)
        self._driver.send_header(frame.pid)
        self._driver.write(frame.data_with_checksum)

    def read_frame(self, pid: PID, data_length: int) -> Frame:
        """
        Request a frame from a slave.

        Sends the header, reads data_length data bytes plus the checksum and
        verifies the checksum.

        Args:
            pid: PID of the frame to request.
            data_length: Number of data bytes the slave responds with (0-8).

        Returns:
            The received frame.

        Raises:
            OutOfRangeError: If data_length is not in range 0-8.
            ChecksumError: If the received checksum is wrong.
            FrameError: If the driver returns the wrong number of bytes.
        """
        if not 0 <= data_length <= ProtocolConstants.MAX_DATA_LENGTH:
            raise OutOfRangeError(
                f"Maximum data length is {ProtocolConstants.MAX_DATA_LENGTH} bytes, "
                f"got {data_length}"
            )

        self._driver.send_header(pid)
        received = self._driver.read(data_length + 1)
        if len(received) != data_length + 1:
            raise FrameError(f"Expected {data_length + 1} bytes, got {len(received)}")

        data = received[:data_length]
        expected = calculate_checksum(pid, data)
        if expected != received[data_length]:
            raise ChecksumError(
                f"Checksum mismatch for {pid!r}",
                expected=expected,
                received=received[data_length],
            )

        frame = Frame.from_data(pid, data)
        logger.debug("Read %r", frame)
        return frame

    def read_by_identifier(
        self,
        node_attributes: NodeAttributes,
        identifier: DiagnosticIdentifier,
    ) -> bytes:
        """
        Run a Read By Identifier request against a slave node.

        Only single-frame responses are supported.

        Args:
            node_attributes: Attributes of the addressed node.
            identifier: Data to read.

        Returns:
            Response data after the RSID.

        Raises:
            NegativeResponseError: If the slave rejected the request.
            ProtocolError: If the response is malformed or from another node.
        """
        request = create_read_by_identifier_frame_from_node_attributes(node_attributes, identifier)
        logger.debug(
            "Read by identifier %r from NAD 0x%02X",
            identifier,
            node_attributes.configured_nad,
        )
        self.write_frame(request)

        response = self.read_frame(SLAVE_RESPONSE_PID, ProtocolConstants.PDU_LENGTH)
        pdu = parse_single_frame(response)
        return decode_read_by_identifier_response(pdu, node_attributes.configured_nad)

    def read_product_id(self, node_attributes: NodeAttributes) -> ProductId:
        """Read the LIN product identification of a node."""
        data = self.read_by_identifier(
            node_attributes, DiagnosticIdentifier.product_identification()
        )
        _check_response_length(data, ProductId.WIRE_SIZE)
        return ProductId.decode(data)

    def read_serial_number(self, node_attributes: NodeAttributes) -> SerialNumber:
        """Read the serial number of a node."""
        data = self.read_by_identifier(node_attributes, DiagnosticIdentifier.serial_number())
        _check_response_length(data, SerialNumber.WIRE_SIZE)
        return SerialNumber.decode(data)

    def __repr__(self) -> str:
        return f"Master(driver={self._driver!r})"


def _check_response_length(data: bytes, size: int) -> None:
    if len(data) < size:
        raise FrameError(f"Response carries {len(data)} data bytes, expected {size}")
