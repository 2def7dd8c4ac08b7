"""
LIN transport layer PDU codec.

Diagnostic requests and responses travel as Protocol Data Units that fill a
complete 8-byte frame:

    byte 0:    NAD  (node address)
    byte 1:    PCI  (protocol control information)
    byte 2:    SID  (service identifier; RSID in responses)
    byte 3-7:  data, unused bytes padded with 0xFF

The high nibble of the PCI selects the PDU type (single, first or
consecutive frame). For a single frame the PCI is the number of bytes that
follow it, SID included.

Only single frames are built and parsed here. First and consecutive frames
are recognised so they can be reported, but multi-frame transfers are not
supported.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from linmaster.exceptions import FrameError, OutOfRangeError, ProtocolError
from linmaster.protocol.constants import ProtocolConstants
from linmaster.protocol.frame import Frame, as_data_bytes
from linmaster.protocol.pid import PID


class PciType(Enum):
    """PDU type encoded in the high nibble of the PCI byte."""

    SINGLE_FRAME = 0
    FIRST_FRAME = 1
    CONSECUTIVE_FRAME = 2
    INVALID = None
    """Any other high nibble."""

    @classmethod
    def from_nibble(cls, nibble: int) -> PciType:
        try:
            return cls(nibble)
        except ValueError:
            return cls.INVALID


@dataclass(frozen=True)
class PCI:
    """
    Protocol control information byte.

    Attributes:
        value: The PCI byte.
    """

    value: int

    @property
    def frame_type(self) -> PciType:
        """PDU type, INVALID for unknown type nibbles."""
        return PciType.from_nibble(self.value >> 4)

    @property
    def length(self) -> int:
        """
        Length nibble.

        For a single frame this is the whole PCI byte: the count of SID and
        data bytes.
        """
        return self.value & 0x0F

    def __repr__(self) -> str:
        return f"PCI(0x{self.value:02X}, {self.frame_type.name})"


def pci_for_single_frame(length: int) -> PCI:
    """
    Build the PCI of a single frame carrying `length` data bytes.

    Args:
        length: Number of data bytes after the SID (0-5).

    Returns:
        PCI with value length + 1 (the SID is counted).

    Raises:
        OutOfRangeError: If length is not in range 0-5.
    """
    if not 0 <= length <= ProtocolConstants.SINGLE_FRAME_MAX_DATA:
        raise OutOfRangeError(
            f"Single frame data length must be 0-{ProtocolConstants.SINGLE_FRAME_MAX_DATA}, "
            f"got {length}"
        )
    return PCI(length + 1)


def create_single_frame(pid: PID, nad: int, sid: int, data: bytes | bytearray | list[int]) -> Frame:
    """
    Build a frame carrying a single-frame PDU.

    Args:
        pid: PID of the frame, normally the master request PID.
        nad: Node address of the target slave.
        sid: Service identifier.
        data: 1-5 service data bytes.

    Returns:
        8-byte frame with checksum.

    Raises:
        OutOfRangeError: If data is empty or longer than 5 bytes, or NAD, SID or a
            data element is not a byte.

    Example:
        >>> frame = create_single_frame(MASTER_REQUEST_PID, 0x10, 0xB2, b"\\x01")
        >>> frame.data.hex()
        '1002b201ffffffff'
    """
    if not (0 <= nad <= 0xFF and 0 <= sid <= 0xFF):
        raise OutOfRangeError(f"NAD and SID must be bytes, got nad={nad} sid={sid}")
    data = as_data_bytes(data)
    if not data:
        raise OutOfRangeError("Single frame requires at least one data byte")
    pci = pci_for_single_frame(len(data))

    buffer = bytearray([ProtocolConstants.PADDING_BYTE]) * ProtocolConstants.PDU_LENGTH
    buffer[0] = nad
    buffer[1] = pci.value
    buffer[2] = sid
    buffer[3 : 3 + len(data)] = data
    return Frame.from_data(pid, buffer)


@dataclass(frozen=True)
class SingleFramePdu:
    """
    A parsed single-frame PDU.

    Attributes:
        nad: Node address.
        pci: Protocol control information.
        sid: Service identifier (RSID in a response).
        data: Service data without padding.
    """

    nad: int
    pci: PCI
    sid: int
    data: bytes


def parse_single_frame(frame: Frame) -> SingleFramePdu:
    """
    Split a received frame into its single-frame PDU fields.

    Args:
        frame: Frame received on the slave response identifier.

    Returns:
        The parsed PDU; padding after the announced length is dropped.

    Raises:
        FrameError: If the frame is not 8 bytes long or the single-frame
            length is outside 1-6.
        ProtocolError: If the PCI is not a single frame.
    """
    data = frame.data
    if len(data) != ProtocolConstants.PDU_LENGTH:
        raise FrameError(
            f"Transport PDU must be {ProtocolConstants.PDU_LENGTH} bytes, got {len(data)}"
        )

    pci = PCI(data[1])
    if pci.frame_type is not PciType.SINGLE_FRAME:
        raise ProtocolError(f"Unsupported transport PDU type: {pci!r}")

    if not 1 <= pci.length <= ProtocolConstants.SINGLE_FRAME_MAX_DATA + 1:
        raise FrameError(f"Invalid single frame length: {pci.length}")

    return SingleFramePdu(
        nad=data[0],
        pci=pci,
        sid=data[2],
        data=data[3 : 2 + pci.length],
    )
