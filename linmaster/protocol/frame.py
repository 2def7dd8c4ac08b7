"""
LIN frame codec.

A frame response on the wire is 0-8 data bytes followed by one checksum
byte. The PID is transmitted separately by the master as part of the header.

Frames are immutable: the checksum is always computed from the PID and data
when the frame is created, so a Frame never holds a checksum that disagrees
with its data.

Signals are packed into the data field at arbitrary bit offsets. decode()
extracts them the way LIN signal databases describe them: the data is read
as a little-endian 64-bit word, data byte 0 being the least significant.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

from linmaster.exceptions import OutOfRangeError
from linmaster.protocol.checksums import calculate_checksum
from linmaster.protocol.constants import ProtocolConstants
from linmaster.protocol.pid import PID


def as_data_bytes(data: bytes | bytearray | list[int]) -> bytes:
    """
    Convert frame data to bytes.

    Raises:
        OutOfRangeError: If an element is not a byte value.
    """
    try:
        return bytes(data)
    except (TypeError, ValueError) as e:
        raise OutOfRangeError(f"Data must be byte values 0-255: {e}") from e


class UnsignedType(IntEnum):
    """Unsigned output types for decoded signals, valued by their bit width."""

    U8 = 8
    U16 = 16
    U32 = 32
    U64 = 64


@dataclass(frozen=True)
class Frame:
    """
    A LIN frame: PID, data and checksum.

    Attributes:
        pid: Protected identifier of the frame.
        data: Data bytes (0-8), without the checksum.
        checksum: Checksum byte, classic or enhanced depending on the PID.

    Example:
        >>> frame = Frame.from_data(PID.from_identifier(29), b"\\x01")
        >>> frame.data_with_checksum
        b'\\x01!'
    """

    pid: PID
    data: bytes
    checksum: int = field(init=False)

    def __post_init__(self) -> None:
        data = as_data_bytes(self.data)
        if len(data) > ProtocolConstants.MAX_DATA_LENGTH:
            raise OutOfRangeError(
                f"Maximum data length is {ProtocolConstants.MAX_DATA_LENGTH} bytes, "
                f"got {len(data)}"
            )
        object.__setattr__(self, "data", data)
        object.__setattr__(self, "checksum", calculate_checksum(self.pid, data))

    @classmethod
    def from_data(cls, pid: PID, data: bytes | bytearray | list[int]) -> Frame:
        """
        Create a frame from a PID and data, computing the checksum.

        Args:
            pid: Protected identifier.
            data: 0-8 data bytes.

        Returns:
            The frame.

        Raises:
            OutOfRangeError: If data is longer than 8 bytes or holds values
                outside 0-255.
        """
        return cls(pid, data)

    @property
    def data_length(self) -> int:
        """Number of data bytes."""
        return len(self.data)

    @property
    def data_with_checksum(self) -> bytes:
        """Data followed by the checksum byte, as written after the header."""
        return self.data + bytes([self.checksum])

    def decode(
        self,
        offset: int,
        length: int,
        output: UnsignedType = UnsignedType.U64,
    ) -> int:
        """
        Extract an unsigned little-endian bit field from the data.

        Args:
            offset: Position of the least significant bit of the field.
            length: Width of the field in bits.
            output: Output type the value must fit in.

        Returns:
            The unsigned field value.

        Raises:
            OutOfRangeError: If the field reaches past the available data or
                is wider than the output type.

        Example:
            >>> frame = Frame.from_data(PID(0x50), bytes([254, 251, 239, 255]))
            >>> frame.decode(20, 11, UnsignedType.U16)
            2046
        """
        if offset < 0 or length < 1:
            raise OutOfRangeError(
                f"Invalid bit field: offset={offset}, length={length}"
            )
        if offset + length > self.data_length * 8:
            raise OutOfRangeError(
                f"Not enough data available: bits {offset}..{offset + length - 1} "
                f"requested from {self.data_length} bytes"
            )
        if length > output:
            raise OutOfRangeError(
                f"Output type not big enough: {length} bits do not fit {output.name}"
            )

        padded = self.data.ljust(ProtocolConstants.MAX_DATA_LENGTH, b"\x00")
        (word,) = struct.unpack("<Q", padded)
        return (word >> offset) & ((1 << length) - 1)

    def __repr__(self) -> str:
        return f"Frame({self.pid!r}, data={self.data.hex()}, checksum=0x{self.checksum:02X})"


def frame_from_data(pid: PID, data: bytes | bytearray | list[int]) -> Frame:
    """Create a frame from a PID and data. See Frame.from_data()."""
    return Frame.from_data(pid, data)
