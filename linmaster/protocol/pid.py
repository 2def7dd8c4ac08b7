"""
Protected identifier (PID) codec.

A LIN header carries the 6-bit frame identifier together with two parity
bits in a single byte:

    bit 0-5: identifier
    bit 6:   P0 = ID0 ^ ID1 ^ ID2 ^ ID4
    bit 7:   P1 = not (ID1 ^ ID3 ^ ID4 ^ ID5)

The identifier also selects the checksum model of the frame: the diagnostic
and reserved identifiers 60-63 use the classic checksum, all others the
enhanced checksum.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from linmaster.exceptions import OutOfRangeError, ProtocolError
from linmaster.protocol.constants import ProtocolConstants

_P0_MASK: Final[int] = 0b01_0111
_P1_MASK: Final[int] = 0b11_1010


def _pid_byte(identifier: int) -> int:
    p0 = (identifier & _P0_MASK).bit_count() & 1
    p1 = ((identifier & _P1_MASK).bit_count() + 1) & 1
    return identifier | (p0 << 6) | (p1 << 7)


@dataclass(frozen=True)
class PID:
    """
    Protected identifier byte.

    Build one with from_identifier(), which validates the identifier, or with
    from_identifier_unchecked() for identifiers known to be valid in advance.
    Constructing PID(value) directly stores the raw byte as given.

    Attributes:
        value: The PID byte as transmitted on the bus.

    Example:
        >>> pid = PID.from_identifier(29)
        >>> hex(pid.value)
        '0xdd'
        >>> pid.identifier
        29
    """

    value: int

    @classmethod
    def from_identifier(cls, identifier: int) -> PID:
        """
        Calculate the PID for a frame identifier.

        Args:
            identifier: Frame identifier (0-63).

        Returns:
            PID with parity bits set.

        Raises:
            OutOfRangeError: If identifier is not in range 0-63.
        """
        if not 0 <= identifier <= ProtocolConstants.MAX_IDENTIFIER:
            raise OutOfRangeError(f"Identifier must be 0-63, got {identifier}")
        return cls(_pid_byte(identifier))

    @classmethod
    def from_identifier_unchecked(cls, identifier: int) -> PID:
        """
        Calculate the PID for an identifier that is known to be valid.

        Bits above the 6-bit identifier are discarded without an error.
        Intended for module-level constants such as the diagnostic PIDs.
        """
        return cls(_pid_byte(identifier & ProtocolConstants.IDENTIFIER_MASK))

    @classmethod
    def from_byte(cls, value: int) -> PID:
        """
        Parse a PID byte received from the bus.

        Args:
            value: Raw PID byte.

        Returns:
            PID holding the byte.

        Raises:
            OutOfRangeError: If value is not a byte.
            ProtocolError: If the parity bits do not match the identifier.
        """
        if not 0 <= value <= 0xFF:
            raise OutOfRangeError(f"PID must be 0-255, got {value}")
        expected = _pid_byte(value & ProtocolConstants.IDENTIFIER_MASK)
        if expected != value:
            raise ProtocolError(
                f"PID parity error: 0x{value:02X} (expected 0x{expected:02X})"
            )
        return cls(value)

    @property
    def identifier(self) -> int:
        """The 6-bit frame identifier."""
        return self.value & ProtocolConstants.IDENTIFIER_MASK

    @property
    def uses_classic_checksum(self) -> bool:
        """
        Whether frames with this PID carry the classic checksum.

        True for the diagnostic identifiers 60 and 61 and the reserved
        identifiers 62 and 63.
        """
        return self.identifier >= ProtocolConstants.CLASSIC_CHECKSUM_FROM_ID

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"PID(0x{self.value:02X}, id={self.identifier})"


def pid_from_identifier(identifier: int) -> PID:
    """Calculate the PID for a frame identifier. See PID.from_identifier()."""
    return PID.from_identifier(identifier)


MASTER_REQUEST_PID: Final[PID] = PID.from_identifier_unchecked(
    ProtocolConstants.MASTER_REQUEST_FRAME_ID
)
"""PID of the diagnostic master request frame (identifier 0x3C)."""

SLAVE_RESPONSE_PID: Final[PID] = PID.from_identifier_unchecked(
    ProtocolConstants.SLAVE_RESPONSE_FRAME_ID
)
"""PID of the diagnostic slave response frame (identifier 0x3D)."""
