"""
LIN protocol constants.

Values follow the LIN 2.x specification: identifier ranges, frame sizes,
diagnostic frame identifiers and the transport layer byte values.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final


class ServiceId(IntEnum):
    """
    Diagnostic service identifiers used by the master.

    A positive response carries RSID = SID + RESPONSE_SID_OFFSET.
    """

    READ_BY_IDENTIFIER = 0xB2
    """Read product identification, serial number or user-defined data."""

    NEGATIVE_RESPONSE = 0x7F
    """RSID of a negative response; data holds the rejected SID and an error code."""


class ProtocolConstants:
    """
    Protocol constants for LIN frames, transport PDUs and serial drivers.
    """

    # Identifiers
    MAX_IDENTIFIER: Final[int] = 0x3F
    """Largest 6-bit frame identifier."""

    CLASSIC_CHECKSUM_FROM_ID: Final[int] = 60
    """Identifiers at or above this value use the classic checksum."""

    IDENTIFIER_MASK: Final[int] = 0x3F
    """Mask selecting the identifier bits of a PID byte."""

    MASTER_REQUEST_FRAME_ID: Final[int] = 0x3C
    """Diagnostic master request frame identifier."""

    SLAVE_RESPONSE_FRAME_ID: Final[int] = 0x3D
    """Diagnostic slave response frame identifier."""

    # Frames
    MAX_DATA_LENGTH: Final[int] = 8
    """Maximum number of data bytes in a frame."""

    SYNC_BYTE: Final[int] = 0x55
    """Sync field transmitted after the break."""

    # Transport layer
    PDU_LENGTH: Final[int] = 8
    """Every transport PDU fills a complete 8-byte frame."""

    SINGLE_FRAME_MAX_DATA: Final[int] = 5
    """Data bytes available in a single frame after NAD, PCI and SID."""

    PADDING_BYTE: Final[int] = 0xFF
    """Value of unused trailing PDU bytes."""

    RESPONSE_SID_OFFSET: Final[int] = 0x40
    """Offset from a request SID to its positive response RSID."""

    # Node attribute defaults (milliseconds)
    DEFAULT_P2_MIN: Final[float] = 50.0
    DEFAULT_ST_MIN: Final[float] = 0.0
    DEFAULT_N_AS_TIMEOUT: Final[float] = 1000.0
    DEFAULT_N_CR_TIMEOUT: Final[float] = 1000.0

    # Serial driver
    DEFAULT_BAUD_RATE: Final[int] = 19200
    """Most common LIN bit rate."""

    DEFAULT_RECEIVE_TIMEOUT: Final[float] = 0.05
    """Default response timeout in seconds."""

    WAKEUP_PULSE: Final[float] = 0.001
    """Dominant wakeup pulse length in seconds (250 us to 5 ms allowed)."""

    WAKEUP_DELAY: Final[float] = 0.1
    """Time slaves need after a wakeup before the first header, in seconds."""
