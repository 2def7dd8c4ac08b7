"""
Protocol layer for LIN communication.

This package contains the wire-level codecs:
- Protocol constants and service identifiers
- Protected identifier (PID) calculation
- Classic and enhanced checksums
- Frame construction and signal decoding
- Single-frame transport PDUs
"""

from linmaster.protocol.checksums import (
    calculate_checksum,
    classic_checksum,
    enhanced_checksum,
    validate_checksum,
)
from linmaster.protocol.constants import ProtocolConstants, ServiceId
from linmaster.protocol.frame import Frame, UnsignedType, frame_from_data
from linmaster.protocol.pid import MASTER_REQUEST_PID, PID, SLAVE_RESPONSE_PID, pid_from_identifier
from linmaster.protocol.transport import (
    PCI,
    PciType,
    SingleFramePdu,
    create_single_frame,
    parse_single_frame,
    pci_for_single_frame,
)

__all__ = [
    # Constants
    "ProtocolConstants",
    "ServiceId",
    # PID
    "PID",
    "pid_from_identifier",
    "MASTER_REQUEST_PID",
    "SLAVE_RESPONSE_PID",
    # Checksums
    "enhanced_checksum",
    "classic_checksum",
    "calculate_checksum",
    "validate_checksum",
    # Frames
    "Frame",
    "UnsignedType",
    "frame_from_data",
    # Transport
    "PCI",
    "PciType",
    "SingleFramePdu",
    "pci_for_single_frame",
    "create_single_frame",
    "parse_single_frame",
]
