"""
Read By Identifier diagnostic requests and responses.

The master asks a slave for its product identification, serial number or
user-defined data with service 0xB2 in a single-frame PDU on the master
request frame (identifier 0x3C). The request data is:

    identifier | supplier_id (LE, 2) | function_id (LE, 2)

The slave answers on the slave response frame (identifier 0x3D) with RSID
0xF2 followed by the requested data, or with a negative response (RSID 0x7F).
"""

from __future__ import annotations

import struct
from typing import Final

from linmaster.exceptions import NegativeResponseError, OutOfRangeError, ProtocolError
from linmaster.models.records import DiagnosticIdentifier, NodeAttributes
from linmaster.protocol.constants import ProtocolConstants, ServiceId
from linmaster.protocol.frame import Frame
from linmaster.protocol.pid import MASTER_REQUEST_PID, SLAVE_RESPONSE_PID
from linmaster.protocol.transport import SingleFramePdu, create_single_frame

MASTER_REQUEST_FRAME_ID: Final[int] = ProtocolConstants.MASTER_REQUEST_FRAME_ID
SLAVE_RESPONSE_FRAME_ID: Final[int] = ProtocolConstants.SLAVE_RESPONSE_FRAME_ID
READ_BY_IDENTIFIER_SID: Final[int] = ServiceId.READ_BY_IDENTIFIER

__all__ = [
    "MASTER_REQUEST_FRAME_ID",
    "MASTER_REQUEST_PID",
    "READ_BY_IDENTIFIER_SID",
    "SLAVE_RESPONSE_FRAME_ID",
    "SLAVE_RESPONSE_PID",
    "byte_to_identifier",
    "create_read_by_identifier_frame",
    "create_read_by_identifier_frame_from_node_attributes",
    "create_read_lin_product_identification_frame",
    "create_read_serial_number_frame",
    "decode_read_by_identifier_response",
    "identifier_to_byte",
]


def identifier_to_byte(identifier: DiagnosticIdentifier) -> int:
    """Wire byte of a Read By Identifier identifier."""
    return identifier.to_byte()


def byte_to_identifier(value: int) -> DiagnosticIdentifier:
    """Classify a Read By Identifier identifier byte."""
    return DiagnosticIdentifier.from_byte(value)


def create_read_by_identifier_frame(
    nad: int,
    identifier: DiagnosticIdentifier,
    supplier_id: int,
    function_id: int,
) -> Frame:
    """
    Build a Read By Identifier request frame.

    Args:
        nad: Node address of the slave.
        identifier: Data to read.
        supplier_id: Supplier ID of the slave (0x7FFF matches any supplier).
        function_id: Function ID of the slave (0xFFFF matches any function).

    Returns:
        Master request frame carrying the single-frame PDU.

    Example:
        >>> frame = create_read_by_identifier_frame(
        ...     0x10, DiagnosticIdentifier.serial_number(), 0x00B3, 0x1001
        ... )
        >>> frame.data.hex()
        '1006b201b3000110'
    """
    if not (0 <= supplier_id <= 0xFFFF and 0 <= function_id <= 0xFFFF):
        raise OutOfRangeError(
            f"Supplier and function IDs must be 16-bit, got 0x{supplier_id:X}, 0x{function_id:X}"
        )
    data = bytes([identifier_to_byte(identifier)]) + struct.pack("<HH", supplier_id, function_id)
    return create_single_frame(MASTER_REQUEST_PID, nad, READ_BY_IDENTIFIER_SID, data)


def create_read_by_identifier_frame_from_node_attributes(
    node_attributes: NodeAttributes,
    identifier: DiagnosticIdentifier,
) -> Frame:
    """Build a Read By Identifier request addressed with a node's attributes."""
    return create_read_by_identifier_frame(
        node_attributes.configured_nad,
        identifier,
        node_attributes.product_id.supplier_id,
        node_attributes.product_id.function_id,
    )


def create_read_lin_product_identification_frame(node_attributes: NodeAttributes) -> Frame:
    """Build a request for the LIN product identification of a node."""
    return create_read_by_identifier_frame_from_node_attributes(
        node_attributes, DiagnosticIdentifier.product_identification()
    )


def create_read_serial_number_frame(node_attributes: NodeAttributes) -> Frame:
    """Build a request for the serial number of a node."""
    return create_read_by_identifier_frame_from_node_attributes(
        node_attributes, DiagnosticIdentifier.serial_number()
    )


def decode_read_by_identifier_response(pdu: SingleFramePdu, nad: int) -> bytes:
    """
    Validate a Read By Identifier response and return its data.

    Args:
        pdu: Single-frame PDU received on the slave response frame.
        nad: Node address the request was sent to.

    Returns:
        Response data after the RSID.

    Raises:
        NegativeResponseError: If the slave rejected the request.
        ProtocolError: If the response comes from another node or carries an
            unexpected RSID.
    """
    if pdu.nad != nad:
        raise ProtocolError(f"Response from NAD 0x{pdu.nad:02X}, expected 0x{nad:02X}")

    if pdu.sid == ServiceId.NEGATIVE_RESPONSE:
        if len(pdu.data) < 2:
            raise ProtocolError(f"Truncated negative response: {pdu.data.hex()}")
        raise NegativeResponseError(service_id=pdu.data[0], error_code=pdu.data[1])

    expected_rsid = READ_BY_IDENTIFIER_SID + ProtocolConstants.RESPONSE_SID_OFFSET
    if pdu.sid != expected_rsid:
        raise ProtocolError(
            f"Unexpected RSID 0x{pdu.sid:02X}, expected 0x{expected_rsid:02X}"
        )
    return pdu.data
