"""
Pydantic models for LIN node configuration and diagnostic records.

Design principles:
- All models are frozen (immutable) value objects
- Field bounds match the wire widths (u8, u16, u32)
- Multi-byte fields are little-endian on the wire
"""

from __future__ import annotations

import struct
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from linmaster.exceptions import OutOfRangeError
from linmaster.protocol.constants import ProtocolConstants


class IdentifierKind(Enum):
    """Classes of data a slave can be asked for with Read By Identifier."""

    LIN_PRODUCT_IDENTIFICATION = "lin_product_identification"
    SERIAL_NUMBER = "serial_number"
    USER_DEFINED = "user_defined"
    RESERVED = "reserved"


_USER_DEFINED_RANGE = range(32, 64)


class DiagnosticIdentifier(BaseModel):
    """
    Identifier byte of a Read By Identifier request.

    A tagged value: the two named identifiers carry a fixed byte, the
    user-defined range 32-63 and the reserved remainder carry their own byte.
    Each byte maps to exactly one identifier and back.

    Example:
        >>> DiagnosticIdentifier.from_byte(1).kind
        <IdentifierKind.SERIAL_NUMBER: 'serial_number'>
        >>> DiagnosticIdentifier.user_defined(40).to_byte()
        40
    """

    model_config = ConfigDict(frozen=True)

    kind: IdentifierKind
    value: int = Field(ge=0, le=255, description="Identifier byte on the wire")

    @model_validator(mode="after")
    def check_kind_matches_value(self) -> DiagnosticIdentifier:
        """Reject combinations that would break the one-to-one byte mapping."""
        if _classify(self.value) is not self.kind:
            raise ValueError(f"Byte {self.value} is not a {self.kind.value} identifier")
        return self

    @classmethod
    def product_identification(cls) -> DiagnosticIdentifier:
        """LIN product identification (identifier 0)."""
        return cls(kind=IdentifierKind.LIN_PRODUCT_IDENTIFICATION, value=0)

    @classmethod
    def serial_number(cls) -> DiagnosticIdentifier:
        """Serial number (identifier 1)."""
        return cls(kind=IdentifierKind.SERIAL_NUMBER, value=1)

    @classmethod
    def user_defined(cls, value: int) -> DiagnosticIdentifier:
        """
        User-defined identifier (32-63).

        Raises:
            OutOfRangeError: If value is outside 32-63.
        """
        _check_kind(IdentifierKind.USER_DEFINED, value)
        return cls(kind=IdentifierKind.USER_DEFINED, value=value)

    @classmethod
    def reserved(cls, value: int) -> DiagnosticIdentifier:
        """
        Reserved identifier (2-31, 64-255).

        Raises:
            OutOfRangeError: If value is not a reserved identifier byte.
        """
        _check_kind(IdentifierKind.RESERVED, value)
        return cls(kind=IdentifierKind.RESERVED, value=value)

    @classmethod
    def from_byte(cls, value: int) -> DiagnosticIdentifier:
        """
        Classify an identifier byte.

        Raises:
            OutOfRangeError: If value is not a byte.
        """
        if not 0 <= value <= 0xFF:
            raise OutOfRangeError(f"Identifier byte must be 0-255, got {value}")
        return cls(kind=_classify(value), value=value)

    def to_byte(self) -> int:
        """Wire byte of this identifier."""
        return self.value

    def __repr__(self) -> str:
        return f"DiagnosticIdentifier({self.kind.name}, {self.value})"


def _classify(value: int) -> IdentifierKind:
    if value == 0:
        return IdentifierKind.LIN_PRODUCT_IDENTIFICATION
    if value == 1:
        return IdentifierKind.SERIAL_NUMBER
    if value in _USER_DEFINED_RANGE:
        return IdentifierKind.USER_DEFINED
    return IdentifierKind.RESERVED


def _check_kind(kind: IdentifierKind, value: int) -> None:
    if not 0 <= value <= 0xFF or _classify(value) is not kind:
        raise OutOfRangeError(f"Byte {value} is not a {kind.value} identifier")


class ProductId(BaseModel):
    """
    LIN product identification of a slave node.

    Wire format (5 bytes, little-endian):
        supplier_id (2) | function_id (2) | variant (1)

    Example:
        >>> ProductId.decode(bytes([0xB3, 0x00, 0x01, 0x10, 0x01]))
        ProductId(supplier=0x00B3, function=0x1001, variant=0x01)
    """

    model_config = ConfigDict(frozen=True)

    supplier_id: int = Field(ge=0, le=0xFFFF, description="Supplier ID assigned by the LIN consortium")
    function_id: int = Field(ge=0, le=0xFFFF, description="Supplier-specific function ID")
    variant: int = Field(default=0, ge=0, le=0xFF, description="Node variant")

    WIRE_SIZE: ClassVar[int] = 5

    @classmethod
    def decode(cls, data: bytes | bytearray | memoryview) -> ProductId:
        """
        Decode a product identification from response data.

        Args:
            data: At least 5 bytes; extra bytes are ignored.

        Raises:
            OutOfRangeError: If fewer than 5 bytes are given.
        """
        if len(data) < cls.WIRE_SIZE:
            raise OutOfRangeError(
                f"Product ID needs {cls.WIRE_SIZE} bytes, got {len(data)}"
            )
        supplier_id, function_id, variant = struct.unpack_from("<HHB", data)
        return cls(supplier_id=supplier_id, function_id=function_id, variant=variant)

    def encode(self) -> bytes:
        """Encode to the 5-byte wire format."""
        return struct.pack("<HHB", self.supplier_id, self.function_id, self.variant)

    def __repr__(self) -> str:
        return (
            f"ProductId(supplier=0x{self.supplier_id:04X}, "
            f"function=0x{self.function_id:04X}, variant=0x{self.variant:02X})"
        )


class SerialNumber(BaseModel):
    """
    Serial number of a slave node, a 32-bit little-endian value.

    Example:
        >>> int(SerialNumber.decode(bytes([0xC9, 0x38, 0x56, 0x0B])))
        190200009
    """

    model_config = ConfigDict(frozen=True)

    value: int = Field(ge=0, le=0xFFFFFFFF, description="Serial number")

    WIRE_SIZE: ClassVar[int] = 4

    @classmethod
    def decode(cls, data: bytes | bytearray | memoryview) -> SerialNumber:
        """
        Decode a serial number from response data.

        Args:
            data: At least 4 bytes; extra bytes are ignored.

        Raises:
            OutOfRangeError: If fewer than 4 bytes are given.
        """
        if len(data) < cls.WIRE_SIZE:
            raise OutOfRangeError(
                f"Serial number needs {cls.WIRE_SIZE} bytes, got {len(data)}"
            )
        (value,) = struct.unpack_from("<I", data)
        return cls(value=value)

    def encode(self) -> bytes:
        """Encode to the 4-byte wire format."""
        return struct.pack("<I", self.value)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"SerialNumber({self.value})"


class NodeAttributes(BaseModel):
    """
    Static configuration of a slave node, as listed in an LDF.

    The timing parameters are carried for the caller; they are not enforced
    by the master. All times are in milliseconds.

    Example:
        >>> attrs = NodeAttributes(
        ...     configured_nad=0x10,
        ...     initial_nad=0x10,
        ...     product_id=ProductId(supplier_id=0x00B3, function_id=0x1001),
        ... )
        >>> attrs.p2_min
        50.0
    """

    model_config = ConfigDict(frozen=True)

    configured_nad: int = Field(ge=0, le=0xFF, description="NAD used for diagnostics")
    initial_nad: int = Field(ge=0, le=0xFF, description="NAD before configuration")
    product_id: ProductId
    p2_min: float = Field(default=ProtocolConstants.DEFAULT_P2_MIN, ge=0.0)
    st_min: float = Field(default=ProtocolConstants.DEFAULT_ST_MIN, ge=0.0)
    n_as_timeout: float = Field(default=ProtocolConstants.DEFAULT_N_AS_TIMEOUT, ge=0.0)
    n_cr_timeout: float = Field(default=ProtocolConstants.DEFAULT_N_CR_TIMEOUT, ge=0.0)

    @classmethod
    def with_default_timing(
        cls,
        configured_nad: int,
        initial_nad: int,
        product_id: ProductId,
    ) -> NodeAttributes:
        """Create node attributes with the default timing parameters."""
        return cls(
            configured_nad=configured_nad,
            initial_nad=initial_nad,
            product_id=product_id,
        )
