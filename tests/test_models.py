"""Tests for the pydantic record models."""

import pytest
from pydantic import ValidationError

from linmaster.exceptions import OutOfRangeError
from linmaster.models.records import (
    DiagnosticIdentifier,
    IdentifierKind,
    NodeAttributes,
    ProductId,
    SerialNumber,
)


class TestProductId:
    """Tests for ProductId model."""

    def test_decode(self):
        """Test decoding the little-endian wire format."""
        product_id = ProductId.decode(bytes([0xB3, 0x00, 0x01, 0x10, 0x01]))
        assert product_id.supplier_id == 0x00B3
        assert product_id.function_id == 0x1001
        assert product_id.variant == 0x01

    def test_decode_ignores_extra_bytes(self):
        """Test that trailing bytes are ignored."""
        product_id = ProductId.decode(bytes([0xB3, 0x00, 0x01, 0x10, 0x01, 0xFF]))
        assert product_id == ProductId(supplier_id=0x00B3, function_id=0x1001, variant=0x01)

    def test_decode_too_short(self):
        """Test that fewer than 5 bytes are rejected."""
        with pytest.raises(OutOfRangeError):
            ProductId.decode(bytes([0xB3, 0x00, 0x01, 0x10]))

    def test_encode(self):
        """Test encoding to the wire format."""
        product_id = ProductId(supplier_id=0x1234, function_id=0xABCD, variant=7)
        assert product_id.encode() == bytes([0x34, 0x12, 0xCD, 0xAB, 0x07])

    def test_default_variant(self):
        """Test that the variant defaults to 0."""
        assert ProductId(supplier_id=1, function_id=2).variant == 0

    def test_supplier_id_bounds(self):
        """Test that supplier IDs must fit 16 bits."""
        with pytest.raises(ValidationError):
            ProductId(supplier_id=0x10000, function_id=0)

    def test_frozen(self):
        """Test that product IDs are immutable."""
        product_id = ProductId(supplier_id=1, function_id=2)
        with pytest.raises(ValidationError):
            product_id.supplier_id = 3

    def test_repr(self):
        """Test string representation."""
        product_id = ProductId(supplier_id=0x00B3, function_id=0x1001, variant=0x01)
        assert repr(product_id) == "ProductId(supplier=0x00B3, function=0x1001, variant=0x01)"


class TestSerialNumber:
    """Tests for SerialNumber model."""

    def test_decode(self):
        """Test decoding a 32-bit little-endian serial number."""
        serial_number = SerialNumber.decode(bytes([0xC9, 0x38, 0x56, 0x0B]))
        assert serial_number.value == 190200009
        assert int(serial_number) == 190200009
        assert str(serial_number) == "190200009"

    def test_decode_too_short(self):
        """Test that fewer than 4 bytes are rejected."""
        with pytest.raises(OutOfRangeError):
            SerialNumber.decode(bytes([0xC9, 0x38, 0x56]))

    def test_encode(self):
        """Test encoding to the wire format."""
        assert SerialNumber(value=190200009).encode() == bytes([0xC9, 0x38, 0x56, 0x0B])

    def test_value_bounds(self):
        """Test that the value must fit 32 bits."""
        with pytest.raises(ValidationError):
            SerialNumber(value=-1)
        with pytest.raises(ValidationError):
            SerialNumber(value=0x1_0000_0000)


class TestDiagnosticIdentifier:
    """Tests for DiagnosticIdentifier model."""

    def test_from_byte(self):
        """Test classification of identifier bytes."""
        assert DiagnosticIdentifier.from_byte(0).kind is IdentifierKind.LIN_PRODUCT_IDENTIFICATION
        assert DiagnosticIdentifier.from_byte(1).kind is IdentifierKind.SERIAL_NUMBER
        assert DiagnosticIdentifier.from_byte(45).kind is IdentifierKind.USER_DEFINED
        assert DiagnosticIdentifier.from_byte(200).kind is IdentifierKind.RESERVED

    def test_equality(self):
        """Test that identifiers compare by kind and value."""
        assert DiagnosticIdentifier.from_byte(1) == DiagnosticIdentifier.serial_number()
        assert DiagnosticIdentifier.reserved(2) != DiagnosticIdentifier.reserved(3)

    def test_mismatched_kind(self):
        """Test that a named kind cannot carry another byte."""
        with pytest.raises(ValidationError):
            DiagnosticIdentifier(kind=IdentifierKind.SERIAL_NUMBER, value=0)

    def test_repr(self):
        """Test string representation."""
        assert repr(DiagnosticIdentifier.user_defined(40)) == "DiagnosticIdentifier(USER_DEFINED, 40)"


class TestNodeAttributes:
    """Tests for NodeAttributes model."""

    @pytest.fixture
    def product_id(self):
        """A sample product ID."""
        return ProductId(supplier_id=0x00B3, function_id=0x1001, variant=0x01)

    def test_default_timing(self, product_id):
        """Test the default timing parameters."""
        attrs = NodeAttributes.with_default_timing(0x10, 0x7F, product_id)
        assert attrs.configured_nad == 0x10
        assert attrs.initial_nad == 0x7F
        assert attrs.product_id == product_id
        assert attrs.p2_min == 50.0
        assert attrs.st_min == 0.0
        assert attrs.n_as_timeout == 1000.0
        assert attrs.n_cr_timeout == 1000.0

    def test_custom_timing(self, product_id):
        """Test overriding timing parameters."""
        attrs = NodeAttributes(
            configured_nad=0x10,
            initial_nad=0x10,
            product_id=product_id,
            p2_min=10.0,
            st_min=5.0,
        )
        assert attrs.p2_min == 10.0
        assert attrs.st_min == 5.0
        assert attrs.n_as_timeout == 1000.0

    def test_nad_bounds(self, product_id):
        """Test that NADs must fit a byte."""
        with pytest.raises(ValidationError):
            NodeAttributes.with_default_timing(0x100, 0x10, product_id)

    def test_negative_timing_rejected(self, product_id):
        """Test that timing parameters cannot be negative."""
        with pytest.raises(ValidationError):
            NodeAttributes(configured_nad=1, initial_nad=1, product_id=product_id, p2_min=-1.0)

    def test_frozen(self, product_id):
        """Test that node attributes are immutable."""
        attrs = NodeAttributes.with_default_timing(0x10, 0x10, product_id)
        with pytest.raises(ValidationError):
            attrs.configured_nad = 0x11
