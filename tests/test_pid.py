"""Tests for protected identifier calculation."""

import pytest

from linmaster.exceptions import OutOfRangeError, ProtocolError
from linmaster.protocol.pid import (
    MASTER_REQUEST_PID,
    PID,
    SLAVE_RESPONSE_PID,
    pid_from_identifier,
)


class TestPidFromIdentifier:
    """Tests for PID.from_identifier and pid_from_identifier."""

    @pytest.mark.parametrize(
        ("identifier", "expected"),
        [
            (0, 0x80),
            (1, 0xC1),
            (2, 0x42),
            (25, 0x99),
            (27, 0x5B),
            (29, 0xDD),
        ],
    )
    def test_known_values(self, identifier, expected):
        """Test PID bytes for known identifiers."""
        pid = pid_from_identifier(identifier)
        assert pid == PID(expected)
        assert pid.identifier == identifier

    def test_all_identifiers_roundtrip(self):
        """Test that every identifier survives the PID encoding."""
        for identifier in range(64):
            assert pid_from_identifier(identifier).identifier == identifier

    def test_parity_bits_match_formula(self):
        """Test parity bits against the LIN parity equations."""
        for identifier in range(64):
            bits = [(identifier >> i) & 1 for i in range(6)]
            p0 = bits[0] ^ bits[1] ^ bits[2] ^ bits[4]
            p1 = 1 - (bits[1] ^ bits[3] ^ bits[4] ^ bits[5])
            value = pid_from_identifier(identifier).value
            assert (value >> 6) & 1 == p0
            assert (value >> 7) & 1 == p1

    @pytest.mark.parametrize("identifier", [64, 100, 255, -1])
    def test_out_of_range_raises(self, identifier):
        """Test that identifiers outside 0-63 are rejected."""
        with pytest.raises(OutOfRangeError):
            pid_from_identifier(identifier)

    def test_out_of_range_is_value_error(self):
        """Test that contract violations are also ValueErrors."""
        with pytest.raises(ValueError):
            PID.from_identifier(64)


class TestPidProperties:
    """Tests for PID accessors and checksum classification."""

    @pytest.mark.parametrize("identifier", [0, 1, 59, 60, 63])
    def test_uses_classic_checksum(self, identifier):
        """Test that only identifiers 60-63 use the classic checksum."""
        assert pid_from_identifier(identifier).uses_classic_checksum == (identifier >= 60)

    def test_int_conversion(self):
        """Test conversion to the raw byte."""
        assert int(PID(0xDD)) == 0xDD

    def test_immutable(self):
        """Test that PIDs cannot be modified."""
        pid = PID(0x80)
        with pytest.raises(AttributeError):
            pid.value = 0x81

    def test_repr(self):
        """Test string representation."""
        assert repr(PID(0xDD)) == "PID(0xDD, id=29)"


class TestUncheckedAndRaw:
    """Tests for the non-validating and parsing constructors."""

    def test_diagnostic_pids(self):
        """Test the fixed diagnostic frame PIDs."""
        assert MASTER_REQUEST_PID == PID(0x3C)
        assert SLAVE_RESPONSE_PID == PID(0x7D)
        assert MASTER_REQUEST_PID.uses_classic_checksum
        assert SLAVE_RESPONSE_PID.uses_classic_checksum

    def test_unchecked_matches_checked(self):
        """Test that both builders agree on valid identifiers."""
        for identifier in range(64):
            assert PID.from_identifier_unchecked(identifier) == PID.from_identifier(identifier)

    def test_from_byte_valid(self):
        """Test parsing a PID byte with correct parity."""
        assert PID.from_byte(0x50).identifier == 16
        assert PID.from_byte(0xDD) == pid_from_identifier(29)

    def test_from_byte_bad_parity(self):
        """Test that a PID byte with wrong parity is rejected."""
        with pytest.raises(ProtocolError) as exc_info:
            PID.from_byte(0x1D)
        assert "parity" in str(exc_info.value)

    def test_from_byte_not_a_byte(self):
        """Test that values above 255 are rejected."""
        with pytest.raises(OutOfRangeError):
            PID.from_byte(0x100)
