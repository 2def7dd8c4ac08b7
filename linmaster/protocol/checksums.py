"""
LIN checksum calculation and validation.

LIN defines two checksum models, both an inverted eight-bit sum with carry:
- Classic (LIN 1.3): computed over the data bytes only
- Enhanced (LIN 2.x): computed over the PID byte and the data bytes

"Sum with carry" adds each byte and subtracts 255 whenever the running sum
reaches 256, folding the carry back into the low byte. This differs from
plain modulo-256 addition.

Frames with identifiers 60-63 always use the classic checksum.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from linmaster.protocol.pid import PID


def _sum_with_carry(seed: int, data: bytes | bytearray | memoryview) -> int:
    total = seed
    for byte in data:
        total += byte
        if total >= 256:
            total -= 255
    return total


def enhanced_checksum(pid: PID | int, data: bytes | bytearray | memoryview) -> int:
    """
    Calculate the LIN 2.x enhanced checksum.

    Args:
        pid: Protected identifier (PID or raw PID byte) seeding the sum.
        data: Frame data bytes.

    Returns:
        8-bit checksum value (0-255).

    Example:
        >>> enhanced_checksum(0x4A, bytes([0x55, 0x93, 0xE5]))
        230
    """
    return ~_sum_with_carry(int(pid), data) & 0xFF


def classic_checksum(data: bytes | bytearray | memoryview) -> int:
    """
    Calculate the LIN 1.3 classic checksum over the data bytes only.

    Example:
        >>> classic_checksum(bytes([0x01]))
        254
    """
    return ~_sum_with_carry(0, data) & 0xFF


def calculate_checksum(pid: PID, data: bytes | bytearray | memoryview) -> int:
    """
    Calculate the checksum a frame with the given PID must carry.

    Uses the classic checksum for identifiers 60-63 and the enhanced
    checksum for every other identifier.

    Args:
        pid: Protected identifier of the frame.
        data: Frame data bytes (without checksum).

    Returns:
        8-bit checksum value (0-255).
    """
    if pid.uses_classic_checksum:
        return classic_checksum(data)
    return enhanced_checksum(pid, data)


def validate_checksum(pid: PID, data_with_checksum: bytes | bytearray | memoryview) -> bool:
    """
    Validate the trailing checksum byte of received frame data.

    Args:
        pid: Protected identifier the frame was received under.
        data_with_checksum: Data bytes followed by one checksum byte.

    Returns:
        True if the checksum matches, False otherwise (including empty input).
    """
    if len(data_with_checksum) < 1:
        return False
    return calculate_checksum(pid, data_with_checksum[:-1]) == data_with_checksum[-1]
