"""
Driver layer binding the LIN master to a bus.

Available drivers:
- SerialDriver: UART-attached transceiver using pyserial
- MockDriver: Mock driver for testing without hardware

Example:
    >>> from linmaster.driver import SerialDriver
    >>> with SerialDriver("/dev/ttyUSB0") as driver:
    ...     driver.send_wakeup()

Testing Example:
    >>> from linmaster.driver import MockDriver
    >>> mock = MockDriver()
    >>> mock.add_response(bytes([0x01, 0x21]))
"""

from linmaster.driver.abc import AbstractDriver
from linmaster.driver.mock import MockDriver, ScriptedMockDriver
from linmaster.driver.serial_port import SerialDriver

__all__ = [
    "AbstractDriver",
    "MockDriver",
    "ScriptedMockDriver",
    "SerialDriver",
]
