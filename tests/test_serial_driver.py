"""Tests for SerialDriver using the pyserial loopback URL."""

import pytest
import serial

from linmaster import Master
from linmaster.driver.serial_port import SerialDriver
from linmaster.exceptions import PhysicalBusError, TimeoutError
from linmaster.protocol.frame import Frame
from linmaster.protocol.pid import PID


class TestSerialDriver:
    """Tests for SerialDriver class."""

    @pytest.fixture
    def driver(self):
        """Open a loopback driver without echo checking."""
        driver = SerialDriver("loop://", timeout=0.01, echo=False, wakeup_pulse=0, wakeup_delay=0)
        driver.open()
        yield driver
        driver.close()

    @pytest.fixture
    def echo_driver(self):
        """Open a loopback driver that verifies its echo."""
        driver = SerialDriver("loop://", timeout=0.01, wakeup_pulse=0, wakeup_delay=0)
        driver.open()
        yield driver
        driver.close()

    def test_initial_state(self):
        """Test that the driver starts closed."""
        driver = SerialDriver("loop://")
        assert not driver.is_open
        assert driver.port_name == "loop://"
        assert driver.baudrate == 19200
        assert "closed" in repr(driver)

    def test_open_close(self, driver):
        """Test opening and closing the port."""
        assert driver.is_open
        driver.close()
        assert not driver.is_open
        driver.close()

    def test_open_bad_port_raises(self):
        """Test that an unavailable port raises a bus error."""
        driver = SerialDriver("/dev/does-not-exist-lin")
        with pytest.raises(PhysicalBusError):
            driver.open()

    def test_header_bytes(self, driver):
        """Test that a header is break, sync and PID."""
        driver.send_header(PID.from_identifier(29))
        assert driver.read(3) == b"\x00\x55\xDD"

    def test_header_restores_baudrate(self, driver):
        """Test that the break does not leave the port at half speed."""
        driver.send_header(PID.from_identifier(29))
        assert driver._serial.baudrate == 19200

    def test_write_read(self, driver):
        """Test that written bytes can be read back."""
        driver.write(b"\x01\x21")
        assert driver.read(2) == b"\x01\x21"

    def test_read_timeout(self, driver):
        """Test that a short read raises a timeout."""
        with pytest.raises(TimeoutError) as exc_info:
            driver.read(1)
        assert exc_info.value.timeout_seconds == 0.01

    def test_wakeup(self, driver):
        """Test sending a wakeup signal."""
        driver.send_wakeup()
        assert driver.is_open

    def test_closed_driver_raises(self):
        """Test that I/O on a closed port raises a bus error."""
        driver = SerialDriver("loop://")
        with pytest.raises(PhysicalBusError):
            driver.send_header(PID.from_identifier(1))
        with pytest.raises(PhysicalBusError):
            driver.read(1)
        with pytest.raises(PhysicalBusError):
            driver.write(b"\x00")
        with pytest.raises(PhysicalBusError):
            driver.send_wakeup()

    def test_context_manager(self):
        """Test that the context manager opens and closes the port."""
        with SerialDriver("loop://") as driver:
            assert driver.is_open
        assert not driver.is_open

    def test_echo_consumed(self, echo_driver):
        """Test that the echoed header and response are verified and consumed."""
        echo_driver.send_header(PID.from_identifier(29))
        echo_driver.write(b"\x01\x21")
        with pytest.raises(TimeoutError):
            echo_driver.read(1)

    def test_master_write_frame(self, echo_driver):
        """Test publishing a frame through the master."""
        Master(echo_driver).write_frame(Frame.from_data(PID.from_identifier(29), b"\x01"))

    def test_master_read_frame_without_slave(self, echo_driver):
        """Test that a read without a responding slave times out."""
        with pytest.raises(TimeoutError):
            Master(echo_driver).read_frame(PID.from_identifier(29), 1)


class _BreakRecordingPort:
    """Stand-in port exposing only the break condition."""

    is_open = True

    def __init__(self):
        self.break_condition = False


class TestSerialDriverWakeup:
    """Tests for wakeup pulse timing."""

    def test_pulse_length_from_wakeup_pulse(self, monkeypatch):
        """Test that the bus is held dominant for exactly the wakeup pulse."""
        port = _BreakRecordingPort()
        sleeps = []
        monkeypatch.setattr(
            "linmaster.driver.serial_port.time.sleep",
            lambda seconds: sleeps.append((port.break_condition, seconds)),
        )
        driver = SerialDriver("loop://", wakeup_pulse=0.001, wakeup_delay=0.2)
        driver._serial = port

        driver.send_wakeup()

        assert sleeps == [(True, 0.001), (False, 0.2)]
        assert port.break_condition is False

    def test_break_failure_raises(self, monkeypatch):
        """Test that a failing break condition is reported as a bus error."""

        class FailingPort:
            is_open = True

            @property
            def break_condition(self):
                return False

            @break_condition.setter
            def break_condition(self, value):
                raise serial.SerialException("break not supported")

        monkeypatch.setattr("linmaster.driver.serial_port.time.sleep", lambda seconds: None)
        driver = SerialDriver("loop://")
        driver._serial = FailingPort()
        with pytest.raises(PhysicalBusError, match="Wakeup failed"):
            driver.send_wakeup()


class TestSerialDriverHeaderErrors:
    """Tests for error wrapping while sending a header."""

    def test_input_flush_failure_raises(self, monkeypatch):
        """Test that a failing input buffer reset is reported as a bus error."""
        driver = SerialDriver("loop://", timeout=0.01)
        driver.open()
        try:

            def fail():
                raise serial.SerialException("device disconnected")

            monkeypatch.setattr(driver._serial, "reset_input_buffer", fail)
            with pytest.raises(PhysicalBusError, match="Break failed"):
                driver.send_header(PID.from_identifier(1))
            assert driver._serial.baudrate == 19200
        finally:
            driver.close()
