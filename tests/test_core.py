import pytest

from sc8815.core import I2CBus, SC8815Base
from sc8815.errors import I2CError, InvalidParameterError
from sc8815.registers import DEFAULT_ADDRESS, Register, StatusFlags


class ScriptedBus:
    """I2C bus that checks each transaction against a scripted expectation."""

    def __init__(self, expectations):
        self.expectations = list(expectations)
        self.log = []

    def _next(self, kind, address, data):
        assert self.expectations, f"unexpected {kind} {data!r}"
        exp = self.expectations.pop(0)
        assert exp[0] == kind
        assert exp[1] == address
        assert exp[2] == bytes(data)
        self.log.append((kind, bytes(data)))
        return exp

    def write_read(self, address, data, read_length):
        exp = self._next("write_read", address, data)
        assert len(exp[3]) == read_length
        return bytes(exp[3])

    def write(self, address, data):
        self._next("write", address, data)

    def done(self):
        assert self.expectations == []


def wr(reg, resp):
    return ("write_read", DEFAULT_ADDRESS, bytes([reg]), bytes([resp]))


def w(reg, value):
    return ("write", DEFAULT_ADDRESS, bytes([reg, value]))


INIT = [
    wr(0x17, 0x40),
    wr(0x0B, 0x00),
    w(0x0B, 0x08),
    wr(0x19, 0x00),
    w(0x19, 0x01),
]


def make(expectations):
    bus = ScriptedBus(expectations)
    return bus, SC8815Base(bus, DEFAULT_ADDRESS)


def test_device_initialization():
    bus, dev = make(INIT)
    assert dev.init() is None
    bus.done()
    assert len(bus.log) == 5


def test_ac_adapter_status_check():
    bus, dev = make(INIT + [wr(0x17, 0x40)])
    dev.init()
    assert dev.is_ac_adapter_connected() is True
    bus.done()


def test_otg_mode_control():
    bus, dev = make(INIT + [wr(0x09, 0x00), w(0x09, 0x80), wr(0x09, 0x80)])
    dev.init()
    dev.set_otg_mode(True)
    assert dev.is_otg_mode() is True
    bus.done()


def test_status_flags_from_register():
    bus, dev = make([wr(0x17, 0x42)])
    flags = dev.get_status_flags()
    assert StatusFlags.AC_OK in flags
    assert StatusFlags.EOC in flags
    assert StatusFlags.OTP not in flags
    bus.done()


@pytest.mark.parametrize(
    "method,value,expected",
    [
        ("is_usb_load_detected", 0x20, True),
        ("is_usb_load_detected", 0x40, False),
        ("is_charging_complete", 0x02, True),
        ("is_otp_fault", 0x04, True),
        ("is_otp_fault", 0x00, False),
        ("is_vbus_short_fault", 0x08, True),
    ],
)
def test_status_queries(method, value, expected):
    bus, dev = make([wr(0x17, value)])
    assert getattr(dev, method)() is expected
    bus.done()


def test_init_preserves_existing_bits():
    bus, dev = make(
        [wr(0x17, 0x00), wr(0x0B, 0x04), w(0x0B, 0x0C), wr(0x19, 0x40), w(0x19, 0x41)]
    )
    dev.init()
    bus.done()
    assert bus.log[-1] == ("write", bytes([0x19, 0x41]))


def test_disable_otg_clears_bit_only():
    bus, dev = make([wr(0x09, 0x95), w(0x09, 0x15)])
    dev.set_otg_mode(False)
    bus.done()
    assert bus.log[-1] == ("write", bytes([0x09, 0x15]))


@pytest.mark.parametrize("freq,written", [(0, 0xF3), (1, 0xF7), (3, 0xFF)])
def test_switching_frequency(freq, written):
    bus, dev = make([wr(0x09, 0xF3), w(0x09, written)])
    dev.set_switching_frequency(freq)
    bus.done()
    assert bus.log[-1] == ("write", bytes([0x09, written]))


@pytest.mark.parametrize("freq", [2, 4, -1])
def test_switching_frequency_invalid(freq):
    bus, dev = make([])
    with pytest.raises(InvalidParameterError):
        dev.set_switching_frequency(freq)
    assert bus.log == []


def test_dead_time():
    bus, dev = make([wr(0x09, 0x80), w(0x09, 0x83)])
    dev.set_dead_time(3)
    bus.done()
    assert bus.log[-1] == ("write", bytes([0x09, 0x83]))


def test_dead_time_invalid():
    bus, dev = make([])
    with pytest.raises(InvalidParameterError):
        dev.set_dead_time(4)
    assert bus.log == []


@pytest.mark.parametrize(
    "method,arg,reg,before,after",
    [
        ("set_trickle_charging", False, 0x0A, 0x00, 0x40),
        ("set_trickle_charging", True, 0x0A, 0x40, 0x00),
        ("set_charging_termination", False, 0x0A, 0x00, 0x20),
        ("set_frequency_dithering", True, 0x0B, 0x08, 0x0C),
        ("set_pfm_mode", True, 0x0C, 0x00, 0x01),
        ("set_short_foldback_disable", True, 0x0C, 0x00, 0x04),
        ("set_pgate_control", True, 0x0C, 0x00, 0x80),
        ("set_gpo_control", True, 0x0C, 0x00, 0x40),
        ("set_adc_conversion", True, 0x0C, 0x00, 0x20),
        ("set_adc_conversion", False, 0x0C, 0x21, 0x01),
        ("set_trickle_threshold", True, 0x0A, 0x00, 0x08),
        ("set_eoc_threshold", True, 0x0C, 0x00, 0x02),
        ("set_charging_current_selection", True, 0x0A, 0x00, 0x80),
        ("set_loop_response", True, 0x0C, 0x00, 0x08),
        ("set_ilim_bandwidth", True, 0x0C, 0x00, 0x10),
        ("set_short_foldback", False, 0x0C, 0x04, 0x00),
        ("set_ovp_protection", True, 0x0A, 0x00, 0x04),
    ],
)
def test_flag_setters(method, arg, reg, before, after):
    bus, dev = make([wr(reg, before), w(reg, after)])
    getattr(dev, method)(arg)
    bus.done()
    assert bus.log[-1] == ("write", bytes([reg, after]))


def test_clear_vbus_short_fault_with_delay_order():
    calls = []

    bus, dev = make([wr(0x0C, 0x04), w(0x0C, 0x00), wr(0x0C, 0x00), w(0x0C, 0x04)])

    def delay():
        calls.append(len(bus.log))

    result = dev.clear_vbus_short_fault_with_delay(delay)
    assert result is None
    bus.done()
    assert calls == [2]
    assert bus.log[1] == ("write", bytes([0x0C, 0x00]))
    assert bus.log[3] == ("write", bytes([0x0C, 0x04]))


def test_clear_vbus_short_fault_step():
    bus, dev = make([wr(0x0C, 0x04), w(0x0C, 0x00)])
    dev.clear_vbus_short_fault_step(True)
    bus.done()
    assert bus.log[-1] == ("write", bytes([0x0C, 0x00]))


def test_reset_clears_controls_then_inits():
    bus, dev = make([w(0x09, 0), w(0x0A, 0), w(0x0B, 0), w(0x0C, 0)] + INIT)
    dev.reset()
    bus.done()
    assert len(bus.log) == 9


def test_read_and_write_register():
    bus, dev = make([wr(0x08, 0x5A), w(0x08, 0xA5)])
    assert dev.read_register(Register.RATIO) == 0x5A
    dev.write_register(Register.RATIO, 0xA5)
    bus.done()


class FailingBus:
    def write_read(self, address, data, read_length):
        raise OSError("nack")

    def write(self, address, data):
        raise OSError("nack")


def test_bus_errors_are_wrapped():
    dev = SC8815Base(FailingBus(), DEFAULT_ADDRESS)
    with pytest.raises(I2CError) as info:
        dev.read_register(Register.STATUS)
    assert isinstance(info.value.error, OSError)
    with pytest.raises(I2CError):
        dev.write_register(Register.STATUS, 0)
    with pytest.raises(I2CError):
        dev.init()


def test_release_returns_bus():
    bus = ScriptedBus([])
    dev = SC8815Base(bus, DEFAULT_ADDRESS)
    assert dev.release() is bus
    assert isinstance(bus, I2CBus)