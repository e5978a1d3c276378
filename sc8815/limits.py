"""Current limits, voltage references and battery voltage settings of the SC8815."""

from __future__ import annotations

import struct

from sc8815.core import SC8815Base
from sc8815.errors import InvalidParameterError
from sc8815.registers import Ctrl1Flags, Register

__all__ = ["SC8815Limits"]

_IBUS_RATIO_MULTIPLIERS = {1: 6, 2: 3}
_IBAT_RATIO_MULTIPLIERS = {0: 6, 1: 12}
_VINREG_RATIO_MULTIPLIERS = {0: 100, 1: 40}
_VBUS_RATIO_MULTIPLIERS = {0: 12.5, 1: 5.0}

_IR_COMP_SETTINGS = {0: 0b00, 20: 0b01, 40: 0b10, 80: 0b11}
_VCELL_SETTINGS = {
    4100: 0b000,
    4200: 0b001,
    4250: 0b010,
    4300: 0b011,
    4350: 0b100,
    4400: 0b101,
    4450: 0b110,
}

_IBUS_RATIO_BITS = 0x0C
_IBAT_RATIO_BIT = 0x10
_VBUS_RATIO_BIT = 0x01
_VINREG_RATIO_BIT = 0x10
_SLEW_BITS = 0x03
_VBAT_SEL_BIT = 0x20
_REF_LOW_FILL = 0x3F
_MAX_REF_VALUE = 1023


def _f32(value: float) -> float:
    """Round ``value`` to single precision, as the chip's reference arithmetic does."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _limit_setting(limit_ma: int, rs_mohm: int, multiplier: int) -> int:
    """Register value for a current limit: LIM = (SET + 1) / 256 * RATIO * 10 mOhm / RS."""
    limit_a = _f32(limit_ma / 1000.0)
    scaled = _f32(_f32(limit_a * 256.0) * float(rs_mohm))
    setting = _f32(_f32(scaled / (multiplier * 10.0)) - 1.0)
    if not 0.0 <= setting <= 255.0:
        raise InvalidParameterError()
    return int(setting)


def _reference_value(reference_mv: float) -> int:
    """10-bit reference value for REF = (4 * SET + SET2 + 1) * 2 mV."""
    value = int(_f32(_f32(reference_mv / 2.0) - 1.0))
    if value > _MAX_REF_VALUE:
        raise InvalidParameterError()
    return value


def _split_reference(value: int) -> tuple[int, int]:
    """High byte and low-bits register values of a 10-bit reference."""
    return value >> 2, ((value & 0x03) << 6) | _REF_LOW_FILL


class SC8815Limits(SC8815Base):
    """SC8815 driver with current limit, voltage and battery settings."""

    def _update_bits(self, register: Register, bits: int, set_bits: bool) -> None:
        value = self.read_register(register)
        value = value | bits if set_bits else value & ~bits & 0xFF
        self.write_register(register, value)

    def set_ibus_limit(self, limit_ma: int, ratio: int, rs1_mohm: int) -> None:
        """Set the IBUS current limit (ratio 1: 6x, 2: 3x; at least 300 mA)."""
        if limit_ma < 300 or ratio not in _IBUS_RATIO_MULTIPLIERS or rs1_mohm <= 0:
            raise InvalidParameterError()
        setting = _limit_setting(limit_ma, rs1_mohm, _IBUS_RATIO_MULTIPLIERS[ratio])

        self.write_register(Register.IBUS_LIM_SET, setting)

        ratio_reg = self.read_register(Register.RATIO)
        ratio_reg = (ratio_reg & ~_IBUS_RATIO_BITS & 0xFF) | ((ratio & 0x03) << 2)
        self.write_register(Register.RATIO, ratio_reg)

    def set_ibat_limit(self, limit_ma: int, ratio: int, rs2_mohm: int) -> None:
        """Set the IBAT current limit (ratio 0: 6x, 1: 12x; at least 300 mA)."""
        if limit_ma < 300 or ratio not in _IBAT_RATIO_MULTIPLIERS or rs2_mohm <= 0:
            raise InvalidParameterError()
        setting = _limit_setting(limit_ma, rs2_mohm, _IBAT_RATIO_MULTIPLIERS[ratio])

        self.write_register(Register.IBAT_LIM_SET, setting)
        self._update_bits(Register.RATIO, _IBAT_RATIO_BIT, ratio == 1)

    def set_vinreg_voltage(self, voltage_mv: int, ratio: int) -> None:
        """Set the VINREG threshold for charging mode (ratio 0: 100x, 1: 40x)."""
        if ratio not in _VINREG_RATIO_MULTIPLIERS:
            raise InvalidParameterError()
        multiplier = _VINREG_RATIO_MULTIPLIERS[ratio]
        if not multiplier <= voltage_mv <= 256 * multiplier:
            raise InvalidParameterError()

        setting = voltage_mv // multiplier - 1
        if setting > 255:
            raise InvalidParameterError()

        self.write_register(Register.VINREG_SET, setting)
        self._update_bits(Register.CTRL0_SET, _VINREG_RATIO_BIT, ratio == 1)

    def set_vbus_internal_voltage(self, voltage_mv: int, vbus_ratio: int) -> None:
        """Set the VBUS output voltage from the internal reference (discharging mode)."""
        if vbus_ratio not in _VBUS_RATIO_MULTIPLIERS:
            raise InvalidParameterError()
        reference_mv = _f32(voltage_mv / _VBUS_RATIO_MULTIPLIERS[vbus_ratio])
        if not 2.0 <= reference_mv <= 2048.0:
            raise InvalidParameterError()

        high, low = _split_reference(_reference_value(reference_mv))
        self.write_register(Register.VBUSREF_I_SET, high)
        self.write_register(Register.VBUSREF_I_SET2, low)

        self._update_bits(Register.RATIO, _VBUS_RATIO_BIT, vbus_ratio == 1)
        self._set_flag(Register.CTRL1_SET, Ctrl1Flags, Ctrl1Flags.FB_SEL, False)

    def set_vbus_external_reference(self, reference_mv: int) -> None:
        """Set the external VBUS reference voltage (700-2048 mV, discharging mode)."""
        if not 700 <= reference_mv <= 2048:
            raise InvalidParameterError()

        high, low = _split_reference(_reference_value(reference_mv))
        self.write_register(Register.VBUSREF_E_SET, high)
        self.write_register(Register.VBUSREF_E_SET2, low)

        self._set_flag(Register.CTRL1_SET, Ctrl1Flags, Ctrl1Flags.FB_SEL, True)

    def set_vbus_slew_rate(self, slew_setting: int) -> None:
        """Set the VBUS slew rate (0: 1 mV/us, 1: 2 mV/us, 2: 4 mV/us)."""
        if not 0 <= slew_setting <= 2:
            raise InvalidParameterError()
        ctrl2 = self.read_register(Register.CTRL2_SET)
        ctrl2 = (ctrl2 & ~_SLEW_BITS & 0xFF) | slew_setting
        self.write_register(Register.CTRL2_SET, ctrl2)

    def configure_battery_voltage(
        self,
        cell_count: int,
        voltage_per_cell_mv: int,
        use_internal: bool,
        ir_comp_mohm: int,
    ) -> None:
        """Set cell count, voltage per cell, VBAT source and IR compensation."""
        if not 1 <= cell_count <= 4 or not 4100 <= voltage_per_cell_mv <= 4450:
            raise InvalidParameterError()
        try:
            ir_setting = _IR_COMP_SETTINGS[ir_comp_mohm]
            vcell_setting = _VCELL_SETTINGS[voltage_per_cell_mv]
        except KeyError:
            raise InvalidParameterError() from None
        csel_setting = cell_count - 1

        vbat_set = vcell_setting | (csel_setting << 3) | (ir_setting << 6)
        if not use_internal:
            vbat_set |= _VBAT_SEL_BIT

        self.write_register(Register.VBAT_SET, vbat_set)