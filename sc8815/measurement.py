"""ADC readings and interrupt mask handling of the SC8815."""

from __future__ import annotations

import struct

from sc8815.errors import InvalidParameterError
from sc8815.limits import SC8815Limits
from sc8815.registers import MaskFlags, Register, StatusFlags, truncate

__all__ = ["SC8815Measurement"]

_VOLTAGE_RATIO_MULTIPLIERS = {0: 12.5, 1: 5.0}
_IBUS_RATIO_MULTIPLIERS = {1: 6, 2: 3}
_IBAT_RATIO_MULTIPLIERS = {0: 6, 1: 12}

_U16_MAX = 0xFFFF

_INTERRUPT_STATUS = (
    StatusFlags.EOC
    | StatusFlags.OTP
    | StatusFlags.VBUS_SHORT
    | StatusFlags.INDET
    | StatusFlags.AC_OK
)


def _f32(value: float) -> float:
    """Round ``value`` to single precision."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _to_u16(value: float) -> int:
    """Truncate towards zero and clamp into the unsigned 16-bit range."""
    return max(0, min(int(value), _U16_MAX))


def _low_bits(value: int) -> int:
    """The two ADC low bits held in bits 7-6 of a *_VALUE2 register."""
    return (value >> 6) & 0x03


class SC8815Measurement(SC8815Limits):
    """SC8815 driver with ADC readings and interrupt control."""

    def _read_pair(self, high: Register, low: Register) -> tuple[int, int]:
        return self.read_register(high), self.read_register(low)

    def read_vbus_voltage(self, vbus_ratio: int) -> int:
        """Read VBUS in millivolts (ratio 0: 12.5x, 1: 5x)."""
        if vbus_ratio not in _VOLTAGE_RATIO_MULTIPLIERS:
            raise InvalidParameterError()
        high, low = self._read_pair(Register.VBUS_FB_VALUE, Register.VBUS_FB_VALUE2)
        fb_value = (high << 2) | _low_bits(low)
        multiplier = _VOLTAGE_RATIO_MULTIPLIERS[vbus_ratio]
        voltage = _f32(_f32(float(4 * fb_value + 1) * multiplier) * 2.0)
        return _to_u16(voltage)

    def read_vbat_voltage(self, vbat_mon_ratio: int) -> int:
        """Read VBAT in millivolts (ratio 0: 12.5x, 1: 5x)."""
        if vbat_mon_ratio not in _VOLTAGE_RATIO_MULTIPLIERS:
            raise InvalidParameterError()
        high, low = self._read_pair(Register.VBAT_FB_VALUE, Register.VBAT_FB_VALUE2)
        adc_value = 4 * high + _low_bits(low) + 1
        multiplier = _VOLTAGE_RATIO_MULTIPLIERS[vbat_mon_ratio]
        voltage = _f32(_f32(float(adc_value) * multiplier) * 2.0)
        return _to_u16(voltage)

    def _read_current(
        self, high_reg: Register, low_reg: Register, multiplier: int, rs_mohm: int
    ) -> int:
        high, low = self._read_pair(high_reg, low_reg)
        numerator = (4 * high + _low_bits(low) + 1) * 2
        current_a = _f32(float(numerator) / 1200.0)
        current_a = _f32(current_a * float(multiplier))
        current_a = _f32(current_a * _f32(10.0 / float(rs_mohm)))
        return _to_u16(_f32(current_a * 1000.0))

    def read_ibus_current(self, ibus_ratio: int, rs1_mohm: int) -> int:
        """Read IBUS in milliamps (ratio 1: 6x, 2: 3x)."""
        if ibus_ratio not in _IBUS_RATIO_MULTIPLIERS or rs1_mohm <= 0:
            raise InvalidParameterError()
        return self._read_current(
            Register.IBUS_VALUE,
            Register.IBUS_VALUE2,
            _IBUS_RATIO_MULTIPLIERS[ibus_ratio],
            rs1_mohm,
        )

    def read_ibat_current(self, ibat_ratio: int, rs2_mohm: int) -> int:
        """Read IBAT in milliamps (ratio 0: 6x, 1: 12x)."""
        if ibat_ratio not in _IBAT_RATIO_MULTIPLIERS or rs2_mohm <= 0:
            raise InvalidParameterError()
        return self._read_current(
            Register.IBAT_VALUE,
            Register.IBAT_VALUE2,
            _IBAT_RATIO_MULTIPLIERS[ibat_ratio],
            rs2_mohm,
        )

    def read_adin_voltage(self) -> int:
        """Read the ADIN pin voltage in millivolts (at most 2048 mV)."""
        high, low = self._read_pair(Register.ADIN_VALUE, Register.ADIN_VALUE2)
        return (4 * high + _low_bits(low) + 1) * 2

    def read_all_adc_values(
        self,
        vbus_ratio: int,
        vbat_mon_ratio: int,
        ibus_ratio: int,
        ibat_ratio: int,
        rs1_mohm: int,
        rs2_mohm: int,
    ) -> tuple[int, int, int, int, int]:
        """Read (VBUS mV, VBAT mV, IBUS mA, IBAT mA, ADIN mV) in that order."""
        vbus_mv = self.read_vbus_voltage(vbus_ratio)
        vbat_mv = self.read_vbat_voltage(vbat_mon_ratio)
        ibus_ma = self.read_ibus_current(ibus_ratio, rs1_mohm)
        ibat_ma = self.read_ibat_current(ibat_ratio, rs2_mohm)
        adin_mv = self.read_adin_voltage()
        return vbus_mv, vbat_mv, ibus_ma, ibat_ma, adin_mv

    def set_interrupt_mask(self, mask_flags: MaskFlags) -> None:
        """Write the interrupt mask; reserved bit 0 is always kept set."""
        value = int(mask_flags) | int(MaskFlags.RESERVED_0)
        self.write_register(Register.MASK, value)

    def get_interrupt_mask(self) -> MaskFlags:
        """Read the interrupt mask (a set bit disables the interrupt)."""
        return truncate(MaskFlags, self.read_register(Register.MASK))

    def enable_interrupts(self, interrupts: MaskFlags) -> None:
        """Unmask the given interrupts."""
        mask = int(self.get_interrupt_mask()) & ~int(interrupts) & 0xFF
        self.set_interrupt_mask(MaskFlags(mask))

    def disable_interrupts(self, interrupts: MaskFlags) -> None:
        """Mask the given interrupts."""
        mask = int(self.get_interrupt_mask()) | int(interrupts)
        self.set_interrupt_mask(MaskFlags(mask))

    def has_pending_interrupts(self) -> bool:
        """Whether any interrupt-related status bit is set."""
        return bool(int(self.get_status_flags()) & int(_INTERRUPT_STATUS))

    def clear_interrupts(self) -> StatusFlags:
        """Read the status register, which clears INDET, and return what was set."""
        return self.get_status_flags()

    def enable_all_interrupts(self) -> None:
        """Unmask every interrupt, keeping the reserved bits set."""
        self.set_interrupt_mask(MaskFlags.RESERVED_0 | MaskFlags.RESERVED_7)

    def disable_all_interrupts(self) -> None:
        """Mask every interrupt."""
        self.set_interrupt_mask(MaskFlags(0xFF))

    def _interrupt_enabled(self, flag: MaskFlags) -> bool:
        return not int(self.get_interrupt_mask()) & int(flag)

    def is_ac_ok_interrupt_enabled(self) -> bool:
        """Whether the AC adapter insertion/removal interrupt is enabled."""
        return self._interrupt_enabled(MaskFlags.AC_OK_MASK)

    def is_indet_interrupt_enabled(self) -> bool:
        """Whether the USB load detection interrupt is enabled."""
        return self._interrupt_enabled(MaskFlags.INDET_MASK)

    def is_otp_interrupt_enabled(self) -> bool:
        """Whether the over-temperature interrupt is enabled."""
        return self._interrupt_enabled(MaskFlags.OTP_MASK)