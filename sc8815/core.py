"""Register access, status queries and control-bit settings of the SC8815."""

from __future__ import annotations

from typing import Callable, Protocol, TypeVar, runtime_checkable

from sc8815.errors import I2CError, InvalidParameterError, SC8815Error
from sc8815.registers import (
    Ctrl0Flags,
    Ctrl1Flags,
    Ctrl2Flags,
    Ctrl3Flags,
    MaskFlags,
    Register,
    StatusFlags,
    truncate,
)

__all__ = ["I2CBus", "SC8815Base"]

_F = TypeVar("_F", Ctrl0Flags, Ctrl1Flags, Ctrl2Flags, Ctrl3Flags)

_FREQ_BITS = 0x0C
_DEAD_TIME_BITS = 0x03


@runtime_checkable
class I2CBus(Protocol):
    """An I2C bus master the driver talks through."""

    def write_read(self, address: int, data: bytes, read_length: int) -> bytes:
        """Write ``data`` then read ``read_length`` bytes from ``address``."""
        ...

    def write(self, address: int, data: bytes) -> None:
        """Write ``data`` to ``address``."""
        ...


class SC8815Base:
    """Low-level SC8815 driver: register I/O, status bits and control flags."""

    def __init__(self, i2c: I2CBus, address: int) -> None:
        self._i2c = i2c
        self.address = address

    def release(self) -> I2CBus:
        """Return the I2C bus used by this driver."""
        return self._i2c

    def read_register(self, register: Register) -> int:
        """Read one register and return its value."""
        try:
            data = self._i2c.write_read(self.address, bytes([int(register)]), 1)
        except SC8815Error:
            raise
        except Exception as exc:
            raise I2CError(exc) from exc
        return data[0]

    def write_register(self, register: Register, value: int) -> None:
        """Write one byte to a register."""
        try:
            self._i2c.write(self.address, bytes([int(register), value & 0xFF]))
        except SC8815Error:
            raise
        except Exception as exc:
            raise I2CError(exc) from exc

    def _set_flag(
        self, register: Register, flag_type: type[_F], flag: _F, enable: bool
    ) -> None:
        flags = truncate(flag_type, self.read_register(register))
        flags = flags | flag if enable else flags & ~flag
        self.write_register(register, int(flags))

    def init(self) -> None:
        """Verify communication and set the bits the datasheet requires after power-up."""
        self.read_register(Register.STATUS)

        ctrl2 = self.read_register(Register.CTRL2_SET) | Ctrl2Flags.FACTORY
        self.write_register(Register.CTRL2_SET, int(ctrl2))

        mask = self.read_register(Register.MASK) | MaskFlags.RESERVED_0
        self.write_register(Register.MASK, int(mask))

    def reset(self) -> None:
        """Clear all control registers and initialise again."""
        for register in (
            Register.CTRL0_SET,
            Register.CTRL1_SET,
            Register.CTRL2_SET,
            Register.CTRL3_SET,
        ):
            self.write_register(register, 0x00)
        self.init()

    def get_status_flags(self) -> StatusFlags:
        """Read the status register."""
        return truncate(StatusFlags, self.read_register(Register.STATUS))

    def _status_has(self, flag: StatusFlags) -> bool:
        return flag in self.get_status_flags()

    def is_ac_adapter_connected(self) -> bool:
        """Whether an AC adapter is inserted."""
        return self._status_has(StatusFlags.AC_OK)

    def is_usb_load_detected(self) -> bool:
        """Whether a USB-A load insertion was detected."""
        return self._status_has(StatusFlags.INDET)

    def is_charging_complete(self) -> bool:
        """Whether end-of-charge conditions are satisfied."""
        return self._status_has(StatusFlags.EOC)

    def is_otp_fault(self) -> bool:
        """Whether an over-temperature fault occurred."""
        return self._status_has(StatusFlags.OTP)

    def is_vbus_short_fault(self) -> bool:
        """Whether a VBUS short circuit fault occurred in discharging mode."""
        return self._status_has(StatusFlags.VBUS_SHORT)

    def set_otg_mode(self, enable_otg: bool) -> None:
        """Select OTG (discharging) mode or charging mode."""
        self._set_flag(Register.CTRL0_SET, Ctrl0Flags, Ctrl0Flags.EN_OTG, enable_otg)

    def is_otg_mode(self) -> bool:
        """Whether the device is in OTG mode."""
        flags = truncate(Ctrl0Flags, self.read_register(Register.CTRL0_SET))
        return Ctrl0Flags.EN_OTG in flags

    def set_trickle_charging(self, enable: bool) -> None:
        """Enable or disable the trickle charging phase."""
        self._set_flag(
            Register.CTRL1_SET, Ctrl1Flags, Ctrl1Flags.DIS_TRICKLE, not enable
        )

    def set_charging_termination(self, enable: bool) -> None:
        """Enable or disable automatic charge termination."""
        self._set_flag(Register.CTRL1_SET, Ctrl1Flags, Ctrl1Flags.DIS_TERM, not enable)

    def set_switching_frequency(self, freq_setting: int) -> None:
        """Set the switching frequency (0: 150 kHz, 1: 300 kHz, 3: 450 kHz)."""
        if freq_setting not in (0, 1, 3):
            raise InvalidParameterError()
        ctrl0 = self.read_register(Register.CTRL0_SET)
        ctrl0 = (ctrl0 & ~_FREQ_BITS & 0xFF) | ((freq_setting & 0x03) << 2)
        self.write_register(Register.CTRL0_SET, ctrl0)

    def set_dead_time(self, dt_setting: int) -> None:
        """Set the dead time (0: 20 ns, 1: 40 ns, 2: 60 ns, 3: 80 ns)."""
        if not 0 <= dt_setting <= 3:
            raise InvalidParameterError()
        ctrl0 = self.read_register(Register.CTRL0_SET)
        ctrl0 = (ctrl0 & ~_DEAD_TIME_BITS & 0xFF) | dt_setting
        self.write_register(Register.CTRL0_SET, ctrl0)

    def set_frequency_dithering(self, enable: bool) -> None:
        """Enable or disable switching frequency dithering."""
        self._set_flag(Register.CTRL2_SET, Ctrl2Flags, Ctrl2Flags.EN_DITHER, enable)

    def set_pfm_mode(self, enable: bool) -> None:
        """Enable or disable PFM mode under light load (discharging mode only)."""
        self._set_flag(Register.CTRL3_SET, Ctrl3Flags, Ctrl3Flags.EN_PFM, enable)

    def set_short_foldback_disable(self, disable: bool) -> None:
        """Disable or re-enable current foldback when VBUS is shorted."""
        self._set_flag(
            Register.CTRL3_SET, Ctrl3Flags, Ctrl3Flags.DIS_SHORT_FOLDBACK, disable
        )

    def clear_vbus_short_fault_with_delay(self, delay_fn: Callable[[], object]) -> None:
        """Clear a VBUS short fault: enable foldback, wait via ``delay_fn``, disable it."""
        self.set_short_foldback_disable(False)
        delay_fn()
        self.set_short_foldback_disable(True)

    def clear_vbus_short_fault_step(self, enable_foldback: bool) -> None:
        """One step of clearing a VBUS short fault; the caller waits between steps."""
        self.set_short_foldback_disable(not enable_foldback)

    def set_pgate_control(self, enable: bool) -> None:
        """Drive PGATE low (PMOS on) or high (PMOS off)."""
        self._set_flag(Register.CTRL3_SET, Ctrl3Flags, Ctrl3Flags.EN_PGATE, enable)

    def set_gpo_control(self, enable: bool) -> None:
        """Drive GPO low or leave it open drain."""
        self._set_flag(Register.CTRL3_SET, Ctrl3Flags, Ctrl3Flags.GPO_CTRL, enable)

    def set_adc_conversion(self, start: bool) -> None:
        """Start or stop ADC conversion."""
        self._set_flag(Register.CTRL3_SET, Ctrl3Flags, Ctrl3Flags.AD_START, start)

    def set_trickle_threshold(self, use_60_percent: bool) -> None:
        """Use 60 % (True) or 70 % (False) of the VBAT target as trickle threshold."""
        self._set_flag(
            Register.CTRL1_SET, Ctrl1Flags, Ctrl1Flags.TRICKLE_SET, use_60_percent
        )

    def set_eoc_threshold(self, use_tenth: bool) -> None:
        """Use 1/10 (True) or 1/25 (False) of charging current as EOC threshold."""
        self._set_flag(Register.CTRL3_SET, Ctrl3Flags, Ctrl3Flags.EOC_SET, use_tenth)

    def set_charging_current_selection(self, use_ibat: bool) -> None:
        """Use IBAT (True) or IBUS (False) as the charging current reference."""
        self._set_flag(Register.CTRL1_SET, Ctrl1Flags, Ctrl1Flags.ICHAR_SEL, use_ibat)

    def set_loop_response(self, improve_response: bool) -> None:
        """Select improved or normal loop response."""
        self._set_flag(
            Register.CTRL3_SET, Ctrl3Flags, Ctrl3Flags.LOOP_SET, improve_response
        )

    def set_ilim_bandwidth(self, use_low_bandwidth: bool) -> None:
        """Select 1.25 kHz (True) or 5 kHz (False) ILIM loop bandwidth."""
        self._set_flag(
            Register.CTRL3_SET, Ctrl3Flags, Ctrl3Flags.ILIM_BW_SEL, use_low_bandwidth
        )

    def set_short_foldback(self, disable_foldback: bool) -> None:
        """Disable or enable current foldback for VBUS short circuit protection."""
        self._set_flag(
            Register.CTRL3_SET,
            Ctrl3Flags,
            Ctrl3Flags.DIS_SHORT_FOLDBACK,
            disable_foldback,
        )

    def set_ovp_protection(self, disable_ovp: bool) -> None:
        """Disable or enable OVP protection in discharging mode."""
        self._set_flag(Register.CTRL1_SET, Ctrl1Flags, Ctrl1Flags.DIS_OVP, disable_ovp)