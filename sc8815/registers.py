"""Register map, bit-field flags and device constants of the SC8815."""

from __future__ import annotations

import enum
from functools import reduce
from operator import or_
from typing import TypeVar

__all__ = [
    "Register",
    "StatusFlags",
    "MaskFlags",
    "Ctrl0Flags",
    "Ctrl1Flags",
    "Ctrl2Flags",
    "Ctrl3Flags",
    "RatioFlags",
    "VbatSetFlags",
    "BatteryStatusFlags",
    "InputSourceStatusFlags",
    "ThermalStatusFlags",
    "truncate",
]


class Register(enum.IntEnum):
    """Register addresses of the SC8815."""

    VBAT_SET = 0x00
    VBUSREF_I_SET = 0x01
    VBUSREF_I_SET2 = 0x02
    VBUSREF_E_SET = 0x03
    VBUSREF_E_SET2 = 0x04
    IBUS_LIM_SET = 0x05
    IBAT_LIM_SET = 0x06
    VINREG_SET = 0x07
    RATIO = 0x08
    CTRL0_SET = 0x09
    CTRL1_SET = 0x0A
    CTRL2_SET = 0x0B
    CTRL3_SET = 0x0C
    VBUS_FB_VALUE = 0x0D
    VBUS_FB_VALUE2 = 0x0E
    VBAT_FB_VALUE = 0x0F
    VBAT_FB_VALUE2 = 0x10
    IBUS_VALUE = 0x11
    IBUS_VALUE2 = 0x12
    IBAT_VALUE = 0x13
    IBAT_VALUE2 = 0x14
    ADIN_VALUE = 0x15
    ADIN_VALUE2 = 0x16
    STATUS = 0x17
    BATTERY_STATUS = 0x18
    MASK = 0x19
    INPUT_SOURCE_STATUS = 0x1A
    THERMAL_STATUS = 0x1B


class StatusFlags(enum.IntFlag):
    """Status register (0x17) bits."""

    RESERVED_0 = 0x01
    EOC = 0x02
    OTP = 0x04
    VBUS_SHORT = 0x08
    RESERVED_4 = 0x10
    INDET = 0x20
    AC_OK = 0x40
    RESERVED_7 = 0x80


class MaskFlags(enum.IntFlag):
    """Interrupt mask register (0x19) bits; a set bit disables the interrupt."""

    RESERVED_0 = 0x01
    EOC_MASK = 0x02
    OTP_MASK = 0x04
    VBUS_SHORT_MASK = 0x08
    RESERVED_4 = 0x10
    INDET_MASK = 0x20
    AC_OK_MASK = 0x40
    RESERVED_7 = 0x80


class Ctrl0Flags(enum.IntFlag):
    """CTRL0_SET register (0x09) bits."""

    DT_SET_MASK = 0x03
    FREQ_SET_MASK = 0x0C
    VINREG_RATIO = 0x10
    RESERVED_5 = 0x20
    RESERVED_6 = 0x40
    EN_OTG = 0x80


class Ctrl1Flags(enum.IntFlag):
    """CTRL1_SET register (0x0A) bits."""

    RESERVED_0 = 0x01
    RESERVED_1 = 0x02
    DIS_OVP = 0x04
    TRICKLE_SET = 0x08
    FB_SEL = 0x10
    DIS_TERM = 0x20
    DIS_TRICKLE = 0x40
    ICHAR_SEL = 0x80


class Ctrl2Flags(enum.IntFlag):
    """CTRL2_SET register (0x0B) bits."""

    SLEW_SET_MASK = 0x03
    EN_DITHER = 0x04
    FACTORY = 0x08
    RESERVED_4_7 = 0xF0


class Ctrl3Flags(enum.IntFlag):
    """CTRL3_SET register (0x0C) bits."""

    EN_PFM = 0x01
    EOC_SET = 0x02
    DIS_SHORT_FOLDBACK = 0x04
    LOOP_SET = 0x08
    ILIM_BW_SEL = 0x10
    AD_START = 0x20
    GPO_CTRL = 0x40
    EN_PGATE = 0x80


class RatioFlags(enum.IntFlag):
    """RATIO register (0x08) bits."""

    VBUS_RATIO = 0x01
    VBAT_MON_RATIO = 0x02
    IBUS_RATIO_MASK = 0x0C
    IBAT_RATIO = 0x10
    RESERVED_5 = 0x20
    RESERVED_6_7 = 0xC0


class VbatSetFlags(enum.IntFlag):
    """VBAT_SET register (0x00) bit fields."""

    VCELL_SET_MASK = 0x07
    CSEL_MASK = 0x18
    VBAT_SEL = 0x20
    IRCOMP_MASK = 0xC0


class BatteryStatusFlags(enum.IntFlag):
    """Battery status register bits."""

    BATTERY_PRESENT = 0x01
    BATTERY_LOW_VOLTAGE = 0x02
    BATTERY_OVERVOLTAGE = 0x04
    BATTERY_OVERCURRENT = 0x08
    BATTERY_TEMP_FAULT = 0x10
    RESERVED = 0xE0


class InputSourceStatusFlags(enum.IntFlag):
    """Input source status register bits."""

    INPUT_SOURCE_PRESENT = 0x01
    INPUT_UNDERVOLTAGE = 0x02
    INPUT_OVERVOLTAGE = 0x04
    INPUT_OVERCURRENT = 0x08
    RESERVED = 0xF0


class ThermalStatusFlags(enum.IntFlag):
    """Thermal status register bits."""

    TEMP_WARNING = 0x01
    THERMAL_SHUTDOWN = 0x02
    RESERVED = 0xFC


_F = TypeVar("_F", bound=enum.IntFlag)


def truncate(flag_type: type[_F], value: int) -> _F:
    """Build a flag value from ``value``, dropping bits the flag type does not define."""
    defined = reduce(or_, (int(member) for member in flag_type.__members__.values()), 0)
    return flag_type(value & defined)


# Default 7-bit I2C address and its 8-bit write/read forms.
DEFAULT_ADDRESS = 0x74
I2C_WRITE_ADDRESS = 0xE8
I2C_READ_ADDRESS = 0xE9

DEFAULT_TIMEOUT_MS = 1000

# Battery voltage per cell settings.
VCELL_4_1V = 0b000
VCELL_4_2V = 0b001
VCELL_4_25V = 0b010
VCELL_4_3V = 0b011
VCELL_4_35V = 0b100
VCELL_4_4V = 0b101
VCELL_4_45V = 0b110

# Battery cell selection.
CSEL_1S = 0b00
CSEL_2S = 0b01
CSEL_3S = 0b10
CSEL_4S = 0b11

# Switching frequency settings.
FREQ_150KHZ = 0b00
FREQ_300KHZ = 0b01
FREQ_450KHZ = 0b11

# Dead time settings.
DT_20NS = 0b00
DT_40NS = 0b01
DT_60NS = 0b10
DT_80NS = 0b11

IBUS_RATIO_6X = 0b01
IBUS_RATIO_3X = 0b10

IBAT_RATIO_6X = 0
IBAT_RATIO_12X = 1

VBUS_RATIO_12_5X = 0
VBUS_RATIO_5X = 1

VBAT_MON_RATIO_12_5X = 0
VBAT_MON_RATIO_5X = 1

VINREG_RATIO_100X = 0
VINREG_RATIO_40X = 1

# Slew rate settings for VBUS dynamic change.
SLEW_1MV_US = 0b00
SLEW_2MV_US = 0b01
SLEW_4MV_US = 0b10

ADC_RESOLUTION_MV = 2
ADC_MAX_VOLTAGE_MV = 2048

TYPICAL_RS1_MOHM = 10
TYPICAL_RS2_MOHM = 10

VBAT_RANGE_MIN_V = 2.7
VBAT_RANGE_MAX_V = 36.0
VBUS_RANGE_MIN_V = 2.7
VBUS_RANGE_MAX_V = 36.0