"""Configuration, status and measurement types of the SC8815."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

__all__ = [
    "OperatingMode",
    "SwitchingFrequency",
    "DeadTime",
    "PowerState",
    "ChargingState",
    "BatteryStatus",
    "InputSourceStatus",
    "ThermalStatus",
    "SC8815Status",
    "AdcMeasurements",
    "DeviceStatus",
    "CellCount",
    "IrCompensation",
    "BatteryConfiguration",
    "IbusRatio",
    "IbatRatio",
    "CurrentLimitConfiguration",
    "VinregRatio",
    "PowerConfiguration",
    "DeviceConfiguration",
    "DeviceInfo",
    "InterruptConfig",
]


class OperatingMode(enum.IntEnum):
    """Operating mode of the device."""

    CHARGING = 0
    OTG = 1
    DISCHARGING = 1


class SwitchingFrequency(enum.IntEnum):
    """Switching frequency setting."""

    FREQ_150KHZ = 0
    FREQ_300KHZ = 1
    FREQ_450KHZ = 3

    @classmethod
    def from_raw(cls, value: int) -> SwitchingFrequency:
        """Decode a register value; unknown values map to 300 kHz."""
        try:
            return cls(value)
        except ValueError:
            return cls.FREQ_300KHZ


class DeadTime(enum.IntEnum):
    """Dead time setting."""

    NS20 = 0
    NS40 = 1
    NS60 = 2
    NS80 = 3

    @classmethod
    def from_raw(cls, value: int) -> DeadTime:
        """Decode a register value; unknown values map to 20 ns."""
        try:
            return cls(value)
        except ValueError:
            return cls.NS20


class PowerState(enum.Enum):
    """Power state of the device."""

    OFF = enum.auto()
    ON = enum.auto()


class ChargingState(enum.Enum):
    """Charging state of the device."""

    NOT_CHARGING = enum.auto()
    PRE_CHARGING = enum.auto()
    CONSTANT_CURRENT = enum.auto()
    CONSTANT_VOLTAGE = enum.auto()
    COMPLETE = enum.auto()
    FAULT = enum.auto()
    DISCHARGING = enum.auto()
    CHARGING = enum.auto()


class BatteryStatus(enum.Enum):
    """Battery connection status."""

    NOT_CONNECTED = enum.auto()
    CONNECTED = enum.auto()
    FAULT = enum.auto()


class InputSourceStatus(enum.Enum):
    """Input source status."""

    NOT_CONNECTED = enum.auto()
    CONNECTED = enum.auto()
    FAULT = enum.auto()


class ThermalStatus(enum.Enum):
    """Thermal status of the device."""

    NORMAL = enum.auto()
    WARNING = enum.auto()
    SHUTDOWN = enum.auto()


@dataclass
class SC8815Status:
    """Decoded contents of the status register."""

    eoc: bool = False
    otp_fault: bool = False
    vbus_short_fault: bool = False
    usb_load_detected: bool = False
    ac_adapter_connected: bool = False


@dataclass
class AdcMeasurements:
    """ADC readings in millivolts and milliamps."""

    vbus_mv: int = 0
    vbat_mv: int = 0
    ibus_ma: int = 0
    ibat_ma: int = 0
    adin_mv: int = 0


@dataclass
class DeviceStatus:
    """Overall status of the device."""

    power: PowerState = PowerState.OFF
    charging: ChargingState = ChargingState.NOT_CHARGING
    battery: BatteryStatus = BatteryStatus.NOT_CONNECTED
    input_source: InputSourceStatus = InputSourceStatus.NOT_CONNECTED
    thermal: ThermalStatus = ThermalStatus.NORMAL
    power_good: bool = False
    overcurrent: bool = False
    overvoltage: bool = False


class CellCount(enum.IntEnum):
    """Battery cell count."""

    CELLS_1S = 1
    CELLS_2S = 2
    CELLS_3S = 3
    CELLS_4S = 4

    @classmethod
    def from_raw(cls, value: int) -> CellCount:
        """Decode a cell count; unknown values map to 1S."""
        try:
            return cls(value)
        except ValueError:
            return cls.CELLS_1S


class IrCompensation(enum.IntEnum):
    """IR compensation in milliohms."""

    NONE = 0
    MOHM20 = 20
    MOHM40 = 40
    MOHM80 = 80

    @classmethod
    def from_raw(cls, value: int) -> IrCompensation:
        """Decode a compensation value; unknown values map to none."""
        try:
            return cls(value)
        except ValueError:
            return cls.NONE


@dataclass
class BatteryConfiguration:
    """Battery settings."""

    cell_count: CellCount = CellCount.CELLS_1S
    voltage_per_cell_mv: int = 4200
    use_internal_setting: bool = True
    ir_compensation_mohm: IrCompensation = IrCompensation.NONE


class IbusRatio(enum.IntEnum):
    """IBUS ratio setting."""

    RATIO_6X = 1
    RATIO_3X = 2

    @classmethod
    def from_raw(cls, value: int) -> IbusRatio:
        """Decode a register value; unknown values map to 3x."""
        try:
            return cls(value)
        except ValueError:
            return cls.RATIO_3X


class IbatRatio(enum.IntEnum):
    """IBAT ratio setting."""

    RATIO_6X = 0
    RATIO_12X = 1

    @classmethod
    def from_raw(cls, value: int) -> IbatRatio:
        """Decode a register value; unknown values map to 12x."""
        try:
            return cls(value)
        except ValueError:
            return cls.RATIO_12X


@dataclass
class CurrentLimitConfiguration:
    """Current limits, ratios and sense resistor values."""

    ibus_limit_ma: int = 3000
    ibus_ratio: IbusRatio = IbusRatio.RATIO_3X
    ibat_limit_ma: int = 3000
    ibat_ratio: IbatRatio = IbatRatio.RATIO_12X
    rs1_mohm: int = 10
    rs2_mohm: int = 10


class VinregRatio(enum.IntEnum):
    """VINREG ratio setting."""

    RATIO_100X = 0
    RATIO_40X = 1

    @classmethod
    def from_raw(cls, value: int) -> VinregRatio:
        """Decode a register value; unknown values map to 100x."""
        try:
            return cls(value)
        except ValueError:
            return cls.RATIO_100X


@dataclass
class PowerConfiguration:
    """Power stage settings."""

    operating_mode: OperatingMode = OperatingMode.CHARGING
    switching_frequency: SwitchingFrequency = SwitchingFrequency.FREQ_300KHZ
    dead_time: DeadTime = DeadTime.NS20
    frequency_dithering: bool = False
    pfm_mode: bool = False
    vinreg_voltage_mv: int = 4500
    vinreg_ratio: VinregRatio = VinregRatio.RATIO_100X


@dataclass
class DeviceConfiguration:
    """Complete device configuration."""

    battery: BatteryConfiguration = field(default_factory=BatteryConfiguration)
    current_limits: CurrentLimitConfiguration = field(
        default_factory=CurrentLimitConfiguration
    )
    power: PowerConfiguration = field(default_factory=PowerConfiguration)
    trickle_charging: bool = True
    charging_termination: bool = True
    use_ibus_for_charging: bool = True


@dataclass(frozen=True)
class DeviceInfo:
    """Device identification."""

    device_id: int
    vendor_id: int
    product_id: int
    revision_id: int


@dataclass
class InterruptConfig:
    """Which interrupt sources are enabled."""

    power_good_change: bool = False
    charging_state_change: bool = False
    battery_status_change: bool = False
    input_source_change: bool = False
    thermal_status_change: bool = False
    overcurrent_protection: bool = False
    overvoltage_protection: bool = False