"""High-level SC8815 driver: device configuration and combined status queries."""

from __future__ import annotations

from sc8815.measurement import SC8815Measurement
from sc8815.models import (
    AdcMeasurements,
    BatteryStatus,
    ChargingState,
    CurrentLimitConfiguration,
    DeviceConfiguration,
    InputSourceStatus,
    OperatingMode,
    SC8815Status,
    ThermalStatus,
)
from sc8815.registers import (
    BatteryStatusFlags,
    Ctrl2Flags,
    InputSourceStatusFlags,
    Register,
    StatusFlags,
    ThermalStatusFlags,
    truncate,
)

__all__ = ["SC8815"]

_DEFAULT_VBUS_RATIO = 0
_DEFAULT_VBAT_MON_RATIO = 0
_DEFAULT_IBUS_RATIO = 2
_DEFAULT_IBAT_RATIO = 1
_DEFAULT_RS_MOHM = 10

_BATTERY_FAULTS = (
    BatteryStatusFlags.BATTERY_LOW_VOLTAGE
    | BatteryStatusFlags.BATTERY_OVERVOLTAGE
    | BatteryStatusFlags.BATTERY_OVERCURRENT
    | BatteryStatusFlags.BATTERY_TEMP_FAULT
)
_INPUT_FAULTS = (
    InputSourceStatusFlags.INPUT_UNDERVOLTAGE
    | InputSourceStatusFlags.INPUT_OVERVOLTAGE
    | InputSourceStatusFlags.INPUT_OVERCURRENT
)
_CRITICAL_FAULTS = StatusFlags.OTP | StatusFlags.VBUS_SHORT


class SC8815(SC8815Measurement):
    """SC8815 power management IC driver."""

    def configure_device(self, config: DeviceConfiguration) -> None:
        """Apply a complete device configuration."""
        ctrl2 = truncate(Ctrl2Flags, self.read_register(Register.CTRL2_SET))
        self.write_register(Register.CTRL2_SET, int(ctrl2 | Ctrl2Flags.FACTORY))

        battery = config.battery
        self.configure_battery_voltage(
            int(battery.cell_count),
            battery.voltage_per_cell_mv,
            battery.use_internal_setting,
            int(battery.ir_compensation_mohm),
        )

        limits = config.current_limits
        self.set_ibus_limit(limits.ibus_limit_ma, int(limits.ibus_ratio), limits.rs1_mohm)
        self.set_ibat_limit(limits.ibat_limit_ma, int(limits.ibat_ratio), limits.rs2_mohm)

        power = config.power
        self.set_otg_mode(power.operating_mode == OperatingMode.OTG)
        self.set_switching_frequency(int(power.switching_frequency))
        self.set_dead_time(int(power.dead_time))
        self.set_frequency_dithering(power.frequency_dithering)
        self.set_pfm_mode(power.pfm_mode)
        self.set_vinreg_voltage(power.vinreg_voltage_mv, int(power.vinreg_ratio))

        self.set_trickle_charging(config.trickle_charging)
        self.set_charging_termination(config.charging_termination)
        self.set_charging_current_selection(not config.use_ibus_for_charging)

    def get_device_status(self) -> SC8815Status:
        """Decode the status register."""
        flags = self.get_status_flags()
        return SC8815Status(
            eoc=StatusFlags.EOC in flags,
            otp_fault=StatusFlags.OTP in flags,
            vbus_short_fault=StatusFlags.VBUS_SHORT in flags,
            usb_load_detected=StatusFlags.INDET in flags,
            ac_adapter_connected=StatusFlags.AC_OK in flags,
        )

    def get_adc_measurements(self) -> AdcMeasurements:
        """Read all ADC values with the default ratios and 10 mOhm sense resistors."""
        return AdcMeasurements(
            *self.read_all_adc_values(
                _DEFAULT_VBUS_RATIO,
                _DEFAULT_VBAT_MON_RATIO,
                _DEFAULT_IBUS_RATIO,
                _DEFAULT_IBAT_RATIO,
                _DEFAULT_RS_MOHM,
                _DEFAULT_RS_MOHM,
            )
        )

    def get_adc_measurements_with_config(
        self, current_config: CurrentLimitConfiguration
    ) -> AdcMeasurements:
        """Read all ADC values using the ratios and resistors of ``current_config``."""
        return AdcMeasurements(
            *self.read_all_adc_values(
                _DEFAULT_VBUS_RATIO,
                _DEFAULT_VBAT_MON_RATIO,
                int(current_config.ibus_ratio),
                int(current_config.ibat_ratio),
                current_config.rs1_mohm,
                current_config.rs2_mohm,
            )
        )

    def get_battery_status(self) -> BatteryStatus:
        """Read the battery status register."""
        flags = truncate(BatteryStatusFlags, self.read_register(Register.BATTERY_STATUS))
        if flags & _BATTERY_FAULTS:
            return BatteryStatus.FAULT
        if BatteryStatusFlags.BATTERY_PRESENT in flags:
            return BatteryStatus.CONNECTED
        return BatteryStatus.NOT_CONNECTED

    def get_input_source_status(self) -> InputSourceStatus:
        """Read the input source status register."""
        flags = truncate(
            InputSourceStatusFlags, self.read_register(Register.INPUT_SOURCE_STATUS)
        )
        if flags & _INPUT_FAULTS:
            return InputSourceStatus.FAULT
        if InputSourceStatusFlags.INPUT_SOURCE_PRESENT in flags:
            return InputSourceStatus.CONNECTED
        return InputSourceStatus.NOT_CONNECTED

    def get_thermal_status(self) -> ThermalStatus:
        """Read the thermal status register."""
        flags = truncate(ThermalStatusFlags, self.read_register(Register.THERMAL_STATUS))
        if ThermalStatusFlags.THERMAL_SHUTDOWN in flags:
            return ThermalStatus.SHUTDOWN
        if ThermalStatusFlags.TEMP_WARNING in flags:
            return ThermalStatus.WARNING
        return ThermalStatus.NORMAL

    def is_power_good(self) -> bool:
        """Whether no over-temperature or VBUS short fault is present."""
        return not int(self.get_status_flags()) & int(_CRITICAL_FAULTS)

    def get_charging_state(self) -> ChargingState:
        """Derive the charging state from the status register and OTG mode."""
        flags = self.get_status_flags()
        if self.is_otg_mode():
            return ChargingState.DISCHARGING
        if StatusFlags.EOC in flags:
            return ChargingState.COMPLETE
        if StatusFlags.AC_OK in flags:
            return ChargingState.CHARGING
        return ChargingState.NOT_CHARGING