# sc8815

A Python driver for the SC8815, a bidirectional buck-boost battery charger and
power delivery IC controlled over I2C.

The driver talks through any bus object that follows the `I2CBus` protocol
from `sc8815.core`:

- `write_read(address, data, read_length)` writes `data` and returns the bytes read;
- `write(address, data)` writes `data`.

Any exception the bus raises is wrapped in `sc8815.errors.I2CError`, with the
original exception kept in its `error` attribute.

## Installation

```
pip install sc8815
```

## Quick start

```python
from sc8815.driver import SC8815
from sc8815.models import CellCount, DeviceConfiguration, OperatingMode
from sc8815.registers import DEFAULT_ADDRESS

bus = MyI2CBus()                     # any object providing write_read() and write()
charger = SC8815(bus, DEFAULT_ADDRESS)
charger.init()                       # reads STATUS, sets the FACTORY bit and mask bit 0

config = DeviceConfiguration()
config.battery.cell_count = CellCount.CELLS_3S
config.current_limits.ibat_limit_ma = 1500
config.power.operating_mode = OperatingMode.CHARGING
charger.configure_device(config)

charger.set_adc_conversion(True)

status = charger.get_device_status()
print(status.ac_adapter_connected, status.eoc)

readings = charger.get_adc_measurements_with_config(config.current_limits)
print(readings.vbus_mv, readings.vbat_mv, readings.ibus_ma, readings.ibat_ma, readings.adin_mv)
```

## Modules

- `sc8815.registers` – the `Register` addresses, the bit-flag types
  (`StatusFlags`, `MaskFlags`, `Ctrl0Flags` … `Ctrl3Flags`, `RatioFlags`,
  `VbatSetFlags`, `BatteryStatusFlags`, `InputSourceStatusFlags`,
  `ThermalStatusFlags`), `truncate(flag_type, value)` which drops undefined
  bits, and device constants such as `DEFAULT_ADDRESS` (0x74).
- `sc8815.models` – enums and dataclasses for configuration, status and
  readings: `DeviceConfiguration` (made of `BatteryConfiguration`,
  `CurrentLimitConfiguration` and `PowerConfiguration`), `SC8815Status`,
  `AdcMeasurements`, `ChargingState`, `BatteryStatus` and others. The
  setting enums have a `from_raw()` class method that maps unknown values to
  the default setting.
- `sc8815.errors` – `SC8815Error` and its subclasses.
- `sc8815.driver` – `SC8815`, the class to use. It builds on
  `sc8815.measurement.SC8815Measurement`, `sc8815.limits.SC8815Limits` and
  `sc8815.core.SC8815Base`, so every method below is available on it.

## What the driver does

- Register access: `read_register`, `write_register`, `init`, `reset`
  (clears CTRL0–CTRL3, then runs `init`), `release` (returns the bus).
- Status: `get_status_flags`, `get_device_status`, `is_ac_adapter_connected`,
  `is_usb_load_detected`, `is_charging_complete`, `is_otp_fault`,
  `is_vbus_short_fault`, `is_power_good`, `get_charging_state`,
  `get_battery_status`, `get_input_source_status`, `get_thermal_status`.
- Control bits: `set_otg_mode`/`is_otg_mode`, `set_trickle_charging`,
  `set_charging_termination`, `set_switching_frequency` (0, 1 or 3),
  `set_dead_time` (0–3), `set_frequency_dithering`, `set_pfm_mode`,
  `set_pgate_control`, `set_gpo_control`, `set_adc_conversion`,
  `set_trickle_threshold`, `set_eoc_threshold`,
  `set_charging_current_selection`, `set_loop_response`,
  `set_ilim_bandwidth`, `set_short_foldback`, `set_short_foldback_disable`,
  `set_ovp_protection`.
- Limits and references: `set_ibus_limit`, `set_ibat_limit`,
  `set_vinreg_voltage`, `set_vbus_internal_voltage`,
  `set_vbus_external_reference` (700–2048 mV), `set_vbus_slew_rate` (0–2),
  `configure_battery_voltage` (1–4 cells; 4100, 4200, 4250, 4300, 4350, 4400
  or 4450 mV per cell; IR compensation 0, 20, 40 or 80 mΩ).
- ADC: `read_vbus_voltage`, `read_vbat_voltage`, `read_ibus_current`,
  `read_ibat_current`, `read_adin_voltage`, `read_all_adc_values`,
  `get_adc_measurements` (default ratios, 10 mΩ sense resistors) and
  `get_adc_measurements_with_config`.
- Interrupts: `set_interrupt_mask` (always keeps reserved bit 0 set),
  `get_interrupt_mask`, `enable_interrupts`, `disable_interrupts`,
  `enable_all_interrupts`, `disable_all_interrupts`,
  `has_pending_interrupts`, `clear_interrupts`,
  `is_ac_ok_interrupt_enabled`, `is_indet_interrupt_enabled`,
  `is_otp_interrupt_enabled`.
- VBUS short-circuit recovery: `clear_vbus_short_fault_with_delay(delay_fn)`
  enables foldback, calls `delay_fn` (which should wait about 10 ms) and
  disables foldback again; `clear_vbus_short_fault_step(enable_foldback)`
  does one step at a time for callers that wait themselves.

```python
import time

if charger.is_vbus_short_fault():
    charger.clear_vbus_short_fault_with_delay(lambda: time.sleep(0.01))
```

## Errors

Every failure is raised as a subclass of `sc8815.errors.SC8815Error`. Bus
failures raise `I2CError`. Out-of-range arguments raise
`InvalidParameterError`, which is also a `ValueError`.

## What it does not do

- It contains no I2C bus implementation; you supply an object with
  `write_read()` and `write()`.
- It is synchronous only; there is no asyncio interface.
- It has no command-line tool.

## Running the tests

```
pip install -e .[test]
pytest
```