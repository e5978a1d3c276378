"""Exceptions raised by the SC8815 driver."""

from __future__ import annotations

from typing import Any

__all__ = [
    "SC8815Error",
    "I2CError",
    "InvalidRegisterOrParameterError",
    "InvalidParameterError",
    "DeviceNotRespondingError",
    "OperationTimeoutError",
    "PowerConfigError",
    "InitializationFailedError",
    "InvalidDeviceStateError",
    "OvercurrentDetectedError",
    "OvervoltageDetectedError",
    "ThermalProtectionError",
    "BatteryError",
    "ChargingError",
]


class SC8815Error(Exception):
    """Base class for every error the driver raises."""

    default_message = "SC8815 error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class I2CError(SC8815Error):
    """An underlying I2C bus operation failed."""

    def __init__(self, error: Any) -> None:
        self.error = error
        super().__init__(f"I2C communication error: {error!r}")


class InvalidRegisterOrParameterError(SC8815Error):
    """A reserved register address or an invalid parameter was used."""

    default_message = "Invalid register address or parameter"


class InvalidParameterError(SC8815Error, ValueError):
    """A parameter value is out of range or not supported."""

    default_message = "Invalid parameter value"


class DeviceNotRespondingError(SC8815Error):
    """The device did not respond or reported an unexpected ID."""

    default_message = "Device not responding or device ID mismatch"


class OperationTimeoutError(SC8815Error, TimeoutError):
    """An operation timed out."""

    default_message = "Operation timeout"


class PowerConfigError(SC8815Error):
    """The power configuration could not be applied."""

    default_message = "Power configuration error"


class InitializationFailedError(SC8815Error):
    """Device initialisation failed."""

    default_message = "Initialization failed"


class InvalidDeviceStateError(SC8815Error):
    """The device is in an unexpected state."""

    default_message = "Device is in an unexpected state"


class OvercurrentDetectedError(SC8815Error):
    """An overcurrent condition was detected."""

    default_message = "Overcurrent condition detected"


class OvervoltageDetectedError(SC8815Error):
    """An overvoltage condition was detected."""

    default_message = "Overvoltage condition detected"


class ThermalProtectionError(SC8815Error):
    """Thermal protection was triggered."""

    default_message = "Thermal protection triggered"


class BatteryError(SC8815Error):
    """A battery related error occurred."""

    default_message = "Battery related error"


class ChargingError(SC8815Error):
    """A charging error occurred."""

    default_message = "Charging error"