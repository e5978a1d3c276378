import pytest

from sc8815.errors import (
    BatteryError,
    ChargingError,
    DeviceNotRespondingError,
    I2CError,
    InitializationFailedError,
    InvalidDeviceStateError,
    InvalidParameterError,
    InvalidRegisterOrParameterError,
    OperationTimeoutError,
    OvercurrentDetectedError,
    OvervoltageDetectedError,
    PowerConfigError,
    SC8815Error,
    ThermalProtectionError,
)


@pytest.mark.parametrize(
    ("error_type", "message"),
    [
        (InvalidRegisterOrParameterError, "Invalid register address or parameter"),
        (InvalidParameterError, "Invalid parameter value"),
        (DeviceNotRespondingError, "Device not responding or device ID mismatch"),
        (OperationTimeoutError, "Operation timeout"),
        (PowerConfigError, "Power configuration error"),
        (InitializationFailedError, "Initialization failed"),
        (InvalidDeviceStateError, "Device is in an unexpected state"),
        (OvercurrentDetectedError, "Overcurrent condition detected"),
        (OvervoltageDetectedError, "Overvoltage condition detected"),
        (ThermalProtectionError, "Thermal protection triggered"),
        (BatteryError, "Battery related error"),
        (ChargingError, "Charging error"),
    ],
)
def test_default_messages(error_type, message):
    with pytest.raises(SC8815Error) as info:
        raise error_type()
    assert str(info.value) == message
    assert type(info.value) is error_type


def test_i2c_error_wraps_bus_error():
    bus_error = OSError(121, "Remote I/O error")
    err = I2CError(bus_error)
    assert err.error is bus_error
    assert str(err) == f"I2C communication error: {bus_error!r}"


def test_i2c_error_caught_as_base():
    err = I2CError("nack")
    assert err.error == "nack"
    assert str(err) == "I2C communication error: 'nack'"
    with pytest.raises(SC8815Error) as info:
        raise err
    assert info.value is err


def test_invalid_parameter_is_value_error():
    err = InvalidParameterError()
    assert str(err) == "Invalid parameter value"
    assert isinstance(err, ValueError)
    with pytest.raises(ValueError) as info:
        raise err
    assert info.value is err


def test_timeout_is_builtin_timeout():
    err = OperationTimeoutError()
    assert str(err) == "Operation timeout"
    assert isinstance(err, TimeoutError)
    with pytest.raises(TimeoutError) as info:
        raise err
    assert info.value is err


def test_custom_message_overrides_default():
    err = ChargingError("charger stalled")
    assert str(err) == "charger stalled"
    assert err.args == ("charger stalled",)