"""Driver for the SC8815 battery charging and power delivery IC over I2C."""

__version__ = "0.1.0"