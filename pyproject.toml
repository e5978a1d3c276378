[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sc8815"
version = "0.1.0"
description = "Driver for the SC8815 battery charging and power delivery IC over I2C"
requires-python = ">=3.10"
dependencies = []
keywords = ["sc8815", "power-management", "battery-charging", "i2c", "driver"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware :: Hardware Drivers",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sc8815"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
