[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "filtertimer"
version = "0.1.0"
description = "Filter service-life timer logic: debounced buttons, DIP-switch configuration, CRC-checked persistent storage and LED/buzzer indication, with a simulated board"
requires-python = ">=3.10"
dependencies = []
keywords = ["filter", "timer", "debounce", "eeprom", "crc16", "embedded", "simulation"]
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
    "Topic :: Home Automation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["filtertimer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
