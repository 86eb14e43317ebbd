"""Filter service-life timer logic: buttons, configuration, storage, indication and a simulated board."""

__version__ = "0.1.0"
__all__ = [
    "hal",
    "eeprom",
    "button",
    "configuration_mode",
    "main_operation",
    "indication",
]