"""Persistent storage of the timer settings and accumulated operating time."""

from __future__ import annotations

import logging
import struct

logger = logging.getLogger(__name__)

_U32 = struct.Struct("<I")
_U16 = struct.Struct("<H")
_U32_MAX = 0xFFFFFFFF


def crc16(data: bytes) -> int:
    """Return the CRC-16/Modbus checksum of ``data``."""
    crc = 0xFFFF
    for byte in data:
        crc ^= byte
        for _ in range(8):
            crc = (crc >> 1) ^ 0xA001 if crc & 1 else crc >> 1
    return crc


def _check_u32(seconds: int) -> int:
    if not 0 <= seconds <= _U32_MAX:
        raise ValueError(f"value {seconds} does not fit in 32 unsigned bits")
    return seconds


class MinimalEEPROM:
    """Byte-addressed EEPROM image holding the timer's three values.

    Layout (little-endian): max operating time at 0, max replacement time
    at 4, current operating time at 8 and its CRC-16 at 12.
    """

    ADDR_MAX_OPERATING = 0
    ADDR_MAX_REPLACEMENT = 4
    ADDR_CURRENT_TIME = 8
    ADDR_CURRENT_TIME_CRC = 12
    LAYOUT_SIZE = 14
    CORRUPTED = _U32_MAX

    def __init__(self, memory: bytearray | None = None) -> None:
        self.memory = memory if memory is not None else bytearray(b"\xff" * 1024)

    def begin(self) -> None:
        """Make sure the image is large enough, padding with erased bytes."""
        missing = self.LAYOUT_SIZE - len(self.memory)
        if missing > 0:
            self.memory.extend(b"\xff" * missing)

    def _get_u32(self, address: int) -> int:
        return _U32.unpack_from(self.memory, address)[0]

    def _put_u32_if_changed(self, address: int, value: int) -> bool:
        if self._get_u32(address) == value:
            return False
        _U32.pack_into(self.memory, address, value)
        return True

    def save_max_operating_time(self, seconds: int) -> None:
        """Store the maximum operating time, writing only when it changed."""
        self._put_u32_if_changed(self.ADDR_MAX_OPERATING, _check_u32(seconds))

    def save_max_replacement_time(self, seconds: int) -> None:
        """Store the filter replacement time, writing only when it changed."""
        self._put_u32_if_changed(self.ADDR_MAX_REPLACEMENT, _check_u32(seconds))

    def save_current_operating_time(self, seconds: int) -> None:
        """Store the accumulated operating time with its CRC, only when it changed."""
        if self._put_u32_if_changed(self.ADDR_CURRENT_TIME, _check_u32(seconds)):
            _U16.pack_into(
                self.memory, self.ADDR_CURRENT_TIME_CRC, crc16(_U32.pack(seconds))
            )

    def read_max_operating_time(self) -> int:
        """Return the stored maximum operating time in seconds."""
        return self._get_u32(self.ADDR_MAX_OPERATING)

    def read_max_replacement_time(self) -> int:
        """Return the stored filter replacement time in seconds."""
        return self._get_u32(self.ADDR_MAX_REPLACEMENT)

    def read_current_operating_time(self) -> int:
        """Return the accumulated operating time, or CORRUPTED if its CRC fails."""
        value = self._get_u32(self.ADDR_CURRENT_TIME)
        stored_crc = _U16.unpack_from(self.memory, self.ADDR_CURRENT_TIME_CRC)[0]
        valid = crc16(_U32.pack(value)) == stored_crc
        logger.debug("current operating time %d, crc valid: %s", value, valid)
        return value if valid else self.CORRUPTED