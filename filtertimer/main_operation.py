"""Main run loop: counts operating time while the start button is held."""

from __future__ import annotations

import logging
from enum import IntEnum

from .button import Button
from .eeprom import MinimalEEPROM
from .hal import HIGH, LOW, Board, PinMode

logger = logging.getLogger(__name__)

_U32_MASK = 0xFFFFFFFF


class OperatingLevel(IntEnum):
    """Stage of the filter's life."""

    NONE = 0
    OPERATING = 1
    REPLACEMENT = 2
    BLOCKED = 3


class MainOperation:
    """Tracks operating time and signals when the filter must be replaced.

    While the button is held a session runs: after a 1.5 s start-up delay
    (green light and beep) time is counted and saved every 30 s. Past the
    maximum operating time the red light and buzzer blink; past that plus the
    replacement time the device is blocked.
    """

    START_DELAY_MS = 1500
    SAVE_INTERVAL_MS = 30000
    BLINK_INTERVAL_MS = 500

    def __init__(
        self,
        board: Board,
        button: Button,
        eeprom: MinimalEEPROM,
        green_pin: int,
        red_pin: int,
        buzzer_pin: int,
    ) -> None:
        self._board = board
        self._button = button
        self._eeprom = eeprom
        self._green_pin = green_pin
        self._red_pin = red_pin
        self._buzzer_pin = buzzer_pin

        self.current_level = OperatingLevel.NONE
        self.session_active = False
        self.stored_operating_time = 0

        self._delay_in_progress = False
        self._delay_start = 0
        self._session_start = 0
        self._last_save = 0

    def begin(self) -> None:
        """Configure the pins and restore the accumulated operating time."""
        for pin in (self._green_pin, self._red_pin, self._buzzer_pin):
            self._board.pin_mode(pin, PinMode.OUTPUT)
        self.stored_operating_time = self._eeprom.read_current_operating_time()
        self.current_level = OperatingLevel.OPERATING
        logger.info(
            "operating time restored: %d s, level %d",
            self.stored_operating_time,
            self.current_level,
        )

    def update(self) -> None:
        """Poll the button and run or stop the session."""
        self._button.update()
        if self._button.is_pressed():
            if not self.session_active:
                self._start_session()
            self._update_session()
        elif self.session_active:
            self._stop_session()

    def _start_session(self) -> None:
        logger.info("session started")
        self.session_active = True
        self._delay_in_progress = True
        self._delay_start = self._board.millis()
        self._set_outputs(green=True, red=False, buzzer=True)

    def _stop_session(self) -> None:
        logger.info("session stopped")
        self.session_active = False
        self._delay_in_progress = False

        duration = (self._board.millis() - self._session_start) // 1000
        self.stored_operating_time = (self.stored_operating_time + duration) & _U32_MASK
        self._eeprom.save_current_operating_time(self.stored_operating_time)

        if self.current_level is OperatingLevel.REPLACEMENT:
            self.current_level = OperatingLevel.BLOCKED
        self._set_outputs(green=False, red=False, buzzer=False)

    def _update_session(self) -> None:
        if self._delay_in_progress:
            if self._board.millis() - self._delay_start < self.START_DELAY_MS:
                return
            self._delay_in_progress = False
            self._session_start = self._board.millis()
            self._last_save = self._session_start
            self._set_outputs(green=True, red=False, buzzer=False)

        elapsed = (self._board.millis() - self._session_start) // 1000
        current_time = (self.stored_operating_time + elapsed) & _U32_MASK

        if self._board.millis() - self._last_save >= self.SAVE_INTERVAL_MS:
            self._eeprom.save_current_operating_time(current_time)
            self._last_save = self._board.millis()

        max_operating = self._eeprom.read_max_operating_time()
        if self.current_level is OperatingLevel.OPERATING and current_time >= max_operating:
            self.current_level = OperatingLevel.REPLACEMENT
        limit = (max_operating + self._eeprom.read_max_replacement_time()) & _U32_MASK
        if self.current_level is OperatingLevel.REPLACEMENT and current_time >= limit:
            self.current_level = OperatingLevel.BLOCKED

        if self.current_level is OperatingLevel.OPERATING:
            self._set_outputs(green=True, red=False, buzzer=False)
        elif self.current_level is OperatingLevel.REPLACEMENT:
            self._blink_red_and_beep()
        elif self.current_level is OperatingLevel.BLOCKED:
            self._set_outputs(green=False, red=True, buzzer=True)
        else:
            self._set_outputs(green=False, red=False, buzzer=False)

    def _set_outputs(self, *, green: bool, red: bool, buzzer: bool) -> None:
        self._board.digital_write(self._green_pin, HIGH if green else LOW)
        self._board.digital_write(self._red_pin, HIGH if red else LOW)
        self._board.digital_write(self._buzzer_pin, HIGH if buzzer else LOW)

    def _blink_red_and_beep(self) -> None:
        on = (self._board.millis() // self.BLINK_INTERVAL_MS) % 2 == 0
        level = HIGH if on else LOW
        self._board.digital_write(self._red_pin, level)
        self._board.digital_write(self._buzzer_pin, level)