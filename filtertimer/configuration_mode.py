"""Settings mode: the DIP switch sets the operating and replacement times."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .button import Button
from .eeprom import MinimalEEPROM
from .hal import HIGH, LOW, Board, PinMode

logger = logging.getLogger(__name__)


class ConfigurationMode:
    """Lets the user store timer limits with a button and a 4-way DIP switch.

    A long press outside the mode enters it; a click outside the mode resets
    the accumulated operating time. Inside the mode a click saves the DIP
    value for the current level and switches level (1: maximum operating
    time, 2: replacement time); a long press saves and leaves the mode.
    Each DIP step is worth five seconds, and a DIP value of zero saves nothing.
    """

    BLINK_INTERVAL = 500
    DIP_SIZE = 4
    SECONDS_PER_STEP = 5

    def __init__(
        self,
        board: Board,
        button: Button,
        eeprom: MinimalEEPROM,
        green_pin: int,
        red_pin: int,
        buzzer_pin: int,
        dip_pins: Iterable[int],
    ) -> None:
        pins = tuple(dip_pins)
        if len(pins) != self.DIP_SIZE:
            raise ValueError(
                f"expected {self.DIP_SIZE} DIP switch pins, got {len(pins)}"
            )
        self._board = board
        self._button = button
        self._eeprom = eeprom
        self._green_pin = green_pin
        self._red_pin = red_pin
        self._buzzer_pin = buzzer_pin
        self._dip_pins = pins

        self._active = False
        self.level = 1
        self._last_blink_time = 0
        self._led_state = False

    def begin(self) -> None:
        """Configure the pins and reset the mode to its idle state."""
        for pin in (self._green_pin, self._red_pin, self._buzzer_pin):
            self._board.pin_mode(pin, PinMode.OUTPUT)
        for pin in (self._green_pin, self._red_pin, self._buzzer_pin):
            self._board.digital_write(pin, LOW)
        for pin in self._dip_pins:
            self._board.pin_mode(pin, PinMode.INPUT_PULLUP)

        self._active = False
        self.level = 1
        self._led_state = False
        self._last_blink_time = self._board.millis()

    def _restart_blink(self) -> None:
        self._led_state = False
        self._last_blink_time = self._board.millis()

    def update(self) -> None:
        """Poll the button and run the mode's state machine and indication."""
        self._button.update()

        if not self._active:
            if self._button.is_long_press():
                self._active = True
                self.level = 1
                self._restart_blink()
            elif self._button.is_click():
                logger.info("resetting current operating time")
                self._eeprom.save_current_operating_time(0)
            return

        if self._button.is_long_press():
            self._save_level_value(self.read_dip())
            self._eeprom.save_current_operating_time(0)
            for pin in (self._green_pin, self._red_pin, self._buzzer_pin):
                self._board.digital_write(pin, LOW)
            self._active = False
            return

        if self._button.is_click():
            self._save_level_value(self.read_dip())
            self.level = 2 if self.level == 1 else 1
            self._restart_blink()

        now = self._board.millis()
        if now - self._last_blink_time >= self.BLINK_INTERVAL:
            self._last_blink_time = now
            self._led_state = not self._led_state
            level_out = HIGH if self._led_state else LOW
            if self.level == 1:
                self._board.digital_write(self._green_pin, level_out)
                self._board.digital_write(self._red_pin, LOW)
            else:
                self._board.digital_write(self._red_pin, level_out)
                self._board.digital_write(self._green_pin, LOW)
            self._board.digital_write(self._buzzer_pin, level_out)

    def is_active(self) -> bool:
        """Return True while the settings mode is on."""
        return self._active

    def read_dip(self) -> int:
        """Return the DIP switch value 0-15; the first pin is the high bit."""
        value = 0
        for pin in self._dip_pins:
            value = (value << 1) | int(self._board.digital_read(pin) == LOW)
        return value

    def _save_level_value(self, dip_value: int) -> None:
        if dip_value == 0:
            return
        seconds = dip_value * self.SECONDS_PER_STEP
        if self.level == 1:
            self._eeprom.save_max_operating_time(seconds)
        else:
            self._eeprom.save_max_replacement_time(seconds)