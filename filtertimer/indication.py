"""Non-blocking control of two indicator LEDs and a piezo buzzer."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from .hal import HIGH, LOW, Board, PinMode


@dataclass
class _OneShot:
    """A timed switch-on; a duration of 0 means it stays on."""

    active: bool = False
    start_time: int = 0
    duration: int = 0


@dataclass
class _Blink:
    """A blinking pattern; an end time of 0 means it never stops."""

    active: bool = False
    is_on: bool = False
    start_time: int = 0
    last_toggle_time: int = 0
    end_time: int = 0
    period: int = 0


def _check_ms(name: str, value: int) -> int:
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


@dataclass
class _Channel:
    """One indicator together with its one-shot and blink states."""

    switch: Callable[[bool], None]
    one_shot: _OneShot = field(default_factory=_OneShot)
    blink: _Blink = field(default_factory=_Blink)

    def turn_on(self, now: int, duration_ms: int) -> None:
        self.one_shot = _OneShot(True, now, _check_ms("duration_ms", duration_ms))
        self.blink.active = False
        self.switch(True)

    def turn_off(self) -> None:
        self.one_shot.active = False
        self.blink.active = False
        self.switch(False)

    def start_blink(self, now: int, duration_ms: int, period_ms: int) -> None:
        _check_ms("duration_ms", duration_ms)
        _check_ms("period_ms", period_ms)
        end_time = now + duration_ms if duration_ms > 0 else 0
        self.blink = _Blink(True, False, now, now, end_time, period_ms)
        self.one_shot.active = False
        self.switch(False)

    def expire_one_shot(self, now: int) -> None:
        shot = self.one_shot
        if shot.active and shot.duration > 0 and now - shot.start_time >= shot.duration:
            self.switch(False)
            shot.active = False

    def step_blink(self, now: int) -> None:
        state = self.blink
        if not state.active:
            return
        if state.end_time > 0 and now >= state.end_time:
            state.active = False
            state.is_on = False
            self.switch(False)
            return
        if now - state.last_toggle_time >= state.period:
            state.is_on = not state.is_on
            state.last_toggle_time = now
            self.switch(state.is_on)


class IndicationModule:
    """Drives a green LED, a red LED and a piezo buzzer without blocking.

    Each indicator can be switched on for a fixed time (0 meaning until
    switched off) or made to blink with a given period for a given time
    (0 meaning forever). Call :meth:`update` on every loop pass.
    """

    BUZZER_FREQUENCY = 1000

    def __init__(self, board: Board, green_pin: int, red_pin: int, buzzer_pin: int) -> None:
        self._board = board
        self._green_pin = green_pin
        self._red_pin = red_pin
        self._buzzer_pin = buzzer_pin

        self._red = _Channel(self._led_switch(red_pin))
        self._green = _Channel(self._led_switch(green_pin))
        self._buzzer = _Channel(self._buzzer_switch)

    def _led_switch(self, pin: int) -> Callable[[bool], None]:
        def switch(on: bool) -> None:
            self._board.digital_write(pin, HIGH if on else LOW)

        return switch

    def _buzzer_switch(self, on: bool) -> None:
        if on:
            self._board.tone(self._buzzer_pin, self.BUZZER_FREQUENCY)
        else:
            self._board.no_tone(self._buzzer_pin)

    @property
    def _channels(self) -> tuple[_Channel, _Channel, _Channel]:
        return (self._red, self._green, self._buzzer)

    def begin(self) -> None:
        """Configure the pins and switch every indicator off."""
        for pin in (self._red_pin, self._green_pin, self._buzzer_pin):
            self._board.pin_mode(pin, PinMode.OUTPUT)
        self._board.digital_write(self._red_pin, LOW)
        self._board.digital_write(self._green_pin, LOW)
        self._buzzer_switch(False)

    def green_on(self, duration_ms: int) -> None:
        """Light the green LED for ``duration_ms`` (0: until switched off)."""
        self._green.turn_on(self._board.millis(), duration_ms)

    def green_off(self) -> None:
        """Switch the green LED off and stop its blinking."""
        self._green.turn_off()

    def green_blink(self, duration_ms: int, period_ms: int) -> None:
        """Blink the green LED for ``duration_ms`` (0: forever)."""
        self._green.start_blink(self._board.millis(), duration_ms, period_ms)

    def green_blink_forever(self, period_ms: int) -> None:
        """Blink the green LED until told otherwise."""
        self._green.start_blink(self._board.millis(), 0, period_ms)

    def red_on(self, duration_ms: int) -> None:
        """Light the red LED for ``duration_ms`` (0: until switched off)."""
        self._red.turn_on(self._board.millis(), duration_ms)

    def red_off(self) -> None:
        """Switch the red LED off and stop its blinking."""
        self._red.turn_off()

    def red_blink(self, duration_ms: int, period_ms: int) -> None:
        """Blink the red LED for ``duration_ms`` (0: forever)."""
        self._red.start_blink(self._board.millis(), duration_ms, period_ms)

    def red_blink_forever(self, period_ms: int) -> None:
        """Blink the red LED until told otherwise."""
        self._red.start_blink(self._board.millis(), 0, period_ms)

    def beep_on(self, duration_ms: int) -> None:
        """Sound the buzzer for ``duration_ms`` (0: until switched off)."""
        self._buzzer.turn_on(self._board.millis(), duration_ms)

    def beep_off(self) -> None:
        """Silence the buzzer and stop its beeping."""
        self._buzzer.turn_off()

    def beep_blink(self, duration_ms: int, period_ms: int) -> None:
        """Beep intermittently for ``duration_ms`` (0: forever)."""
        self._buzzer.start_blink(self._board.millis(), duration_ms, period_ms)

    def beep_blink_forever(self, period_ms: int) -> None:
        """Beep intermittently until told otherwise."""
        self._buzzer.start_blink(self._board.millis(), 0, period_ms)

    def update(self) -> None:
        """Expire timed switch-ons and advance blinking patterns."""
        now = self._board.millis()
        for channel in self._channels:
            channel.expire_one_shot(now)
        for channel in self._channels:
            channel.step_blink(now)