"""Debounced push button with press, release, click and long-press events."""

from __future__ import annotations

from .hal import LOW, Board, PinMode


class Button:
    """A button wired between a pin and ground, read with the internal pull-up.

    Call :meth:`update` on every loop pass. The ``was_*`` and ``is_click`` /
    ``is_long_press`` queries report an event once and then clear it.
    """

    def __init__(
        self, board: Board, pin: int, hold_time: int = 1500, debounce: int = 50
    ) -> None:
        self._board = board
        self._pin = pin
        self.hold_time = hold_time
        self.debounce = debounce

        board.pin_mode(pin, PinMode.INPUT_PULLUP)
        self._raw_state = self._read()
        self._stable_state = self._raw_state
        self._last_stable_state = self._raw_state
        self._last_debounce_time = board.millis()
        self._press_start_time = 0

        self._press_edge = False
        self._release_edge = False
        self._click = False
        self._long_press = False
        self._long_press_handled = False

    def _read(self) -> bool:
        return self._board.digital_read(self._pin) == LOW

    def update(self) -> None:
        """Sample the pin and advance the debounce and event logic."""
        reading = self._read()
        now = self._board.millis()

        if reading != self._raw_state:
            self._raw_state = reading
            self._last_debounce_time = now

        if (
            now - self._last_debounce_time > self.debounce
            and self._raw_state != self._stable_state
        ):
            self._last_stable_state = self._stable_state
            self._stable_state = self._raw_state
            if self._stable_state:
                self._press_start_time = now
                self._press_edge = True
            else:
                self._release_edge = True
                if (
                    not self._long_press_handled
                    and now - self._press_start_time < self.hold_time
                ):
                    self._click = True
                self._long_press_handled = False

        if (
            self._stable_state
            and not self._long_press_handled
            and now - self._press_start_time >= self.hold_time
        ):
            self._long_press = True
            self._long_press_handled = True

    def is_pressed(self) -> bool:
        """Return the debounced state: True while the button is held."""
        return self._stable_state

    def was_pressed(self) -> bool:
        """Report a press edge once."""
        event, self._press_edge = self._press_edge, False
        return event

    def was_released(self) -> bool:
        """Report a release edge once."""
        event, self._release_edge = self._release_edge, False
        return event

    def is_click(self) -> bool:
        """Report once a press released before the hold time."""
        event, self._click = self._click, False
        return event

    def is_long_press(self) -> bool:
        """Report once a press held for at least the hold time."""
        event, self._long_press = self._long_press, False
        return event