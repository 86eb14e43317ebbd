"""Board abstraction: pin I/O, timing and tone generation, plus an in-memory board."""

from __future__ import annotations

from enum import Enum
from typing import Protocol

LOW = 0
HIGH = 1


class PinMode(Enum):
    """Electrical configuration of a digital pin."""

    INPUT = "input"
    OUTPUT = "output"
    INPUT_PULLUP = "input_pullup"


class Board(Protocol):
    """What the firmware logic needs from a microcontroller board."""

    def pin_mode(self, pin: int, mode: PinMode) -> None:
        """Configure a pin."""

    def digital_read(self, pin: int) -> int:
        """Return the level (LOW or HIGH) present on a pin."""

    def digital_write(self, pin: int, level: int) -> None:
        """Drive an output pin to a level."""

    def millis(self) -> int:
        """Return milliseconds elapsed since start-up."""

    def tone(self, pin: int, frequency: int) -> None:
        """Start a square wave of the given frequency on a pin."""

    def no_tone(self, pin: int) -> None:
        """Stop any square wave on a pin."""


class VirtualBoard:
    """A board simulated in memory, with a manually advanced clock."""

    def __init__(self) -> None:
        self._now = 0
        self._modes: dict[int, PinMode] = {}
        self._inputs: dict[int, int] = {}
        self._outputs: dict[int, int] = {}
        self._tones: dict[int, int] = {}

    def pin_mode(self, pin: int, mode: PinMode) -> None:
        """Configure a pin."""
        self._modes[pin] = PinMode(mode)

    def digital_read(self, pin: int) -> int:
        """Return the externally applied level, or the idle level of the pin."""
        if pin in self._inputs:
            return self._inputs[pin]
        if self._modes.get(pin) is PinMode.INPUT_PULLUP:
            return HIGH
        if self._modes.get(pin) is PinMode.OUTPUT:
            return self._outputs.get(pin, LOW)
        return LOW

    def digital_write(self, pin: int, level: int) -> None:
        """Record the level driven on a pin."""
        self._outputs[pin] = HIGH if level else LOW

    def millis(self) -> int:
        """Return the simulated clock in milliseconds."""
        return self._now

    def tone(self, pin: int, frequency: int) -> None:
        """Start a simulated tone on a pin."""
        if frequency <= 0:
            raise ValueError(f"frequency must be positive, got {frequency}")
        self._tones[pin] = frequency

    def no_tone(self, pin: int) -> None:
        """Stop the simulated tone on a pin."""
        self._tones.pop(pin, None)

    def set_input(self, pin: int, level: int) -> None:
        """Apply an external level to a pin, as a switch or sensor would."""
        self._inputs[pin] = HIGH if level else LOW

    def advance(self, ms: int) -> int:
        """Move the clock forward by ``ms`` milliseconds and return the new time."""
        if ms < 0:
            raise ValueError(f"cannot move the clock backwards by {ms} ms")
        self._now += ms
        return self._now

    def output(self, pin: int) -> int:
        """Return the level last written to a pin (LOW if never written)."""
        return self._outputs.get(pin, LOW)

    def tone_frequency(self, pin: int) -> int | None:
        """Return the frequency sounding on a pin, or None when silent."""
        return self._tones.get(pin)