import pytest

from filtertimer.hal import HIGH, LOW, PinMode, VirtualBoard


def test_pullup_input_idles_high():
    board = VirtualBoard()
    board.pin_mode(3, PinMode.INPUT_PULLUP)
    assert board.digital_read(3) == HIGH


def test_plain_input_idles_low():
    board = VirtualBoard()
    board.pin_mode(3, PinMode.INPUT)
    assert board.digital_read(3) == LOW


def test_set_input_overrides_pullup():
    board = VirtualBoard()
    board.pin_mode(4, PinMode.INPUT_PULLUP)
    board.set_input(4, LOW)
    assert board.digital_read(4) == LOW
    board.set_input(4, HIGH)
    assert board.digital_read(4) == HIGH


def test_output_records_last_write():
    board = VirtualBoard()
    board.pin_mode(7, PinMode.OUTPUT)
    assert board.output(7) == LOW
    board.digital_write(7, HIGH)
    assert board.output(7) == HIGH
    assert board.digital_read(7) == HIGH
    board.digital_write(7, LOW)
    assert board.output(7) == LOW


def test_clock_starts_at_zero_and_advances():
    board = VirtualBoard()
    assert board.millis() == 0
    assert board.advance(250) == 250
    board.advance(100)
    assert board.millis() == 350


def test_clock_cannot_go_backwards():
    board = VirtualBoard()
    with pytest.raises(ValueError):
        board.advance(-1)


def test_tone_and_no_tone():
    board = VirtualBoard()
    assert board.tone_frequency(9) is None
    board.tone(9, 1000)
    assert board.tone_frequency(9) == 1000
    board.no_tone(9)
    assert board.tone_frequency(9) is None


def test_tone_rejects_non_positive_frequency():
    board = VirtualBoard()
    with pytest.raises(ValueError):
        board.tone(9, 0)