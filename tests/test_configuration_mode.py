import pytest

from filtertimer.button import Button
from filtertimer.configuration_mode import ConfigurationMode
from filtertimer.eeprom import MinimalEEPROM
from filtertimer.hal import HIGH, LOW, VirtualBoard

BUTTON = 2
GREEN = 5
RED = 6
BUZZER = 7
DIP = (10, 11, 12, 13)
LONG = 400
SHORT = 100


@pytest.fixture
def rig():
    board = VirtualBoard()
    button = Button(board, BUTTON, hold_time=300, debounce=20)
    eeprom = MinimalEEPROM()
    cfg = ConfigurationMode(board, button, eeprom, GREEN, RED, BUZZER, DIP)
    cfg.begin()
    return board, eeprom, cfg


def tick(board, cfg, ms):
    for _ in range(0, ms, 10):
        board.advance(10)
        cfg.update()


def press(board, cfg, held_ms):
    board.set_input(BUTTON, LOW)
    tick(board, cfg, held_ms)
    board.set_input(BUTTON, HIGH)
    tick(board, cfg, 100)


def set_dip(board, *on_pins):
    for pin in on_pins:
        board.set_input(pin, LOW)


def outputs(board):
    return board.output(GREEN), board.output(RED), board.output(BUZZER)


def test_wrong_number_of_dip_pins_is_rejected():
    board = VirtualBoard()
    with pytest.raises(ValueError):
        ConfigurationMode(
            board, Button(board, BUTTON), MinimalEEPROM(), GREEN, RED, BUZZER, (1, 2, 3)
        )


def test_read_dip_all_off_and_all_on(rig):
    board, _, cfg = rig
    assert cfg.read_dip() == 0
    set_dip(board, *DIP)
    assert cfg.read_dip() == 15


def test_read_dip_last_pin_is_low_bit(rig):
    board, _, cfg = rig
    set_dip(board, DIP[-1])
    assert cfg.read_dip() == 1


def test_read_dip_first_pin_outweighs_the_rest(rig):
    board, _, cfg = rig
    set_dip(board, DIP[0])
    first_only = cfg.read_dip()
    board.set_input(DIP[0], HIGH)
    set_dip(board, *DIP[1:])
    assert first_only > cfg.read_dip()


def test_starts_inactive(rig):
    _, _, cfg = rig
    assert (cfg.is_active(), cfg.level) == (False, 1)


def test_long_press_enters_mode(rig):
    board, _, cfg = rig
    press(board, cfg, LONG)
    assert (cfg.is_active(), cfg.level) == (True, 1)


def test_click_outside_mode_resets_operating_time(rig):
    board, eeprom, cfg = rig
    eeprom.save_current_operating_time(100)
    press(board, cfg, SHORT)
    assert cfg.is_active() is False
    assert eeprom.read_current_operating_time() == 0


def test_blinking_green_and_buzzer_on_level_one(rig):
    board, _, cfg = rig
    press(board, cfg, LONG)
    tick(board, cfg, 400)
    assert outputs(board) == (HIGH, LOW, HIGH)
    tick(board, cfg, 500)
    assert outputs(board) == (LOW, LOW, LOW)


def test_click_in_mode_saves_operating_time_and_switches_level(rig):
    board, eeprom, cfg = rig
    press(board, cfg, LONG)
    set_dip(board, DIP[-1])
    press(board, cfg, SHORT)
    assert cfg.level == 2
    assert eeprom.read_max_operating_time() == ConfigurationMode.SECONDS_PER_STEP
    tick(board, cfg, 550)
    assert (board.output(RED), board.output(GREEN)) == (HIGH, LOW)


def test_second_click_returns_to_level_one(rig):
    board, _, cfg = rig
    for held in (LONG, SHORT, SHORT):
        press(board, cfg, held)
    assert (cfg.level, cfg.is_active()) == (1, True)


def test_long_press_on_level_two_saves_replacement_and_leaves(rig):
    board, eeprom, cfg = rig
    eeprom.save_max_operating_time(600)
    eeprom.save_current_operating_time(77)
    press(board, cfg, LONG)
    press(board, cfg, SHORT)
    set_dip(board, DIP[-1])
    press(board, cfg, LONG)
    assert cfg.is_active() is False
    stored = (
        eeprom.read_max_replacement_time(),
        eeprom.read_max_operating_time(),
        eeprom.read_current_operating_time(),
    )
    assert stored == (ConfigurationMode.SECONDS_PER_STEP, 600, 0)
    assert outputs(board) == (LOW, LOW, LOW)


def test_zero_dip_saves_nothing(rig):
    board, eeprom, cfg = rig
    eeprom.save_max_operating_time(600)
    press(board, cfg, LONG)
    press(board, cfg, LONG)
    assert cfg.is_active() is False
    assert eeprom.read_max_operating_time() == 600


def test_saved_value_scales_with_dip(rig):
    board, eeprom, cfg = rig
    press(board, cfg, LONG)
    set_dip(board, *DIP)
    press(board, cfg, LONG)
    assert eeprom.read_max_operating_time() == cfg.read_dip() * ConfigurationMode.SECONDS_PER_STEP