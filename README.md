# filtertimer

This package holds the control logic for a filter service-life timer. The device
counts how long a filter has been in use. When the filter reaches its maximum
operating time, the device signals that the filter needs replacing. When the
replacement grace period has also run out, the device blocks.

All components reach the hardware through the `Board` interface in
`filtertimer.hal`. `VirtualBoard` is an in-memory implementation of that
interface, for use in tests and experiments.

## Modules

### `filtertimer.hal`

- `PinMode` enumerates the pin modes: `INPUT`, `OUTPUT` and `INPUT_PULLUP`.
- The module also defines the levels `LOW` (0) and `HIGH` (1).
- `Board` is the protocol the logic expects:
  - `pin_mode(pin, mode)`
  - `digital_read(pin)`
  - `digital_write(pin, level)`
  - `millis()`
  - `tone(pin, frequency)`
  - `no_tone(pin)`
- `VirtualBoard` implements `Board` in memory:
  - Its clock starts at 0 and only moves when you call `advance(ms)`. `advance` returns the new time and raises `ValueError` for a negative step.
  - `set_input(pin, level)` applies an external level to a pin.
  - A pin with no external level reads `HIGH` when it is in `INPUT_PULLUP` mode.
  - `output(pin)` returns the level last written to a pin.
  - `tone_frequency(pin)` returns the frequency sounding on a pin, or `None` when the pin is silent.
  - `tone` raises `ValueError` for a frequency that is not positive.

### `filtertimer.eeprom`

- `crc16(data)` computes the CRC-16/Modbus checksum of a bytes-like object.
- `MinimalEEPROM(memory=None)` wraps a `bytearray` image of the EEPROM.
  - The default image is 1024 erased (`0xFF`) bytes.
  - `begin()` pads a shorter image up to the 14 bytes the layout needs.
  - The layout is little-endian and has four fields:

    | Offset | Field |
    | --- | --- |
    | 0 | maximum operating time |
    | 4 | maximum replacement time |
    | 8 | current operating time |
    | 12 | CRC-16 of the current operating time |

  - `save_max_operating_time`, `save_max_replacement_time` and `save_current_operating_time` write only when the stored value changes. Each raises `ValueError` for values outside the unsigned 32-bit range.
  - `read_max_operating_time()` and `read_max_replacement_time()` return the stored values.
  - `read_current_operating_time()` returns the stored value. If its CRC does not match, it returns `MinimalEEPROM.CORRUPTED` (`0xFFFFFFFF`) instead.

### `filtertimer.button`

`Button(board, pin, hold_time=1500, debounce=50)` is an active-low push button that uses the internal pull-up.

- Call `update()` on every loop pass.
- `is_pressed()` gives the debounced state.
- Each of the following reports its event once and then clears it:
  - `was_pressed()`
  - `was_released()`
  - `is_click()`: a press released before `hold_time`.
  - `is_long_press()`: a press held for at least `hold_time`.

### `filtertimer.configuration_mode`

`ConfigurationMode(board, button, eeprom, green_pin, red_pin, buzzer_pin, dip_pins)` takes exactly four DIP switch pins. Any other number raises `ValueError`.

- `read_dip()` returns the DIP value, from 0 to 15. The first pin is the high bit, and a closed switch (`LOW`) counts as 1.
- Outside the mode:
  - A long press enters the mode at level 1.
  - A click resets the current operating time to 0.
- Inside the mode:
  - A click saves the DIP value × 5 seconds for the current level. Level 1 sets the maximum operating time and level 2 sets the maximum replacement time. The click then switches the level.
  - A long press saves in the same way, resets the current operating time, switches the outputs off and leaves the mode.
  - A DIP value of 0 saves nothing.
  - The green LED (level 1) or the red LED (level 2) blinks every 500 ms. The buzzer output blinks in step with it.
- `is_active()` tells whether the mode is on.

### `filtertimer.main_operation`

`OperatingLevel` has four values: `NONE`, `OPERATING`, `REPLACEMENT` and `BLOCKED`.

`MainOperation(board, button, eeprom, green_pin, red_pin, buzzer_pin)` runs the session logic:

- `begin()` configures the pins and restores `stored_operating_time` from the EEPROM. It also sets `current_level` to `OPERATING`.
- While the button is held, a session runs:
  1. For 1.5 s the green LED and the buzzer are on.
  2. After that, seconds are counted, and the running total is saved every 30 s.
  3. At the maximum operating time the level becomes `REPLACEMENT`. The red LED and the buzzer then blink with a 500 ms phase.
  4. At the maximum operating time plus the replacement time the level becomes `BLOCKED`. Red and buzzer are then steady on.
- Releasing the button does the following:
  - It adds the session time to the total and saves it.
  - It turns all outputs off.
  - It moves a session that ended at `REPLACEMENT` to `BLOCKED`.
- `session_active` shows whether a session is running.

### `filtertimer.indication`

`IndicationModule(board, green_pin, red_pin, buzzer_pin)` gives non-blocking control of two LEDs and a buzzer. The buzzer sounds a 1000 Hz tone.

- Each indicator has four methods:

  | Indicator | Methods |
  | --- | --- |
  | green LED | `green_on(duration_ms)`, `green_off()`, `green_blink(duration_ms, period_ms)`, `green_blink_forever(period_ms)` |
  | red LED | `red_on(duration_ms)`, `red_off()`, `red_blink(duration_ms, period_ms)`, `red_blink_forever(period_ms)` |
  | buzzer | `beep_on(duration_ms)`, `beep_off()`, `beep_blink(duration_ms, period_ms)`, `beep_blink_forever(period_ms)` |

- A duration of 0 means "until switched off" for the `*_on` methods and "forever" for the `*_blink` methods.
- Negative times raise `ValueError`.
- `update()` ends timed switch-ons and advances blinking.

## Example

```python
from filtertimer.hal import VirtualBoard, LOW
from filtertimer.button import Button
from filtertimer.eeprom import MinimalEEPROM, crc16

board = VirtualBoard()
button = Button(board, pin=2)

board.set_input(2, LOW)       # press
board.advance(60)
button.update()
print(button.is_pressed())    # True

eeprom = MinimalEEPROM()
eeprom.save_current_operating_time(42)
print(eeprom.read_current_operating_time())  # 42
print(hex(crc16(b"123456789")))              # 0x4b37
```

Call each component's `begin()` once, then call its `update()` on every pass of
your main loop. The components write progress messages through the standard
`logging` module.

## What the package does not do

- It has no command-line program and no ready-made main loop that wires the components to particular pins. You create the objects and call `update()` yourself.
- The only `Board` implementation provided is the simulated `VirtualBoard`. To drive real pins, supply your own object that implements the `Board` methods.
- `MinimalEEPROM` keeps its data in a `bytearray`. Saving the image to a file or device is up to you.

## Running the tests

```
pip install -e ".[test]"
pytest
```