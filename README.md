# learnsource

Building blocks for working with MIDI controller input and feedback:
normalized control and feedback values, MIDI short messages and the
composite (N)RPN and 14-bit control change messages, source addresses,
and sys-ex rendering of text for hardware displays.

No third-party dependencies are needed.

## Installation

```
pip install learnsource
```

## Modules

- `learnsource.values`: `UnitValue`, `Fraction`, `DiscreteIncrement`
  (with the three relative encoder decodings), `ControlValue`,
  `FeedbackValue` with its numeric and textual forms, `RgbColor`,
  `DetailedSourceCharacter`, and the helpers `normalize_n_bit`,
  `normalize_14_bit_centered`, `denormalize_7_bit`, `denormalize_14_bit`,
  `denormalize_14_bit_centered`, `bpm_from_unit_value`,
  `unit_value_from_bpm`, `format_percentage_without_unit` and
  `parse_percentage_without_unit`.
- `learnsource.messages`: `ShortMessage` with constructors for every
  channel message type and `ShortMessage.system()` for system messages,
  `ParameterNumberMessage` (RPN/NRPN, 7- or 14-bit), and
  `ControlChange14BitMessage`, each able to split itself into the short
  messages to send.
- `learnsource.displays`: `DisplayType`, the display scopes
  (`MackieLcdScope`, `MackieSevenSegmentDisplayScope`,
  `SlKeyboardDisplayScope`, `SiniConE24Scope`), `DisplaySpec`,
  `DisplaySpecAddress`, and the sys-ex builders `mackie_lcd_sysex`,
  `sinicon_e24_sysex` and `sl_keyboard_display_sysex`.
- `learnsource.midi_source_value`: `RawMidiEvent` (at most 256 bytes),
  `MidiSourceValue`, `MidiSourceAddress`, `PatternByte`,
  `RawFeedbackAddressInfo` and `PreliminaryMidiSourceFeedbackValue`.
- `learnsource.display_feedback`: `render_display_feedback()` turns a
  feedback value into events for a `DisplaySpec` (Mackie LCD, X-Touch
  Mackie LCD with a color request, Mackie 7-segment, SiniCon E24,
  Studiologic SL keyboard, Launchpad Pro scrolling text).

## Examples

Values and encoders:

```python
from learnsource.values import (
    DiscreteIncrement, UnitValue, denormalize_7_bit, denormalize_14_bit_centered,
)

denormalize_7_bit(UnitValue(0.5))            # 64
denormalize_14_bit_centered(UnitValue(0.5))  # 8192, the pitch bend center
DiscreteIncrement.from_encoder_2_value(62)   # DiscreteIncrement(increment=-2)
```

Messages and addresses:

```python
from learnsource.messages import (
    DataEntryByteOrder, ParameterNumberMessage, ShortMessage,
)
from learnsource.midi_source_value import MidiSourceValue

cc = MidiSourceValue(ShortMessage.control_change(1, 64, 127))
cc.extract_feedback_address()   # a CONTROL_CHANGE address on channel 1, controller 64

rpn = MidiSourceValue(ParameterNumberMessage.registered_14_bit(7, 3000, 8192))
rpn.to_short_messages(DataEntryByteOrder.MSB_FIRST)   # four control changes
```

Text on a Mackie LCD:

```python
from learnsource.display_feedback import render_display_feedback
from learnsource.displays import DisplaySpec, MackieLcdScope
from learnsource.values import FeedbackValue

spec = DisplaySpec(DisplaySpec.Kind.MACKIE_LCD, MackieLcdScope(channel=0, line=0))
result = render_display_feedback(spec, FeedbackValue.textual("Volume"))
result.final_value.value[0].data
# b'\xf0\x00\x00f\x14\x12\x00Volume \xf7'
```

Non-ASCII characters are dropped from display text, and unused display
positions are padded.

## What this package does not do

There is no source type here that matches incoming MIDI values against a
configured control element and produces `ControlValue`s, or that builds
feedback messages for notes, control changes and other non-display
elements; the pieces above are what such a source would be built from.
The package sends and receives no MIDI itself and has no command-line
program.

## Running the tests

```
pip install -e ".[test]"
pytest
```