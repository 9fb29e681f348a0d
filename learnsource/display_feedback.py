"""Turning feedback values into sys-ex and CC events for hardware displays."""

from __future__ import annotations

from itertools import chain, repeat
from typing import Iterator, List, NamedTuple, Optional, Sequence

from .displays import (
    DisplaySpec,
    MackieLcdScope,
    MackieSevenSegmentDisplayScope,
    SiniConE24Scope,
    SlKeyboardDisplayScope,
    mackie_lcd_sysex,
    sinicon_e24_sysex,
    sl_keyboard_display_sysex,
)
from .midi_source_value import (
    MidiSourceValue,
    PreliminaryMidiSourceFeedbackValue,
    RawFeedbackAddressInfo,
    RawMidiEvent,
    XTouchMackieLcdColorRequest,
)
from .values import FeedbackValue, RgbColor, TextualFeedbackValue

_ASCII_SPACE = 0x20
_SIIICON_CONTROLLER_NUMBER = 1

_X_TOUCH_PALETTE = (
    RgbColor(0, 0, 0),
    RgbColor(255, 0, 0),
    RgbColor(0, 255, 0),
    RgbColor(255, 255, 0),
    RgbColor(0, 0, 255),
    RgbColor(128, 0, 128),
    RgbColor(0, 255, 255),
    RgbColor(255, 255, 255),
)

_LAUNCHPAD_PALETTE_HEX = """
000000 1c1c1c 7c7c7c fcfcfc ff4e48 fe0a00 5a0000 180002
ffbc63 ff5700 5a1d00 241802 fdfd21 fdfd00 585800 181800
81fd2b 40fd01 165800 132801 35fd2b 00fe00 005801 001800
35fc47 00fe00 005801 001800 32fd7f 00fd3a 015814 001c0e
2ffcb1 00fb91 015732 011810 39beff 00a7ff 014051 001018
4186ff 0050ff 011a5a 010619 4747ff 0000fe 00005a 000018
8347ff 5000ff 160067 0a0032 ff48fe ff00fe 5a005a 180018
fb4e83 ff0753 5a021b 210110 ff1901 9a3500 7a5101 3e6500
013800 005432 00537f 0000fe 01444d 1a00d1 7c7c7c 202020
ff0a00 bafd00 acec00 56fd00 008800 01fc7b 00a7ff 021aff
3500ff 7800ff b4177e 412000 ff4a01 82e100 66fd00 00fe00
00fe00 45fd61 01fbcb 5086ff 274dc8 847aed d30cff ff065a
ff7d01 b8b100 8afd00 815d00 3a2802 0d4c05 005037 131429
101f5a 6a3c18 ac0401 e15136 dc6900 fee100 99e101 60b500
1b1c31 dcfd54 76fbb9 9698ff 8b62ff 404040 747474 defcfc
a20401 340100 00d201 004101 b8b100 3c3000 b45d00 4c1300
"""

_LAUNCHPAD_PALETTE = tuple(
    RgbColor(int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))
    for h in _LAUNCHPAD_PALETTE_HEX.split()
)


def _closest_color_index(color: RgbColor, palette: Sequence[RgbColor]) -> int:
    """Index of the exact match or else the nearest palette color (first one wins on ties)."""
    best_index = 0
    best_distance = 3 * 255**2 + 1
    for i, candidate in enumerate(palette):
        if candidate == color:
            return i
        distance = (
            (color.r - candidate.r) ** 2
            + (color.g - candidate.g) ** 2
            + (color.b - candidate.b) ** 2
        )
        if distance < best_distance:
            best_distance = distance
            best_index = i
    return best_index


class SegmentCode(NamedTuple):
    """A 7-segment display code and whether the following character was consumed too."""

    code: Optional[int]
    consumed_one_more: bool


_NO_CODE = SegmentCode(None, False)


def convert_to_7_segment_code(ch: str, next_ch: Optional[str], reverse: bool) -> SegmentCode:
    """Code for ``ch`` on a Mackie 7-segment display.

    ``reverse`` must be set when the text is walked backwards (for right alignment); a
    period then merges with the character before it as its decimal point.
    """
    if reverse:
        if ch == ".":
            ch, with_decimal_point = (next_ch if next_ch is not None else " "), True
        else:
            with_decimal_point = False
    else:
        with_decimal_point = next_ch == "."
    if ch == ".":
        # A lone period becomes a space with decimal point, not an underscore.
        return SegmentCode(0x20 + 0x40, False)
    if not ch.isascii():
        return _NO_CODE
    byte = ord(ch.upper()) if "a" <= ch <= "z" else ord(ch)
    if ch in ":!@":
        return _NO_CODE
    if 0x40 <= byte <= 0x60:
        code = byte - 0x40
    elif 0x20 <= byte <= 0x3F:
        code = byte
    else:
        return _NO_CODE
    if with_decimal_point:
        return SegmentCode(code + 0x40, True)
    return SegmentCode(code, False)


def filter_ascii_chars(text: str) -> Iterator[int]:
    """The bytes of the ASCII characters of ``text``, others dropped."""
    return (ord(ch) for ch in text if ch.isascii())


def _take(chars: Iterator[int], count: int, fill: int) -> List[int]:
    return [next(chars, fill) for _ in range(count)]


def _event(data: bytes) -> Optional[RawMidiEvent]:
    try:
        return RawMidiEvent.try_from_slice(0, data)
    except ValueError:
        return None


def _mackie_lcd_events(
    value: TextualFeedbackValue, scope: MackieLcdScope, extender_index: int
) -> List[RawMidiEvent]:
    chars = filter_ascii_chars(value.text)
    events = []
    for portion in scope.lcd_portions():
        body = _take(chars, len(portion), _ASCII_SPACE)
        event = _event(mackie_lcd_sysex(0x14 + extender_index, portion.start, body))
        if event is not None:
            events.append(event)
    return events


def _sinicon_events(spec: DisplaySpec, value: TextualFeedbackValue) -> List[RawMidiEvent]:
    scope: SiniConE24Scope = spec.scope
    style = value.style
    color = style.color or RgbColor.WHITE
    background_color = style.background_color or RgbColor.BLACK
    previous_background_color = spec.last_sent_background_color
    spec.last_sent_background_color = background_color
    update_background = background_color != previous_background_color
    chars = filter_ascii_chars(value.text)
    events: List[Optional[RawMidiEvent]] = []
    for dest in scope.destinations():
        if update_background:
            # A line length of zero sets the background color.
            events.append(
                _event(
                    sinicon_e24_sysex(
                        _SIIICON_CONTROLLER_NUMBER,
                        dest.cell_index,
                        dest.item_index,
                        0,
                        background_color,
                        (),
                    )
                )
            )
        line_length = dest.line_length()
        events.append(
            _event(
                sinicon_e24_sysex(
                    _SIIICON_CONTROLLER_NUMBER,
                    dest.cell_index,
                    dest.item_index,
                    line_length,
                    color,
                    _take(chars, line_length, 0),
                )
            )
        )
    return [e for e in events if e is not None]


def _sl_keyboard_events(
    scope: SlKeyboardDisplayScope, value: TextualFeedbackValue
) -> List[RawMidiEvent]:
    chars = filter_ascii_chars(value.text)
    events = []
    for dest in scope.destinations():
        body = _take(chars, dest.line_length(), 0)
        event = _event(sl_keyboard_display_sysex(dest.section_index, dest.line_index, body))
        if event is not None:
            events.append(event)
    return events


def _seven_segment_codes(text: str) -> Iterator[int]:
    # Walk backwards because the text is right-aligned.
    reversed_chars = list(reversed(text))
    i = 0
    while i < len(reversed_chars):
        next_ch = reversed_chars[i + 1] if i + 1 < len(reversed_chars) else None
        result = convert_to_7_segment_code(reversed_chars[i], next_ch, True)
        i += 2 if result.consumed_one_more else 1
        if result.code is not None:
            yield result.code


def _seven_segment_events(
    scope: MackieSevenSegmentDisplayScope, value: TextualFeedbackValue
) -> List[RawMidiEvent]:
    codes = chain(_seven_segment_codes(value.text), repeat(_ASCII_SPACE))
    return [
        RawMidiEvent.try_from_slice(0, bytes([0xB0, 0x40 + pos, next(codes)]))
        for pos in reversed(scope.positions())
    ]


def _launchpad_scrolling_text_sysex(color: RgbColor, looped: bool, body: Iterator[int]) -> bytes:
    color_code = _closest_color_index(color, _LAUNCHPAD_PALETTE)
    start = [0xF0, 0x00, 0x20, 0x29, 0x02, 0x10, 0x14, color_code, int(looped)]
    return bytes([*start, *body, 0xF7])


def render_display_feedback(
    spec: DisplaySpec, value: FeedbackValue
) -> Optional[PreliminaryMidiSourceFeedbackValue]:
    """Raw events showing ``value`` as text on the display described by ``spec``.

    Returns None if the Launchpad scrolling text is too long to fit in one event.
    SiniCon E24 specs remember the last background color sent.
    """
    textual = value.to_textual()
    style = textual.style
    kind = DisplaySpec.Kind
    color_request = None
    if spec.kind is kind.MACKIE_LCD:
        events = _mackie_lcd_events(textual, spec.scope, spec.extender_index)
    elif spec.kind is kind.X_TOUCH_MACKIE_LCD:
        events = _mackie_lcd_events(textual, spec.scope, spec.extender_index)
        color_request = XTouchMackieLcdColorRequest(
            extender_index=spec.extender_index,
            channel=spec.scope.channel,
            color_index=(
                None
                if style.color is None
                else _closest_color_index(style.color, _X_TOUCH_PALETTE)
            ),
        )
    elif spec.kind is kind.SINICON_E24:
        events = _sinicon_events(spec, textual)
    elif spec.kind is kind.SL_KEYBOARD:
        events = _sl_keyboard_events(spec.scope, textual)
    elif spec.kind is kind.MACKIE_SEVEN_SEGMENT_DISPLAY:
        events = _seven_segment_events(spec.scope, textual)
    else:
        sysex = _launchpad_scrolling_text_sysex(
            style.color or RgbColor.WHITE, True, filter_ascii_chars(textual.text)
        )
        event = _event(sysex)
        if event is None:
            return None
        events = [event]
    info = RawFeedbackAddressInfo(RawFeedbackAddressInfo.Kind.DISPLAY, spec=spec.address())
    return PreliminaryMidiSourceFeedbackValue(
        final_value=MidiSourceValue(tuple(events), info),
        x_touch_mackie_lcd_color_request=color_request,
    )