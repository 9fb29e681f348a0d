import pytest

from learnsource.displays import (
    DisplaySpec,
    DisplaySpecAddress,
    DisplayType,
    MackieLcdScope,
    MackieSevenSegmentDisplayScope,
    SiniConE24Destination,
    SiniConE24Scope,
    SlKeyboardDisplayDestination,
    SlKeyboardDisplayScope,
    mackie_lcd_sysex,
    sinicon_e24_sysex,
    sl_keyboard_display_sysex,
)
from learnsource.values import RgbColor


@pytest.mark.parametrize(
    "display_type, displays, lines",
    [
        (DisplayType.MACKIE_LCD, 8, 2),
        (DisplayType.X_TOUCH_MACKIE_XT_LCD, 8, 2),
        (DisplayType.SINICON_E24, 24, 4),
        (DisplayType.SL_KEYBOARD_DISPLAY, 5, 2),
        (DisplayType.MACKIE_SEVEN_SEGMENT_DISPLAY, 0, 1),
        (DisplayType.LAUNCHPAD_PRO_SCROLLING_TEXT, 0, 1),
    ],
)
def test_display_and_line_counts(display_type, displays, lines):
    assert display_type.display_count() == displays
    assert display_type.line_count() == lines


def test_display_type_labels_and_names():
    assert str(DisplayType.MACKIE_LCD) == "Mackie LCD"
    assert DisplayType("sinicon-e24") is DisplayType.SINICON_E24


def test_seven_segment_positions():
    assert MackieSevenSegmentDisplayScope.ALL.positions() == (
        0x0B, 0x0A, 9, 8, 7, 6, 5, 4, 3, 2, 1, 0,
    )
    assert MackieSevenSegmentDisplayScope.TC_HOURS_BARS.positions() == (9, 8, 7)


def test_seven_segment_positions_compose():
    s = MackieSevenSegmentDisplayScope
    assert s.ALL.positions() == s.ASSIGNMENT.positions() + s.TC.positions()
    assert s.TC.positions() == (
        s.TC_HOURS_BARS.positions()
        + s.TC_MINUTES_BEATS.positions()
        + s.TC_SECONDS_SUB.positions()
        + s.TC_FRAMES_TICKS.positions()
    )


def test_mackie_lcd_scope_clamps():
    scope = MackieLcdScope(20, 5)
    assert (scope.channel, scope.line) == (7, 1)
    with pytest.raises(ValueError):
        MackieLcdScope(-1, None)


def test_mackie_lcd_portions_whole_and_line():
    assert MackieLcdScope(None, None).lcd_portions() == [range(0, 112)]
    line_1 = MackieLcdScope(None, 1).lcd_portions()
    assert len(line_1) == 1
    assert len(line_1[0]) == MackieLcdScope.LINE_LEN
    assert line_1[0].stop == 112


def test_mackie_lcd_channel_portions_cover_both_lines():
    both = MackieLcdScope(2, None).lcd_portions()
    assert both == MackieLcdScope(2, 0).lcd_portions() + MackieLcdScope(2, 1).lcd_portions()
    assert all(len(r) == MackieLcdScope.CHANNEL_LEN for r in both)
    assert both[1].start - both[0].start == MackieLcdScope.LINE_LEN


def test_sl_keyboard_destinations():
    all_dests = SlKeyboardDisplayScope().destinations()
    assert len(all_dests) == 10
    assert all_dests[:2] == [
        SlKeyboardDisplayDestination(0, 0),
        SlKeyboardDisplayDestination(0, 1),
    ]
    assert SlKeyboardDisplayScope(9, 9).destinations() == [SlKeyboardDisplayDestination(4, 1)]
    assert all(d.line_index == 1 for d in SlKeyboardDisplayScope(None, 1).destinations())


@pytest.mark.parametrize(
    "section, line, length",
    [(0, 0, 13), (0, 1, 0), (2, 0, 10), (3, 1, 9), (4, 0, 0)],
)
def test_sl_keyboard_line_length(section, line, length):
    assert SlKeyboardDisplayDestination(section, line).line_length() == length


def test_sinicon_destinations():
    assert len(SiniConE24Scope().destinations()) == 24 * 4
    column = SiniConE24Scope(None, 2).destinations()
    assert len(column) == 24
    assert {d.item_index for d in column} == {2}
    assert SiniConE24Scope(3, 1).destinations() == [SiniConE24Destination(3, 1)]


@pytest.mark.parametrize("item, length", [(0, 16), (2, 16), (3, 9), (4, 0)])
def test_sinicon_line_length(item, length):
    assert SiniConE24Destination(0, item).line_length() == length


def test_x_touch_spec_shares_mackie_lcd_address():
    scope = MackieLcdScope(1, 0)
    x_touch = DisplaySpec(DisplaySpec.Kind.X_TOUCH_MACKIE_LCD, scope, extender_index=2)
    mackie = DisplaySpec(DisplaySpec.Kind.MACKIE_LCD, scope, extender_index=2)
    assert x_touch.address() == mackie.address()
    assert x_touch.address() == DisplaySpecAddress(
        DisplaySpecAddress.Kind.MACKIE_LCD, scope, 2
    )


def test_spec_address_kinds():
    spec = DisplaySpec(DisplaySpec.Kind.SL_KEYBOARD, SlKeyboardDisplayScope(1, 1))
    assert spec.address().kind is DisplaySpecAddress.Kind.SL_KEYBOARD_DISPLAY
    launchpad = DisplaySpec(DisplaySpec.Kind.LAUNCHPAD_PRO_SCROLLING_TEXT)
    assert launchpad.address() == DisplaySpecAddress(
        DisplaySpecAddress.Kind.LAUNCHPAD_PRO_SCROLLING_TEXT
    )


def test_spec_equality_ignores_background_state():
    scope = SiniConE24Scope(0, 0)
    a = DisplaySpec(DisplaySpec.Kind.SINICON_E24, scope)
    b = DisplaySpec(DisplaySpec.Kind.SINICON_E24, scope, last_sent_background_color=RgbColor.BLACK)
    assert a == b


def test_spec_rejects_wrong_scope():
    with pytest.raises(TypeError):
        DisplaySpec(DisplaySpec.Kind.MACKIE_LCD, SiniConE24Scope())
    with pytest.raises(TypeError):
        DisplaySpec(DisplaySpec.Kind.LAUNCHPAD_PRO_SCROLLING_TEXT, MackieLcdScope())


def test_mackie_lcd_sysex_bytes():
    assert mackie_lcd_sysex(0x14, 0, b"AB") == bytes(
        [0xF0, 0x00, 0x00, 0x66, 0x14, 0x12, 0x00, 0x41, 0x42, 0xF7]
    )


def test_sinicon_sysex_structure():
    color = RgbColor(10, 20, 30)
    sysex = sinicon_e24_sysex(1, 0, 3, 9, color, b"Hi")
    assert sysex[:4] == bytes([0xF0, 0x00, 0x02, 0x38])
    assert sysex[4:14] == bytes([1, 1, 1, 4, 1, 0, 9, 10, 20, 30])
    assert sysex[14:] == b"Hi" + bytes([0xF7])


def test_sl_keyboard_sysex_bytes():
    assert sl_keyboard_display_sysex(1, 0, [0x41]) == bytes(
        [0xF0, 0x00, 0x20, 0x1A, 0x00, 0x02, 0x18, 0x00, 0x0B, 0x41, 0x00, 0x00, 0x00, 0xF7]
    )


def test_sl_keyboard_sysex_interleaves_zeros():
    sysex = sl_keyboard_display_sysex(0, 1, b"ABC")
    body = sysex[9:-3]
    assert body[::2] == b"ABC"
    assert set(body[1::2]) == {0}


def test_sl_keyboard_sysex_unsupported_position():
    with pytest.raises(ValueError):
        sl_keyboard_display_sysex(5, 0, b"")