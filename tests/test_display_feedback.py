import pytest

from learnsource.display_feedback import (
    convert_to_7_segment_code,
    filter_ascii_chars,
    render_display_feedback,
)
from learnsource.displays import (
    DisplaySpec,
    MackieLcdScope,
    MackieSevenSegmentDisplayScope,
    SiniConE24Scope,
    SlKeyboardDisplayScope,
)
from learnsource.midi_source_value import MidiSourceAddress
from learnsource.values import FeedbackStyle, FeedbackValue, RgbColor


def events_of(result):
    return [event.data for event in result.final_value.value]


def test_filter_ascii_chars_drops_non_ascii():
    assert list(filter_ascii_chars("aé b")) == [ord("a"), ord(" "), ord("b")]


def test_7_segment_lowercase_equals_uppercase():
    assert convert_to_7_segment_code("a", None, True) == convert_to_7_segment_code("A", None, True)


def test_7_segment_digit_keeps_ascii_code():
    result = convert_to_7_segment_code("1", None, False)
    assert result.code == ord("1")
    assert result.consumed_one_more is False


@pytest.mark.parametrize("ch", [":", "!", "@", "é", "~"])
def test_7_segment_unsupported_characters(ch):
    assert convert_to_7_segment_code(ch, None, True).code is None


def test_7_segment_decimal_point_reverse():
    plain = convert_to_7_segment_code("5", None, True)
    with_point = convert_to_7_segment_code(".", "5", True)
    assert with_point.consumed_one_more is True
    assert with_point.code == plain.code + 0x40


def test_7_segment_decimal_point_forward():
    plain = convert_to_7_segment_code("5", None, False)
    with_point = convert_to_7_segment_code("5", ".", False)
    assert with_point.code == plain.code + 0x40
    assert with_point.consumed_one_more is True


def test_mackie_lcd_single_channel_line():
    spec = DisplaySpec(DisplaySpec.Kind.MACKIE_LCD, MackieLcdScope(0, 0))
    result = render_display_feedback(spec, FeedbackValue.textual("Hi"))
    assert events_of(result) == [b"\xf0\x00\x00\x66\x14\x12\x00Hi     \xf7"]
    assert result.x_touch_mackie_lcd_color_request is None


def test_mackie_lcd_extender_and_full_scope():
    spec = DisplaySpec(DisplaySpec.Kind.MACKIE_LCD, MackieLcdScope(), extender_index=1)
    result = render_display_feedback(spec, FeedbackValue.textual("x"))
    (data,) = events_of(result)
    assert data[4] == 0x15
    body = data[7:-1]
    assert len(body) == 2 * 8 * 7
    assert body[0:1] == b"x"
    assert set(body[1:]) == {ord(" ")}


def test_mackie_lcd_text_spans_channel_lines():
    spec = DisplaySpec(DisplaySpec.Kind.MACKIE_LCD, MackieLcdScope(channel=2))
    result = render_display_feedback(spec, FeedbackValue.textual("ABCDEFGHIJ"))
    first, second = events_of(result)
    assert first[7:-1] == b"ABCDEFG"
    assert second[7:-1] == b"HIJ    "


def test_x_touch_color_request():
    spec = DisplaySpec(DisplaySpec.Kind.X_TOUCH_MACKIE_LCD, MackieLcdScope(3, 1), 2)
    style = FeedbackStyle(color=RgbColor.WHITE)
    result = render_display_feedback(spec, FeedbackValue.textual("ok", style))
    request = result.x_touch_mackie_lcd_color_request
    assert request.extender_index == 2
    assert request.channel == 3
    assert request.color_index == 7


def test_x_touch_without_color():
    spec = DisplaySpec(DisplaySpec.Kind.X_TOUCH_MACKIE_LCD, MackieLcdScope(3, 1))
    result = render_display_feedback(spec, FeedbackValue.textual("ok"))
    assert result.x_touch_mackie_lcd_color_request.color_index is None


def test_display_feedback_address():
    spec = DisplaySpec(DisplaySpec.Kind.MACKIE_LCD, MackieLcdScope(0, 0))
    result = render_display_feedback(spec, FeedbackValue.textual("Hi"))
    address = result.final_value.extract_feedback_address()
    assert address.kind is MidiSourceAddress.Kind.DISPLAY
    assert address.spec == spec.address()


def test_sinicon_background_only_sent_when_changed():
    spec = DisplaySpec(DisplaySpec.Kind.SINICON_E24, SiniConE24Scope(0, 0))
    first = events_of(render_display_feedback(spec, FeedbackValue.textual("abc")))
    assert len(first) == 2
    assert first[0][10] == 0
    assert spec.last_sent_background_color == RgbColor.BLACK
    second = events_of(render_display_feedback(spec, FeedbackValue.textual("abc")))
    assert second == [first[1]]
    text_body = first[1][14:-1]
    assert len(text_body) == 16
    assert text_body[:3] == b"abc"


def test_sinicon_changed_background_resent():
    spec = DisplaySpec(DisplaySpec.Kind.SINICON_E24, SiniConE24Scope(1, 3))
    render_display_feedback(spec, FeedbackValue.textual("x"))
    style = FeedbackStyle(background_color=RgbColor.WHITE)
    events = events_of(render_display_feedback(spec, FeedbackValue.textual("x", style)))
    assert len(events) == 2
    assert spec.last_sent_background_color == RgbColor.WHITE


def test_sl_keyboard_single_destination():
    spec = DisplaySpec(DisplaySpec.Kind.SL_KEYBOARD, SlKeyboardDisplayScope(1, 0))
    (data,) = events_of(render_display_feedback(spec, FeedbackValue.textual("Hey")))
    assert data[:6] == bytes([0xF0, 0x00, 0x20, 0x1A, 0x00, 0x02])
    assert data[6:9] == bytes([0x18, 0x00, 0x0B])
    assert data[9:15] == b"H\x00e\x00y\x00"
    assert len(data) == 9 + 2 * 10 + 3
    assert data[-3:] == bytes([0x00, 0x00, 0xF7])


def test_seven_segment_right_aligned():
    scope = MackieSevenSegmentDisplayScope.ASSIGNMENT
    spec = DisplaySpec(DisplaySpec.Kind.MACKIE_SEVEN_SEGMENT_DISPLAY, scope)
    events = events_of(render_display_feedback(spec, FeedbackValue.textual("AB")))
    code_a = convert_to_7_segment_code("A", None, True).code
    code_b = convert_to_7_segment_code("B", None, True).code
    assert events == [bytes([0xB0, 0x40 + 0x0A, code_b]), bytes([0xB0, 0x40 + 0x0B, code_a])]


def test_seven_segment_pads_with_spaces():
    scope = MackieSevenSegmentDisplayScope.TC_FRAMES_TICKS
    spec = DisplaySpec(DisplaySpec.Kind.MACKIE_SEVEN_SEGMENT_DISPLAY, scope)
    events = events_of(render_display_feedback(spec, FeedbackValue.textual("7")))
    assert [e[1] for e in events] == [0x40, 0x41, 0x42]
    assert [e[2] for e in events] == [ord("7"), ord(" "), ord(" ")]


def test_launchpad_scrolling_text():
    spec = DisplaySpec(DisplaySpec.Kind.LAUNCHPAD_PRO_SCROLLING_TEXT)
    (data,) = events_of(render_display_feedback(spec, FeedbackValue.textual("Go")))
    assert data[:7] == bytes([0xF0, 0x00, 0x20, 0x29, 0x02, 0x10, 0x14])
    assert data[7] == 3
    assert data[8] == 1
    assert data[9:] == b"Go\xf7"


def test_launchpad_text_too_long():
    spec = DisplaySpec(DisplaySpec.Kind.LAUNCHPAD_PRO_SCROLLING_TEXT)
    assert render_display_feedback(spec, FeedbackValue.textual("x" * 300)) is None