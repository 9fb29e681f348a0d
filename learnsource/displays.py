"""Hardware display descriptions: display types, scopes, specs and their sys-ex framing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import ClassVar, Iterable, List, Optional, Tuple, Union

from .values import RgbColor

_SYSEX_START = 0xF0
_SYSEX_END = 0xF7


def _clamped_index(value: Optional[int], count: int, what: str) -> Optional[int]:
    if value is None:
        return None
    if value < 0:
        raise ValueError(f"{what} {value} must not be negative")
    return min(value, count - 1)


class DisplayType(Enum):
    """Kinds of displays a display source can drive."""

    MACKIE_LCD = "mackie-lcd"
    MACKIE_XT_LCD = "mackie-xt-lcd"
    X_TOUCH_MACKIE_LCD = "x-touch-mackie-lcd"
    X_TOUCH_MACKIE_XT_LCD = "x-touch-mackie-xt-lcd"
    MACKIE_SEVEN_SEGMENT_DISPLAY = "mackie-seven"
    SINICON_E24 = "sinicon-e24"
    LAUNCHPAD_PRO_SCROLLING_TEXT = "launchpad-pro-scrolling-text"
    SL_KEYBOARD_DISPLAY = "sl-keyboard"

    def __str__(self) -> str:
        return _DISPLAY_TYPE_LABELS[self]

    def _is_mackie_lcd(self) -> bool:
        return self in (
            DisplayType.MACKIE_LCD,
            DisplayType.MACKIE_XT_LCD,
            DisplayType.X_TOUCH_MACKIE_LCD,
            DisplayType.X_TOUCH_MACKIE_XT_LCD,
        )

    def display_count(self) -> int:
        """Number of individually addressable displays; 0 if not applicable."""
        if self._is_mackie_lcd():
            return MackieLcdScope.CHANNEL_COUNT
        if self is DisplayType.SINICON_E24:
            return SiniConE24Scope.CELL_COUNT
        if self is DisplayType.SL_KEYBOARD_DISPLAY:
            return SlKeyboardDisplayScope.SECTION_COUNT
        return 0

    def line_count(self) -> int:
        """Number of lines per display; 1 if not applicable."""
        if self._is_mackie_lcd():
            return MackieLcdScope.LINE_COUNT
        if self is DisplayType.SINICON_E24:
            return SiniConE24Scope.ITEM_COUNT
        if self is DisplayType.SL_KEYBOARD_DISPLAY:
            return SlKeyboardDisplayScope.LINE_COUNT
        return 1


_DISPLAY_TYPE_LABELS = {
    DisplayType.MACKIE_LCD: "Mackie LCD",
    DisplayType.MACKIE_XT_LCD: "Mackie XT LCD",
    DisplayType.X_TOUCH_MACKIE_LCD: "X-Touch Mackie LCD",
    DisplayType.X_TOUCH_MACKIE_XT_LCD: "X-Touch Mackie XT LCD",
    DisplayType.MACKIE_SEVEN_SEGMENT_DISPLAY: "Mackie 7-segment display",
    DisplayType.SINICON_E24: "SiniCon E24 display",
    DisplayType.LAUNCHPAD_PRO_SCROLLING_TEXT: "Launchpad Pro - Scrolling text",
    DisplayType.SL_KEYBOARD_DISPLAY: "Studiologic SL Keyboard display",
}


class MackieSevenSegmentDisplayScope(IntEnum):
    """Which part of the Mackie 7-segment display is addressed."""

    ALL = 0
    ASSIGNMENT = 1
    TC = 2
    TC_HOURS_BARS = 3
    TC_MINUTES_BEATS = 4
    TC_SECONDS_SUB = 5
    TC_FRAMES_TICKS = 6

    def __str__(self) -> str:
        return _SEVEN_SEGMENT_LABELS[self]

    def positions(self) -> Tuple[int, ...]:
        """Display positions, left to right."""
        return _SEVEN_SEGMENT_POSITIONS[self]


_SEVEN_SEGMENT_LABELS = {
    MackieSevenSegmentDisplayScope.ALL: "<All>",
    MackieSevenSegmentDisplayScope.ASSIGNMENT: "Assignment",
    MackieSevenSegmentDisplayScope.TC: "Time code",
    MackieSevenSegmentDisplayScope.TC_HOURS_BARS: ".... Hours/bars (3)",
    MackieSevenSegmentDisplayScope.TC_MINUTES_BEATS: ".... Minutes/beats (2)",
    MackieSevenSegmentDisplayScope.TC_SECONDS_SUB: ".... Seconds/sub (2)",
    MackieSevenSegmentDisplayScope.TC_FRAMES_TICKS: ".... Frames/ticks (3)",
}

_SEVEN_SEGMENT_POSITIONS = {
    MackieSevenSegmentDisplayScope.ALL: (0x0B, 0x0A, 9, 8, 7, 6, 5, 4, 3, 2, 1, 0),
    MackieSevenSegmentDisplayScope.ASSIGNMENT: (0x0B, 0x0A),
    MackieSevenSegmentDisplayScope.TC: (9, 8, 7, 6, 5, 4, 3, 2, 1, 0),
    MackieSevenSegmentDisplayScope.TC_HOURS_BARS: (9, 8, 7),
    MackieSevenSegmentDisplayScope.TC_MINUTES_BEATS: (6, 5),
    MackieSevenSegmentDisplayScope.TC_SECONDS_SUB: (4, 3),
    MackieSevenSegmentDisplayScope.TC_FRAMES_TICKS: (2, 1, 0),
}


@dataclass(frozen=True)
class MackieLcdScope:
    """Channel and line of a Mackie LCD; None means all. Indexes are clamped."""

    channel: Optional[int] = None
    line: Optional[int] = None

    CHANNEL_LEN: ClassVar[int] = 7
    CHANNEL_COUNT: ClassVar[int] = 8
    LINE_COUNT: ClassVar[int] = 2
    LINE_LEN: ClassVar[int] = 8 * 7

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "channel", _clamped_index(self.channel, self.CHANNEL_COUNT, "channel")
        )
        object.__setattr__(self, "line", _clamped_index(self.line, self.LINE_COUNT, "line"))

    def lcd_portions(self) -> List[range]:
        """Disjoint position intervals on the LCD, each left to right."""

        def portion(start: int, length: int) -> range:
            return range(start, start + length)

        if self.channel is None:
            if self.line is None:
                return [portion(0, self.LINE_COUNT * self.LINE_LEN)]
            return [portion(self.line * self.LINE_LEN, self.LINE_LEN)]
        lines = range(self.LINE_COUNT) if self.line is None else (self.line,)
        return [
            portion(line * self.LINE_LEN + self.channel * self.CHANNEL_LEN, self.CHANNEL_LEN)
            for line in lines
        ]


@dataclass(frozen=True)
class SlKeyboardDisplayDestination:
    section_index: int
    line_index: int

    def line_length(self) -> int:
        if self.section_index == 0 and self.line_index == 0:
            return 13
        if 1 <= self.section_index <= 3:
            if self.line_index == 0:
                return 10
            if self.line_index == 1:
                return 9
        return 0


@dataclass(frozen=True)
class SlKeyboardDisplayScope:
    """Section and line of a Studiologic SL keyboard display; None means all."""

    section: Optional[int] = None
    line: Optional[int] = None

    SECTION_COUNT: ClassVar[int] = 5
    # The main display has one line only; its second line is treated like the first.
    LINE_COUNT: ClassVar[int] = 2

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "section", _clamped_index(self.section, self.SECTION_COUNT, "section")
        )
        object.__setattr__(self, "line", _clamped_index(self.line, self.LINE_COUNT, "line"))

    def destinations(self) -> List[SlKeyboardDisplayDestination]:
        sections = range(self.SECTION_COUNT) if self.section is None else (self.section,)
        lines = range(self.LINE_COUNT) if self.line is None else (self.line,)
        return [SlKeyboardDisplayDestination(s, l) for s in sections for l in lines]


@dataclass(frozen=True)
class SiniConE24Destination:
    cell_index: int
    item_index: int

    def line_length(self) -> int:
        if 0 <= self.item_index <= 2:
            return 16
        if self.item_index == 3:
            return 9
        return 0


@dataclass(frozen=True)
class SiniConE24Scope:
    """Cell and item of a SiniCon E24 display; None means all. Indexes are clamped."""

    cell_index: Optional[int] = None
    item_index: Optional[int] = None

    CELL_COUNT: ClassVar[int] = 24
    ITEM_COUNT: ClassVar[int] = 4

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "cell_index", _clamped_index(self.cell_index, self.CELL_COUNT, "cell index")
        )
        object.__setattr__(
            self, "item_index", _clamped_index(self.item_index, self.ITEM_COUNT, "item index")
        )

    def destinations(self) -> List[SiniConE24Destination]:
        cells = range(self.CELL_COUNT) if self.cell_index is None else (self.cell_index,)
        items = range(self.ITEM_COUNT) if self.item_index is None else (self.item_index,)
        return [SiniConE24Destination(c, i) for c in cells for i in items]


DisplayScope = Union[
    MackieLcdScope, MackieSevenSegmentDisplayScope, SlKeyboardDisplayScope, SiniConE24Scope
]


def _check_scope(kind: Enum, scope: object, expected: Optional[type]) -> None:
    if expected is None:
        if scope is not None:
            raise TypeError(f"{kind.name} takes no scope")
    elif not isinstance(scope, expected):
        raise TypeError(f"{kind.name} needs a {expected.__name__}, got {scope!r}")


def _check_extender_index(extender_index: int) -> None:
    if not 0 <= extender_index <= 0xFF:
        raise ValueError(f"extender index {extender_index} out of range")


@dataclass(frozen=True)
class DisplaySpecAddress:
    """Uniquely identifies the display area a display source writes to."""

    class Kind(Enum):
        MACKIE_LCD = "mackie-lcd"
        MACKIE_SEVEN_SEGMENT_DISPLAY = "mackie-seven"
        SL_KEYBOARD_DISPLAY = "sl-keyboard"
        SINICON_E24 = "sinicon-e24"
        LAUNCHPAD_PRO_SCROLLING_TEXT = "launchpad-pro-scrolling-text"
        X_TOUCH_MACKIE_LCD_COLORS = "x-touch-mackie-lcd-colors"

    kind: DisplaySpecAddress.Kind
    scope: Optional[DisplayScope] = None
    extender_index: int = 0

    def __post_init__(self) -> None:
        _check_scope(self.kind, self.scope, _ADDRESS_SCOPE_TYPES[self.kind])
        _check_extender_index(self.extender_index)


_ADDRESS_SCOPE_TYPES = {
    DisplaySpecAddress.Kind.MACKIE_LCD: MackieLcdScope,
    DisplaySpecAddress.Kind.MACKIE_SEVEN_SEGMENT_DISPLAY: MackieSevenSegmentDisplayScope,
    DisplaySpecAddress.Kind.SL_KEYBOARD_DISPLAY: SlKeyboardDisplayScope,
    DisplaySpecAddress.Kind.SINICON_E24: SiniConE24Scope,
    DisplaySpecAddress.Kind.LAUNCHPAD_PRO_SCROLLING_TEXT: None,
    DisplaySpecAddress.Kind.X_TOUCH_MACKIE_LCD_COLORS: None,
}


@dataclass
class DisplaySpec:
    """A concrete display to send text to.

    ``last_sent_background_color`` is state remembered between feedback runs
    (SiniCon E24 only) and is ignored when comparing specs.
    """

    class Kind(Enum):
        MACKIE_LCD = "mackie-lcd"
        X_TOUCH_MACKIE_LCD = "x-touch-mackie-lcd"
        MACKIE_SEVEN_SEGMENT_DISPLAY = "mackie-seven"
        SL_KEYBOARD = "sl-keyboard"
        SINICON_E24 = "sinicon-e24"
        LAUNCHPAD_PRO_SCROLLING_TEXT = "launchpad-pro-scrolling-text"

    kind: DisplaySpec.Kind
    scope: Optional[DisplayScope] = None
    extender_index: int = 0
    last_sent_background_color: Optional[RgbColor] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        _check_scope(self.kind, self.scope, _SPEC_SCOPE_TYPES[self.kind])
        _check_extender_index(self.extender_index)

    def address(self) -> DisplaySpecAddress:
        """The address of the display area this spec writes to."""
        kind = self.kind
        if kind in (DisplaySpec.Kind.MACKIE_LCD, DisplaySpec.Kind.X_TOUCH_MACKIE_LCD):
            return DisplaySpecAddress(
                DisplaySpecAddress.Kind.MACKIE_LCD, self.scope, self.extender_index
            )
        if kind is DisplaySpec.Kind.MACKIE_SEVEN_SEGMENT_DISPLAY:
            return DisplaySpecAddress(
                DisplaySpecAddress.Kind.MACKIE_SEVEN_SEGMENT_DISPLAY, self.scope
            )
        if kind is DisplaySpec.Kind.SINICON_E24:
            return DisplaySpecAddress(DisplaySpecAddress.Kind.SINICON_E24, self.scope)
        if kind is DisplaySpec.Kind.SL_KEYBOARD:
            return DisplaySpecAddress(DisplaySpecAddress.Kind.SL_KEYBOARD_DISPLAY, self.scope)
        return DisplaySpecAddress(DisplaySpecAddress.Kind.LAUNCHPAD_PRO_SCROLLING_TEXT)


_SPEC_SCOPE_TYPES = {
    DisplaySpec.Kind.MACKIE_LCD: MackieLcdScope,
    DisplaySpec.Kind.X_TOUCH_MACKIE_LCD: MackieLcdScope,
    DisplaySpec.Kind.MACKIE_SEVEN_SEGMENT_DISPLAY: MackieSevenSegmentDisplayScope,
    DisplaySpec.Kind.SL_KEYBOARD: SlKeyboardDisplayScope,
    DisplaySpec.Kind.SINICON_E24: SiniConE24Scope,
    DisplaySpec.Kind.LAUNCHPAD_PRO_SCROLLING_TEXT: None,
}


def mackie_lcd_sysex(model_id: int, display_offset: int, body: Iterable[int]) -> bytes:
    """Sys-ex writing ``body`` to a Mackie LCD starting at ``display_offset``."""
    start = [_SYSEX_START, 0x00, 0x00, 0x66, model_id, 0x12, display_offset]
    return bytes([*start, *body, _SYSEX_END])


def sinicon_e24_sysex(
    controller_number: int,
    cell_index: int,
    item_index: int,
    line_length: int,
    color: RgbColor,
    body: Iterable[int],
) -> bytes:
    """Sys-ex for a SiniCon E24 text item; a line length of 0 sets the background color."""
    display_type = 1  # 4 lines
    item_type = 1  # text
    item_style = 0
    start = [
        _SYSEX_START,
        0x00,
        0x02,
        0x38,
        controller_number,
        cell_index + 1,
        display_type,
        item_index + 1,
        item_type,
        item_style,
        line_length,
        color.r,
        color.g,
        color.b,
    ]
    return bytes([*start, *body, _SYSEX_END])


_SL_KEYBOARD_PREFIXES = {
    (0, 0): (0x01, 0x00, 0x0E),
    (0, 1): (0x01, 0x00, 0x0E),
    (1, 0): (0x18, 0x00, 0x0B),
    (1, 1): (0x48, 0x00, 0x0A),
    (2, 0): (0x24, 0x00, 0x0B),
    (2, 1): (0x53, 0x00, 0x0A),
    (3, 0): (0x30, 0x00, 0x0B),
    (3, 1): (0x5E, 0x00, 0x0A),
    (4, 0): (0x3C, 0x00, 0x0B),
    (4, 1): (0x69, 0x00, 0x0A),
}


def sl_keyboard_display_sysex(section_index: int, line_index: int, body: Iterable[int]) -> bytes:
    """Sys-ex writing ``body`` to one line of a Studiologic SL keyboard display."""
    try:
        prefix = _SL_KEYBOARD_PREFIXES[(section_index, line_index)]
    except KeyError:
        raise ValueError(
            f"unsupported combination of section and line: ({section_index}, {line_index})"
        ) from None
    start = [_SYSEX_START, 0x00, 0x20, 0x1A, 0x00, 0x02]
    expanded_body = [b for ch in body for b in (ch, 0x00)]
    return bytes([*start, *prefix, *expanded_body, 0x00, 0x00, _SYSEX_END])