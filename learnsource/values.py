"""Value types shared by sources: unit values, fractions, increments and feedback values."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union

_U7_MAX = 127
_U14_MAX = 16383
_MIN_BPM = 1.0
_MAX_BPM = 960.0


def _round_half_away(x: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if x >= 0:
        return math.floor(x + 0.5)
    return -math.floor(-x + 0.5)


@dataclass(frozen=True, order=True)
class UnitValue:
    """A float within the closed interval 0.0 to 1.0."""

    value: float

    MIN: ClassVar[UnitValue]
    MAX: ClassVar[UnitValue]

    def __post_init__(self) -> None:
        if not 0.0 <= self.value <= 1.0:
            raise ValueError(f"{self.value!r} is not within the unit interval")
        object.__setattr__(self, "value", float(self.value))

    def to_discrete(self, max_value: int) -> int:
        """Scale to 0..max_value, rounding halves away from zero."""
        return _round_half_away(self.value * max_value)

    def is_on(self) -> bool:
        return self.value > 0.0

    def __str__(self) -> str:
        return f"{self.value:.4f}"


UnitValue.MIN = UnitValue(0.0)
UnitValue.MAX = UnitValue(1.0)


@dataclass(frozen=True)
class Fraction:
    """A discrete value between 0 and ``max_val``; ``actual`` is clamped to ``max_val``."""

    actual: int
    max_val: int

    def __post_init__(self) -> None:
        if self.actual < 0 or self.max_val < 0:
            raise ValueError("fraction parts must not be negative")
        if self.actual > self.max_val:
            object.__setattr__(self, "actual", self.max_val)

    def to_unit_value(self) -> UnitValue:
        if self.max_val == 0:
            return UnitValue.MIN
        return UnitValue(min(1.0, self.actual / self.max_val))

    def is_on(self) -> bool:
        return self.actual > 0

    def __str__(self) -> str:
        return str(self.actual)


def _check_7_bit(value: int) -> int:
    if not 0 <= value <= _U7_MAX:
        raise ValueError(f"{value} is not a 7-bit value")
    return value


@dataclass(frozen=True)
class DiscreteIncrement:
    """A non-zero relative step."""

    increment: int

    def __post_init__(self) -> None:
        if self.increment == 0:
            raise ValueError("increment must not be zero")

    @staticmethod
    def from_encoder_1_value(value: int) -> DiscreteIncrement:
        """127 = decrement, 0 = none, 1 = increment."""
        value = _check_7_bit(value)
        if value == 0:
            raise ValueError("neutral encoder value")
        return DiscreteIncrement(value if value <= 63 else value - 128)

    @staticmethod
    def from_encoder_2_value(value: int) -> DiscreteIncrement:
        """63 = decrement, 64 = none, 65 = increment."""
        value = _check_7_bit(value)
        if value == 64:
            raise ValueError("neutral encoder value")
        return DiscreteIncrement(value - 64)

    @staticmethod
    def from_encoder_3_value(value: int) -> DiscreteIncrement:
        """65 = decrement, 0 = none, 1 = increment."""
        value = _check_7_bit(value)
        if value == 0:
            raise ValueError("neutral encoder value")
        return DiscreteIncrement(value if value <= 64 else -(value - 64))


@dataclass(frozen=True)
class ControlValue:
    """A control value; its payload type decides whether it's absolute or relative."""

    value: Union[UnitValue, Fraction, DiscreteIncrement]

    def __post_init__(self) -> None:
        if not isinstance(self.value, (UnitValue, Fraction, DiscreteIncrement)):
            raise TypeError(f"unsupported control value payload: {self.value!r}")

    @staticmethod
    def absolute_continuous(value: float) -> ControlValue:
        return ControlValue(UnitValue(value))

    @staticmethod
    def absolute_discrete(actual: int, max_val: int) -> ControlValue:
        return ControlValue(Fraction(actual, max_val))

    @staticmethod
    def relative(increment: int) -> ControlValue:
        return ControlValue(DiscreteIncrement(increment))

    def to_unit_value(self) -> UnitValue:
        if isinstance(self.value, UnitValue):
            return self.value
        if isinstance(self.value, Fraction):
            return self.value.to_unit_value()
        raise ValueError("relative values don't have a unit value")

    def to_absolute_continuous(self) -> ControlValue:
        return ControlValue(self.to_unit_value())


class DetailedSourceCharacter(Enum):
    RANGE_CONTROL = "range-control"
    MOMENTARY_VELOCITY_SENSITIVE_BUTTON = "momentary-velocity-sensitive-button"
    MOMENTARY_ON_OFF_BUTTON = "momentary-on-off-button"
    TRIGGER = "trigger"
    RELATIVE = "relative"


@dataclass(frozen=True)
class RgbColor:
    r: int
    g: int
    b: int

    WHITE: ClassVar[RgbColor]
    BLACK: ClassVar[RgbColor]

    def __post_init__(self) -> None:
        for component in (self.r, self.g, self.b):
            if not 0 <= component <= 255:
                raise ValueError(f"color component {component} out of range")


RgbColor.WHITE = RgbColor(255, 255, 255)
RgbColor.BLACK = RgbColor(0, 0, 0)


@dataclass(frozen=True)
class FeedbackStyle:
    color: Optional[RgbColor] = None
    background_color: Optional[RgbColor] = None


@dataclass(frozen=True)
class NumericFeedbackValue:
    value: Union[UnitValue, Fraction]
    style: FeedbackStyle = field(default_factory=FeedbackStyle)


@dataclass(frozen=True)
class TextualFeedbackValue:
    text: str
    style: FeedbackStyle = field(default_factory=FeedbackStyle)


@dataclass(frozen=True)
class FeedbackValue:
    """Feedback sent to a source: off, numeric or textual."""

    content: Union[NumericFeedbackValue, TextualFeedbackValue, None] = None

    @staticmethod
    def numeric(value: Union[UnitValue, Fraction], style: Optional[FeedbackStyle] = None) -> FeedbackValue:
        return FeedbackValue(NumericFeedbackValue(value, style or FeedbackStyle()))

    @staticmethod
    def textual(text: str, style: Optional[FeedbackStyle] = None) -> FeedbackValue:
        return FeedbackValue(TextualFeedbackValue(text, style or FeedbackStyle()))

    @staticmethod
    def off() -> FeedbackValue:
        return FeedbackValue(None)

    def to_numeric(self) -> Optional[NumericFeedbackValue]:
        """Numeric view; off counts as zero, text has none."""
        if self.content is None:
            return NumericFeedbackValue(UnitValue.MIN)
        if isinstance(self.content, NumericFeedbackValue):
            return self.content
        return None

    def to_textual(self) -> TextualFeedbackValue:
        if self.content is None:
            return TextualFeedbackValue("")
        if isinstance(self.content, NumericFeedbackValue):
            return TextualFeedbackValue(str(self.content.value), self.content.style)
        return self.content


def normalize_n_bit(value: int, resolution: int) -> Fraction:
    max_val = 2**resolution - 1
    if not 0 <= value <= max_val:
        raise ValueError(f"value {value} not {resolution}-bit")
    return Fraction(value, max_val)


def normalize_14_bit_centered(value: int) -> Fraction:
    """Inverse of :func:`denormalize_14_bit_centered`."""
    if not 0 <= value <= _U14_MAX:
        raise ValueError(f"value {value} not 14-bit")
    if value == _U14_MAX:
        return Fraction(_U14_MAX, _U14_MAX)
    return Fraction(value, _U14_MAX + 1)


def _denormalize(value: Union[UnitValue, Fraction], max_val: int) -> int:
    if isinstance(value, Fraction):
        return value.actual if value.actual <= max_val else max_val
    return _round_half_away(value.value * max_val)


def denormalize_7_bit(value: Union[UnitValue, Fraction]) -> int:
    return _denormalize(value, _U7_MAX)


def denormalize_14_bit(value: Union[UnitValue, Fraction]) -> int:
    return _denormalize(value, _U14_MAX)


def denormalize_14_bit_centered(value: Union[UnitValue, Fraction]) -> int:
    """Map onto 0..16384 and clamp to 16383, giving the range a discrete center (8192)."""
    if isinstance(value, Fraction):
        return _denormalize(value, _U14_MAX)
    return min(_round_half_away(value.value * (_U14_MAX + 1)), _U14_MAX)


def bpm_from_unit_value(value: UnitValue) -> float:
    return _MIN_BPM + value.value * (_MAX_BPM - _MIN_BPM)


def unit_value_from_bpm(bpm: float) -> UnitValue:
    if not _MIN_BPM <= bpm <= _MAX_BPM:
        raise ValueError(f"{bpm} is not a valid BPM value")
    return UnitValue((bpm - _MIN_BPM) / (_MAX_BPM - _MIN_BPM))


def format_percentage_without_unit(value: float) -> str:
    percent = value * 100.0
    if abs(percent - round(percent)) < 0.00001:
        return f"{round(percent):d}"
    return f"{percent:.2f}"


def parse_percentage_without_unit(text: str) -> float:
    try:
        decimal = float(text)
    except ValueError:
        raise ValueError("not a decimal value") from None
    return decimal / 100.0