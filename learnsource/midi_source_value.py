"""Values that MIDI sources consume and produce, and the addresses derived from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from itertools import islice
from typing import Iterable, Optional, Tuple, Union

from .displays import DisplaySpecAddress
from .messages import (
    ControlChange14BitMessage,
    DataEntryByteOrder,
    ParameterNumberMessage,
    ShortMessage,
    ShortMessageQuad,
    ShortMessageType,
)
from .values import unit_value_from_bpm


@dataclass(frozen=True)
class RawMidiEvent:
    """Raw MIDI bytes (e.g. sys-ex) with a frame offset of 1/1024000 second units."""

    frame_offset: int
    data: bytes

    MAX_LENGTH = 256

    def __post_init__(self) -> None:
        if self.frame_offset < 0:
            raise ValueError("frame offset must not be negative")
        object.__setattr__(self, "data", bytes(self.data))
        if len(self.data) > self.MAX_LENGTH:
            raise ValueError("given MIDI message too long")

    @staticmethod
    def try_from_slice(frame_offset: int, midi_message: bytes) -> RawMidiEvent:
        """Event holding a copy of ``midi_message``; raises ValueError if too long."""
        if len(midi_message) > RawMidiEvent.MAX_LENGTH:
            raise ValueError("given MIDI message too long")
        return RawMidiEvent(frame_offset, bytes(midi_message))

    @staticmethod
    def try_from_iter(frame_offset: int, iterable: Iterable[int]) -> RawMidiEvent:
        """Event built from the bytes of ``iterable``; raises ValueError if too long."""
        data = bytes(islice(iterable, RawMidiEvent.MAX_LENGTH + 1))
        if len(data) > RawMidiEvent.MAX_LENGTH:
            raise ValueError("given content too long")
        return RawMidiEvent(frame_offset, data)

    def __bytes__(self) -> bytes:
        return self.data


@dataclass(frozen=True)
class PatternByte:
    """One byte of a raw pattern address: a fixed byte, or variable when ``value`` is None."""

    value: Optional[int] = None

    def __post_init__(self) -> None:
        if self.value is not None and not 0 <= self.value <= 0xFF:
            raise ValueError(f"pattern byte {self.value} out of range")

    @property
    def is_variable(self) -> bool:
        return self.value is None


@dataclass(frozen=True)
class MidiSourceAddress:
    """Uniquely addresses a source, e.g. for source takeover and filtering."""

    class Kind(Enum):
        NOTE = "note"
        POLYPHONIC_KEY_PRESSURE = "polyphonic-key-pressure"
        CONTROL_CHANGE = "control-change"
        PROGRAM_CHANGE = "program-change"
        CHANNEL_PRESSURE = "channel-pressure"
        PITCH_BEND_CHANGE = "pitch-bend-change"
        PARAMETER_NUMBER = "parameter-number"
        DISPLAY = "display"
        RAW = "raw"
        SCRIPT = "script"

    kind: MidiSourceAddress.Kind
    channel: Optional[int] = None
    key_number: Optional[int] = None
    controller_number: Optional[int] = None
    is_14_bit: bool = False
    number: Optional[int] = None
    is_registered: bool = False
    spec: Optional[DisplaySpecAddress] = None
    pattern: Tuple[PatternByte, ...] = ()
    # For script addresses, e.g. 0x4bb0 for status byte 0xb0 and data byte 1 0x4b.
    script_bytes: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", tuple(self.pattern))
        for name in _ADDRESS_REQUIRED_FIELDS[self.kind]:
            if getattr(self, name) is None:
                raise ValueError(f"{self.kind.name} address needs {name}")


_ADDRESS_REQUIRED_FIELDS = {
    MidiSourceAddress.Kind.NOTE: ("channel", "key_number"),
    MidiSourceAddress.Kind.POLYPHONIC_KEY_PRESSURE: ("channel", "key_number"),
    MidiSourceAddress.Kind.CONTROL_CHANGE: ("channel", "controller_number"),
    MidiSourceAddress.Kind.PROGRAM_CHANGE: ("channel",),
    MidiSourceAddress.Kind.CHANNEL_PRESSURE: ("channel",),
    MidiSourceAddress.Kind.PITCH_BEND_CHANGE: ("channel",),
    MidiSourceAddress.Kind.PARAMETER_NUMBER: ("channel", "number"),
    MidiSourceAddress.Kind.DISPLAY: ("spec",),
    MidiSourceAddress.Kind.RAW: (),
    MidiSourceAddress.Kind.SCRIPT: (),
}


@dataclass(frozen=True)
class RawFeedbackAddressInfo:
    """What is needed to reconstruct the source address of a raw feedback value."""

    class Kind(Enum):
        RAW = "raw"
        DISPLAY = "display"
        CUSTOM = "custom"

    kind: RawFeedbackAddressInfo.Kind
    variable_range: Optional[range] = None
    spec: Optional[DisplaySpecAddress] = None
    address: Optional[MidiSourceAddress] = None

    def __post_init__(self) -> None:
        if self.kind is RawFeedbackAddressInfo.Kind.DISPLAY and self.spec is None:
            raise ValueError("display address info needs a spec")
        if self.kind is RawFeedbackAddressInfo.Kind.CUSTOM and self.address is None:
            raise ValueError("custom address info needs an address")


@dataclass(frozen=True)
class XTouchMackieLcdColorRequest:
    """Request to set the color of one X-Touch channel display."""

    extender_index: int
    channel: Optional[int]
    color_index: Optional[int]


MidiSourcePayload = Union[
    ShortMessage,
    ParameterNumberMessage,
    ControlChange14BitMessage,
    Tuple[RawMidiEvent, ...],
    float,
    bytes,
]


@dataclass(frozen=True)
class MidiSourceValue:
    """Incoming or outgoing MIDI value; the payload type decides its kind.

    A tuple of :class:`RawMidiEvent` is a raw value, a number is a tempo in BPM
    (control only) and ``bytes`` are incoming sys-ex (control only).
    """

    class Kind(Enum):
        PLAIN = "plain"
        PARAMETER_NUMBER = "parameter-number"
        CONTROL_CHANGE_14_BIT = "control-change-14-bit"
        RAW = "raw"
        TEMPO = "tempo"
        BORROWED_SYSEX = "borrowed-sysex"

    value: MidiSourcePayload
    feedback_address_info: Optional[RawFeedbackAddressInfo] = field(default=None)

    def __post_init__(self) -> None:
        value = self.value
        if isinstance(value, (list, tuple)):
            events = tuple(value)
            if not all(isinstance(e, RawMidiEvent) for e in events):
                raise TypeError("raw values must consist of RawMidiEvent objects")
            object.__setattr__(self, "value", events)
        elif isinstance(value, (bytearray, memoryview)):
            object.__setattr__(self, "value", bytes(value))
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            unit_value_from_bpm(float(value))
            object.__setattr__(self, "value", float(value))
        elif not isinstance(
            value, (ShortMessage, ParameterNumberMessage, ControlChange14BitMessage, bytes)
        ):
            raise TypeError(f"unsupported MIDI source value payload: {value!r}")
        if self.feedback_address_info is not None and self.kind is not MidiSourceValue.Kind.RAW:
            raise ValueError("only raw values carry feedback address info")

    @property
    def kind(self) -> MidiSourceValue.Kind:
        value = self.value
        if isinstance(value, ShortMessage):
            return MidiSourceValue.Kind.PLAIN
        if isinstance(value, ParameterNumberMessage):
            return MidiSourceValue.Kind.PARAMETER_NUMBER
        if isinstance(value, ControlChange14BitMessage):
            return MidiSourceValue.Kind.CONTROL_CHANGE_14_BIT
        if isinstance(value, tuple):
            return MidiSourceValue.Kind.RAW
        if isinstance(value, float):
            return MidiSourceValue.Kind.TEMPO
        return MidiSourceValue.Kind.BORROWED_SYSEX

    @staticmethod
    def single_raw(
        feedback_address_info: Optional[RawFeedbackAddressInfo], event: RawMidiEvent
    ) -> MidiSourceValue:
        return MidiSourceValue((event,), feedback_address_info)

    def extract_feedback_address(self) -> Optional[MidiSourceAddress]:
        """The address this value is directed to, or None if it has none."""
        value = self.value
        kind = MidiSourceAddress.Kind
        if isinstance(value, ShortMessage):
            return _short_message_address(value)
        if isinstance(value, ParameterNumberMessage):
            return MidiSourceAddress(
                kind.PARAMETER_NUMBER,
                channel=value.channel,
                number=value.number,
                is_registered=value.is_registered,
            )
        if isinstance(value, ControlChange14BitMessage):
            return MidiSourceAddress(
                kind.CONTROL_CHANGE,
                channel=value.channel,
                controller_number=value.msb_controller_number,
                is_14_bit=True,
            )
        if isinstance(value, tuple):
            info = self.feedback_address_info
            if info is None:
                return None
            if info.kind is RawFeedbackAddressInfo.Kind.RAW:
                if not value:
                    return None
                variable_range = info.variable_range
                pattern = tuple(
                    PatternByte()
                    if variable_range is not None and i in variable_range
                    else PatternByte(b)
                    for i, b in enumerate(value[0].data)
                )
                return MidiSourceAddress(kind.RAW, pattern=pattern)
            if info.kind is RawFeedbackAddressInfo.Kind.DISPLAY:
                return MidiSourceAddress(kind.DISPLAY, spec=info.spec)
            return info.address
        return None

    def channel(self) -> Optional[int]:
        value = self.value
        if isinstance(value, (ShortMessage, ParameterNumberMessage, ControlChange14BitMessage)):
            return value.channel
        return None

    def try_into_owned(self) -> MidiSourceValue:
        """Turns borrowed sys-ex into a raw value without feedback address."""
        if isinstance(self.value, bytes):
            return MidiSourceValue.single_raw(None, RawMidiEvent.try_from_slice(0, self.value))
        return self

    def to_short_messages(self, byte_order: DataEntryByteOrder) -> ShortMessageQuad:
        """The short messages to send for this value, padded with None."""
        value = self.value
        if isinstance(value, ShortMessage):
            return (value, None, None, None)
        if isinstance(value, ParameterNumberMessage):
            return value.to_short_messages(byte_order)
        if isinstance(value, ControlChange14BitMessage):
            msb, lsb = value.to_short_messages()
            return (msb, lsb, None, None)
        return (None, None, None, None)


def _short_message_address(msg: ShortMessage) -> Optional[MidiSourceAddress]:
    kind = MidiSourceAddress.Kind
    message_type = msg.message_type
    if message_type in (ShortMessageType.NOTE_ON, ShortMessageType.NOTE_OFF):
        return MidiSourceAddress(kind.NOTE, channel=msg.channel, key_number=msg.key_number)
    if message_type is ShortMessageType.POLYPHONIC_KEY_PRESSURE:
        return MidiSourceAddress(
            kind.POLYPHONIC_KEY_PRESSURE, channel=msg.channel, key_number=msg.key_number
        )
    if message_type is ShortMessageType.CONTROL_CHANGE:
        return MidiSourceAddress(
            kind.CONTROL_CHANGE,
            channel=msg.channel,
            controller_number=msg.controller_number,
            is_14_bit=False,
        )
    simple = {
        ShortMessageType.PROGRAM_CHANGE: kind.PROGRAM_CHANGE,
        ShortMessageType.CHANNEL_PRESSURE: kind.CHANNEL_PRESSURE,
        ShortMessageType.PITCH_BEND_CHANGE: kind.PITCH_BEND_CHANGE,
    }.get(message_type)
    if simple is None:
        return None
    return MidiSourceAddress(simple, channel=msg.channel)


@dataclass(frozen=True)
class PreliminaryMidiSourceFeedbackValue:
    """A final feedback value plus an optional X-Touch color request to integrate later."""

    final_value: MidiSourceValue
    x_touch_mackie_lcd_color_request: Optional[XTouchMackieLcdColorRequest] = None