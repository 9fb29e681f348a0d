"""MIDI short messages and the composite messages built from several of them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

_U7_MAX = 127
_U14_MAX = 16383

_DATA_ENTRY_MSB = 6
_DATA_ENTRY_LSB = 38
_DATA_INCREMENT = 96
_DATA_DECREMENT = 97
_NRPN_LSB = 98
_NRPN_MSB = 99
_RPN_LSB = 100
_RPN_MSB = 101

_PARAMETER_NUMBER_CONTROLLERS = frozenset(
    {
        _DATA_ENTRY_MSB,
        _DATA_ENTRY_LSB,
        _DATA_INCREMENT,
        _DATA_DECREMENT,
        _NRPN_LSB,
        _NRPN_MSB,
        _RPN_LSB,
        _RPN_MSB,
    }
)


def _check_range(value: int, maximum: int, what: str) -> int:
    if not 0 <= value <= maximum:
        raise ValueError(f"{what} {value} out of range 0..{maximum}")
    return value


def _check_channel(channel: int) -> int:
    return _check_range(channel, 15, "channel")


def _check_7_bit(value: int, what: str = "value") -> int:
    return _check_range(value, _U7_MAX, what)


def _check_14_bit(value: int, what: str = "value") -> int:
    return _check_range(value, _U14_MAX, what)


class ShortMessageType(Enum):
    """Type of a short message, identified by its status byte (channel bits zeroed)."""

    NOTE_OFF = 0x80
    NOTE_ON = 0x90
    POLYPHONIC_KEY_PRESSURE = 0xA0
    CONTROL_CHANGE = 0xB0
    PROGRAM_CHANGE = 0xC0
    CHANNEL_PRESSURE = 0xD0
    PITCH_BEND_CHANGE = 0xE0
    SYSTEM_EXCLUSIVE_START = 0xF0
    TIME_CODE_QUARTER_FRAME = 0xF1
    SONG_POSITION_POINTER = 0xF2
    SONG_SELECT = 0xF3
    SYSTEM_COMMON_UNDEFINED_1 = 0xF4
    SYSTEM_COMMON_UNDEFINED_2 = 0xF5
    TUNE_REQUEST = 0xF6
    SYSTEM_EXCLUSIVE_END = 0xF7
    TIMING_CLOCK = 0xF8
    SYSTEM_REAL_TIME_UNDEFINED_1 = 0xF9
    START = 0xFA
    CONTINUE = 0xFB
    STOP = 0xFC
    SYSTEM_REAL_TIME_UNDEFINED_2 = 0xFD
    ACTIVE_SENSING = 0xFE
    SYSTEM_RESET = 0xFF


def _type_of_status(status: int) -> ShortMessageType:
    if not 0x80 <= status <= 0xFF:
        raise ValueError(f"status byte {status:#x} is not a status byte")
    return ShortMessageType(status & 0xF0 if status < 0xF0 else status)


@dataclass(frozen=True)
class ShortMessage:
    """A MIDI message of at most three bytes."""

    status: int
    data_1: int = 0
    data_2: int = 0

    def __post_init__(self) -> None:
        _type_of_status(self.status)
        _check_7_bit(self.data_1, "data byte 1")
        _check_7_bit(self.data_2, "data byte 2")

    @staticmethod
    def _channel_message(
        message_type: ShortMessageType, channel: int, data_1: int, data_2: int = 0
    ) -> ShortMessage:
        return ShortMessage(message_type.value | _check_channel(channel), data_1, data_2)

    @staticmethod
    def note_on(channel: int, key_number: int, velocity: int) -> ShortMessage:
        return ShortMessage._channel_message(
            ShortMessageType.NOTE_ON, channel, key_number, velocity
        )

    @staticmethod
    def note_off(channel: int, key_number: int, velocity: int) -> ShortMessage:
        return ShortMessage._channel_message(
            ShortMessageType.NOTE_OFF, channel, key_number, velocity
        )

    @staticmethod
    def polyphonic_key_pressure(
        channel: int, key_number: int, pressure_amount: int
    ) -> ShortMessage:
        return ShortMessage._channel_message(
            ShortMessageType.POLYPHONIC_KEY_PRESSURE, channel, key_number, pressure_amount
        )

    @staticmethod
    def control_change(
        channel: int, controller_number: int, control_value: int
    ) -> ShortMessage:
        return ShortMessage._channel_message(
            ShortMessageType.CONTROL_CHANGE, channel, controller_number, control_value
        )

    @staticmethod
    def program_change(channel: int, program_number: int) -> ShortMessage:
        return ShortMessage._channel_message(
            ShortMessageType.PROGRAM_CHANGE, channel, program_number
        )

    @staticmethod
    def channel_pressure(channel: int, pressure_amount: int) -> ShortMessage:
        return ShortMessage._channel_message(
            ShortMessageType.CHANNEL_PRESSURE, channel, pressure_amount
        )

    @staticmethod
    def pitch_bend_change(channel: int, pitch_bend_value: int) -> ShortMessage:
        _check_14_bit(pitch_bend_value, "pitch bend value")
        return ShortMessage._channel_message(
            ShortMessageType.PITCH_BEND_CHANGE,
            channel,
            pitch_bend_value & 0x7F,
            pitch_bend_value >> 7,
        )

    @staticmethod
    def system(message_type: ShortMessageType) -> ShortMessage:
        """A system message without data bytes (e.g. timing clock, start, stop)."""
        if message_type.value < 0xF0:
            raise ValueError(f"{message_type.name} is not a system message type")
        return ShortMessage(message_type.value)

    def to_bytes(self) -> Tuple[int, int, int]:
        return (self.status, self.data_1, self.data_2)

    @property
    def message_type(self) -> ShortMessageType:
        return _type_of_status(self.status)

    @property
    def channel(self) -> Optional[int]:
        if self.status >= 0xF0:
            return None
        return self.status & 0x0F

    def _data_if(self, byte: int, *types: ShortMessageType) -> Optional[int]:
        return byte if self.message_type in types else None

    @property
    def key_number(self) -> Optional[int]:
        return self._data_if(
            self.data_1,
            ShortMessageType.NOTE_ON,
            ShortMessageType.NOTE_OFF,
            ShortMessageType.POLYPHONIC_KEY_PRESSURE,
        )

    @property
    def velocity(self) -> Optional[int]:
        return self._data_if(
            self.data_2, ShortMessageType.NOTE_ON, ShortMessageType.NOTE_OFF
        )

    @property
    def controller_number(self) -> Optional[int]:
        return self._data_if(self.data_1, ShortMessageType.CONTROL_CHANGE)

    @property
    def control_value(self) -> Optional[int]:
        return self._data_if(self.data_2, ShortMessageType.CONTROL_CHANGE)

    @property
    def program_number(self) -> Optional[int]:
        return self._data_if(self.data_1, ShortMessageType.PROGRAM_CHANGE)

    @property
    def pressure_amount(self) -> Optional[int]:
        message_type = self.message_type
        if message_type is ShortMessageType.POLYPHONIC_KEY_PRESSURE:
            return self.data_2
        if message_type is ShortMessageType.CHANNEL_PRESSURE:
            return self.data_1
        return None

    @property
    def pitch_bend_value(self) -> Optional[int]:
        if self.message_type is not ShortMessageType.PITCH_BEND_CHANGE:
            return None
        return (self.data_2 << 7) | self.data_1


class DataType(Enum):
    """How the value of a parameter number message is to be interpreted."""

    DATA_ENTRY = "data-entry"
    DATA_INCREMENT = "data-increment"
    DATA_DECREMENT = "data-decrement"


class DataEntryByteOrder(Enum):
    """Order in which the two data entry bytes of a 14-bit (N)RPN message are sent."""

    MSB_FIRST = "msb-first"
    LSB_FIRST = "lsb-first"


ShortMessageQuad = Tuple[
    Optional[ShortMessage],
    Optional[ShortMessage],
    Optional[ShortMessage],
    Optional[ShortMessage],
]


@dataclass(frozen=True)
class ParameterNumberMessage:
    """A registered or non-registered parameter number message (RPN/NRPN)."""

    channel: int
    number: int
    value: int
    is_registered: bool
    is_14_bit: bool
    data_type: DataType = DataType.DATA_ENTRY

    def __post_init__(self) -> None:
        _check_channel(self.channel)
        _check_14_bit(self.number, "parameter number")
        if self.is_14_bit:
            _check_14_bit(self.value)
        else:
            _check_7_bit(self.value)

    @staticmethod
    def registered_7_bit(channel: int, number: int, value: int) -> ParameterNumberMessage:
        return ParameterNumberMessage(channel, number, value, True, False)

    @staticmethod
    def registered_14_bit(channel: int, number: int, value: int) -> ParameterNumberMessage:
        return ParameterNumberMessage(channel, number, value, True, True)

    @staticmethod
    def non_registered_7_bit(
        channel: int, number: int, value: int
    ) -> ParameterNumberMessage:
        return ParameterNumberMessage(channel, number, value, False, False)

    @staticmethod
    def non_registered_14_bit(
        channel: int, number: int, value: int
    ) -> ParameterNumberMessage:
        return ParameterNumberMessage(channel, number, value, False, True)

    def to_short_messages(self, byte_order: DataEntryByteOrder) -> ShortMessageQuad:
        """The control change messages that make up this message, padded with None."""

        def cc(controller_number: int, value: int) -> ShortMessage:
            return ShortMessage.control_change(self.channel, controller_number, value)

        msb_cn, lsb_cn = (_RPN_MSB, _RPN_LSB) if self.is_registered else (_NRPN_MSB, _NRPN_LSB)
        number_msb = cc(msb_cn, self.number >> 7)
        number_lsb = cc(lsb_cn, self.number & 0x7F)
        if self.data_type is not DataType.DATA_ENTRY:
            cn = _DATA_INCREMENT if self.data_type is DataType.DATA_INCREMENT else _DATA_DECREMENT
            return (number_msb, number_lsb, cc(cn, self.value & 0x7F), None)
        if not self.is_14_bit:
            return (number_msb, number_lsb, cc(_DATA_ENTRY_MSB, self.value), None)
        value_msb = cc(_DATA_ENTRY_MSB, self.value >> 7)
        value_lsb = cc(_DATA_ENTRY_LSB, self.value & 0x7F)
        if byte_order is DataEntryByteOrder.MSB_FIRST:
            return (number_msb, number_lsb, value_msb, value_lsb)
        return (number_msb, number_lsb, value_lsb, value_msb)


def corresponding_14_bit_lsb_controller_number(number: int) -> Optional[int]:
    """The LSB controller paired with an MSB controller (0..31), else None."""
    _check_7_bit(number, "controller number")
    return number + 32 if number < 32 else None


def is_parameter_number_message_controller_number(number: int) -> bool:
    """Whether the controller takes part in (N)RPN messages."""
    return number in _PARAMETER_NUMBER_CONTROLLERS


@dataclass(frozen=True)
class ControlChange14BitMessage:
    """A 14-bit control change made of an MSB and an LSB control change."""

    channel: int
    msb_controller_number: int
    value: int

    def __post_init__(self) -> None:
        _check_channel(self.channel)
        if not 0 <= self.msb_controller_number < 32:
            raise ValueError(
                f"controller number {self.msb_controller_number} can't be a 14-bit MSB controller"
            )
        _check_14_bit(self.value)

    def lsb_controller_number(self) -> int:
        return self.msb_controller_number + 32

    def to_short_messages(self) -> Tuple[ShortMessage, ShortMessage]:
        return (
            ShortMessage.control_change(
                self.channel, self.msb_controller_number, self.value >> 7
            ),
            ShortMessage.control_change(
                self.channel, self.lsb_controller_number(), self.value & 0x7F
            ),
        )