"""Building blocks for MIDI controller sources: values, messages, addresses and display sys-ex."""

__version__ = "0.1.0"

__all__ = [
    "values",
    "messages",
    "displays",
    "midi_source_value",
    "display_feedback",
]