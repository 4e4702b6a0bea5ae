"""Output events produced by the interpreter and the sinks that collect them.

The interpreter never writes text itself. Every ``.`` instruction becomes one
event: a printable character, a tagged non-printable byte, or the decimal text
of a cell value too large for a byte. Rendering is left to the sink.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Protocol, TextIO, Union

BYTE_MAX = 255


@dataclass(frozen=True)
class Char:
    char: str


@dataclass(frozen=True)
class NonPrintable:
    value: int


@dataclass(frozen=True)
class DecimalText:
    text: str


@dataclass(frozen=True)
class InputNotImplemented:
    pass


Event = Union[Char, NonPrintable, DecimalText, InputNotImplemented]


def is_printable(byte: int) -> bool:
    return 0x20 <= byte <= 0x7E


def classify(value: int) -> Event:
    """Map a cell value to the event a ``.`` instruction emits for it."""
    if value <= BYTE_MAX:
        if is_printable(value):
            return Char(chr(value))
        return NonPrintable(value)
    return DecimalText(str(value))


def render(event: Event) -> str:
    if isinstance(event, Char):
        return event.char
    if isinstance(event, NonPrintable):
        return f'<non printable u8 {event.value}>'
    if isinstance(event, DecimalText):
        return event.text
    if isinstance(event, InputNotImplemented):
        return 'Read byte not implemented\n'
    raise TypeError(f'Unknown output event: {event!r}')


class Sink(Protocol):
    def write(self, event: Event) -> None: ...


@dataclass
class CaptureSink:
    events: List[Event] = field(default_factory=list)

    def write(self, event: Event) -> None:
        self.events.append(event)

    def text(self) -> str:
        return ''.join(render(e) for e in self.events)


class StreamSink:
    """Renders events straight to a text stream, flushing after each write."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def write(self, event: Event) -> None:
        self.stream.write(render(event))
        self.stream.flush()


class TeeSink:
    def __init__(self, *sinks: Sink):
        self.sinks = sinks

    def write(self, event: Event) -> None:
        for sink in self.sinks:
            sink.write(event)
