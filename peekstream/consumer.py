"""Message model shared by all input sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum

from .events import Atomic
from .fields import IPAddress


class Source(IntEnum):
    UNKNOWN = 0
    LOGFILE = 1
    KAFKA = 2
    UX_SOCK = 3
    REDIS = 4

    def __str__(self) -> str:
        if self is Source.KAFKA:
            return "kafka"
        if self is Source.LOGFILE:
            return "logfile"
        return "NA"


@dataclass
class Message:
    """One log entry with where it came from and how to parse it."""

    data: bytes = b""
    offset: int = 0
    partition: int = 0
    type: Source = Source.UNKNOWN
    event: Atomic = Atomic.SIMPLE
    source: str = ""
    key: str = ""
    time: datetime | None = None
    sender: IPAddress | None = None


@dataclass
class Offsets:
    """An inclusive range of message offsets."""

    beginning: int = 0
    end: int = 0

    def __len__(self) -> int:
        return self.end - self.beginning + 1


class Parser(IntEnum):
    RFC5424 = 0
    RAW_JSON = 1
    PEEK_JSON = 2

    def __str__(self) -> str:
        return _PARSER_NAMES.get(self, "unknown parser")


_PARSER_NAMES = {
    Parser.RFC5424: "rfc5424",
    Parser.RAW_JSON: "json-raw",
    Parser.PEEK_JSON: "json-peek",
}


def parser_from_name(name: str) -> Parser:
    """Look up a parser by name; anything unrecognised selects PEEK_JSON."""
    for parser, parser_name in _PARSER_NAMES.items():
        if name == parser_name:
            return parser
    return Parser.PEEK_JSON


@dataclass
class ParseMapping:
    atomic: Atomic = Atomic.SIMPLE
    parser: Parser = Parser.RFC5424


ParseMap = dict[str, ParseMapping]