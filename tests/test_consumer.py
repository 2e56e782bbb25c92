import pytest

from peekstream.consumer import (
    Message,
    Offsets,
    Parser,
    Source,
    parser_from_name,
)
from peekstream.events import Atomic


@pytest.mark.parametrize(
    "source,name",
    [
        (Source.KAFKA, "kafka"),
        (Source.LOGFILE, "logfile"),
        (Source.REDIS, "NA"),
        (Source.UNKNOWN, "NA"),
    ],
)
def test_source_names(source, name):
    msg = Message(data=b"x", type=source)
    assert str(msg.type) == name


@pytest.mark.parametrize("name", ["rfc5424", "json-raw", "json-peek"])
def test_parser_names(name):
    assert str(parser_from_name(name)) == name


@pytest.mark.parametrize("parser", list(Parser))
def test_parser_round_trip(parser):
    assert parser_from_name(str(parser)) is parser


def test_unknown_parser_defaults_to_peek():
    assert parser_from_name("whatever") is Parser.PEEK_JSON


def test_offsets_inclusive_length():
    assert len(Offsets(3, 3)) == 1
    assert len(Offsets(5, 9)) == 5


def test_message_defaults():
    msg = Message(data=b"x")
    assert msg.type is Source.UNKNOWN
    assert msg.event is Atomic.SIMPLE
    assert msg.time is None