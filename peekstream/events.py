"""Event kinds, field lookup helpers and timestamp discovery."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any

from .fields import _parse_rfc3339, parse_quoted_rfc3339

_EVENT_LOG_TS = "%Y-%m-%d %H:%M:%S"


class Atomic(IntEnum):
    SIMPLE = 0
    KNOWN_TIMESTAMPS = 1
    SURICATA = 2
    SYSLOG = 3
    SNOOPY = 4
    EVENT_LOG = 5
    SYSMON = 6
    ZEEK = 7
    MAZERUNNER = 8

    def __str__(self) -> str:
        return _NAMES.get(self, "atomic")

    def explain(self) -> str:
        return _EXPLANATIONS.get(
            self,
            "Simple fallback format for unknown JSON formats. "
            "May attempt to access and parse popular timestamp keys but no guarantee on success.",
        )


_NAMES = {
    Atomic.KNOWN_TIMESTAMPS: "timestamp parser",
    Atomic.SURICATA: "suricata",
    Atomic.SYSLOG: "syslog",
    Atomic.SNOOPY: "snoopy",
    Atomic.EVENT_LOG: "windows",
    Atomic.SYSMON: "sysmon",
    Atomic.ZEEK: "zeek",
    Atomic.MAZERUNNER: "mazerunner",
}

_EXPLANATIONS = {
    Atomic.KNOWN_TIMESTAMPS: "Simple timestamp parser. "
    "Attemtps to access popular timestamp fields in JSON messages",
    Atomic.SURICATA: "Suricata EVE JSON format.",
    Atomic.SYSLOG: "Parsed BSD syslog.",
    Atomic.SNOOPY: "Snoopy audit log for linux systems.",
    Atomic.EVENT_LOG: "Windows event log.",
    Atomic.SYSMON: "Sysmon audit log for Windows event log.",
    Atomic.ZEEK: "Zeek, formerly known as Bro. Custom output format.",
    Atomic.MAZERUNNER: "MazeRunner. Honeypot system from Cymmertria.",
}

ATOMICS = (Atomic.SURICATA, Atomic.SYSLOG, Atomic.SNOOPY, Atomic.EVENT_LOG, Atomic.SYSMON)


def new_atomic(raw: str) -> tuple[Atomic, bool]:
    """Look up a selectable event kind by name; unknown names give (SIMPLE, False)."""
    for atomic in ATOMICS:
        if raw == str(atomic):
            return atomic, True
    return Atomic.SIMPLE, False


def try_fix_broken_message(data: bytes) -> bytes:
    """Drop known invalid escape sequences so the payload can be decoded as JSON."""
    for broken, fixed in ((b"\\(", b"("), (b"\\)", b")"), (b"\\*", b"*")):
        data = data.replace(broken, fixed)
    return data


def get_field(data: Mapping[str, Any], *keys: str) -> tuple[Any, bool]:
    """Walk nested mappings along keys; return (value, found).

    A non-mapping value met before the keys run out is returned as is.
    """
    if not keys or keys[0] not in data:
        return None, False
    value = data[keys[0]]
    if isinstance(value, Mapping) and len(keys) > 1:
        return get_field(value, *keys[1:])
    return value, True


def get_dot_field(key: str, data: Mapping[str, Any]) -> tuple[Any, bool]:
    """Like get_field with a dotted path such as ``alert.signature_id``."""
    return get_field(data, *key.split("."))


class Simple(dict):
    """An unknown JSON document; its time is the moment it is asked for."""

    def time(self) -> datetime:
        return datetime.now(timezone.utc)


def _string(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{key}: expected a string, got {type(value).__name__}")
    return value


def _event_log_time(raw: str | None) -> datetime | None:
    if raw is None:
        return None
    return datetime.strptime(raw, _EVENT_LOG_TS).replace(tzinfo=timezone.utc)


@dataclass
class KnownTimeStamps:
    """Well-known timestamp fields found in JSON log records."""

    timestamp: datetime | None = None
    suri_timestamp: datetime | None = None
    event_time: datetime | None = None
    event_received_time: datetime | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> KnownTimeStamps:
        """Read the fields that are present; raise ValueError on malformed values."""
        ts = _string(data, "@timestamp")
        suri = _string(data, "timestamp")
        return cls(
            timestamp=_parse_rfc3339(ts) if ts is not None else None,
            suri_timestamp=parse_quoted_rfc3339(suri) if suri is not None else None,
            event_time=_event_log_time(_string(data, "EventTime")),
            event_received_time=_event_log_time(_string(data, "EventReceivedTime")),
        )

    def time(self, always_use_syslog: bool = False) -> datetime | None:
        """Pick the most specific timestamp, or the syslog one when asked to."""
        if always_use_syslog:
            return self.timestamp
        for candidate in (self.event_received_time, self.event_time, self.suri_timestamp):
            if candidate is not None:
                return candidate
        return self.timestamp