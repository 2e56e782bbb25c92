"""Parsers for textual field values: IP addresses, networks and timestamps."""

from __future__ import annotations

import ipaddress
import json
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]

_SURICATA_TS = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d{1,9}))?(Z|[+-]\d{4})$"
)
_RFC3339 = re.compile(
    r"^(\d{4}-\d{2}-\d{2})[Tt](\d{2}:\d{2}:\d{2})(?:\.(\d{1,9}))?([Zz]|[+-]\d{2}:\d{2})$"
)


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] == '"':
        try:
            value = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid syntax: {text!r}") from exc
        if isinstance(value, str):
            return value
    if len(text) >= 2 and text[0] == text[-1] == "`" and "`" not in text[1:-1]:
        return text[1:-1]
    raise ValueError(f"invalid syntax: {text!r}")


def _split_cidr(raw: str) -> str:
    if "/" not in raw:
        raise ValueError(f"invalid CIDR address: {raw}")
    return raw


def _offset(sign_digits: str) -> timezone:
    if sign_digits in ("Z", "z"):
        return timezone.utc
    sign = -1 if sign_digits[0] == "-" else 1
    digits = sign_digits[1:].replace(":", "")
    delta = timedelta(hours=int(digits[:2]), minutes=int(digits[2:]))
    return timezone(sign * delta)


def _with_fraction(base: datetime, fraction: str | None) -> datetime:
    if not fraction:
        return base
    return base.replace(microsecond=int(fraction[:6].ljust(6, "0")))


def _parse_rfc3339(value: str) -> datetime:
    match = _RFC3339.match(value)
    if match is None:
        raise ValueError(f"invalid RFC3339 timestamp: {value!r}")
    date, clock, fraction, zone = match.groups()
    base = datetime.strptime(f"{date}T{clock}", "%Y-%m-%dT%H:%M:%S")
    return _with_fraction(base, fraction).replace(tzinfo=_offset(zone))


def parse_string_ip(text: str) -> IPAddress | None:
    """Parse a quoted IP address; an unparsable address yields None."""
    raw = _unquote(text)
    try:
        return ipaddress.ip_address(raw)
    except ValueError:
        return None


def parse_cidr_network(raw: str) -> IPNetwork:
    """Parse a CIDR string into its network, ignoring up to two escape backslashes."""
    cleaned = raw.replace("\\", "", 2)
    return ipaddress.ip_network(_split_cidr(cleaned), strict=False)


def parse_cidr_address(raw: str) -> IPAddress:
    """Parse a CIDR string and return its address part."""
    return ipaddress.ip_interface(_split_cidr(raw)).ip


def parse_quoted_rfc3339(raw: str) -> datetime:
    """Parse a Suricata style timestamp such as 2021-11-30T12:00:00.123456+0200."""
    match = _SURICATA_TS.match(raw)
    if match is None:
        raise ValueError(f"invalid timestamp: {raw!r}")
    clock, fraction, zone = match.groups()
    base = datetime.strptime(clock, "%Y-%m-%dT%H:%M:%S")
    return _with_fraction(base, fraction).replace(tzinfo=_offset(zone))


def format_quoted_rfc3339(ts: datetime) -> str:
    """Format a timestamp as a JSON string the way Suricata writes it."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return '"' + ts.strftime("%Y-%m-%dT%H:%M:%S.%f%z") + '"'


@dataclass
class AssetVcenter:
    """Asset report from a vCenter inventory."""

    ts: datetime | None = None
    name: str = ""
    host_name: str = ""
    domain: str = ""
    ip: IPAddress | None = None
    mac: str = ""
    team: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AssetVcenter:
        ts = data.get("ts")
        ip = data.get("ip")
        return cls(
            ts=_parse_rfc3339(ts) if ts else None,
            name=data.get("name", ""),
            host_name=data.get("host_name", ""),
            domain=data.get("domain", ""),
            ip=parse_cidr_address(ip) if ip is not None else None,
            mac=data.get("mac", ""),
            team=data.get("team", ""),
        )