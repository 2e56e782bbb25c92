"""ArcSight Common Event Format (CEF) messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Cef:
    """A parsed CEF header with its key=value extensions.

    The CEF header has no timestamp; ``timestamp`` stays unset unless the
    caller attaches one.
    """

    device_vendor: str = ""
    device_product: str = ""
    device_version: str = ""
    signature_id: str = ""
    name: str = ""
    severity: str = ""
    extensions: dict[str, str] = field(default_factory=dict)
    timestamp: datetime | None = None

    def content(self) -> dict[str, str]:
        return self.extensions

    def time(self) -> datetime | None:
        """The attached timestamp, or None when the message carried none."""
        return self.timestamp

    def source(self) -> str:
        return self.device_product

    def sender(self) -> str:
        return self.device_vendor


class CefParseError(ValueError):
    """A message could not be read as CEF.

    When the header parsed but carried no extensions, the partial result is
    kept in ``cef``.
    """

    def __init__(self, msg: str, reason: str, cef: Cef | None = None) -> None:
        super().__init__(f"Unable to parse CEF msg [{msg}] BECAUSE: {reason}")
        self.msg = msg
        self.reason = reason
        self.cef = cef


def parse_cef(message: str) -> Cef:
    """Parse a CEF message; raise CefParseError if it is malformed or has no extensions."""
    m = message
    if m.startswith("CEF: "):
        m = m.lstrip("CEF: ")
    if m.startswith(" "):
        m = m.lstrip(" ")
    core = m.split("|", 7)
    if len(core) != 8:
        raise CefParseError(m, f"Field count mismatch, should be 8. Got {len(core)}")
    obj = Cef(
        device_vendor=core[1],
        device_product=core[2],
        device_version=core[3],
        signature_id=core[4],
        name=core[5],
        severity=core[6],
        extensions=_parse_extensions(core[7]),
    )
    if not obj.extensions:
        raise CefParseError(m, "Empty extension list, not legit for our use-case", obj)
    return obj


def _parse_extensions(text: str) -> dict[str, str]:
    """Split the extension part into keys and values; values may contain spaces."""
    escaped = False
    key = sub = ""
    last = offset = offset2 = found = 0
    data: dict[str, str] = {}
    for i, ch in enumerate(text):
        if ch == "\\":
            escaped = True
        elif ch == " ":
            offset = i
        elif ch == "=":
            if escaped:
                continue
            sub = text[last:i]
            for j, ch2 in enumerate(sub):
                if ch2 == " ":
                    offset2 = j
            if found > 0 and len(sub) > 1:
                data[key.lstrip(" ")] = sub[1:offset2]
            key = text[offset:i]
            last = i
            found += 1
        else:
            escaped = False
    key = sub[offset2:]
    val = text[last:]
    if len(key) > 1 and len(val) > 1:
        data[key.lstrip(" ")] = val[1:]
    return data