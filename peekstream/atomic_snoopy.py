"""Snoopy command audit log messages."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .fields import IPAddress


@dataclass
class SnoopySSH:
    """SSH connection details attached to a command."""

    dst_port: str = ""
    dst_ip: IPAddress | None = None
    src_port: str = ""
    src_ip: IPAddress | None = None

    def is_empty(self) -> bool:
        return (
            self.dst_ip is None
            and not self.dst_port
            and self.src_ip is None
            and not self.src_port
        )


@dataclass
class Snoopy:
    """One logged command execution.

    Snoopy payloads have no timestamp; ``timestamp`` stays unset unless the
    caller attaches one.
    """

    cmd: str = ""
    filename: str = ""
    cwd: str = ""
    tty: str = ""
    sid: str = ""
    gid: str = ""
    group: str = ""
    uid: str = ""
    username: str = ""
    login: str = ""
    ssh: SnoopySSH | None = None
    timestamp: datetime | None = None

    def time(self) -> datetime | None:
        """The attached timestamp, or None when the payload carried none."""
        return self.timestamp

    def source(self) -> str:
        return self.username

    def sender(self) -> str:
        return self.cmd

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping with empty fields left out."""
        pairs = (
            ("cmd", self.cmd),
            ("filename", self.filename),
            ("cwd", self.cwd),
            ("tty", self.tty),
            ("sid", self.sid),
            ("gid", self.gid),
            ("group", self.group),
            ("uid", self.uid),
            ("username", self.username),
            ("login", self.login),
        )
        out: dict[str, Any] = {key: value for key, value in pairs if value}
        if self.ssh is not None:
            ssh = {
                "dst_port": self.ssh.dst_port,
                "dst_ip": str(self.ssh.dst_ip) if self.ssh.dst_ip is not None else "",
                "src_port": self.ssh.src_port,
                "src_ip": str(self.ssh.src_ip) if self.ssh.src_ip is not None else "",
            }
            out["ssh"] = {key: value for key, value in ssh.items() if value}
        return out


class SnoopyParseError(ValueError):
    """A message could not be read as a snoopy record."""

    def __init__(self, msg: str, reason: str = "") -> None:
        super().__init__(f"Unable to parse snoopy msg [{msg}] BECAUSE: {reason}")
        self.msg = msg
        self.reason = reason


def _ip_or_none(text: str) -> IPAddress | None:
    try:
        return ipaddress.ip_address(text)
    except ValueError:
        return None


def _split_fields(data: str) -> list[str]:
    """Split on spaces, keeping parenthesised groups whole; ')' also ends a field."""
    inside = False
    items: list[str] = []
    current: list[str] = []
    for ch in data:
        if ch == "(":
            inside = not inside
            separator = False
        elif ch == ")":
            inside = not inside
            separator = True
        elif inside:
            separator = False
        else:
            separator = ch == " "
        if separator:
            if current:
                items.append("".join(current))
                current = []
        else:
            current.append(ch)
    if current:
        items.append("".join(current))
    return items


def parse_snoopy(message: str) -> Snoopy:
    """Parse a snoopy log line in the default or the extended format."""
    m = message.lstrip(" ") if message.startswith(" ") else message
    if not m.startswith("["):
        raise SnoopyParseError(m, "Invalid header")
    close = m.find("]")
    if close == -1:
        raise SnoopyParseError(m, "No closing bracket")

    data = m[:close].lstrip("[")
    cmd = m[close:]
    obj = Snoopy()
    colon = cmd.find(":")
    if colon != -1 and len(cmd) > 3:
        obj.cmd = cmd[colon + 1 :].rstrip("\n")

    data = data.replace("group:domain users", "group:domain_users", 1)
    items = _split_fields(data)

    if len(items) == 10:
        bites = [""] * 10
        for i, item in enumerate(items):
            parts = item.split(":", 1)
            if len(parts) != 2:
                continue
            if i == 1 and item.startswith("ssh"):
                cuts = item.split("(")
                if len(cuts) == 2:
                    words = cuts[1].split()
                    if len(words) == 4:
                        obj.ssh = SnoopySSH(
                            src_ip=_ip_or_none(words[0]),
                            src_port=words[1],
                            dst_ip=_ip_or_none(words[2]),
                            dst_port=words[3],
                        )
            else:
                bites[i] = parts[1]
        obj.login = bites[0]
        obj.username = bites[2]
        obj.uid = bites[3]
        obj.group = bites[4]
        obj.gid = bites[5]
        obj.sid = bites[6]
        obj.tty = bites[7]
        obj.cwd = bites[8]
        obj.filename = bites[9]
    elif len(items) == 5:
        bites = [""] * 5
        for i, item in enumerate(items):
            parts = item.split(":", 1)
            if len(parts) == 2:
                bites[i] = parts[1]
        obj.uid = bites[0]
        obj.sid = bites[1]
        obj.tty = bites[2].lstrip("(")
        obj.cwd = bites[3]
        obj.filename = bites[4]
    else:
        raise SnoopyParseError(m)
    return obj