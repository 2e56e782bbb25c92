"""Exercise inventory records pulled from the Providentia API."""

from __future__ import annotations

import ipaddress
import json
import urllib.request
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from .fields import AssetVcenter, IPAddress, _parse_rfc3339
from .meta_asset import Asset

_ZERO_TIME = "0001-01-01T00:00:00Z"


class MissingInstancesError(ValueError):
    """Some targets had no instances to map."""

    def __init__(self, items: list[Target]) -> None:
        super().__init__(f"missing instance info on {len(items)} targets")
        self.items = items


class RespDecodeError(ValueError):
    """The API response body could not be decoded."""

    def __init__(self, decode: BaseException) -> None:
        super().__init__(f"API response body decode: {decode}")
        self.decode = decode


@dataclass
class Params:
    url: str = ""
    token: str = ""
    raw_dump: str = ""


@dataclass
class _Address:
    pool_id: str = ""
    mode: str = ""
    connection: bool = False
    address: str = ""
    dns_enabled: bool = False
    gateway: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> _Address:
        return cls(
            pool_id=data.get("pool_id") or "",
            mode=data.get("mode") or "",
            connection=bool(data.get("connection", False)),
            address=data.get("address") or "",
            dns_enabled=bool(data.get("dns_enabled", False)),
            gateway=data.get("gateway") or "",
        )


@dataclass
class _Interface:
    network_id: str = ""
    cloud_id: str = ""
    domain: str = ""
    fqdn: str = ""
    egress: bool = False
    connection: bool = False
    addresses: list[_Address] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> _Interface:
        return cls(
            network_id=data.get("network_id") or "",
            cloud_id=data.get("cloud_id") or "",
            domain=data.get("domain") or "",
            fqdn=data.get("fqdn") or "",
            egress=bool(data.get("egress", False)),
            connection=bool(data.get("connection", False)),
            addresses=[_Address.from_dict(a) for a in data.get("addresses") or []],
        )


@dataclass
class Instance:
    """One deployed copy of a target."""

    id: str = ""
    vm_name: str = ""
    team_unique_id: str = ""
    hostname: str = ""
    domain: str = ""
    fqdn: str = ""
    connection_address: str = ""
    interfaces: list[_Interface] = field(default_factory=list)
    checks: list[Any] = field(default_factory=list)
    config_map: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Instance:
        return cls(
            id=data.get("id") or "",
            vm_name=data.get("vm_name") or "",
            team_unique_id=data.get("team_unique_id") or "",
            hostname=data.get("hostname") or "",
            domain=data.get("domain") or "",
            fqdn=data.get("fqdn") or "",
            connection_address=data.get("connection_address") or "",
            interfaces=[_Interface.from_dict(i) for i in data.get("interfaces") or []],
            checks=list(data.get("checks") or []),
            config_map=dict(data.get("config_map") or {}),
        )


@dataclass
class Target:
    """An inventory entry describing a host role and its instances."""

    id: str = ""
    owner: str = ""
    description: str = ""
    role: str = ""
    team_name: str = ""
    bt_visible: bool = False
    hardware_cpu: int = 0
    hardware_ram: int = 0
    hardware_primary_disk_size: int = 0
    tags: list[str] = field(default_factory=list)
    capabilities: list[Any] = field(default_factory=list)
    services: list[Any] = field(default_factory=list)
    sequence_tag: Any = None
    sequence_total: Any = None
    instances: list[Instance] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Target:
        return cls(
            id=data.get("id") or "",
            owner=data.get("owner") or "",
            description=data.get("description") or "",
            role=data.get("role") or "",
            team_name=data.get("team_name") or "",
            bt_visible=bool(data.get("bt_visible", False)),
            hardware_cpu=int(data.get("hardware_cpu") or 0),
            hardware_ram=int(data.get("hardware_ram") or 0),
            hardware_primary_disk_size=int(data.get("hardware_primary_disk_size") or 0),
            tags=list(data.get("tags") or []),
            capabilities=list(data.get("capabilities") or []),
            services=list(data.get("services") or []),
            sequence_tag=data.get("sequence_tag"),
            sequence_total=data.get("sequence_total"),
            instances=[Instance.from_dict(i) for i in data.get("instances") or []],
        )

    def extract_os(self) -> str:
        """First ``os_`` tag; empty without tags, ``unk`` when none matches."""
        if not self.tags:
            return ""
        return next((tag for tag in self.tags if tag.startswith("os_")), "unk")


def _format_time(ts: datetime | None) -> str:
    if ts is None:
        return _ZERO_TIME
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.isoformat()


@dataclass
class Record:
    """A single address of an inventory instance."""

    ansible_name: str = ""
    host_name: str = ""
    pretty: str = ""
    domain: str = ""
    role: str = ""
    addr: IPAddress | None = None
    team: str = ""
    os: str = ""
    network_name: str = ""
    updated: datetime | None = None
    fqdn: str = ""

    def is_asset(self) -> bool:
        return self.team == "blue"

    def vsphere_copy(self, vs: AssetVcenter) -> Record:
        """Copy this record with the address and time from a vCenter report."""
        return Record(
            ansible_name=self.ansible_name,
            host_name=self.host_name,
            pretty=self.pretty,
            domain=self.domain,
            role=self.role,
            addr=vs.ip,
            team=self.team,
            os=self.os,
            network_name=self.network_name,
            updated=vs.ts,
            fqdn=self.fqdn,
        )

    def keys(self) -> list[str]:
        """Non-empty names this record can be looked up by."""
        keys = [
            self.host_name,
            self.ansible_name,
            self.pretty,
            str(self.addr) if self.addr is not None else "",
        ]
        if self.domain:
            keys.append(self.fqdn)
        return [key for key in keys if key]

    def to_asset(self) -> Asset:
        return Asset(
            host=self.host_name,
            alias=self.pretty,
            domain=self.domain,
            ip=self.addr,
            team=self.team,
            vm=self.ansible_name,
            role=self.role,
            os=self.os,
            zone=self.network_name,
            is_asset=self.team == "blue",
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "ansible_name": self.ansible_name,
            "host_name": self.host_name,
            "pretty": self.pretty,
            "domain": self.domain,
            "role": self.role,
            "addr": str(self.addr) if self.addr is not None else "",
            "team": self.team,
            "os": self.os,
            "network_name": self.network_name,
            "updated": _format_time(self.updated),
        }
        if self.fqdn:
            out["fqdn"] = self.fqdn
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Record:
        addr = data.get("addr")
        updated = data.get("updated")
        return cls(
            ansible_name=data.get("ansible_name", ""),
            host_name=data.get("host_name", ""),
            pretty=data.get("pretty", ""),
            domain=data.get("domain", ""),
            role=data.get("role", ""),
            addr=ipaddress.ip_address(addr) if addr else None,
            team=data.get("team", ""),
            os=data.get("os", ""),
            network_name=data.get("network_name", ""),
            updated=_parse_rfc3339(updated) if updated else None,
            fqdn=data.get("fqdn", ""),
        )


def filter_by_time(records: Iterable[Record], since: timedelta) -> list[Record]:
    """Keep records updated less than ``since`` ago."""
    now = datetime.now(timezone.utc)
    out = []
    for record in records:
        if record.updated is None:
            continue
        updated = record.updated
        if updated.tzinfo is None:
            updated = updated.replace(tzinfo=timezone.utc)
        if now - updated < since:
            out.append(record)
    return out


def parse_targets(data: bytes | str) -> list[Target]:
    """Decode an API response body into targets."""
    try:
        obj = json.loads(data)
        if obj is None:
            return []
        if not isinstance(obj, dict):
            raise TypeError(f"expected a JSON object, got {type(obj).__name__}")
        return [Target.from_dict(item) for item in obj.get("result") or []]
    except (ValueError, TypeError, AttributeError) as exc:
        raise RespDecodeError(exc) from exc


def pull(params: Params) -> list[Target]:
    """Fetch targets from the API, optionally saving the raw body to a file."""
    if not params.url:
        raise ValueError("Missing url")
    if not params.token:
        raise ValueError("Missing token")
    request = urllib.request.Request(
        params.url, method="GET", headers={"Authorization": params.token}
    )
    with urllib.request.urlopen(request) as response:
        data = response.read()
    if params.raw_dump:
        with open(params.raw_dump, "wb") as handle:
            handle.write(data)
    return parse_targets(data)