"""Asset descriptions attached to events."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from .fields import IPAddress


@dataclass
class Asset:
    """A host known to the exercise inventory."""

    host: str = ""
    alias: str = ""
    os: str = ""
    ip: IPAddress | None = None
    zone: str = ""
    team: str = ""
    domain: str = ""
    vm: str = ""
    role: str = ""
    is_asset: bool = False

    def copy(self) -> Asset:
        return dataclasses.replace(self)

    def fqdn(self) -> str:
        if self.domain:
            return f"{self.host}.{self.domain}"
        return self.host

    def to_dict(self) -> dict[str, Any]:
        return {
            "Host": self.host,
            "Alias": self.alias,
            "OS": self.os,
            "IP": str(self.ip) if self.ip is not None else "",
            "Zone": self.zone,
            "Team": self.team,
            "Domain": self.domain,
            "VM": self.vm,
            "Role": self.role,
            "is_asset": self.is_asset,
        }


@dataclass
class RawAsset:
    """Asset record as loaded from an inventory export."""

    host_name: str = ""
    pretty: str = ""
    role: str = ""
    os: str = ""
    ip: IPAddress | None = None
    zone: str = ""
    team: str = ""
    domain: str = ""
    vm: str = ""

    def to_asset(self) -> Asset:
        return Asset(
            host=self.host_name,
            alias=self.pretty,
            role=self.role,
            os=self.os,
            ip=self.ip,
            zone=self.zone,
            team=self.team,
            domain=self.domain,
            vm=self.vm,
            is_asset=True,
        )