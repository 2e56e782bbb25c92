"""Network segments as described in exercise planning tables."""

from __future__ import annotations

import ipaddress
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .fields import IPAddress, IPNetwork, parse_cidr_network

_COLUMNS = {
    "abbreviation": "Abbreviation",
    "vlan": "VLAN/Portgroup",
    "desc": "Description",
    "whois": "WHOIS",
    "team": "Team",
}


@dataclass
class NetSegment:
    """Short form of a network, suited to denormalised logging."""

    id: int = 0
    name: str = ""
    vlan: str = ""
    net: IPNetwork | None = None

    def __contains__(self, ip: IPAddress | str) -> bool:
        if self.net is None:
            return False
        if isinstance(ip, str):
            try:
                ip = ipaddress.ip_address(ip)
            except ValueError:
                return False
        return ip in self.net

    def __str__(self) -> str:
        return str(self.net) if self.net is not None else "<nil>"


@dataclass
class Network:
    """Full description of a network segment."""

    id: int = 0
    name: str = ""
    abbreviation: str = ""
    vlan: str = ""
    ipv4: IPNetwork | None = None
    ipv6: IPNetwork | None = None
    desc: str = ""
    whois: str = ""
    team: str = ""

    def shorthand(self) -> tuple[NetSegment, NetSegment]:
        """Return the IPv4 and IPv6 segments of this network."""
        return (
            NetSegment(id=self.id, name=self.name, net=self.ipv4),
            NetSegment(id=self.id, name=self.name, net=self.ipv6),
        )


def _column(data: Mapping[str, Any], name: str) -> dict[int, Any]:
    return {int(key): value for key, value in (data.get(name) or {}).items()}


def _network(raw: Any) -> IPNetwork | None:
    if raw is None or raw == "":
        return None
    return parse_cidr_network(raw)


def networks_from_pandas(data: Mapping[str, Any]) -> list[Network]:
    """Build networks from a table exported column-wise, one mapping per column."""
    names = _column(data, "Name")
    columns = {attr: _column(data, col) for attr, col in _COLUMNS.items()}
    ipv4 = _column(data, "IPv4")
    ipv6 = _column(data, "IPv6")
    return [
        Network(
            id=idx,
            name=name,
            ipv4=_network(ipv4.get(idx)),
            ipv6=_network(ipv6.get(idx)),
            **{attr: values.get(idx, "") for attr, values in columns.items()},
        )
        for idx, name in names.items()
    ]