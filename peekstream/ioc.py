"""Indicators of compromise and the Suricata rules generated from them."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .fields import _parse_rfc3339

# bump whenever the templates change
REVISION = 3
SID_OFFSET = 2000000000
SID_OFFSET_JA3_DIRECTION = 1000000

_TPL_SRC_IP = 'alert ip [%s] any -> $HOME_NET any (msg:"XS YT IoC - %s - %s - Known Bad IP Inbound Traffic"; threshold: type limit, track by_dst, seconds 60, count 1; classtype:misc-attack; flowbits:set,YT.Evil; sid:%d; rev:%d; metadata:%s;)'
_TPL_DEST_IP = 'alert ip $HOME_NET any -> [%s] any (msg:"XS YT IoC - %s - %s - Asset Connecting to Known Bad IP"; threshold: type limit, track by_src, seconds 60, count 1; classtype:misc-attack; flowbits:set,YT.Evil; sid:%d; rev:%d; metadata:%s;)'
_TPL_JA3 = 'alert tls $HOME_NET any -> $EXTERNAL_NET any (msg:"XS YT IoC - %s - %s - Known Bad TLS Client Fingerprint Seen Outbound"; flow:established,to_server; flowbits:set,YT.Evil; ja3.hash; content:"%s"; classtype:trojan-activity; sid:%d; rev:%d; metadata:%s;)'
_TPL_JA3_RECON = 'alert tls $EXTERNAL_NET any -> $HOME_NET any (msg:"XS YT IoC - %s - %s - Known Bad TLS Client Fingerprint Seen Inbound"; flow:established,to_server; flowbits:set,YT.Evil; ja3.hash; content:"%s"; classtype:trojan-activity; sid:%d; rev:%d; metadata:%s;)'
_TPL_JA3S = 'alert tls $EXTERNAL_NET any -> $HOME_NET any (msg:"XS YT IoC - %s - %s - Known Bad TLS Server Fingerprint Seen in Response"; flow:established,to_client; flowbits:set,YT.Evil; ja3s.hash; content:"%s"; classtype:trojan-activity; sid:%d; rev:%d; metadata:%s;)'
_TPL_TLS_SNI = 'alert tls $HOME_NET any -> $EXTERNAL_NET any (msg:"XS YT IoC - %s - %s - Asset Connecting to Known Bad TLS Server"; flow:to_server,established; tls.sni; content:"%s"; endswith; flowbits:set,YT.Evil; classtype:domain-c2; sid:%d; rev:%d; metadata:%s;)'
_TPL_HTTP_HOST = 'alert http $HOME_NET any -> $EXTERNAL_NET any (msg:"XS YT IoC - %s - %s - Asset Connecting to Known Bad HTTP Site"; flow:established,to_server; http.host; content:"%s"; endswith; flowbits:set,YT.Evil; classtype:trojan-activity; sid:%d; rev:%d; metadata: %s;)'

_TPL_METADATA = "affected_product Any, attack_target Any, deployment Perimeter, tag YT, signature_severity Major, created_at 2021_11_30, updated_at 2021_11_30"


class IoCError(ValueError):
    """An indicator is not usable."""


class MissingIoCTypeError(IoCError):
    def __init__(self) -> None:
        super().__init__("missing IoC type")


class MissingIoCValueError(IoCError):
    def __init__(self) -> None:
        super().__init__("missing IoC value")


class InvalidIPError(IoCError):
    def __init__(self) -> None:
        super().__init__("invalid IP addr")


def _comment(template: str, enabled: bool) -> str:
    return template if enabled else "# " + template


@dataclass
class IoC:
    """An indicator of compromise: a typed value to alert on."""

    id: int = 0
    enabled: bool = True
    value: str = ""
    type: str = ""
    added: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def sid(self) -> int:
        return SID_OFFSET + self.id

    def _ip_rule(self, template: str) -> str:
        return _comment(template, self.enabled) % (
            self.value, self.value, self.type, self.sid, REVISION, _TPL_METADATA,
        )

    def _typed_rule(self, template: str, sid: int) -> str:
        return _comment(template, self.enabled) % (
            self.type, self.value, self.value, sid, REVISION, _TPL_METADATA,
        )

    def rule(self) -> str:
        """Render the Suricata rule; disabled indicators are commented out."""
        if self.type == "src_ip":
            return self._ip_rule(_TPL_SRC_IP)
        if self.type == "dest_ip":
            return self._ip_rule(_TPL_DEST_IP)
        if self.type == "tls.ja3.hash":
            return (
                self._typed_rule(_TPL_JA3, self.sid)
                + "\n"
                + self._typed_rule(_TPL_JA3_RECON, self.sid + SID_OFFSET_JA3_DIRECTION)
            )
        if self.type == "tls.ja3s.hash":
            return self._typed_rule(_TPL_JA3S, self.sid)
        if self.type == "tls.sni":
            return self._typed_rule(_TPL_TLS_SNI, self.sid)
        if self.type == "http.hostname":
            return self._typed_rule(_TPL_HTTP_HOST, self.sid)
        return f"# unsupported ioc type for {self.id}"

    def key(self) -> str:
        """Identity of the indicator regardless of its ID."""
        return f"{self.type}_{self.value}"

    def validate(self) -> None:
        """Raise an IoCError if the type or value is missing or an IP is malformed."""
        if not self.type:
            raise MissingIoCTypeError()
        if not self.value:
            raise MissingIoCValueError()
        if self.type in ("src_ip", "dest_ip"):
            try:
                ipaddress.ip_address(self.value)
            except ValueError as exc:
                raise InvalidIPError() from exc

    def to_dict(self) -> dict[str, Any]:
        added = self.added if self.added.tzinfo else self.added.replace(tzinfo=timezone.utc)
        return {
            "id": self.id,
            "enabled": self.enabled,
            "value": self.value,
            "type": self.type,
            "added": added.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> IoC:
        added = data.get("added")
        return cls(
            id=int(data.get("id", 0)),
            enabled=bool(data.get("enabled", False)),
            value=data.get("value", ""),
            type=data.get("type", ""),
            added=_parse_rfc3339(added) if added else datetime.now(timezone.utc),
        )