"""Game metadata attached to events: direction, techniques and assets."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from .meta_asset import Asset
from .meta_mitre import MitreAttack


class Directionality(IntEnum):
    UNKNOWN = 0
    LOCAL = 1
    LATERAL = 2
    INBOUND = 3
    OUTBOUND = 4
    NET_PIVOT = 5

    def __str__(self) -> str:
        return _DIRECTION_NAMES.get(self, "Unknown")


_DIRECTION_NAMES = {
    Directionality.LATERAL: "Lateral",
    Directionality.LOCAL: "Local",
    Directionality.INBOUND: "Inbound",
    Directionality.OUTBOUND: "Outbound",
    Directionality.NET_PIVOT: "Network Pivot",
}


@dataclass
class EventData:
    """Core identifying fields of an event for quick filtering."""

    id: int = 0
    key: str = ""
    fields: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"ID": self.id, "Key": self.key, "Fields": list(self.fields)}


@dataclass
class GameAsset:
    """Asset, direction and technique information for one event."""

    asset: Asset = field(default_factory=Asset)
    event_type: str = ""
    direction_string: str = ""
    directionality: Directionality = Directionality.UNKNOWN
    mitre_attack: MitreAttack | None = None
    sigma_results: list[Any] | None = None
    event_data: EventData | None = None
    source: Asset | None = None
    destination: Asset | None = None

    def set_direction(self) -> GameAsset:
        """Derive direction from which of source and destination are exercise assets."""
        if self.source is None and self.destination is None:
            self.directionality = Directionality.LOCAL
        elif self.source is None or self.destination is None:
            raise ValueError("source and destination must both be set or both be unset")
        elif self.source.is_asset and not self.destination.is_asset:
            self.directionality = Directionality.OUTBOUND
        elif not self.source.is_asset and self.destination.is_asset:
            self.directionality = Directionality.INBOUND
        elif self.source.is_asset and self.destination.is_asset:
            self.directionality = Directionality.LATERAL
        else:
            self.directionality = Directionality.UNKNOWN
        self.direction_string = str(self.directionality)
        return self

    def set_net_pivot(self) -> GameAsset:
        self.directionality = Directionality.NET_PIVOT
        return self

    def set_lateral(self) -> GameAsset:
        self.directionality = Directionality.LATERAL
        return self

    def set_inbound(self) -> GameAsset:
        self.directionality = Directionality.INBOUND
        return self

    def set_outbound(self) -> GameAsset:
        self.directionality = Directionality.OUTBOUND
        return self

    def set_local(self) -> GameAsset:
        self.directionality = Directionality.LOCAL
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.asset.to_dict(),
            "EventType": self.event_type,
            "DirectionString": self.direction_string,
            "Directionality": int(self.directionality),
            "MitreAttack": self.mitre_attack.to_dict() if self.mitre_attack else None,
            "SigmaResults": self.sigma_results,
            "EventData": self.event_data.to_dict() if self.event_data else None,
            "Src": self.source.to_dict() if self.source else None,
            "Dest": self.destination.to_dict() if self.destination else None,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))