"""MITRE ATT&CK technique references."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Technique:
    id: str = ""
    name: str = ""
    url: str = ""
    phases: list[str] = field(default_factory=list)


def _technique_dict(technique: Technique) -> dict[str, Any]:
    return {
        "ID": technique.id,
        "Name": technique.name,
        "URL": technique.url,
        "Phases": list(technique.phases),
    }


@dataclass
class MitreAttack:
    """Techniques associated with an event, with the first one as primary."""

    technique: Technique = field(default_factory=Technique)
    items: list[str] = field(default_factory=list)
    techniques: list[Technique] = field(default_factory=list)

    def contains(self, key: str) -> bool:
        """True if any technique has the given name."""
        return any(t.name == key for t in self.techniques)

    def update(self) -> None:
        """Deduplicate techniques by ID and refresh the name list and primary technique."""
        if not self.techniques:
            return
        seen: set[str] = set()
        unique: list[Technique] = []
        for technique in self.techniques:
            if technique.id in seen:
                continue
            seen.add(technique.id)
            unique.append(technique)
        self.techniques = unique
        self.items = [t.name for t in unique]
        self.technique = unique[0]

    def set(self, mapping: Mapping[str, Technique] | None) -> None:
        """Fill in names, URLs and phases from a technique table keyed by ID."""
        if not self.techniques or not mapping:
            return
        self.techniques = [
            Technique(id=t.id, name=mapping[t.id].name, phases=mapping[t.id].phases,
                      url=mapping[t.id].url)
            if t.id in mapping
            else t
            for t in self.techniques
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            **_technique_dict(self.technique),
            "Items": list(self.items),
            "Techniques": [_technique_dict(t) for t in self.techniques],
        }