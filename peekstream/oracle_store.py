"""Thread-safe stores behind the oracle API: indicators and inventory assets."""

from __future__ import annotations

import json
import threading
from collections.abc import Mapping
from dataclasses import replace
from typing import TextIO

from .ioc import IoC, IoCError
from .providentia import Record

# order in which indicator types are reported
_TYPES = ("dest_ip", "src_ip", "tls.ja3.hash", "tls.ja3s.hash", "tls.sni", "http.hostname")

_WISE_HEADER = (
    "#field:target.name;shortcut:0\n"
    "#field:target.pretty;shortcut:1\n"
    "#field:target.team;shortcut:2\n"
    "#field:target.os;shortcut:3\n"
    "#field:target.network_name;shortcut:4\n"
)


class UnsupportedIoCTypeError(IoCError):
    """The indicator type has no rule template."""

    def __init__(self) -> None:
        super().__init__("unsupported item type")


class IoCNotFoundError(LookupError):
    """No indicator is stored under the requested ID."""

    def __init__(self, ioc_id: int) -> None:
        super().__init__(f"IoC with ID {ioc_id} not found")
        self.ioc_id = ioc_id


class IoCStore:
    """Indicators kept unique per type and value, addressable by ID."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._next_id = 0
        self._by_type: dict[str, dict[str, IoC]] = {kind: {} for kind in _TYPES}
        self._by_id: dict[int, IoC] = {}

    def add(self, item: IoC, keep_id: bool = False) -> int:
        """Store an indicator and return its ID.

        New indicators get the next free ID unless ``keep_id`` is set, as when
        reloading a saved store; then the item's own ID is kept and the
        counter moved past it. An indicator already present is not stored
        again and the given item's ID is returned.
        """
        item.validate()
        with self._lock:
            bucket = self._by_type.get(item.type)
            if bucket is None:
                raise UnsupportedIoCTypeError()
            key = item.key()
            if key in bucket:
                return item.id
            if keep_id:
                stored = replace(item)
                if item.id > self._next_id:
                    self._next_id = item.id + 1
            else:
                stored = IoC(
                    id=self._next_id,
                    enabled=item.enabled,
                    value=item.value,
                    type=item.type,
                )
                self._next_id += 1
            bucket[key] = stored
            self._by_id[stored.id] = stored
            return stored.id

    def offset(self) -> int:
        """The ID the next new indicator will get."""
        with self._lock:
            return self._next_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)

    def extract(self) -> list[IoC]:
        """Copies of all indicators, keyed by ID."""
        with self._lock:
            return [replace(item) for item in self._by_id.values()]

    def _set_enabled(self, ioc_id: int, enabled: bool) -> IoC:
        with self._lock:
            item = self._by_id.get(ioc_id)
            if item is None:
                raise IoCNotFoundError(ioc_id)
            item.enabled = enabled
            return replace(item)

    def disable(self, ioc_id: int) -> IoC:
        return self._set_enabled(ioc_id, False)

    def enable(self, ioc_id: int) -> IoC:
        return self._set_enabled(ioc_id, True)

    def values(self) -> list[IoC]:
        """Copies of all indicators, grouped by type."""
        with self._lock:
            return [
                replace(item)
                for kind in _TYPES
                for item in self._by_type[kind].values()
            ]


class AssetStore:
    """The current inventory records."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._records: list[Record] = []

    @property
    def records(self) -> list[Record]:
        with self._lock:
            return list(self._records)

    def update(self, records: Mapping[str, Record]) -> None:
        """Replace the records; an empty mapping leaves the old ones in place."""
        if not records:
            return
        with self._lock:
            self._records = list(records.values())

    def to_json(self) -> bytes:
        with self._lock:
            payload = [record.to_dict() for record in self._records]
        return json.dumps(payload, separators=(",", ":")).encode("utf-8")

    def write_wise(self, stream: TextIO) -> None:
        """Write the records as an Arkime WISE tagger file."""
        with self._lock:
            records = list(self._records)
        stream.write(_WISE_HEADER)
        for record in records:
            addr = str(record.addr) if record.addr is not None else "<nil>"
            stream.write(
                f"{addr};0={record.fqdn};1={record.pretty};2={record.team};"
                f"3={record.os};4={record.network_name}\n"
            )