import io
import ipaddress
import json
from datetime import datetime, timezone

import pytest

from peekstream.ioc import IoC, InvalidIPError, MissingIoCTypeError
from peekstream.oracle_store import (
    AssetStore,
    IoCNotFoundError,
    IoCStore,
    UnsupportedIoCTypeError,
)
from peekstream.providentia import Record


def _record(name="ws1", addr="10.0.0.5"):
    return Record(
        host_name=name,
        pretty=name + "-alias",
        addr=ipaddress.ip_address(addr),
        team="blue",
        os="os_linux",
        network_name="net",
        fqdn=name + ".example.com",
        updated=datetime(2022, 1, 1, tzinfo=timezone.utc),
    )


def test_add_assigns_sequential_ids():
    store = IoCStore()
    first = store.add(IoC(type="src_ip", value="10.0.0.1"))
    second = store.add(IoC(type="tls.sni", value="bad.example.com"))
    assert second == first + 1
    assert store.offset() == second + 1
    assert len(store) == store.offset()


def test_duplicate_is_not_stored_twice():
    store = IoCStore()
    store.add(IoC(type="src_ip", value="10.0.0.1"))
    dup = IoC(id=42, type="src_ip", value="10.0.0.1")
    assert store.add(dup) == dup.id
    assert len(store) == 1


def test_validation_errors_propagate():
    store = IoCStore()
    with pytest.raises(MissingIoCTypeError):
        store.add(IoC(type="", value="x"))
    with pytest.raises(InvalidIPError):
        store.add(IoC(type="dest_ip", value="not-an-ip"))
    assert len(store) == 0


def test_unsupported_type():
    store = IoCStore()
    with pytest.raises(UnsupportedIoCTypeError) as info:
        store.add(IoC(type="md5", value="abc"))
    assert str(info.value) == "unsupported item type"


def test_keep_id_moves_offset_past_item():
    store = IoCStore()
    item = IoC(id=10, type="http.hostname", value="evil.example.com")
    assert store.add(item, keep_id=True) == item.id
    assert store.offset() == item.id + 1
    assert store.add(IoC(type="tls.sni", value="x.example.com")) == item.id + 1


def test_disable_and_enable():
    store = IoCStore()
    ioc_id = store.add(IoC(type="src_ip", value="10.0.0.1"))
    assert store.disable(ioc_id).enabled is False
    assert [i.enabled for i in store.values()] == [False]
    assert store.enable(ioc_id).enabled is True
    assert [i.enabled for i in store.extract()] == [True]


def test_unknown_id_raises():
    store = IoCStore()
    with pytest.raises(IoCNotFoundError) as info:
        store.disable(7)
    assert str(info.value) == "IoC with ID 7 not found"


def test_values_grouped_by_type():
    store = IoCStore()
    store.add(IoC(type="http.hostname", value="evil.example.com"))
    store.add(IoC(type="dest_ip", value="10.0.0.2"))
    store.add(IoC(type="src_ip", value="10.0.0.3"))
    assert [i.type for i in store.values()] == ["dest_ip", "src_ip", "http.hostname"]


def test_extract_returns_copies():
    store = IoCStore()
    ioc_id = store.add(IoC(type="src_ip", value="10.0.0.1"))
    copies = store.extract()
    copies[0].enabled = False
    copies[0].value = "changed"
    fresh = {i.id: i for i in store.extract()}
    assert fresh[ioc_id].enabled is True
    assert fresh[ioc_id].value == "10.0.0.1"


def test_assets_empty_json():
    assert AssetStore().to_json() == b"[]"


def test_assets_update_and_json_round_trip():
    store = AssetStore()
    record = _record()
    store.update({"ws1": record})
    decoded = json.loads(store.to_json())
    assert decoded == [record.to_dict()]
    assert Record.from_dict(decoded[0]).keys() == record.keys()


def test_assets_empty_update_keeps_records():
    store = AssetStore()
    store.update({"ws1": _record()})
    store.update({})
    assert [r.host_name for r in store.records] == ["ws1"]


def test_write_wise():
    store = AssetStore()
    record = _record()
    store.update({"ws1": record})
    out = io.StringIO()
    store.write_wise(out)
    lines = out.getvalue().splitlines()
    assert lines[0] == "#field:target.name;shortcut:0"
    assert lines[4] == "#field:target.network_name;shortcut:4"
    assert lines[5] == (
        f"{record.addr};0={record.fqdn};1={record.pretty};2={record.team};"
        f"3={record.os};4={record.network_name}"
    )
    assert len(lines) == 6