import ipaddress

import pytest

from peekstream.meta_network import NetSegment, networks_from_pandas


def _table():
    return {
        "Name": {"0": "DMZ", "1": "Internal"},
        "Abbreviation": {"0": "dmz", "1": "int"},
        "VLAN/Portgroup": {"0": "vlan10", "1": "vlan20"},
        "IPv4": {"0": "10.0.0.0/24", "1": "10.1.0.0/16"},
        "IPv6": {"0": "fd00::/64"},
        "Description": {"0": "demilitarised"},
        "WHOIS": {},
        "Team": {"0": "blue", "1": "blue"},
    }


def test_networks_from_pandas_reads_columns():
    nets = {n.id: n for n in networks_from_pandas(_table())}
    assert set(nets) == {0, 1}
    assert nets[0].name == "DMZ"
    assert nets[0].abbreviation == "dmz"
    assert nets[0].vlan == "vlan10"
    assert nets[0].ipv4 == ipaddress.ip_network("10.0.0.0/24")
    assert nets[0].ipv6 == ipaddress.ip_network("fd00::/64")
    assert nets[1].ipv6 is None
    assert nets[1].desc == ""


def test_shorthand_segments_contain_addresses():
    net = {n.id: n for n in networks_from_pandas(_table())}[0]
    v4, v6 = net.shorthand()
    assert (v4.id, v4.name) == (net.id, net.name)
    assert "10.0.0.5" in v4
    assert "10.0.1.5" not in v4
    assert ipaddress.ip_address("fd00::1") in v6
    assert "10.0.0.5" not in v6
    assert str(v4) == "10.0.0.0/24"


def test_empty_segment():
    seg = NetSegment()
    assert "10.0.0.1" not in seg
    assert str(seg) == "<nil>"


def test_escaped_cidr_is_accepted():
    table = {"Name": {"3": "x"}, "IPv4": {"3": "10.2.0.0\\/24"}}
    (net,) = networks_from_pandas(table)
    assert net.ipv4 == ipaddress.ip_network("10.2.0.0/24")


def test_invalid_cidr_raises():
    with pytest.raises(ValueError):
        networks_from_pandas({"Name": {"0": "x"}, "IPv4": {"0": "10.0.0.0"}})