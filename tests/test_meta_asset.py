from ipaddress import ip_address

from peekstream.meta_asset import Asset, RawAsset


def test_fqdn_with_domain():
    assert Asset(host="web", domain="example.com").fqdn() == "web.example.com"


def test_fqdn_without_domain():
    assert Asset(host="web").fqdn() == "web"


def test_copy_is_equal_and_independent():
    original = Asset(host="db", ip=ip_address("10.0.0.2"), is_asset=True)
    duplicate = original.copy()
    assert duplicate == original
    duplicate.host = "other"
    assert original.host == "db"


def test_to_dict_keys_and_values():
    data = Asset(host="db", ip=ip_address("10.0.0.2"), team="blue").to_dict()
    assert data["Host"] == "db"
    assert data["IP"] == "10.0.0.2"
    assert data["Team"] == "blue"
    assert set(data) == {
        "Host", "Alias", "OS", "IP", "Zone", "Team", "Domain", "VM", "Role", "is_asset",
    }


def test_to_dict_missing_ip():
    assert Asset().to_dict()["IP"] == ""


def test_raw_asset_to_asset():
    raw = RawAsset(
        host_name="h", pretty="p", role="r", os="os_linux",
        ip=ip_address("10.1.1.1"), zone="z", team="blue", domain="example.com", vm="vm",
    )
    asset = raw.to_asset()
    assert asset.is_asset is True
    assert asset.host == raw.host_name
    assert asset.alias == raw.pretty
    assert asset.ip == raw.ip
    assert asset.vm == raw.vm