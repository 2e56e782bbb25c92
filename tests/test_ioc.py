from datetime import datetime, timezone

import pytest

from peekstream.ioc import (
    REVISION,
    SID_OFFSET,
    SID_OFFSET_JA3_DIRECTION,
    InvalidIPError,
    IoC,
    IoCError,
    MissingIoCTypeError,
    MissingIoCValueError,
)

ADDED = datetime(2021, 11, 30, 10, 0, 0, 123456, tzinfo=timezone.utc)

ALL_TYPES = ["src_ip", "dest_ip", "tls.ja3.hash", "tls.ja3s.hash", "tls.sni", "http.hostname"]


def test_validate_missing_type():
    with pytest.raises(MissingIoCTypeError, match="missing IoC type"):
        IoC(value="1.2.3.4").validate()


def test_validate_missing_value():
    with pytest.raises(MissingIoCValueError, match="missing IoC value"):
        IoC(type="src_ip").validate()


@pytest.mark.parametrize("ioc_type", ["src_ip", "dest_ip"])
def test_validate_rejects_bad_ip(ioc_type):
    with pytest.raises(InvalidIPError):
        IoC(type=ioc_type, value="300.1.1.1").validate()


def test_errors_share_base():
    with pytest.raises(IoCError):
        IoC().validate()


def test_valid_indicator_key():
    ioc = IoC(type="tls.sni", value="evil.example.com")
    ioc.validate()
    assert ioc.key() == "tls.sni_evil.example.com"


def test_key_ignores_id():
    assert IoC(id=1, type="src_ip", value="::1").key() == IoC(id=9, type="src_ip", value="::1").key()


def test_src_ip_rule():
    rule = IoC(id=5, type="src_ip", value="10.0.0.1").rule()
    assert rule.startswith("alert ip [10.0.0.1] any -> $HOME_NET any")
    assert f"sid:{SID_OFFSET + 5};" in rule
    assert f"rev:{REVISION};" in rule


def test_disabled_rule_is_commented():
    rule = IoC(id=1, type="dest_ip", value="10.0.0.1", enabled=False).rule()
    assert rule.startswith("# alert ip $HOME_NET any -> [10.0.0.1]")


def test_ja3_rule_has_both_directions():
    lines = IoC(id=0, type="tls.ja3.hash", value="abc", enabled=False).rule().split("\n")
    assert len(lines) == 2
    assert all(line.startswith("# alert tls") for line in lines)
    assert f"sid:{SID_OFFSET};" in lines[0]
    assert f"sid:{SID_OFFSET + SID_OFFSET_JA3_DIRECTION};" in lines[1]


@pytest.mark.parametrize("ioc_type", ALL_TYPES)
def test_every_supported_type_mentions_value(ioc_type):
    rule = IoC(id=3, type=ioc_type, value="needle").rule()
    assert "needle" in rule
    assert rule.startswith("alert ")


def test_unsupported_type_rule():
    assert IoC(id=7, type="md5", value="x").rule() == "# unsupported ioc type for 7"


def test_dict_round_trip():
    ioc = IoC(id=4, enabled=False, value="bad.example.com", type="http.hostname", added=ADDED)
    data = ioc.to_dict()
    assert set(data) == {"id", "enabled", "value", "type", "added"}
    assert IoC.from_dict(data) == ioc