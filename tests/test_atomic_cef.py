import pytest

from peekstream.atomic_cef import Cef, CefParseError, parse_cef

MSG = "CEF:0|Vendor|Product|1.0|100|Name|5|src=10.0.0.1 dst=10.0.0.2 act=blocked"


def test_parse_header_fields():
    cef = parse_cef(MSG)
    assert cef.device_vendor == "Vendor"
    assert cef.device_product == "Product"
    assert cef.device_version == "1.0"
    assert cef.signature_id == "100"
    assert cef.name == "Name"
    assert cef.severity == "5"


def test_parse_extensions():
    cef = parse_cef(MSG)
    assert cef.extensions == {"src": "10.0.0.1", "dst": "10.0.0.2", "act": "blocked"}
    assert cef.content() is cef.extensions


def test_prefix_with_space_is_stripped():
    cef = parse_cef("CEF: 0|Vendor|Product|1.0|100|Name|5|src=10.0.0.1")
    assert cef.device_vendor == "Vendor"
    assert cef.extensions == {"src": "10.0.0.1"}


def test_value_with_spaces():
    cef = parse_cef("CEF:0|V|P|1|2|N|3|msg=hello world src=1.2.3.4")
    assert cef.extensions["msg"] == "hello world"
    assert cef.extensions["src"] == "1.2.3.4"


def test_field_count_mismatch():
    with pytest.raises(CefParseError) as info:
        parse_cef("CEF:0|Vendor|Product")
    assert "Field count mismatch" in str(info.value)
    assert info.value.cef is None


def test_empty_extensions_keeps_partial_result():
    with pytest.raises(CefParseError) as info:
        parse_cef("CEF:0|Vendor|Product|1.0|100|Name|5|")
    assert info.value.cef is not None
    assert info.value.cef.device_vendor == "Vendor"
    assert "Empty extension list" in info.value.reason


def test_event_accessors():
    cef = Cef(device_vendor="Vendor", device_product="Product")
    assert cef.source() == "Product"
    assert cef.sender() == "Vendor"
    assert cef.time() is None