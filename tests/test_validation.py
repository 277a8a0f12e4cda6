import pytest

from landing_api.core.errors import InvalidPhone, InvalidType, MissingField
from landing_api.services.validation import (
    clamp_limit,
    clamp_text,
    normalize_phone,
    validate_event_type,
    validate_inquiry,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("+1 (555) 010-2030", "15550102030"),
        ("98765 43210", "9876543210"),
        ("+44 20 7946 0958 123", "442079460958123"),
        (9876543210, "9876543210"),
    ],
)
def test_normalize_phone_keeps_digits(raw, expected):
    assert normalize_phone(raw) == expected


@pytest.mark.parametrize("raw", ["12345", "123-456-789", "1234567890123456", "call me", "", None])
def test_normalize_phone_rejects_out_of_range(raw):
    with pytest.raises(InvalidPhone):
        normalize_phone(raw)


def test_clamp_text():
    assert clamp_text(None, 10) == ""
    assert clamp_text("  hello  ", 10) == "hello"
    assert clamp_text("  hello  ", 10, strip=False) == "  hello  "
    assert clamp_text("abcdef", 3) == "abc"
    assert clamp_text(42, 10) == "42"


def test_validate_inquiry_bounds_optional_fields():
    values = validate_inquiry(
        {
            "name": "  " + "N" * 150,
            "phone": "+1 555 010 2030",
            "service": "S" * 100,
            "message": "M" * 3000,
            "page_url": " https://x.test/" + "p" * 500,
        }
    )
    assert values["name"] == "N" * 100
    assert values["phone"] == "15550102030"
    assert len(values["service"]) == 80
    assert len(values["message"]) == 2000
    assert len(values["page_url"]) == 400
    assert values["page_url"].startswith(" https://")


def test_validate_inquiry_defaults_optional_to_empty():
    values = validate_inquiry({"name": "Asha", "phone": "5550102030"})
    assert values["service"] == ""
    assert values["message"] == ""
    assert values["page_url"] == ""


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"name": "Asha"},
        {"phone": "5550102030"},
        {"name": "   ", "phone": "5550102030"},
        {"name": "Asha", "phone": ""},
    ],
)
def test_validate_inquiry_requires_name_and_phone(payload):
    with pytest.raises(MissingField):
        validate_inquiry(payload)


def test_validate_event_type_is_exact():
    assert validate_event_type("whatsapp") == "whatsapp"
    for bad in ("WhatsApp", "whatsapp ", "unknown", "", None, 1):
        with pytest.raises(InvalidType):
            validate_event_type(bad)


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, 100), ("20", 20), ("1000", 500), (1000, 500), ("abc", 100), ("", 100),
        ("20abc", 20), (" 7", 7), ("0", 0), ("-5", 0),
    ],
)
def test_clamp_limit(raw, expected):
    assert clamp_limit(raw) == expected
