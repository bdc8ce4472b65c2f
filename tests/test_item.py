"""
Tests for item validation and value rendering.
"""

from datetime import datetime
from decimal import Decimal

import pytest
from dateutil import tz

from sitemap_writer.exceptions import ValidationError
from sitemap_writer.sitemap.item import (
    ChangeFrequency,
    SitemapItem,
    VALID_FREQUENCIES,
    format_last_modified,
    format_priority,
    validate_frequency,
    validate_last_modified,
    validate_location,
    validate_priority,
)

UTC = tz.gettz("UTC")


def test_valid_frequencies():
    assert VALID_FREQUENCIES == ["always", "hourly", "daily", "weekly", "monthly", "yearly", "never"]
    for token in VALID_FREQUENCIES:
        assert validate_frequency(token) is ChangeFrequency(token)
    assert validate_frequency(ChangeFrequency.NEVER) is ChangeFrequency.NEVER


@pytest.mark.parametrize("token", ["biweekly", "Daily", "", None, 1])
def test_invalid_frequency(token):
    with pytest.raises(ValidationError) as exc_info:
        validate_frequency(token)
    assert exc_info.value.context == {"frequency": token}


def test_location_returned_verbatim():
    # pydantic would normalize this to a trailing slash; the raw value is kept
    assert validate_location("https://EXAMPLE.com") == "https://EXAMPLE.com"


@pytest.mark.parametrize("value,expected", [
    (0, 0.0),
    (1, 1.0),
    (0.5, 0.5),
    (" 0.7 ", 0.7),
    (Decimal("0.2"), 0.2),
])
def test_validate_priority(value, expected):
    assert validate_priority(value) == expected


@pytest.mark.parametrize("value,expected", [
    (0.8, "0.8"),
    (1.0, "1.0"),
    (0.15, "0.2"),
    (0.95, "1.0"),
    (0.123, "0.1"),
])
def test_format_priority(value, expected):
    assert format_priority(value) == expected


def test_format_last_modified_timestamp():
    assert format_last_modified(1705314600, UTC) == "2024-01-15T10:30:00+00:00"


def test_format_last_modified_negative_offset():
    new_york = tz.gettz("America/New_York")
    assert format_last_modified(1705314600, new_york) == "2024-01-15T05:30:00-05:00"


def test_format_last_modified_out_of_range():
    with pytest.raises(ValidationError):
        format_last_modified(10 ** 20, UTC)


@pytest.mark.parametrize("value", [10 ** 20, -(10 ** 20), 1e300])
def test_validate_last_modified_checks_range(value):
    with pytest.raises(ValidationError):
        validate_last_modified(value)
    with pytest.raises(ValidationError):
        SitemapItem(last_modified=value).validated(UTC)


def test_validate_last_modified_returns_value():
    moment = datetime(2024, 1, 15, 10, 30)
    assert validate_last_modified(moment, UTC) is moment
    assert validate_last_modified(0) == 0


def test_child_elements_skip_unset_fields():
    assert SitemapItem().child_elements(UTC) == []
    item = SitemapItem(location="https://a.com/", frequency=ChangeFrequency.HOURLY)
    assert item.child_elements(UTC) == [("loc", "https://a.com/"), ("changefreq", "hourly")]


def test_child_elements_treat_zero_priority_as_unset():
    item = SitemapItem(location="https://a.com/", priority=0.0)
    assert item.child_elements(UTC) == [("loc", "https://a.com/")]


def test_validated_returns_normalized_copy():
    original = SitemapItem(
        location="https://a.com/",
        last_modified=datetime(2024, 1, 1),
        frequency="yearly",
        priority="1",
        alternate_languages={"fr": "https://a.com/fr/"},
    )
    checked = original.validated()

    assert checked is not original
    assert checked.frequency is ChangeFrequency.YEARLY
    assert checked.priority == 1.0
    assert checked.alternate_languages == original.alternate_languages
    assert checked.alternate_languages is not original.alternate_languages


def test_validation_error_to_dict():
    with pytest.raises(ValidationError) as exc_info:
        validate_priority(2)
    data = exc_info.value.to_dict()
    assert data["error"] == "ValidationError"
    assert data["context"] == {"priority": 2}
    assert "0.0 to 1.0" in data["message"]
