"""
Unit tests for output record assembly.
"""

from __future__ import annotations

import dataclasses
import json

import pytest

from scraper.extract import NAME_SCRAPE_ERROR, OutputRecord, ScreenshotResult, assemble_record

SHOT = ScreenshotResult(encoding="base64", type="image/png", img="aGVsbG8=")


def test_assemble_record_fields():
    record = assemble_record(
        url="https://example.com/p/123", name="Widget X", price="$19.99", screenshot=SHOT
    )
    assert record == OutputRecord(
        url="https://example.com/p/123", name="Widget X", price="$19.99", screenshot=SHOT
    )


def test_assemble_record_carries_sentinel_and_empty_price():
    """Degraded values pass through verbatim; nothing is substituted."""
    record = assemble_record(url="u", name=NAME_SCRAPE_ERROR, price="", screenshot=SHOT)
    assert record.name == "NAME_SCRAPE_ERROR"
    assert record.price == ""


def test_record_is_immutable():
    record = assemble_record(url="u", name="n", price="p", screenshot=SHOT)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.price = "$0.00"


def test_record_to_dict_shape_is_json_serializable():
    record = assemble_record(url="u", name="n", price="$1", screenshot=SHOT)
    data = record.to_dict()
    assert data == {
        "url": "u",
        "name": "n",
        "price": "$1",
        "screenshot": {"encoding": "base64", "type": "image/png", "img": "aGVsbG8="},
    }
    assert json.loads(json.dumps(data)) == data


def test_screenshot_result_from_png():
    shot = ScreenshotResult.from_png(b"hello")
    assert shot == SHOT
