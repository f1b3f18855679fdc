from datetime import datetime, timezone

import pytest

from block_directory.catalog.models import RawCatalogRecord
from block_directory.directory.humanize import human_time_diff, humanize_updated, to_epoch
from block_directory.directory.links import build_links
from block_directory.directory.normalizer import normalize_record, strip_all_tags, trim_words
from block_directory.directory.urls import resolve_asset_url
from block_directory.errors import MalformedRecord

from .conftest import FIXED_NOW, make_plugin

CDN = "https://ps.w.org/"


def _normalize(payload):
    record = RawCatalogRecord.from_payload(payload)
    return normalize_record(record, build_links(record.slug, None, "https://site.test"), CDN, FIXED_NOW)


@pytest.mark.parametrize("raw, expected", [(100, 5.0), (0, 0.0), (75, 3.75)])
def test_rating_is_scaled_to_five_stars(raw, expected):
    item = _normalize(make_plugin("stars", rating=raw, author_block_rating=raw))
    assert item.rating == expected
    assert item.author_block_rating == expected


def test_description_is_truncated_to_thirty_words():
    words = [f"word{i}" for i in range(40)]
    assert trim_words(" ".join(words)) == " ".join(words[:30]) + "..."


def test_short_description_is_unchanged():
    text = "one two three four five six seven eight nine ten"
    assert trim_words(text) == text


def test_strip_all_tags_drops_script_contents():
    assert strip_all_tags("<b>Jane</b><script>alert(1)</script> ") == "Jane"


def test_relative_asset_is_placed_under_cdn_with_cache_buster():
    url = resolve_asset_url("my-block", "/block.js", CDN, to_epoch("2020-01-01 00:00:00"))
    assert url.startswith("https://ps.w.org/")
    assert "my-block/block.js" in url
    assert url.endswith("?v=1577836800")


def test_absolute_https_asset_passes_through():
    assert resolve_asset_url("my-block", "https://example.com/a.js", CDN, 1) == "https://example.com/a.js"


def test_http_asset_is_treated_as_fragment_and_never_plain_http():
    url = resolve_asset_url("my-block", "http://example.com/a.js", CDN, 1)
    assert url.startswith("https://ps.w.org/my-block")


def test_human_time_diff_units():
    now = datetime(2020, 1, 4, tzinfo=timezone.utc)
    assert human_time_diff(datetime(2020, 1, 1, tzinfo=timezone.utc), now) == "3 days"
    assert human_time_diff(datetime(2020, 1, 3, 23, tzinfo=timezone.utc), now) == "1 hour"
    assert human_time_diff(datetime(2020, 1, 3, 23, 59, 30, tzinfo=timezone.utc), now) == "30 seconds"
    assert human_time_diff(datetime(2019, 1, 4, tzinfo=timezone.utc), now) == "1 year"


def test_humanize_updated_accepts_catalog_format():
    now = datetime(2020, 1, 4, 17, 2, tzinfo=timezone.utc)
    assert humanize_updated("2020-01-01 5:02pm GMT", now) == "3 days ago"
    assert humanize_updated("not a date", now) == ""


def test_normalized_item_fields():
    item = _normalize(make_plugin("my-block"))
    data = item.to_response()

    assert data["name"] == "my-block/my-block"
    assert data["title"] == "My-Block Block"
    assert data["id"] == "my-block"
    assert data["rating_count"] == 12
    assert data["author_block_count"] == 3
    assert data["author"] == "Jane Doe"
    assert data["icon"] == "https://ps.w.org/my-block/assets/icon-128x128.png"
    assert data["assets"] == [
        "https://ps.w.org/my-block/block.js?v=1577836800",
        "https://ps.w.org/my-block/block.css?v=1577836800",
    ]
    assert data["last_updated"] == "2020-01-01 00:00:00"
    assert data["humanized_updated"] == "3 days ago"
    assert list(data["_links"]) == ["https://api.w.org/install-plugin"]


def test_title_falls_back_to_record_name_and_icon_to_default():
    item = _normalize(make_plugin("plain", blocks=[{"name": "plain/plain", "title": ""}], icons={}))
    assert item.title == "Plain Plugin"
    assert item.icon == "block-default"


def test_only_first_block_is_surfaced():
    item = _normalize(make_plugin("multi", blocks=[
        {"name": "multi/first", "title": "First"},
        {"name": "multi/second", "title": "Second"},
    ]))
    assert item.name == "multi/first"


def test_record_without_blocks_is_malformed():
    record = RawCatalogRecord.from_payload(make_plugin("empty", blocks=[]))
    with pytest.raises(MalformedRecord):
        normalize_record(record, {}, CDN, FIXED_NOW)


def test_payload_without_slug_is_malformed():
    with pytest.raises(MalformedRecord):
        RawCatalogRecord.from_payload({"name": "No slug"})


def test_unparseable_asset_resolves_to_empty():
    assert resolve_asset_url("my-block", "https://[broken/a.js", CDN, 1) == ""


def test_mixed_assets_keep_record_order_and_are_escaped():
    item = _normalize(make_plugin("my-block", block_assets=[
        "/first.js",
        "https://example.com/second file.js",
        "/third.css",
        "https://cdn.example.com/fourth.js<script>",
    ]))

    assert item.assets == [
        "https://ps.w.org/my-block/first.js?v=1577836800",
        "https://example.com/second%20file.js",
        "https://ps.w.org/my-block/third.css?v=1577836800",
        "https://cdn.example.com/fourth.jsscript",
    ]


@pytest.mark.parametrize("value", ["inf", "-inf", "nan", "Infinity", 10 ** 400])
def test_non_finite_numbers_fall_back_to_zero(value):
    record = RawCatalogRecord.from_payload(make_plugin(
        "odd", rating=value, author_block_rating=value, num_ratings=value, active_installs=value,
    ))

    assert record.rating == 0.0
    assert record.author_block_rating == 0.0
    assert record.num_ratings == 0
    assert record.active_installs == 0


def test_non_finite_rating_on_record_is_malformed():
    record = RawCatalogRecord.from_payload(make_plugin("odd"))
    record.rating = float("inf")

    with pytest.raises(MalformedRecord):
        normalize_record(record, {}, CDN, FIXED_NOW)
