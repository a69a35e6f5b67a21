from app.models import CatalogEntry, TimestampDisplay, marker_code


def test_marker_code_accepts_both_shapes():
    assert marker_code("US") == "US"
    assert marker_code({"code": "US", "name": "United States"}) == "US"
    assert marker_code({"name": "no code"}) is None
    assert marker_code(42) is None


def test_catalog_entry_normalises_countries():
    entry = CatalogEntry.model_validate(
        {"title": "Mixed", "countries": ["US", {"code": "DE"}, {"name": "?"}, None]}
    )
    assert entry.countries == ["US", "DE"]


def test_catalog_entry_without_country_list_is_not_available():
    entry = CatalogEntry.model_validate({"title": "Nowhere", "countries": "US"})
    assert entry.countries is None
    assert entry.available_in({"US"}) is False


def test_identity_prefers_identifier_then_title():
    assert CatalogEntry.model_validate({"id": 80057281, "title": "X"}).identity == "80057281"
    assert CatalogEntry.model_validate({"id": "", "title": "Fallback"}).identity == "Fallback"
    assert CatalogEntry.model_validate({"title": "Fallback"}).identity == "Fallback"


def test_zero_identifier_falls_back_to_title():
    assert CatalogEntry.model_validate({"id": 0, "title": "Zero"}).identity == "Zero"
    assert CatalogEntry.model_validate({"id": 0.0, "title": "Zero"}).identity == "Zero"
    assert CatalogEntry.model_validate({"id": "0", "title": "Zero"}).identity == "0"


def test_rating_and_year_parse_defensively():
    entry = CatalogEntry.model_validate({"title": "Blank", "rating": "", "year": None})
    assert entry.rating_value == 0
    assert entry.year_value == 0

    entry = CatalogEntry.model_validate({"title": "Text", "rating": "7.5/10", "year": "2019-05"})
    assert entry.rating_value == 7.5
    assert entry.year_value == 2019

    entry = CatalogEntry.model_validate({"title": "Junk", "rating": "n/a", "year": "unknown"})
    assert entry.rating_value == 0
    assert entry.year_value == 0


def test_localized_title_falls_back_to_alias():
    entry = CatalogEntry.model_validate(
        {"title": "Show X", "titleJa": "", "japaneseTitle": "ショーX"}
    )
    assert entry.localized_title == "ショーX"


def test_missing_title_is_tolerated():
    entry = CatalogEntry.model_validate({"id": "abc"})
    assert entry.title == ""
    assert entry.identity == "abc"


def test_timestamp_display_states():
    assert TimestampDisplay.missing().text == "データ未取得"
    assert TimestampDisplay.unknown().kind == "unknown"
