import json

import pytest

from leadfinder.etl import normalize


def test_strip_code_fences():
    assert normalize.strip_code_fences('```json\n[1, 2]\n```') == "[1, 2]"
    assert normalize.strip_code_fences("  [1]  ") == "[1]"


def test_parse_businesses_preserves_order_and_assigns_unique_ids():
    items = [{"name": f"Shop {i}", "id": "source-id"} for i in range(12)]

    businesses = normalize.parse_businesses(json.dumps(items))

    assert [b.name for b in businesses] == [f"Shop {i}" for i in range(12)]
    ids = [b.id for b in businesses]
    assert len(set(ids)) == 12
    assert "source-id" not in ids


def test_parse_businesses_ids_differ_between_batches():
    first = normalize.parse_businesses('[{"name": "A"}]')
    second = normalize.parse_businesses('[{"name": "A"}]')
    assert first[0].id != second[0].id


def test_parse_businesses_applies_defaults():
    (business,) = normalize.parse_businesses("[{}]")

    assert business.name == normalize.DEFAULT_NAME
    assert business.address == normalize.DEFAULT_ADDRESS
    assert business.category == normalize.DEFAULT_CATEGORY
    assert business.phone_number is None
    assert business.website is None
    assert business.rating is None
    assert business.email is None
    assert business.open_status is None
    assert business.review_count == 0
    assert business.social_media == {}


def test_parse_businesses_treats_empty_strings_as_absent():
    raw = json.dumps(
        [{"name": "", "website": "", "phoneNumber": "  ", "email": "", "category": "", "rating": 0}]
    )

    (business,) = normalize.parse_businesses(raw)

    assert business.name == normalize.DEFAULT_NAME
    assert business.website is None
    assert business.phone_number is None
    assert business.email is None
    assert business.category == normalize.DEFAULT_CATEGORY
    assert business.rating is None


def test_parse_businesses_keeps_populated_fields():
    raw = json.dumps(
        [
            {
                "name": "Joe's Cafe",
                "address": "123 Main St, Springfield, USA",
                "phoneNumber": "555-0100",
                "website": "https://joes.example",
                "rating": "4.6",
                "reviewCount": "1,204 reviews",
                "category": "Cafe",
                "openStatus": "Open Now",
                "email": "hi@joes.example",
                "socialMedia": {"instagram": "https://instagram.com/joes", "facebook": None, "tiktok": "x"},
            }
        ]
    )

    (business,) = normalize.parse_businesses(raw)

    assert business.phone_number == "555-0100"
    assert business.website == "https://joes.example"
    assert business.rating == 4.6
    assert business.review_count == 1204
    assert business.open_status == "Open Now"
    assert business.social_media == {"instagram": "https://instagram.com/joes"}


def test_parse_businesses_review_count_defaults_to_zero_with_rating():
    (business,) = normalize.parse_businesses('[{"name": "A", "rating": 4.2}]')
    assert business.rating == 4.2
    assert business.review_count == 0


@pytest.mark.parametrize("raw", [None, "", "   \n"])
def test_parse_businesses_empty_payload(raw):
    with pytest.raises(normalize.EmptyResponse):
        normalize.parse_businesses(raw)


def test_parse_businesses_invalid_json_keeps_raw_text(caplog):
    with caplog.at_level("ERROR"):
        with pytest.raises(normalize.MalformedResponse) as excinfo:
            normalize.parse_businesses("not json")

    assert excinfo.value.raw_text == "not json"
    assert "not json" in " ".join(caplog.messages)


@pytest.mark.parametrize("raw", ['{"name": "A"}', '"text"', "42", '[{"name": "A"}, "oops"]', "[null]"])
def test_parse_businesses_rejects_non_array_of_objects(raw):
    with pytest.raises(normalize.MalformedResponse):
        normalize.parse_businesses(raw)


def test_parse_businesses_empty_array():
    assert normalize.parse_businesses("[]") == []


@pytest.mark.parametrize("value", ["1e999", "-1e999", "NaN", "Infinity"])
def test_parse_businesses_non_finite_review_count_defaults_to_zero(value):
    (business,) = normalize.parse_businesses(f'[{{"name": "A", "reviewCount": {value}}}]')
    assert business.review_count == 0


@pytest.mark.parametrize("value", ["1e999", "NaN", "-Infinity", '"inf"', '"nan"'])
def test_parse_businesses_non_finite_rating_is_absent(value):
    (business,) = normalize.parse_businesses(f'[{{"name": "A", "rating": {value}}}]')
    assert business.rating is None
