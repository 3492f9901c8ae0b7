from leadfinder.core.models import Business
from leadfinder.etl import templates


def make_business(**overrides):
    fields = dict(id="biz-1", name="Joe's Cafe", address="123 Main St, Springfield, USA", category="Cafe")
    fields.update(overrides)
    return Business(**fields)


def test_build_prompt_substitutes_fields_and_defaults():
    text = templates.build_prompt(make_business(phone_number=None, category=""))

    assert 'Build a business website for "Joe\'s Cafe"' in text
    assert 'located at "123 Main St, Springfield, USA"' in text
    assert "Industry: General Business." in text
    assert "Their phone number is Not listed." in text
    assert "Home, About, Services, and Contact" in text


def test_build_prompt_uses_phone():
    text = templates.build_prompt(make_business(phone_number="555-0100"))
    assert "Their phone number is 555-0100." in text


def test_generators_are_deterministic():
    business = make_business(rating=4.8)
    assert templates.build_prompt(business) == templates.build_prompt(business)
    assert templates.outreach_message(business) == templates.outreach_message(business)


def test_outreach_praises_high_rating():
    text = templates.outreach_message(make_business(rating=4.8))

    assert "I noticed you have a fantastic 4.8-star rating on Google" in text
    assert text.startswith("Subject: Quick question about Joe's Cafe")
    assert "I help local Cafe businesses" in text


def test_outreach_formats_whole_ratings_without_decimal():
    text = templates.outreach_message(make_business(rating=5.0))
    assert "fantastic 5-star rating" in text


def test_outreach_cites_location_without_rating():
    text = templates.outreach_message(make_business(rating=None))

    assert "I found your business listed in Springfield, but" in text


def test_outreach_rating_at_threshold_cites_location():
    text = templates.outreach_message(make_business(rating=4.0))
    assert "star rating" not in text
    assert "listed in Springfield" in text


def test_outreach_falls_back_to_the_area():
    text = templates.outreach_message(make_business(address="Somewhere without commas", category=""))

    assert "I found your business listed in the area" in text
    assert "I help local business businesses" in text


def test_outreach_keeps_full_rating_precision():
    text = templates.outreach_message(make_business(rating=4.123456789))
    assert "fantastic 4.123456789-star rating" in text


def test_outreach_non_finite_rating_never_rendered():
    from leadfinder.etl.normalize import parse_businesses

    (business,) = parse_businesses('[{"name": "A", "address": "1 Main St, Springfield", "rating": 1e999}]')
    text = templates.outreach_message(business)

    assert "inf" not in text
    assert "listed in Springfield" in text


def test_templates_have_no_trailing_whitespace():
    business = make_business(rating=4.8)
    for text in (templates.build_prompt(business), templates.outreach_message(business)):
        assert all(line == line.rstrip() for line in text.split("\n"))
