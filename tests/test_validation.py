import pytest

from form_config import CATEGORIES, get_form_definition
from validation import (
    INVALID_FORMAT,
    MISSING,
    UNKNOWN_FIELD,
    invalid_phone_fields,
    validate,
    validate_email,
    validate_phone,
)
from tests.payloads import CONTACT_PAYLOAD, FUNDING_PAYLOAD, JOB_PAYLOAD, VENDOR_PAYLOAD

VALID_PAYLOADS = {
    "contact": CONTACT_PAYLOAD,
    "internship": JOB_PAYLOAD,
    "partnership": VENDOR_PAYLOAD,
    "investment": FUNDING_PAYLOAD,
}

REQUIRED_CASES = [
    (category, name)
    for category in CATEGORIES
    for name in get_form_definition(category)["required_fields"]
]


@pytest.mark.parametrize("category", CATEGORIES)
def test_complete_payload_is_valid(category):
    result = validate(category, VALID_PAYLOADS[category])
    assert result.valid
    assert result.message is None


@pytest.mark.parametrize("category,name", REQUIRED_CASES)
def test_single_empty_required_field_is_reported(category, name):
    fields = dict(VALID_PAYLOADS[category], **{name: ""})
    result = validate(category, fields)
    assert not result.valid
    assert result.reason == MISSING
    assert result.field == name
    assert result.message == f"Missing {name}"


@pytest.mark.parametrize("category,name", REQUIRED_CASES)
def test_absent_required_field_is_reported(category, name):
    fields = {k: v for k, v in VALID_PAYLOADS[category].items() if k != name}
    assert validate(category, fields).field == name


def test_first_missing_field_in_declaration_order_wins():
    fields = dict(JOB_PAYLOAD, city="", lastName="", skills="")
    assert validate("internship", fields).field == "lastName"


def test_whitespace_only_counts_as_missing():
    fields = dict(CONTACT_PAYLOAD, message="   ")
    assert validate("contact", fields).field == "message"


@pytest.mark.parametrize(
    "email",
    ["plainaddress", "a@b", "@b.com", "a@.com", "a b@c.com", "a@b@c.com", "a@b."],
)
@pytest.mark.parametrize("category", CATEGORIES)
def test_bad_email_rejected_for_every_category(category, email):
    fields = dict(VALID_PAYLOADS[category], email=email)
    result = validate(category, fields)
    assert result.reason == INVALID_FORMAT
    assert result.field == "email"
    assert result.message == "Invalid email"


@pytest.mark.parametrize("email", ["a@b.co", "first.last@sub.example.org", "x+y@d.io"])
def test_email_shape(email):
    assert validate_email(email)


def test_missing_field_reported_before_bad_email():
    fields = dict(CONTACT_PAYLOAD, email="nope", message="")
    assert validate("contact", fields).field == "message"


def test_non_string_value_is_invalid():
    fields = dict(CONTACT_PAYLOAD, businessPhone=1234567890)
    result = validate("contact", fields)
    assert result.reason == INVALID_FORMAT
    assert result.field == "businessPhone"


def test_unknown_field_rejected():
    fields = dict(CONTACT_PAYLOAD, isAdmin="yes")
    result = validate("contact", fields)
    assert result.reason == UNKNOWN_FIELD
    assert result.message == "Unknown field isAdmin"


def test_opportunity_type_is_allowed_on_opportunities_only():
    assert validate("partnership", dict(VENDOR_PAYLOAD, opportunityType="partnership")).valid
    assert validate("contact", dict(CONTACT_PAYLOAD, opportunityType="x")).reason == UNKNOWN_FIELD


def test_validate_does_not_mutate_input():
    fields = dict(JOB_PAYLOAD, extra="1")
    snapshot = dict(fields)
    validate("internship", fields)
    assert fields == snapshot


def test_unknown_category_raises():
    with pytest.raises(ValueError):
        validate("newsletter", {})


@pytest.mark.parametrize(
    "phone,ok",
    [
        ("+1234567890", True),
        ("98765 43210", True),
        ("1", True),
        ("1234567890123456", True),
        ("12345678901234567", False),
        ("0123456789", False),
        ("+", False),
        ("++123", False),
        ("12-34", False),
        ("abc", False),
    ],
)
def test_phone_shape(phone, ok):
    assert validate_phone(phone) is ok


def test_invalid_phone_fields_lists_bad_numbers():
    fields = dict(JOB_PAYLOAD, whatsapp="call me")
    assert invalid_phone_fields("internship", fields) == ["whatsapp"]
    assert invalid_phone_fields("contact", CONTACT_PAYLOAD) == []
