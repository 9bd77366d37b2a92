# validation.py
"""
Field checks shared by the API handlers and the Streamlit frontend.

`validate` never mutates its input; it returns the first problem it finds:
  1. a required field that is absent or blank (declaration order)
  2. a declared field whose value is not a string
  3. an email that doesn't look like local@domain.tld
  4. a field the category doesn't declare
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from form_config import allowed_fields, get_form_definition

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+?[1-9]\d{0,15}$")

MISSING = "missing"
INVALID_FORMAT = "invalid_format"
UNKNOWN_FIELD = "unknown_field"


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: Optional[str] = None
    field: Optional[str] = None

    @property
    def message(self) -> Optional[str]:
        if self.valid:
            return None
        if self.reason == MISSING:
            return f"Missing {self.field}"
        if self.reason == UNKNOWN_FIELD:
            return f"Unknown field {self.field}"
        return f"Invalid {self.field}"


VALID = ValidationResult(valid=True)


def validate_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def validate_phone(phone: str) -> bool:
    return bool(PHONE_RE.match(re.sub(r"\s", "", phone)))


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def validate(category: str, fields: Mapping[str, Any]) -> ValidationResult:
    form_def = get_form_definition(category)
    if form_def is None:
        raise ValueError(f"Unknown category: {category}")

    for name in form_def["required_fields"]:
        if is_blank(fields.get(name)):
            return ValidationResult(False, MISSING, name)

    known = allowed_fields(category)
    for name in known:
        if name in fields and fields[name] is not None and not isinstance(fields[name], str):
            return ValidationResult(False, INVALID_FORMAT, name)

    if not validate_email(fields["email"]):
        return ValidationResult(False, INVALID_FORMAT, "email")

    for name in fields:
        if name not in known:
            return ValidationResult(False, UNKNOWN_FIELD, name)

    return VALID


def invalid_phone_fields(category: str, fields: Mapping[str, Any]):
    """Phone-type fields whose value doesn't look like a phone number."""
    form_def = get_form_definition(category)
    return [
        name
        for name in form_def["phone_fields"]
        if isinstance(fields.get(name), str)
        and fields[name].strip()
        and not validate_phone(fields[name])
    ]
