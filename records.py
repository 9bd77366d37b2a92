# records.py
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from form_config import CONTACT, get_form_definition


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2025-01-31T09:15:02.123Z"""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_record(
    category: str,
    fields: Mapping[str, Any],
    attachment_filename: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Assemble the document persisted for one submission.

    - submitted fields are copied as-is
    - opportunity categories get `opportunityType` (server value wins over
      whatever the client sent)
    - the stored attachment name goes under the category's filename field
    - `createdAt` is always set here, never taken from the client
    """
    form_def = get_form_definition(category)
    if form_def is None:
        raise ValueError(f"Unknown category: {category}")

    record = dict(fields)
    record.pop("createdAt", None)

    if category != CONTACT:
        record["opportunityType"] = category

    if attachment_filename and form_def["attachment_field"]:
        record[form_def["attachment_field"]] = attachment_filename

    record["createdAt"] = utc_timestamp(now)
    return record
