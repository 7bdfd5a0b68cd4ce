"""Miscellaneous utility functions."""
from __future__ import annotations

import re
from datetime import date
from datetime import datetime
from typing import Any
from typing import Iterable
from typing import List
from typing import Optional
from typing import Union

from django.utils import timezone


def is_truthy(value: str) -> bool:
    """
    Check whether a string represents a True boolean value.

    :param value str: The value to check
    :rtype: bool
    """
    return str(value).lower() not in ("", "n", "no", "off", "f", "false", "0")


def today() -> date:
    """The current date in the configured time zone."""
    return timezone.localdate()


def as_date(value: Union[date, datetime, None]) -> date:
    """
    Coerce a resolution moment into a date.

    ``None`` means "now". Datetimes are converted into the configured time zone
    before being truncated so that a rule ending today is still in effect late
    in the evening.
    """
    if value is None:
        return today()
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    return value


def is_in_effect(
    effective_from: Optional[date],
    effective_to: Optional[date],
    at: date,
) -> bool:
    """
    Whether ``at`` falls inside the inclusive window between ``effective_from``
    and ``effective_to``.

    A missing bound is open-ended.
    """
    if effective_from is not None and effective_from > at:
        return False
    if effective_to is not None and effective_to < at:
        return False
    return True


def clean_list(values: Optional[Iterable[Any]]) -> Optional[List[Any]]:
    """Return a list copy of ``values`` without blanks, or None when nothing
    remains."""
    if values is None:
        return None
    if isinstance(values, (str, int)):
        values = [values]
    cleaned = [v for v in values if v is not None and v != ""]
    return cleaned or None


def as_int_set(values: Optional[Iterable[Any]]) -> set:
    """Integer identifiers from a JSON list, skipping anything that is not a
    number."""
    result = set()
    for value in values or []:
        try:
            result.add(int(value))
        except (TypeError, ValueError):
            continue
    return result


PORT_CODE_IN_TEXT = re.compile(r"\(([A-Z]{3,5})\)")


def port_code_from_text(text: Optional[str]) -> Optional[str]:
    """
    Extract a port code written in brackets, for example ``"Lagos (LOS),
    Nigeria"`` gives ``"LOS"``.

    :rtype: Optional[str]
    """
    if not text:
        return None
    match = PORT_CODE_IN_TEXT.search(text)
    return match.group(1) if match else None
