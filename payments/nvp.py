"""
Name-value pair (NVP) wire helpers.

The NVP API speaks ``application/x-www-form-urlencoded`` in both directions:
requests are posted as form fields and responses come back as a flat
query string.
"""

from collections.abc import Mapping
from urllib.parse import parse_qs

LINE_ITEM_PREFIX = "L_PAYMENTREQUEST_0_"
CREDENTIAL_FIELDS = ("USER", "PWD", "SIGNATURE")


def format_amount(value: float) -> str:
    """Format a money amount with exactly two decimal places."""
    return f"{value:.2f}"


def line_item_key(field: str, index: int) -> str:
    """Build an indexed line item field name, e.g. ``L_PAYMENTREQUEST_0_AMT3``."""
    return f"{LINE_ITEM_PREFIX}{field}{index}"


def parse_nvp(body: str) -> dict[str, list[str]]:
    """Parse an NVP response body into a mapping of key to all its values."""
    return parse_qs(body, keep_blank_values=True)


def first_value(values: Mapping[str, list[str]], key: str, default: str = "") -> str:
    """Return the first value stored under ``key``, or ``default`` when absent."""
    found = values.get(key)
    if not found:
        return default
    return found[0]


def redact(params: Mapping[str, str]) -> dict[str, str]:
    """Copy of ``params`` with credential fields masked, safe to log."""
    return {
        key: "X" * len(value) if key in CREDENTIAL_FIELDS else value
        for key, value in params.items()
    }
