"""Form validation helpers.

A ``Validator`` collects error messages for a single form submission. Forms
inherit from it, run every check they need and then ask ``valid``; nothing
short-circuits, so the user sees every problem at once.
"""

import re
from typing import Any, Dict, List, Pattern

# Parsed once at import and shared by every request.
EMAIL_RX: Pattern[str] = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9]"
    r"(?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*\Z"
)


class Validator:
    """Accumulates field-level and non-field validation errors."""

    def __init__(self) -> None:
        self.field_errors: Dict[str, str] = {}
        self.non_field_errors: List[str] = []

    @property
    def valid(self) -> bool:
        return not self.field_errors and not self.non_field_errors

    def add_field_error(self, key: str, message: str) -> None:
        """Record ``message`` for ``key`` unless the field already has one."""
        self.field_errors.setdefault(key, message)

    def add_non_field_error(self, message: str) -> None:
        self.non_field_errors.append(message)

    def check_field(self, ok: bool, key: str, message: str) -> None:
        """Record ``message`` for ``key`` only when the check failed."""
        if not ok:
            self.add_field_error(key, message)


def not_blank(value: str) -> bool:
    return value.strip() != ""


def max_chars(value: str, n: int) -> bool:
    # len() counts code points, not bytes
    return len(value) <= n


def min_chars(value: str, n: int) -> bool:
    return len(value) >= n


def permitted_value(value: Any, *permitted_values: Any) -> bool:
    return value in permitted_values


def matches(value: str, rx: Pattern[str]) -> bool:
    return rx.match(value) is not None
