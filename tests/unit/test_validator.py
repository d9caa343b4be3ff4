"""
Unit tests for the form validation helpers
"""

import pytest

from snippetbox.core.validator import (
    EMAIL_RX,
    Validator,
    matches,
    max_chars,
    min_chars,
    not_blank,
    permitted_value,
)
from snippetbox.web.forms import SnippetCreateForm


class TestChecks:
    @pytest.mark.parametrize(
        "value,expected",
        [("hello", True), ("", False), ("   ", False), ("\t\n", False), (" x ", True)],
    )
    def test_not_blank(self, value, expected):
        assert not_blank(value) is expected

    def test_max_chars_counts_characters_not_bytes(self):
        # 100 characters, 200 bytes in UTF-8
        assert max_chars("é" * 100, 100)
        assert not max_chars("é" * 101, 100)

    def test_min_chars(self):
        assert min_chars("12345678", 8)
        assert not min_chars("1234567", 8)

    def test_permitted_value(self):
        assert permitted_value(7, 1, 7, 365)
        assert not permitted_value(2, 1, 7, 365)
        assert not permitted_value(7)

    @pytest.mark.parametrize(
        "email",
        ["alice@example.com", "bob.smith+tag@mail.example.co.uk", "x@localhost"],
    )
    def test_email_accepted(self, email):
        assert matches(email, EMAIL_RX)

    @pytest.mark.parametrize(
        "email",
        ["", "alice", "alice@", "@example.com", "alice@-example.com", "alice@example.com\n"],
    )
    def test_email_rejected(self, email):
        assert not matches(email, EMAIL_RX)


class TestValidator:
    def test_new_validator_is_valid(self):
        assert Validator().valid

    def test_first_error_for_a_field_wins(self):
        v = Validator()
        v.add_field_error("title", "first")
        v.add_field_error("title", "second")

        assert v.field_errors == {"title": "first"}
        assert not v.valid

    def test_check_field_only_records_failures(self):
        v = Validator()
        v.check_field(True, "title", "never")
        assert v.valid

        v.check_field(False, "title", "This field cannot be blank")
        assert v.field_errors["title"] == "This field cannot be blank"

    def test_non_field_errors_make_it_invalid(self):
        v = Validator()
        v.add_non_field_error("Email or password is incorrect")

        assert not v.valid
        assert v.non_field_errors == ["Email or password is incorrect"]

    def test_forms_start_without_errors(self):
        form = SnippetCreateForm(title="t", content="c")

        assert form.expires == 365
        assert form.valid
        assert form.field_errors == {}
