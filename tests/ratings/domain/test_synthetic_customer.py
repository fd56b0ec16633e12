"""Tests for SyntheticCustomer and display-name parsing."""

import pytest
from protean.exceptions import ValidationError
from ratings.customers.resolver import split_display_name
from ratings.customers.synthetic import SYNTHETIC_MARKER, SyntheticCustomer, placeholder_email


class TestSyntheticCustomer:
    def test_created_inactive_and_marked(self):
        customer = SyntheticCustomer.create(first_name="Jane", last_name="Doe")
        assert customer.is_active is False
        assert customer.marker == SYNTHETIC_MARKER
        assert customer.display_name == "Jane Doe"

    def test_default_last_name(self):
        assert SyntheticCustomer.create(first_name="Jane").last_name == "Customer"

    def test_cannot_be_activated(self):
        customer = SyntheticCustomer.create(first_name="Jane")
        with pytest.raises(ValidationError):
            customer.is_active = True

    def test_placeholder_emails_are_unique(self):
        emails = {placeholder_email() for _ in range(200)}
        assert len(emails) == 200
        assert all(email.endswith("@placeholder.invalid") for email in emails)


class TestSplitDisplayName:
    def test_first_and_last(self):
        assert split_display_name("Jane Doe") == ("Jane", "Doe")

    def test_multiple_last_tokens(self):
        assert split_display_name("Jane  van der Berg") == ("Jane", "van der Berg")

    def test_single_token(self):
        assert split_display_name("Jane") == ("Jane", "Customer")

    def test_surrounding_whitespace(self):
        assert split_display_name("  Jane   Doe ") == ("Jane", "Doe")

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_rejected(self, name):
        with pytest.raises(ValidationError):
            split_display_name(name)
