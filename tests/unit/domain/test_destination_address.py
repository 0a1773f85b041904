"""
Unit tests for DestinationAddress value object.

Usage:
    pytest tests/unit/domain/test_destination_address.py
"""

import pytest

from satstream.domain.value_objects.destination_address import DestinationAddress


class TestDestinationAddress:
    @pytest.mark.parametrize(
        "value",
        ["lnbc2500u1pvjluezpp5", "lntb10u1pjexample", "LNBC1000N1PEXAMPLE"],
    )
    def test_lightning_invoices(self, value):
        destination = DestinationAddress(value)

        assert destination.is_valid()
        assert destination.is_lightning
        assert not destination.is_onchain

    @pytest.mark.parametrize(
        "value",
        [
            "bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq",
            "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa",
            "3J98t1WpEZ73CNmQviecrnyiWrnqRhWNLy",
        ],
    )
    def test_onchain_addresses(self, value):
        destination = DestinationAddress(value)

        assert destination.is_valid()
        assert destination.is_onchain
        assert not destination.is_lightning

    @pytest.mark.parametrize(
        "value", ["", "   ", "paypal:alice", "lnbc with space", "tb1qtestnet"]
    )
    def test_invalid_destinations(self, value):
        assert not DestinationAddress(value).is_valid()

    def test_surrounding_whitespace_is_stripped(self):
        destination = DestinationAddress("  lntb10u1pjexample\n")

        assert destination.is_valid()
        assert str(destination) == "lntb10u1pjexample"
