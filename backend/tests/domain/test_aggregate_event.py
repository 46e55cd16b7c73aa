"""Tests for AggregateEvent and ValueObject base models."""

from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from account_events import Channel, ChannelsRestricted, Closed, Deposited, Money, Opened


class TestAggregateEvent:
    """Tests for the AggregateEvent base model."""

    def test_create_event_with_defaults(self):
        """Test that event id and timestamp are generated."""
        event = Opened(aggregate_id="acct-1", aggregate_version=1, balance=0)

        assert event.aggregate_id == "acct-1"
        assert event.aggregate_version == 1
        assert event.event_id
        assert isinstance(event.timestamp, datetime)
        assert event.timestamp.tzinfo is not None

    def test_event_ids_are_unique(self):
        """Test that two events get distinct event ids."""
        first = Opened(aggregate_id="acct-1", aggregate_version=1, balance=0)
        second = Opened(aggregate_id="acct-1", aggregate_version=1, balance=0)

        assert first.event_id != second.event_id

    def test_event_is_immutable(self):
        """Test that events cannot be modified after creation."""
        event = Opened(aggregate_id="acct-1", aggregate_version=1, balance=0)

        with pytest.raises(ValidationError):
            event.balance = 10

    def test_accepts_camel_case_names(self):
        """Test that stored attribute names populate snake_case fields."""
        event = Opened.model_validate(
            {"aggregateId": "acct-1", "aggregateVersion": 3, "balance": 5, "ownerName": "Sato"}
        )

        assert event.aggregate_version == 3
        assert event.owner_name == "Sato"

    def test_missing_required_field_raises_error(self):
        """Test that required payload fields are enforced."""
        with pytest.raises(ValidationError):
            Opened(aggregate_id="acct-1", aggregate_version=1)

    def test_type_name_defaults_to_class_name(self):
        """Test the default discriminator value."""
        assert Opened.type_name() == "Opened"

    def test_type_name_override(self):
        """Test that event_type_name overrides the discriminator value."""
        assert Closed.type_name() == "AccountClosed"
        assert "event_type_name" not in Closed.model_fields


class TestEnumByName:
    """Tests for enum members given by name."""

    def test_enum_accepted_by_name(self):
        """Test that an enum member can be given by its name."""
        event = Deposited.model_validate(
            {"aggregateId": "acct-1", "aggregateVersion": 2, "amount": 5, "channel": "ONLINE"}
        )

        assert event.channel is Channel.ONLINE

    def test_enum_still_accepted_by_value(self):
        """Test that an enum member can still be given by its value."""
        event = Deposited(aggregate_id="acct-1", aggregate_version=2, amount=5, channel=3)

        assert event.channel is Channel.ATM

    def test_unknown_enum_name_raises_error(self):
        """Test that an unknown enum name is rejected."""
        with pytest.raises(ValidationError):
            Deposited(aggregate_id="acct-1", aggregate_version=2, amount=5, channel="CHEQUE")

    def test_enum_names_accepted_inside_containers(self):
        """Test that enum names are accepted in lists, tuples, sets and mapping keys."""
        event = ChannelsRestricted.model_validate(
            {
                "aggregateId": "acct-1",
                "aggregateVersion": 4,
                "allowed": ["ONLINE", "ATM"],
                "limits": {"ATM": 3},
                "fallbacks": ["BRANCH"],
                "preferred": ["ONLINE"],
            }
        )

        assert event.allowed == [Channel.ONLINE, Channel.ATM]
        assert event.limits == {Channel.ATM: 3}
        assert event.fallbacks == (Channel.BRANCH,)
        assert event.preferred == {Channel.ONLINE}


class TestValueObject:
    """Tests for ValueObject."""

    def test_value_objects_compare_by_value(self):
        """Test equality by attributes."""
        assert Money(amount=Decimal("10")) == Money(amount=Decimal("10"))
        assert Money(amount=Decimal("10")) != Money(amount=Decimal("11"))

    def test_value_object_is_hashable(self):
        """Test that frozen value objects can be hashed."""
        assert hash(Money(amount=Decimal("10"))) == hash(Money(amount=Decimal("10")))
