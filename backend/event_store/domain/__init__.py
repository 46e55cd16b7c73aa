"""Domain layer - aggregate events and the event store contract."""
