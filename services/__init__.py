"""Account lifecycle services."""
