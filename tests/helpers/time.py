"""Shared, deterministic timestamps for tests."""

from datetime import UTC, datetime


# Fixed timestamp so acceptance times compare the same in every environment.
FIXED_NOW = datetime(2017, 6, 13, 0, 0, 0, tzinfo=UTC)
