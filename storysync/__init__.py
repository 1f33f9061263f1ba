"""Story deduplication and issue label derivation for tracker stories."""

__version__ = "0.1.0"
