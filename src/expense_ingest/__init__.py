"""Bank statement CSV import with rule-based expense categorization."""

__version__ = "0.1.0"
