"""Expense categorization utilities.

Categorization is deterministic and rule-based: user-defined rules are
evaluated locally, with no network calls, so imports stay fast and the
outcome is explainable.
"""

from .rules import categorize, matches_rule, order_rules, preview_rules

__all__ = ["categorize", "matches_rule", "order_rules", "preview_rules"]
