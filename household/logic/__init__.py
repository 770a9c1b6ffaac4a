"""Core business logic layer.

Subpackages:
- shopping: quantity merging and shopping lists built from the weekly meal plan
- rewards: chore reward ledger, field normalization and member totals
"""
__all__ = ["shopping", "rewards"]
