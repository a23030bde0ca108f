"""Domain models and pure functions for pocketledger.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Validation and aggregation separated from storage
"""

from pocketledger.domain.models import CategoryName, CategoryTotal, Entry, Kind, Money, Month, MonthSummary

__all__ = ["CategoryName", "CategoryTotal", "Entry", "Kind", "Money", "Month", "MonthSummary"]
