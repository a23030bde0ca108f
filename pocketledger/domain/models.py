"""Domain types for pocketledger.

- Money: exact decimal amount (never float)
- Month: month key in YYYY-MM format
- CategoryName: free-form, case-sensitive category label
- Kind: expense or income
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, NewType

# Amounts are Decimals so sums never drift by a cent
Money = NewType("Money", Decimal)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

CategoryName = NewType("CategoryName", str)


class Kind(str, Enum):
    """Whether an entry takes money out or brings it in."""

    EXPENSE = "expense"
    INCOME = "income"


@dataclass(frozen=True)
class Entry:
    """Immutable ledger entry as persisted by the store."""

    id: int
    kind: Kind
    amount: Money
    category: CategoryName
    note: str | None
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the fields the presentation layer may rely on.

        Amounts stay Decimal: numeric and exact.
        """
        return {
            "id": self.id,
            "kind": self.kind.value,
            "amount": self.amount,
            "category": self.category,
            "note": self.note,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class MonthSummary:
    """Income, expense and balance for one month."""

    month: Month
    income: Money
    expense: Money
    balance: Money

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "income": self.income,
            "expense": self.expense,
            "balance": self.balance,
        }


@dataclass(frozen=True)
class CategoryTotal:
    """Sum of amounts for one category."""

    category: CategoryName
    total: Money

    def to_dict(self) -> dict[str, Any]:
        return {"category": self.category, "total": self.total}
