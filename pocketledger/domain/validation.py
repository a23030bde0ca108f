"""Pure validation for new ledger entries.

Nothing here touches the database. Each check raises the matching
ValidationError subclass so the caller can re-prompt for the bad field.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from pocketledger.domain.models import CategoryName, Kind, Money
from pocketledger.errors import InvalidAmount, InvalidCategory, InvalidKind

# Bounds keep every amount at 21 significant digits or fewer
MAX_INTEGER_DIGITS = 15
MAX_DECIMAL_PLACES = 6


@dataclass(frozen=True)
class ValidEntry:
    """Entry fields that passed validation and are ready to store."""

    kind: Kind
    amount: Money
    category: CategoryName


def parse_kind(kind: Any) -> Kind:
    """Parse a kind value.

    Args:
        kind: A Kind member or its exact string value ("expense" or "income").

    Returns:
        The matching Kind.

    Raises:
        InvalidKind: If kind is anything else.
    """
    if isinstance(kind, Kind):
        return kind
    if isinstance(kind, str):
        try:
            return Kind(kind)
        except ValueError:
            pass
    raise InvalidKind(f"Invalid kind: {kind!r}. Use 'expense' or 'income'.")


def parse_amount(amount: Any) -> Money:
    """Parse an amount into an exact positive Decimal.

    Floats are converted through their shortest repr, so 0.1 becomes
    Decimal("0.1") rather than its binary expansion.

    Args:
        amount: Decimal, int, float or numeric string.

    Returns:
        The amount as Money.

    Raises:
        InvalidAmount: If the value is not a number, is not finite, is <= 0,
            or exceeds MAX_INTEGER_DIGITS or MAX_DECIMAL_PLACES.
    """
    if isinstance(amount, bool):
        raise InvalidAmount(f"Invalid amount: {amount!r}")

    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, int | float):
        value = Decimal(str(amount))
    elif isinstance(amount, str):
        try:
            value = Decimal(amount.strip())
        except InvalidOperation:
            raise InvalidAmount(f"Invalid amount: {amount!r}") from None
    else:
        raise InvalidAmount(f"Invalid amount: {amount!r}")

    if not value.is_finite():
        raise InvalidAmount(f"Amount must be finite, got {amount!r}")
    if value <= 0:
        raise InvalidAmount(f"Amount must be positive, got {amount!r}")
    if value.adjusted() >= MAX_INTEGER_DIGITS:
        raise InvalidAmount(f"Amount must have at most {MAX_INTEGER_DIGITS} integer digits, got {amount!r}")
    if _decimal_places(value) > MAX_DECIMAL_PLACES:
        raise InvalidAmount(f"Amount must have at most {MAX_DECIMAL_PLACES} decimal places, got {amount!r}")

    return Money(_to_fixed_point(value))


def _decimal_places(value: Decimal) -> int:
    """Count significant decimal places, ignoring trailing zeros, without rounding."""
    _, digits, exponent = value.as_tuple()
    trailing_zeros = len(digits) - len("".join(map(str, digits)).rstrip("0"))
    return max(0, -(exponent + trailing_zeros))


def _to_fixed_point(value: Decimal) -> Decimal:
    """Rewrite exponent forms like 1E+2 as plain 100, keeping entered decimal places."""
    exponent = value.as_tuple().exponent
    if exponent > 0:
        return value.quantize(Decimal(1))
    if exponent < -MAX_DECIMAL_PLACES:
        return value.quantize(Decimal(1).scaleb(-MAX_DECIMAL_PLACES))
    return value


def parse_category(category: Any) -> CategoryName:
    """Check that a category is non-blank.

    The category is returned exactly as given; trimming only decides
    whether it is empty.

    Raises:
        InvalidCategory: If category is not a string or is blank.
    """
    if not isinstance(category, str) or not category.strip():
        raise InvalidCategory("Category must not be empty")
    return CategoryName(category)


def normalize_note(note: str | None) -> str | None:
    """Collapse a missing, null or blank note to None."""
    if note is None or not note.strip():
        return None
    return note


def validate_entry(kind: Any, amount: Any, category: Any) -> ValidEntry:
    """Validate the fields of a new entry.

    Checks run in order kind, amount, category; the first failure is raised.

    Returns:
        ValidEntry with parsed kind, amount and category.

    Raises:
        InvalidKind, InvalidAmount, InvalidCategory.
    """
    return ValidEntry(
        kind=parse_kind(kind),
        amount=parse_amount(amount),
        category=parse_category(category),
    )
