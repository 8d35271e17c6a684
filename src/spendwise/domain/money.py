"""Fixed-scale monetary value type.

All monetary values in spendwise are Money instances: an exact Decimal held
at two decimal places and rounded half-up whenever a value is created or an
arithmetic result is produced. Binary floating point is never used for
amounts; float input is converted through its shortest string form.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Union

from spendwise.domain.errors import (
    DivisionByZeroError,
    InvalidArgumentError,
    ValidationError,
)

MONETARY_SCALE = 2
PERCENTAGE_SCALE = 4
DEFAULT_ROUNDING = ROUND_HALF_UP

_MONETARY_QUANTUM = Decimal(1).scaleb(-MONETARY_SCALE)
_PERCENTAGE_QUANTUM = Decimal(1).scaleb(-PERCENTAGE_SCALE)
_ONE_HUNDRED = Decimal(100)

MoneyLike = Union["Money", Decimal, int, float, str]


def _to_decimal(value: MoneyLike) -> Decimal:
    """Convert supported input into a finite Decimal."""
    if value is None:
        raise InvalidArgumentError("Amount cannot be None")
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Cannot use boolean {value!r} as an amount")
    if isinstance(value, Money):
        return value.amount
    if isinstance(value, float):
        value = repr(value)
    if isinstance(value, str):
        value = value.strip()

    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValidationError(f"Could not parse amount '{value}': {e}") from e

    if not result.is_finite():
        raise ValidationError(f"Amount must be a finite number, got '{value}'")
    return result


def normalize(value: MoneyLike) -> Decimal:
    """Return value quantized to the monetary scale with half-up rounding."""
    return _to_decimal(value).quantize(_MONETARY_QUANTUM, rounding=DEFAULT_ROUNDING)


@dataclass(frozen=True, order=True)
class Money:
    """Immutable two-decimal monetary amount."""

    amount: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", normalize(self.amount))

    @classmethod
    def of(cls, value: MoneyLike) -> "Money":
        """Create Money from a decimal string, number, Decimal or Money."""
        if isinstance(value, Money):
            return value
        return cls(_to_decimal(value))

    @classmethod
    def zero(cls) -> "Money":
        return cls(Decimal(0))

    @classmethod
    def sum(cls, values: Iterable["Money"]) -> "Money":
        """Sum Money values, starting from zero."""
        total = Decimal(0)
        for value in values:
            total += cls.of(value).amount
        return cls(total)

    def add(self, other: MoneyLike) -> "Money":
        return Money(self.amount + Money.of(other).amount)

    def subtract(self, other: MoneyLike) -> "Money":
        return Money(self.amount - Money.of(other).amount)

    def negate(self) -> "Money":
        return Money(-self.amount)

    def absolute(self) -> "Money":
        return Money(abs(self.amount))

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def is_zero(self) -> bool:
        return self.amount == 0

    def percentage_of(self, other: MoneyLike) -> "Money":
        """Express this amount as a percentage of other.

        The ratio is rounded to four decimals before scaling by 100 and
        rounding to the monetary scale.

        Raises:
            DivisionByZeroError: If other is zero
        """
        denominator = Money.of(other)
        if denominator.is_zero():
            raise DivisionByZeroError(
                f"Cannot compute a percentage of a zero amount (numerator {self})"
            )
        ratio = (self.amount / denominator.amount).quantize(
            _PERCENTAGE_QUANTUM, rounding=DEFAULT_ROUNDING
        )
        return Money(ratio * _ONE_HUNDRED)

    def format(self, symbol: str = "$") -> str:
        """Format for display, e.g. '$1,234.56' or '-$12.00'."""
        sign = "-" if self.is_negative() else ""
        return f"{sign}{symbol}{abs(self.amount):,.2f}"

    def __add__(self, other: object) -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self) -> "Money":
        return self.negate()

    def __abs__(self) -> "Money":
        return self.absolute()

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __str__(self) -> str:
        return str(self.amount)

    def __repr__(self) -> str:
        return f"Money('{self.amount}')"
