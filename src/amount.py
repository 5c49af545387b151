from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Union

SCALE = 10000
DECIMAL_PLACES = 4


@dataclass(frozen=True, order=True)
class Amount:
    """
    Signed fixed-point money value with 4 decimal places.
    Stored as an integer count of 1/10000 units so sums never drift.
    """

    scaled: int = 0

    @classmethod
    def zero(cls) -> "Amount":
        return cls(0)

    @classmethod
    def from_whole(cls, units: int) -> "Amount":
        return cls(units * SCALE)

    @classmethod
    def from_decimal(cls, value: Union[Decimal, str, int, float]) -> "Amount":
        """
        Digits past the 4th decimal place are truncated toward zero, not rounded.
        Scaling is exact integer arithmetic, independent of the decimal context.
        Raises ValueError for NaN and OverflowError for infinities.
        """
        if isinstance(value, float):
            value = repr(value)
        value = Decimal(value)
        return cls(int(Fraction(value) * SCALE))

    def to_decimal(self) -> Decimal:
        sign, digits, _ = Decimal(self.scaled).as_tuple()
        return Decimal((sign, digits, -DECIMAL_PLACES))

    def __float__(self) -> float:
        return self.scaled / SCALE

    def __add__(self, other: "Amount") -> "Amount":
        if not isinstance(other, Amount):
            return NotImplemented
        return Amount(self.scaled + other.scaled)

    def __sub__(self, other: "Amount") -> "Amount":
        if not isinstance(other, Amount):
            return NotImplemented
        return Amount(self.scaled - other.scaled)

    def __neg__(self) -> "Amount":
        return Amount(-self.scaled)

    def __str__(self) -> str:
        return f"{self.to_decimal():f}"

    def __repr__(self) -> str:
        return f"Amount('{self}')"
