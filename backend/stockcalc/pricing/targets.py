"""Price rounding and percentage price targets."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from stockcalc.schemas.stock import PriceTargets, TargetSet

_CENT = Decimal("0.01")

GAIN_FACTORS = (Decimal("1.05"), Decimal("1.10"), Decimal("1.15"))
LOSS_FACTORS = (Decimal("0.95"), Decimal("0.90"), Decimal("0.85"))


def _to_decimal(value: float | str | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        number = value
    else:
        # str() of a float is its shortest repr, so 150.005 stays 150.005 here.
        number = Decimal(str(value).strip())
    if not number.is_finite():
        raise ValueError(f"Price must be a finite number, got {value!r}")
    return number


def round_price(value: float | str | Decimal) -> float:
    """Round to whole cents, halves away from zero.

    Decimal's ROUND_HALF_UP rounds ties away from zero, so ``150.005`` becomes
    ``150.01`` and ``-0.005`` becomes ``-0.01``. Values that already have two
    decimals come back unchanged.
    """
    return float(_to_decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))


def _target_set(base: Decimal, factors: tuple[Decimal, Decimal, Decimal]) -> TargetSet:
    five, ten, fifteen = (round_price(base * factor) for factor in factors)
    return TargetSet(five=five, ten=ten, fifteen=fifteen)


def calculate_price_targets(previous_close: float | str | Decimal) -> PriceTargets:
    base = _to_decimal(previous_close)
    return PriceTargets(
        gains=_target_set(base, GAIN_FACTORS),
        losses=_target_set(base, LOSS_FACTORS),
    )
