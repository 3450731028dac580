from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict

from .schema import ESTIMATE_CURRENCY, CostEstimate, RiskLevel

BASE_COST_PER_KG: int = 5000
INSURANCE_RATE: Decimal = Decimal("0.001")
MAX_SPREAD: Decimal = Decimal("1.3")

RISK_MULTIPLIERS: Dict[str, Decimal] = {
    RiskLevel.HIGH.value: Decimal("1.5"),
    RiskLevel.MEDIUM.value: Decimal("1.2"),
}


def _round_half_up(x: Decimal) -> int:
    return int(x.to_integral_value(rounding=ROUND_HALF_UP))


def estimate(weight_kg: float, value_amount: float, risk_level: str) -> CostEstimate:
    """Estimate a shipping cost range.

    base = kg * 5000, scaled by the risk multiplier (low and unrecognized
    levels get none), plus a 0.1% insurance premium on the declared value.
    max is min plus a 30% spread.

    The arithmetic runs in Decimal so huge finite inputs cannot overflow
    and halves round up exactly.

    The result is always in IRR, whatever currency the value was declared
    in. No conversion is performed.

    """

    multiplier = RISK_MULTIPLIERS.get(risk_level, Decimal(1))
    base = Decimal(repr(weight_kg)) * BASE_COST_PER_KG * multiplier
    insurance_premium = Decimal(repr(value_amount)) * INSURANCE_RATE
    low = _round_half_up(base + insurance_premium)
    return CostEstimate(
        min=low, max=_round_half_up(low * MAX_SPREAD), currency=ESTIMATE_CURRENCY
    )
