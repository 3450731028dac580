from __future__ import annotations

from .schema import ALLOWED_CURRENCIES, UNKNOWN, CanonicalCargo, ValidationReport

MAX_WEIGHT_KG: float = 30.0


def validate(cargo: CanonicalCargo) -> ValidationReport:
    """Check a canonical record against the domain constraints.

    The report is informational: it travels with the outgoing payload and
    never blocks forwarding. A missing sub-field fails its own predicate
    only; this function does not raise.

    - weight: 0 < kg <= 30
    - value: amount > 0
    - type: id present (empty or the "unknown" absence marker fail)
    - currency: one of IRR, USD, EUR

    """

    kg = cargo.weight.kg
    type_id = cargo.type.id.strip()
    return ValidationReport(
        weight_valid=0 < kg <= MAX_WEIGHT_KG,
        value_valid=cargo.value.amount > 0,
        type_valid=bool(type_id) and type_id != UNKNOWN,
        currency_valid=cargo.value.currency in ALLOWED_CURRENCIES,
    )
