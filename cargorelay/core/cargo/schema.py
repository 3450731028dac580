from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

# Absence marker used for identifiers and currencies the submitter left out.
UNKNOWN: str = "unknown"

ALLOWED_CURRENCIES = frozenset({"IRR", "USD", "EUR"})

# Cost estimates are always expressed in this unit; no conversion is applied.
ESTIMATE_CURRENCY: str = "IRR"


class RiskLevel(str, Enum):
    """
    Declared sensitivity tier of a cargo type.

    Using str Enum keeps comparisons against raw submission text safe.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ShippingCategory(str, Enum):
    """Ordinal packaging/handling tier, lightest first."""

    SMALL_PARCEL = "small_parcel"
    MEDIUM_PARCEL = "medium_parcel"
    LARGE_PARCEL = "large_parcel"
    EXTRA_LARGE_PARCEL = "extra_large_parcel"
    SPECIAL_HANDLING = "special_handling"


@dataclass(frozen=True)
class CargoType:
    id: str = UNKNOWN
    name: str = UNKNOWN
    description: str = ""
    # Declared text is kept as-is; see RiskLevel for the recognized tiers.
    risk_level: str = RiskLevel.MEDIUM.value


@dataclass(frozen=True)
class CargoWeight:
    kg: float = 0.0
    grams: int = 0
    display: str = "0 kg"


@dataclass(frozen=True)
class CargoValue:
    amount: float = 0.0
    currency: str = UNKNOWN
    currency_symbol: str = ""
    formatted: str = "0"


@dataclass(frozen=True)
class CanonicalCargo:
    """
    Fully-defaulted cargo record used by all downstream rules.

    Invariants
    - Every field is set (defaults come from the component dataclasses)
    - requires_special_handling is derived from the risk level, never read
    """

    type: CargoType = CargoType()
    weight: CargoWeight = CargoWeight()
    value: CargoValue = CargoValue()
    insurance_required: bool = False

    @property
    def requires_special_handling(self) -> bool:
        return self.type.risk_level == RiskLevel.HIGH.value


@dataclass(frozen=True)
class ValidationReport:
    """Informational pass/fail report attached to the outgoing payload."""

    weight_valid: bool
    value_valid: bool
    type_valid: bool
    currency_valid: bool

    @property
    def all_valid(self) -> bool:
        return self.weight_valid and self.value_valid and self.type_valid and self.currency_valid

    def to_dict(self) -> Dict[str, bool]:
        return {
            "weight_valid": self.weight_valid,
            "value_valid": self.value_valid,
            "type_valid": self.type_valid,
            "currency_valid": self.currency_valid,
            "all_valid": self.all_valid,
        }


@dataclass(frozen=True)
class CostEstimate:
    min: int
    max: int
    currency: str = ESTIMATE_CURRENCY

    def to_dict(self) -> Dict[str, Any]:
        return {"min": self.min, "max": self.max, "currency": self.currency}
