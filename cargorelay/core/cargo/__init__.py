"""Cargo submission rules.

Turns a loosely-structured submission into a canonical record and derives the
business outputs (shipping category, cost range, validation report) that are
relayed downstream.

Security notes:
- Never assume submissions are well-formed or benign.
- Keep transforms pure and deterministic.
"""

from .categorizer import CATEGORY_RULES, categorize
from .cost_estimator import estimate
from .normalizer import normalize, normalize_type, normalize_value, normalize_weight
from .payload import CallerContext, build_payload, cargo_details
from .schema import (
    ALLOWED_CURRENCIES,
    ESTIMATE_CURRENCY,
    UNKNOWN,
    CanonicalCargo,
    CargoType,
    CargoValue,
    CargoWeight,
    CostEstimate,
    RiskLevel,
    ShippingCategory,
    ValidationReport,
)
from .validator import validate

__all__ = [
    "normalize",
    "normalize_type",
    "normalize_weight",
    "normalize_value",
    "validate",
    "categorize",
    "CATEGORY_RULES",
    "estimate",
    "build_payload",
    "cargo_details",
    "CallerContext",
    "CanonicalCargo",
    "CargoType",
    "CargoWeight",
    "CargoValue",
    "CostEstimate",
    "RiskLevel",
    "ShippingCategory",
    "ValidationReport",
    "ALLOWED_CURRENCIES",
    "ESTIMATE_CURRENCY",
    "UNKNOWN",
]
