import pytest

from cargorelay.core.cargo import (
    CATEGORY_RULES,
    CargoType,
    CargoValue,
    CargoWeight,
    CanonicalCargo,
    ShippingCategory,
    categorize,
    estimate,
    validate,
)


@pytest.mark.parametrize(
    "kg, value, expected",
    [
        (1, 1_000_000, ShippingCategory.SMALL_PARCEL),
        (1.01, 1_000_000, ShippingCategory.MEDIUM_PARCEL),
        (0.5, 1_000_001, ShippingCategory.MEDIUM_PARCEL),
        (5, 5_000_000, ShippingCategory.MEDIUM_PARCEL),
        (5, 5_000_001, ShippingCategory.LARGE_PARCEL),
        (15, 20_000_000, ShippingCategory.LARGE_PARCEL),
        (30, 100_000_000, ShippingCategory.EXTRA_LARGE_PARCEL),
        (31, 0, ShippingCategory.SPECIAL_HANDLING),
        (0.1, 100_000_001, ShippingCategory.SPECIAL_HANDLING),
    ],
)
def test_categorize_first_matching_rule_wins(kg, value, expected):
    assert categorize(kg, value) == expected


def test_category_rules_are_ordered_lightest_first():
    assert [c for _, c in CATEGORY_RULES] == [
        ShippingCategory.SMALL_PARCEL,
        ShippingCategory.MEDIUM_PARCEL,
        ShippingCategory.LARGE_PARCEL,
        ShippingCategory.EXTRA_LARGE_PARCEL,
    ]


def test_estimate_low_risk_without_value():
    est = estimate(2, 0, "low")

    assert (est.min, est.max, est.currency) == (10000, 13000, "IRR")


def test_estimate_high_risk_with_insurance_premium():
    est = estimate(2, 1_000_000, "high")

    assert est.min == 16000
    assert est.max == 20800


def test_estimate_medium_and_unrecognized_risk():
    assert estimate(1, 0, "medium").min == 6000
    assert estimate(1, 0, "extreme").min == 5000


def test_estimate_rounds_half_up():
    # premium 5 -> max 6.5, which banker's rounding would take down to 6
    est = estimate(0, 5000, "low")
    assert est.min == 5
    assert est.max == 7


def test_estimate_currency_ignores_declared_currency():
    assert estimate(2, 100, "low").to_dict()["currency"] == "IRR"


def _cargo(kg=1.0, amount=1.0, type_id="x", currency="IRR") -> CanonicalCargo:
    return CanonicalCargo(
        type=CargoType(id=type_id),
        weight=CargoWeight(kg=kg),
        value=CargoValue(amount=amount, currency=currency),
    )


def test_validate_all_valid_at_upper_weight_bound():
    report = validate(_cargo(kg=30, amount=1, type_id="x", currency="IRR"))

    assert report.all_valid is True
    assert report.to_dict() == {
        "weight_valid": True,
        "value_valid": True,
        "type_valid": True,
        "currency_valid": True,
        "all_valid": True,
    }


def test_validate_zero_weight_fails_all_valid():
    report = validate(_cargo(kg=0))

    assert report.weight_valid is False
    assert report.all_valid is False


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"kg": 30.01}, "weight_valid"),
        ({"amount": 0}, "value_valid"),
        ({"type_id": ""}, "type_valid"),
        ({"type_id": "unknown"}, "type_valid"),
        ({"currency": "GBP"}, "currency_valid"),
    ],
)
def test_validate_each_predicate_fails_independently(kwargs, field):
    report = validate(_cargo(**kwargs)).to_dict()

    assert report[field] is False
    assert report["all_valid"] is False
    others = [k for k in report if k not in {field, "all_valid"}]
    assert all(report[k] for k in others)


def test_validate_defaults_are_reported_not_raised():
    report = validate(CanonicalCargo())

    assert report.to_dict() == {
        "weight_valid": False,
        "value_valid": False,
        "type_valid": False,
        "currency_valid": False,
        "all_valid": False,
    }


def test_estimate_huge_finite_weight_stays_exact():
    est = estimate(1e305, 0, "high")

    assert est.min == 75 * 10**307
    assert est.max == est.min * 13 // 10
