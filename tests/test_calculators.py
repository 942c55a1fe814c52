import pytest

from homebudget.calculators import (
    amortization_schedule,
    compute_ltv,
    insurance_calculation,
    insurance_premium_rate,
    land_transfer_tax,
    level_payment,
    nz,
    offer_percentages,
    suggested_upkeep,
)
from homebudget.presets import QUEBEC_TVQ_RATE


def test_nz_handles_blank_values():
    assert nz(None) == 0.0
    assert nz("") == 0.0
    assert nz("abc") == 0.0
    assert nz(float("nan")) == 0.0
    assert nz("12.5") == 12.5
    assert nz(None, default=3.0) == 3.0
    assert nz(float("inf")) == 0.0
    assert nz(1e400) == 0.0
    assert nz("-Infinity") == 0.0


def test_compute_ltv():
    assert compute_ltv(500000, 50000) == pytest.approx(0.9)
    assert compute_ltv(0, 50000) == 0.0
    assert compute_ltv(100000, 150000) == 0.0


def test_insurance_ten_percent_down():
    ins = insurance_calculation(500000, 50000)
    assert ins["mortgage_amount"] == 450000
    assert ins["ltv"] == pytest.approx(0.9)
    assert ins["insurance_required"]
    assert ins["premium_rate"] == pytest.approx(0.031)
    assert ins["premium"] == pytest.approx(13950.0)
    assert ins["provincial_tax_on_premium"] == pytest.approx(13950.0 * QUEBEC_TVQ_RATE)
    assert ins["total_financed_amount"] == pytest.approx(450000 + 13950.0 * (1 + QUEBEC_TVQ_RATE))
    assert not ins["exceeds_insurable_ltv"]


def test_insurance_not_required_at_exactly_twenty_percent_down():
    ins = insurance_calculation(500000, 100000)
    assert ins["ltv"] == pytest.approx(0.8)
    assert not ins["insurance_required"]
    assert ins["premium"] == 0.0
    assert ins["total_financed_amount"] == 400000


def test_premium_rate_bracket_edges():
    assert insurance_premium_rate(0.85) == pytest.approx(0.028)
    assert insurance_premium_rate(0.8501) == pytest.approx(0.031)
    assert insurance_premium_rate(0.95) == pytest.approx(0.04)
    assert insurance_premium_rate(0.5) == pytest.approx(0.006)


def test_extended_amortization_surcharge():
    assert insurance_premium_rate(0.9, True) == pytest.approx(0.033)
    ins = insurance_calculation(500000, 50000, is_extended_amortization=True)
    assert ins["premium"] == pytest.approx(450000 * 0.033)


def test_ltv_above_insurable_clamps_to_top_bracket():
    ins = insurance_calculation(100000, 2000)
    assert ins["premium_rate"] == pytest.approx(0.04)
    assert ins["exceeds_insurable_ltv"]


def test_welcome_tax_three_hundred_thousand():
    res = land_transfer_tax(300000)
    expected = 55200 * 0.005 + 221000 * 0.01 + 23800 * 0.015
    assert res["total_tax"] == pytest.approx(expected)
    assert len(res["breakdown"]) == 3
    assert sum(b["amount_taxed"] for b in res["breakdown"]) == pytest.approx(300000)
    assert res["breakdown"][-1]["to"] == 300000


def test_welcome_tax_zero_price():
    res = land_transfer_tax(0)
    assert res["total_tax"] == 0.0
    assert res["breakdown"] == []


def test_welcome_tax_top_bracket():
    res = land_transfer_tax(1500000)
    assert res["breakdown"][-1]["rate"] == 0.025
    assert sum(b["amount_taxed"] for b in res["breakdown"]) == pytest.approx(1500000)


EDGE_PRICES = [55200, 55201, 276200, 276201, 500000, 500001, 1000000, 1000001]


@pytest.mark.parametrize("price", EDGE_PRICES)
def test_welcome_tax_bracket_edges(price):
    res = land_transfer_tax(price)
    assert sum(b["amount_taxed"] for b in res["breakdown"]) == pytest.approx(price)
    assert res["total_tax"] == pytest.approx(sum(b["tax_owed"] for b in res["breakdown"]))


def test_welcome_tax_is_non_decreasing_across_edges():
    taxes = [land_transfer_tax(p)["total_tax"] for p in [0] + EDGE_PRICES]
    assert taxes == sorted(taxes)
    # no jump at a threshold: one extra dollar costs at most the next rate
    assert land_transfer_tax(276201)["total_tax"] - land_transfer_tax(276200)["total_tax"] == pytest.approx(0.015)


def test_offer_percentages():
    pct = offer_percentages(450000, 500000, 0)
    assert pct["of_asking"] == pytest.approx(90.0)
    assert pct["of_evaluation"] is None
    assert offer_percentages(0, 500000, 400000) == {"of_asking": None, "of_evaluation": None}


def test_suggested_upkeep():
    assert suggested_upkeep(600000) == pytest.approx(500.0)
    assert suggested_upkeep(0) == 0.0


def test_level_payment_zero_rate():
    res = level_payment(12000, 0, 12)
    assert res["monthly_payment"] == pytest.approx(1000.0)
    assert res["total_interest"] == 0.0


def test_level_payment_degenerate_inputs():
    assert level_payment(0, 5, 300)["monthly_payment"] == 0.0
    assert level_payment(100000, 5, 0)["monthly_payment"] == 0.0


def test_level_payment_known_value():
    res = level_payment(400000, 6.5, 360)
    assert res["monthly_payment"] == pytest.approx(2528.27, abs=0.01)
    assert res["total_interest"] == pytest.approx(res["total_paid"] - 400000)


def test_schedule_retires_principal():
    sched = amortization_schedule(10000, 6, 12)
    assert list(sched.columns) == ["Month", "Interest", "Principal", "RemainingBalance"]
    assert len(sched) == 12
    assert sched["Principal"].sum() == pytest.approx(10000)
    assert sched["RemainingBalance"].iloc[-1] == 0.0
    assert (sched["RemainingBalance"].diff().dropna() < 0).all()


def test_schedule_stops_at_horizon():
    sched = amortization_schedule(100000, 5, 360, horizon_months=12)
    assert len(sched) == 12
    assert 98000 < sched["RemainingBalance"].iloc[-1] < 100000
    assert len(amortization_schedule(100000, 5, 360, horizon_months=400)) == 360


def test_schedule_empty_for_zero_term():
    assert amortization_schedule(100000, 5, 0).empty
    assert amortization_schedule(0, 5, 300).empty
