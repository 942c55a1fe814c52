import pytest

from homebudget.models import FinancingSource
from homebudget.rules import evaluate_rules, has_blocking, source_limit_advisories


def _codes(state):
    return {r.code for r in evaluate_rules(state)}


def test_ltv_above_insurable_is_critical():
    res = evaluate_rules({"ltv": 0.98, "exceeds_insurable_ltv": True})
    assert [r.code for r in res] == ["LTV_ABOVE_INSURABLE"]
    assert res[0].context["ltv_pct"] == pytest.approx(98.0)
    assert has_blocking(res)


def test_gap_with_gap_loan_is_informational():
    res = evaluate_rules({"gap_amount": 12000, "has_gap_source": True})
    assert [(r.code, r.severity) for r in res] == [("GAP_LOAN_REQUIRED", "info")]
    assert not has_blocking(res)


def test_gap_without_gap_loan_warns():
    assert _codes({"gap_amount": 12000, "has_gap_source": False}) == {"DOWN_PAYMENT_SHORTFALL"}


def test_no_income_only_with_members():
    assert "NO_INCOME" in _codes({"member_count": 1, "total_income": 0})
    assert "NO_INCOME" not in _codes({"member_count": 0, "total_income": 0})
    assert "NO_INCOME" not in _codes({"member_count": 2, "total_income": 8000})


def test_clean_state_has_no_advisories():
    assert evaluate_rules({}) == []


def test_source_ceilings_use_source_name():
    res = source_limit_advisories(FinancingSource.create("celiapp", name="Alex CELIAPP", amount=40001))
    assert [r.code for r in res] == ["CONTRIBUTION_LIMIT"]
    assert res[0].source_label == "Alex CELIAPP"
    assert res[0].severity == "warn"
    assert "$40,000" in res[0].message
