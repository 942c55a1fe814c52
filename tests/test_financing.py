import pytest

from homebudget.financing import allocate_financing, designated_slots
from homebudget.models import FinancingSource


def _sources():
    return [
        FinancingSource.create("mortgage", is_auto_fill_mortgage=True, rate=5.0, term_months=300),
        FinancingSource.create("celiapp", amount=20000),
        FinancingSource.create("tfsa", amount=5000),
        FinancingSource.create("joint_account", amount=10000),
        FinancingSource.create("parents_loan"),
    ]


def test_gap_loan_covers_shortfall():
    alloc = allocate_financing(_sources(), 465000, 50000)
    assert alloc.total_savings_for_down_payment == 25000
    assert alloc.gap_amount == 25000
    assert alloc.gap_index == 4
    assert alloc.sources[4].amount == 25000
    assert alloc.total_savings_for_down_payment + alloc.gap_amount == pytest.approx(50000)


def test_no_gap_when_savings_cover_down_payment():
    alloc = allocate_financing(_sources(), 465000, 20000)
    assert alloc.gap_amount == 0
    assert alloc.sources[4].amount == 0


def test_auto_fill_mortgage_takes_financed_total():
    alloc = allocate_financing(_sources(), 465341.51, 50000)
    assert alloc.auto_fill_index == 0
    assert alloc.sources[0].amount == pytest.approx(465341.51)
    assert alloc.loan_details[0].amount == pytest.approx(465341.51)
    assert alloc.total_monthly_loan_payment == pytest.approx(alloc.results[0].monthly_payment)
    first = alloc.results[0]
    assert first.interest_portion + first.principal_portion == pytest.approx(first.monthly_payment)
    assert first.status.startswith("Monthly: $")


def test_inputs_are_not_modified():
    sources = _sources()
    allocate_financing(sources, 465000, 50000)
    assert sources[0].amount == 0
    assert sources[4].amount == 0


def test_removed_slots_keep_positions():
    sources = _sources()
    sources[1] = None
    alloc = allocate_financing(sources, 465000, 50000)
    assert alloc.sources[1] is None
    assert [r.index for r in alloc.results] == [0, 2, 3, 4]
    assert alloc.gap_index == 4
    assert alloc.gap_amount == 45000


def test_only_first_flagged_source_is_designated():
    sources = [
        FinancingSource.create("mortgage", is_auto_fill_mortgage=True),
        FinancingSource.create("mortgage", is_auto_fill_mortgage=True, amount=1000),
        FinancingSource.create("parents_loan"),
        FinancingSource.create("parents_loan"),
    ]
    assert designated_slots(sources) == (0, 2)
    alloc = allocate_financing(sources, 300000, 10000)
    assert alloc.sources[1].amount == 1000
    assert alloc.sources[3].amount == 0


def test_rrsp_deferred_repayment():
    sources = [FinancingSource.create("rrsp", amount=36000)]
    alloc = allocate_financing(sources, 0, 36000)
    assert alloc.gap_amount == 0
    assert alloc.deferred_monthly_repayment == pytest.approx(200.0)
    repay = alloc.deferred_repayments[0]
    assert repay.start_delay_months == 12
    assert repay.duration_months == 180
    assert alloc.total_monthly_loan_payment == 0
    assert "repayment" in alloc.results[0].status


def test_multiple_rrsp_withdrawals_are_summed():
    sources = [
        FinancingSource.create("rrsp", name="RRSP A", amount=18000),
        FinancingSource.create("rrsp", name="RRSP B", amount=36000),
    ]
    alloc = allocate_financing(sources, 0, 0)
    assert alloc.deferred_monthly_repayment == pytest.approx(300.0)
    assert len(alloc.deferred_repayments) == 2


def test_program_ceiling_advisories():
    sources = [
        FinancingSource.create("celiapp", amount=45000),
        FinancingSource.create("rrsp", amount=70000),
        FinancingSource.create("celiapp", name="At limit", amount=40000),
    ]
    alloc = allocate_financing(sources, 0, 0)
    codes = [w.code for w in alloc.warnings]
    assert codes == ["CONTRIBUTION_LIMIT", "WITHDRAWAL_LIMIT"]
    assert alloc.total_savings_for_down_payment == 155000


def test_loan_without_term_asks_for_term():
    alloc = allocate_financing(_sources(), 465000, 50000)
    gap = alloc.results[4]
    assert gap.monthly_payment == 0
    assert gap.status == "Enter term to calculate payment"
    assert [d.index for d in alloc.loan_details] == [0]


def test_zero_rate_gap_loan_payment():
    sources = _sources()
    sources[4] = sources[4].model_copy(update={"term_months": 60})
    alloc = allocate_financing(sources, 465000, 50000)
    assert alloc.results[4].monthly_payment == pytest.approx(25000 / 60)
    assert alloc.results[4].interest_portion == 0


def test_joint_account_kept_separate():
    alloc = allocate_financing(_sources(), 465000, 50000)
    assert alloc.results[3].status == "Kept separate (not for down payment)"
    assert alloc.results[1].status == "Applied to down payment"
