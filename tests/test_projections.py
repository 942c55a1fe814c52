import pytest

from homebudget.calculators import level_payment
from homebudget.financing import DeferredRepayment, LoanDetail
from homebudget.projections import INTEREST_COLUMN, equity_series, payment_breakdown


def _loan(name="Mortgage", amount=100000.0, rate=5.0, term=300):
    pmt = level_payment(amount, rate, term)["monthly_payment"]
    interest = amount * rate / 100 / 12
    return LoanDetail(
        index=0,
        name=name,
        source_type="mortgage",
        amount=amount,
        rate=rate,
        term_months=term,
        monthly_payment=pmt,
        interest=interest,
        principal=pmt - interest,
    )


def _rrsp():
    return DeferredRepayment(
        index=1, name="RRSP", amount=36000, monthly_repayment=200.0, start_delay_months=12, duration_months=180
    )


def test_payment_breakdown_columns_and_horizon():
    df = payment_breakdown([_loan()], [_rrsp()], {"Insurance": 100.0, "Upkeep": 0.0})
    assert len(df) == 360
    assert df.index[0] == 1 and df.index[-1] == 360
    assert list(df.columns) == [INTEREST_COLUMN, "Principal (Mortgage)", "RRSP Repayment", "Insurance"]
    assert df["Principal (Mortgage)"].sum() == pytest.approx(100000)
    assert df.loc[301, "Principal (Mortgage)"] == 0
    assert (df["Insurance"] == 100.0).all()


def test_deferred_repayment_window():
    df = payment_breakdown([], [_rrsp()], {})
    col = df["RRSP Repayment"]
    assert col.loc[12] == 0
    assert col.loc[13] == 200.0
    assert col.loc[192] == 200.0
    assert col.loc[193] == 0
    assert col.sum() == pytest.approx(36000)


def test_duplicate_loan_names_get_distinct_columns():
    df = payment_breakdown([_loan("Loan"), _loan("Loan", amount=20000, term=60)], [], {})
    assert "Principal (Loan)" in df.columns
    assert "Principal (Loan) #2" in df.columns
    assert df[INTEREST_COLUMN].iloc[0] == pytest.approx((100000 + 20000) * 0.05 / 12)


def test_empty_breakdown():
    df = payment_breakdown([], [], {"Insurance": 0})
    assert df.empty
    assert len(df.index) == 360


def test_equity_series():
    eq = equity_series(500000, [_loan()])
    assert list(eq.index) == list(range(31))
    assert eq.loc[0, "RemainingDebt"] == 100000
    assert eq.loc[0, "Equity"] == 400000
    assert eq.loc[25, "RemainingDebt"] == 0
    assert eq.loc[30, "Equity"] == 500000
    assert (eq["RemainingDebt"].diff().dropna() <= 0).all()


def test_equity_without_loans():
    eq = equity_series(300000, [])
    assert (eq["Equity"] == 300000).all()
