"""Time series handed to the charts: monthly payment mix and yearly equity."""
from __future__ import annotations

from typing import Dict, List

import pandas as pd

from homebudget.calculators import amortization_schedule, nz
from homebudget.financing import DeferredRepayment, LoanDetail
from homebudget.presets import PROJECTION_MONTHS, PROJECTION_YEARS

INTEREST_COLUMN = "Interest (All Loans)"


def _unique(name: str, taken: Dict[str, pd.Series]) -> str:
    candidate = name
    n = 2
    while candidate in taken:
        candidate = f"{name} #{n}"
        n += 1
    return candidate


def _schedule(loan: LoanDetail, horizon: int) -> pd.DataFrame:
    return amortization_schedule(loan.amount, loan.rate, loan.term_months, horizon).set_index("Month")


def payment_breakdown(
    loans: List[LoanDetail],
    deferred: List[DeferredRepayment],
    recurring: Dict[str, float],
    horizon_months: int = PROJECTION_MONTHS,
) -> pd.DataFrame:
    """Monthly payment mix, one row per month from 1 to ``horizon_months``.

    Interest from every loan is combined into one column while principal stays
    per loan.  Deferred program repayments fill the months after their grace
    period and recurring costs are flat.  All-zero series are left out.
    """

    months = pd.RangeIndex(1, horizon_months + 1, name="Month")
    columns: Dict[str, pd.Series] = {}

    interest = pd.Series(0.0, index=months)
    principal: Dict[str, pd.Series] = {}
    for loan in loans:
        sched = _schedule(loan, horizon_months)
        if sched.empty:
            continue
        interest = interest.add(sched["Interest"], fill_value=0.0)
        principal[_unique(f"Principal ({loan.name})", principal)] = sched["Principal"].reindex(
            months, fill_value=0.0
        )
    if (interest > 0).any():
        columns[INTEREST_COLUMN] = interest
    for name, series in principal.items():
        if (series > 0).any():
            columns[name] = series

    for d in deferred:
        start = d.start_delay_months + 1
        end = d.start_delay_months + d.duration_months
        series = pd.Series(0.0, index=months)
        series.loc[(months >= start) & (months <= end)] = d.monthly_repayment
        if (series > 0).any():
            columns[_unique(f"{d.name} Repayment", columns)] = series

    for label, amount in recurring.items():
        if nz(amount) > 0:
            columns[_unique(label, columns)] = pd.Series(nz(amount), index=months)

    return pd.DataFrame(columns, index=months)


def equity_series(
    property_value,
    loans: List[LoanDetail],
    horizon_years: int = PROJECTION_YEARS,
) -> pd.DataFrame:
    """Property value, outstanding debt and equity at each year end.

    The property value is held constant; year 0 is the purchase date.
    """

    value = nz(property_value)
    years = pd.RangeIndex(0, horizon_years + 1, name="Year")
    debt = pd.Series(0.0, index=years)
    for loan in loans:
        sched = _schedule(loan, horizon_years * 12)
        balances = []
        for year in years:
            k = min(year * 12, loan.term_months)
            if k <= 0 or sched.empty:
                balances.append(loan.amount)
            else:
                balances.append(float(sched["RemainingBalance"].iloc[min(k, len(sched)) - 1]))
        debt = debt + pd.Series(balances, index=years).clip(lower=0.0)
    return pd.DataFrame(
        {"PropertyValue": value, "RemainingDebt": debt, "Equity": value - debt},
        index=years,
    )
