from __future__ import annotations
from typing import Iterable, List, Optional

from homebudget.calculators import nz
from homebudget.models import HouseholdMember
from homebudget.presets import (
    GDS_LIMITS,
    HOUSING_RATIO_LIMITS,
    HOUSING_RATIO_OVER,
    RATIO_NOT_APPLICABLE,
    RATIO_OVER,
    RATIO_UNKNOWN,
    TDS_LIMITS,
)


def classify(percent, limits, over):
    """Return the label of the first ceiling ``percent`` does not exceed."""
    for ceiling, label in limits:
        if percent <= ceiling:
            return label
    return over


def housing_cost_ratio(total_monthly_costs, gross_monthly_income):
    """Household housing costs against gross income (the 30% rule)."""

    inc = nz(gross_monthly_income)
    if inc <= 0:
        return {"ratio": 0.0, "percent": 0.0, "status": RATIO_UNKNOWN}
    costs = nz(total_monthly_costs)
    ratio = costs / inc
    percent = costs * 100 / inc
    return {
        "ratio": ratio,
        "percent": percent,
        "status": classify(percent, HOUSING_RATIO_LIMITS, HOUSING_RATIO_OVER),
    }


def per_person_ratios(
    members: Iterable[Optional[HouseholdMember]],
    gds_housing_costs,
    deferred_monthly_repayment=0.0,
) -> List[dict]:
    """GDS and TDS for each household member.

    Housing costs are shared in proportion to each member's income.  The
    deferred program repayment is split evenly: every member repays their own
    withdrawal regardless of what they earn.
    """

    present = [m for m in members if m is not None]
    total_income = sum(m.income for m in present)
    if not present or total_income <= 0:
        return []
    housing = nz(gds_housing_costs)
    deferred_share = nz(deferred_monthly_repayment) / len(present)

    out = []
    for m in present:
        income_share = m.income / total_income
        housing_share = housing * income_share
        tds_amount = housing_share + m.total_debts + deferred_share
        if m.income > 0:
            gds = housing_share * 100 / m.income
            tds = tds_amount * 100 / m.income
            gds_status = classify(gds, GDS_LIMITS, RATIO_OVER)
            tds_status = classify(tds, TDS_LIMITS, RATIO_OVER)
        else:
            gds = tds = 0.0
            gds_status = tds_status = RATIO_NOT_APPLICABLE
        out.append(
            {
                "name": m.name,
                "income": m.income,
                "income_share": income_share,
                "housing_cost_share": housing_share,
                "total_debts": m.total_debts,
                "deferred_repayment_share": deferred_share,
                "tds_amount": tds_amount,
                "gds_percent": gds,
                "gds_status": gds_status,
                "tds_percent": tds,
                "tds_status": tds_status,
            }
        )
    return out


def household_affordability(
    members: Iterable[Optional[HouseholdMember]],
    total_monthly_costs,
    loan_payments,
    property_tax_monthly,
    utility_monthly,
    deferred_monthly_repayment=0.0,
):
    """Household ratio plus the per-person GDS/TDS breakdown.

    GDS housing costs are the loan payments, the monthly property tax and the
    utility bill (standing in for heating).
    """

    present = [m for m in members if m is not None]
    total_income = sum(m.income for m in present)
    total_debts = sum(m.total_debts for m in present)
    gds_costs = nz(loan_payments) + nz(property_tax_monthly) + nz(utility_monthly)
    return {
        "total_gross_income": total_income,
        "total_other_debt_payments": total_debts,
        "gds_housing_costs": gds_costs,
        "household": housing_cost_ratio(total_monthly_costs, total_income),
        "per_person": per_person_ratios(present, gds_costs, deferred_monthly_repayment),
    }
