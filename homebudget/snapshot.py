"""One full recalculation pass: inputs in, :class:`CalculationSnapshot` out."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from homebudget.affordability import household_affordability
from homebudget.calculators import (
    insurance_calculation,
    land_transfer_tax,
    offer_percentages,
    suggested_upkeep,
)
from homebudget.financing import FinancingAllocation, allocate_financing
from homebudget.models import CalculatorInputs
from homebudget.projections import equity_series, payment_breakdown
from homebudget.rules import RuleResult, evaluate_rules

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class CalculationSnapshot:
    purchase_price: float
    down_payment: float
    offer_percentages: dict
    insurance: dict
    welcome_tax: dict
    property_tax_monthly: float
    paint_total: float
    moving_total: float
    renovations_total: float
    one_time_total: float
    total_cash_needed: float
    allocation: FinancingAllocation
    total_monthly_costs: float
    affordability: dict
    suggested_upkeep: float
    warnings: List[RuleResult] = field(default_factory=list)
    payment_breakdown: Optional[pd.DataFrame] = None
    equity: Optional[pd.DataFrame] = None

    def summary(self) -> dict:
        """Flat figures for metric cards and exports."""
        household = self.affordability["household"]
        return {
            "Purchase Price": self.purchase_price,
            "Down Payment": self.down_payment,
            "CMHC Insurance": self.insurance["total_insurance_cost"],
            "Total Mortgage": self.insurance["total_financed_amount"],
            "Welcome Tax": self.welcome_tax["total_tax"],
            "One-Time Costs": self.one_time_total,
            "Total Cash Needed": self.total_cash_needed,
            "Monthly Loan Payments": self.allocation.total_monthly_loan_payment,
            "Total Monthly Costs": self.total_monthly_costs,
            "Gross Monthly Income": self.affordability["total_gross_income"],
            "Housing Cost Ratio %": household["percent"],
            "Housing Cost Status": household["status"],
        }


def calculate(inputs: CalculatorInputs) -> CalculationSnapshot:
    """Recompute every derived figure from ``inputs``.

    Nothing is cached between calls and ``inputs`` is left untouched; the
    caller re-runs this whenever any input changes.
    """

    price = inputs.purchase_price
    down = inputs.down_payment_amount()
    recurring = inputs.recurring
    one_time = inputs.one_time

    insurance = insurance_calculation(price, down, inputs.use_extended_amortization)
    welcome = land_transfer_tax(price)
    property_tax_monthly = inputs.annual_property_tax / 12

    paint_total = one_time.square_footage * one_time.paint_per_sqft
    moving_total = one_time.moving_base + paint_total
    renovations_total = sum(r.amount for r in inputs.renovation_items if r is not None)
    one_time_total = welcome["total_tax"] + one_time.notary_fees + moving_total + renovations_total

    alloc = allocate_financing(
        inputs.financing_sources,
        insurance["total_financed_amount"],
        down,
    )

    total_monthly_costs = (
        alloc.total_monthly_loan_payment
        + recurring.insurance
        + recurring.utility
        + recurring.upkeep
        + property_tax_monthly
    )
    members = [m for m in inputs.household_members if m is not None]
    affordability = household_affordability(
        members,
        total_monthly_costs,
        alloc.total_monthly_loan_payment,
        property_tax_monthly,
        recurring.utility,
        alloc.deferred_monthly_repayment,
    )

    warnings = list(alloc.warnings)
    warnings.extend(
        evaluate_rules(
            {
                "ltv": insurance["ltv"],
                "exceeds_insurable_ltv": insurance["exceeds_insurable_ltv"],
                "gap_amount": alloc.gap_amount,
                "has_gap_source": alloc.gap_index is not None,
                "total_income": affordability["total_gross_income"],
                "member_count": len(members),
            }
        )
    )

    breakdown = payment_breakdown(
        alloc.loan_details,
        alloc.deferred_repayments,
        {
            "Insurance": recurring.insurance,
            "Electricity": recurring.utility,
            "Upkeep": recurring.upkeep,
            "City Taxes": property_tax_monthly,
        },
    )
    equity = equity_series(price, alloc.loan_details)

    logger.debug(
        "recalculated: price=%.2f down=%.2f financed=%.2f monthly=%.2f warnings=%d",
        price,
        down,
        insurance["total_financed_amount"],
        total_monthly_costs,
        len(warnings),
    )
    return CalculationSnapshot(
        purchase_price=price,
        down_payment=down,
        offer_percentages=offer_percentages(price, inputs.asking_price, inputs.evaluation_price),
        insurance=insurance,
        welcome_tax=welcome,
        property_tax_monthly=property_tax_monthly,
        paint_total=paint_total,
        moving_total=moving_total,
        renovations_total=renovations_total,
        one_time_total=one_time_total,
        total_cash_needed=down + one_time_total,
        allocation=alloc,
        total_monthly_costs=total_monthly_costs,
        affordability=affordability,
        suggested_upkeep=suggested_upkeep(price),
        warnings=warnings,
        payment_breakdown=breakdown,
        equity=equity,
    )
