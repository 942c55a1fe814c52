"""Resolve the financing sources of a purchase into amounts and monthly obligations.

Resolution is an explicit three-step pipeline over the sparse source list:

1. :func:`collect` fixes every amount it can (the auto-filled bank mortgage
   takes the financed total, user sources keep their own figure) and sums the
   savings that count toward the down payment.
2. :func:`resolve_gap` sizes the gap loan from what the savings leave
   uncovered.  This must run after every other source has been collected.
3. :func:`monthly_obligations` prices each source with its final amount.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from homebudget.calculators import level_payment, nz, payment_split
from homebudget.models import FinancingSource
from homebudget.rules import RuleResult, source_limit_advisories

logger = logging.getLogger(__name__)


@dataclass
class LoanDetail:
    index: int
    name: str
    source_type: str
    amount: float
    rate: float
    term_months: int
    monthly_payment: float
    interest: float
    principal: float


@dataclass
class DeferredRepayment:
    index: int
    name: str
    amount: float
    monthly_repayment: float
    start_delay_months: int
    duration_months: int


@dataclass
class SourceResult:
    index: int
    name: str
    source_type: str
    amount: float
    monthly_payment: float = 0.0
    interest_portion: float = 0.0
    principal_portion: float = 0.0
    deferred_monthly_repayment: float = 0.0
    status: str = ""


@dataclass
class FinancingAllocation:
    sources: List[Optional[FinancingSource]]
    results: List[SourceResult] = field(default_factory=list)
    total_savings_for_down_payment: float = 0.0
    gap_amount: float = 0.0
    auto_fill_index: Optional[int] = None
    gap_index: Optional[int] = None
    total_monthly_loan_payment: float = 0.0
    total_interest_first_month: float = 0.0
    total_principal_first_month: float = 0.0
    loan_details: List[LoanDetail] = field(default_factory=list)
    deferred_repayments: List[DeferredRepayment] = field(default_factory=list)
    warnings: List[RuleResult] = field(default_factory=list)

    @property
    def deferred_monthly_repayment(self) -> float:
        return sum(d.monthly_repayment for d in self.deferred_repayments)


def designated_slots(sources: List[Optional[FinancingSource]]) -> Tuple[Optional[int], Optional[int]]:
    """Indexes of the auto-filled mortgage and of the gap loan.

    Only the first flagged source of each kind is designated.
    """
    auto_fill = next(
        (i for i, s in enumerate(sources) if s is not None and s.is_auto_fill_mortgage), None
    )
    gap = next(
        (i for i, s in enumerate(sources) if s is not None and s.is_gap_slot and i != auto_fill),
        None,
    )
    return auto_fill, gap


def collect(sources: List[Optional[FinancingSource]], total_financed_amount: float) -> FinancingAllocation:
    auto_fill, gap = designated_slots(sources)
    alloc = FinancingAllocation(sources=[], auto_fill_index=auto_fill, gap_index=gap)
    financed = max(0.0, nz(total_financed_amount))

    for i, source in enumerate(sources):
        if source is None:
            alloc.sources.append(None)
            continue
        if i == auto_fill:
            source = source.model_copy(update={"amount": financed})
        elif i == gap:
            source = source.model_copy(update={"amount": 0.0})
        alloc.sources.append(source)
        if i == gap:
            continue

        caps = source.capabilities
        if caps.counts_toward_down_payment and i != auto_fill and source.amount > 0:
            alloc.total_savings_for_down_payment += source.amount
        alloc.warnings.extend(source_limit_advisories(source))

    return alloc


def resolve_gap(alloc: FinancingAllocation, required_down_payment: float) -> FinancingAllocation:
    alloc.gap_amount = max(0.0, nz(required_down_payment) - alloc.total_savings_for_down_payment)
    if alloc.gap_index is not None:
        gap_source = alloc.sources[alloc.gap_index]
        alloc.sources[alloc.gap_index] = gap_source.model_copy(update={"amount": alloc.gap_amount})
    return alloc


def _status(source: FinancingSource, result: SourceResult) -> str:
    caps = source.capabilities
    if caps.is_loan:
        if result.monthly_payment > 0:
            return f"Monthly: ${result.monthly_payment:,.0f}"
        if source.amount > 0 and source.term_months <= 0:
            return "Enter term to calculate payment"
        return ""
    if result.deferred_monthly_repayment > 0:
        return (
            f"{caps.label} repayment: ${result.deferred_monthly_repayment:,.0f}/mo "
            f"(${source.amount / caps.repayment_years:,.0f}/yr for {caps.repayment_years} yrs)"
        )
    if not caps.counts_toward_down_payment:
        return "Kept separate (not for down payment)"
    return "Applied to down payment" if source.amount > 0 else ""


def monthly_obligations(alloc: FinancingAllocation) -> FinancingAllocation:
    for i, source in enumerate(alloc.sources):
        if source is None:
            continue
        caps = source.capabilities
        result = SourceResult(index=i, name=source.name, source_type=source.source_type, amount=source.amount)

        if caps.is_loan and source.amount > 0:
            payment = level_payment(source.amount, source.rate, source.term_months)["monthly_payment"]
            split = payment_split(source.amount, source.rate, payment)
            result.monthly_payment = payment
            if payment > 0:
                result.interest_portion = split["interest_portion"]
                result.principal_portion = split["principal_portion"]
                alloc.total_monthly_loan_payment += payment
                alloc.total_interest_first_month += split["interest_portion"]
                alloc.total_principal_first_month += split["principal_portion"]
                alloc.loan_details.append(
                    LoanDetail(
                        index=i,
                        name=source.name,
                        source_type=source.source_type,
                        amount=source.amount,
                        rate=source.rate,
                        term_months=source.term_months,
                        monthly_payment=payment,
                        interest=split["interest_portion"],
                        principal=split["principal_portion"],
                    )
                )
        elif caps.has_deferred_repayment and source.amount > 0:
            # no interest; starts after the program's grace period
            monthly = source.amount / caps.repayment_years / 12
            result.deferred_monthly_repayment = monthly
            alloc.deferred_repayments.append(
                DeferredRepayment(
                    index=i,
                    name=source.name,
                    amount=source.amount,
                    monthly_repayment=monthly,
                    start_delay_months=caps.repayment_start_delay_months,
                    duration_months=caps.repayment_years * 12,
                )
            )

        result.status = _status(source, result)
        alloc.results.append(result)
    return alloc


def allocate_financing(
    sources: Iterable[Optional[FinancingSource]],
    total_financed_amount: float,
    required_down_payment: float,
) -> FinancingAllocation:
    """Collect, resolve the gap loan, then price every source.

    ``sources`` may contain ``None`` for removed slots; the returned
    ``sources`` list keeps those holes so indexes line up with the input.
    Inputs are not modified.
    """
    alloc = collect(list(sources), total_financed_amount)
    resolve_gap(alloc, required_down_payment)
    monthly_obligations(alloc)
    logger.debug(
        "financing allocated: savings=%.2f gap=%.2f loans=%d monthly=%.2f",
        alloc.total_savings_for_down_payment,
        alloc.gap_amount,
        len(alloc.loan_details),
        alloc.total_monthly_loan_payment,
    )
    return alloc
