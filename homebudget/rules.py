from __future__ import annotations
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

from homebudget.models import FinancingSource


class RuleResult(BaseModel):
    code: str
    severity: Literal["info", "warn", "critical"]
    message: str
    source_label: str = ""
    context: Dict[str, Any] = Field(default_factory=dict)


def _money(x: float) -> str:
    return f"${x:,.0f}"


def source_limit_advisories(source: FinancingSource) -> List[RuleResult]:
    """Program ceilings exceeded by one financing source."""
    res: List[RuleResult] = []
    caps = source.capabilities
    amount = source.amount

    if caps.max_withdrawal is not None and amount > caps.max_withdrawal:
        res.append(
            RuleResult(
                code="WITHDRAWAL_LIMIT",
                severity="warn",
                source_label=source.name or caps.label,
                message=(
                    f"Maximum {caps.label} withdrawal is {_money(caps.max_withdrawal)} per person. "
                    "You may need to reduce this amount."
                ),
                context={"amount": amount, "limit": caps.max_withdrawal},
            )
        )

    if caps.max_contribution is not None and amount > caps.max_contribution:
        res.append(
            RuleResult(
                code="CONTRIBUTION_LIMIT",
                severity="warn",
                source_label=source.name or caps.label,
                message=(
                    f"Maximum {caps.label} contribution is {_money(caps.max_contribution)}. "
                    "Amount exceeds limit."
                ),
                context={"amount": amount, "limit": caps.max_contribution},
            )
        )

    return res


def evaluate_rules(state: dict) -> List[RuleResult]:
    """Household-level advisories for one recalculation pass."""
    res: List[RuleResult] = []

    if state.get("exceeds_insurable_ltv", False):
        ltv = float(state.get("ltv", 0.0)) * 100
        res.append(
            RuleResult(
                code="LTV_ABOVE_INSURABLE",
                severity="critical",
                source_label="CMHC",
                message="Down payment is below 5%; CMHC will not insure this loan. Premium shown uses the highest bracket.",
                context={"ltv_pct": ltv},
            )
        )

    gap = float(state.get("gap_amount", 0.0))
    if gap > 0 and state.get("has_gap_source", False):
        res.append(
            RuleResult(
                code="GAP_LOAN_REQUIRED",
                severity="info",
                source_label="Parent's Loan",
                message=f"Savings fall short of the down payment; {_money(gap)} is covered by the gap loan.",
                context={"gap_amount": gap},
            )
        )
    elif gap > 0:
        res.append(
            RuleResult(
                code="DOWN_PAYMENT_SHORTFALL",
                severity="warn",
                source_label="Down Payment",
                message=f"Savings fall {_money(gap)} short of the down payment and no gap loan is set up.",
                context={"gap_amount": gap},
            )
        )

    if state.get("member_count", 0) > 0 and float(state.get("total_income", 0.0)) <= 0:
        res.append(
            RuleResult(
                code="NO_INCOME",
                severity="info",
                source_label="Household",
                message="No income entered; debt service ratios are not meaningful.",
            )
        )

    return res


def has_blocking(res: List[RuleResult]) -> bool:
    return any(r.severity == "critical" for r in res)
