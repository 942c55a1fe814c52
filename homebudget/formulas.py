"""Reference text for the formulas the calculator applies."""
from typing import Dict, List

from homebudget.presets import CMHC_EXTENDED_AMORTIZATION_SURCHARGE, QUEBEC_TVQ_RATE, WELCOME_TAX_BRACKETS


def _welcome_tax_formula() -> str:
    parts = []
    previous = 0.0
    for threshold, rate in WELCOME_TAX_BRACKETS:
        pct = f"{rate * 100:.1f}%"
        if previous == 0:
            parts.append(f"{pct} (≤${threshold:,.0f})")
        elif threshold == float("inf"):
            parts.append(f"{pct} (>${previous:,.0f})")
        else:
            parts.append(f"{pct} (${previous:,.0f}-${threshold:,.0f})")
        previous = threshold
    return " + ".join(parts)


FORMULAS: List[Dict] = [
    {
        "category": "Property Pricing",
        "items": [
            ("Offer as % of Asking", "(Offer Price ÷ Asking Price) × 100", "How your offer compares to the seller's asking price"),
            ("Offer as % of Evaluation", "(Offer Price ÷ Evaluation Price) × 100", "How your offer compares to the municipal evaluation"),
        ],
    },
    {
        "category": "CMHC Insurance",
        "items": [
            ("Loan-to-Value Ratio (LTV)", "LTV = (Purchase Price - Down Payment) ÷ Purchase Price", "Insurance is required when LTV > 80%"),
            ("CMHC Premium", "Premium = Mortgage Amount × Premium Rate", "Rate from the LTV bracket table"),
            (
                "30-Year Amortization",
                f"Premium Rate + {CMHC_EXTENDED_AMORTIZATION_SURCHARGE * 100:.2f}%",
                "Surcharge for extended amortization",
            ),
            (
                "CMHC with Quebec Tax",
                f"Total = Premium × (1 + {QUEBEC_TVQ_RATE * 100:.3f}%)",
                "Quebec sales tax (TVQ) applies to the premium; both are added to the mortgage",
            ),
        ],
    },
    {
        "category": "Mortgage Payment",
        "items": [
            ("Monthly Payment", "M = P × [r(1+r)ⁿ] ÷ [(1+r)ⁿ - 1]", "P = Principal, r = Monthly rate (annual÷12), n = Number of payments"),
            ("Interest Portion", "Interest = Remaining Balance × Monthly Rate", "Portion of each payment going to interest"),
            ("Principal Portion", "Principal = Monthly Payment - Interest", "Portion of each payment reducing the loan balance"),
        ],
    },
    {
        "category": "Quebec Welcome Tax",
        "items": [
            ("Welcome Tax Brackets", _welcome_tax_formula(), "Land transfer tax calculated in brackets"),
        ],
    },
    {
        "category": "Moving Costs",
        "items": [
            ("Paint Cost", "Paint Cost = Square Footage × Cost per Sqft", "Typical: $2-4/sqft DIY, $4-8/sqft professional"),
        ],
    },
    {
        "category": "Monthly Costs",
        "items": [
            ("City Taxes Monthly", "Monthly = Annual City Taxes ÷ 12", "Annual property taxes as a monthly amount"),
            ("Suggested Upkeep", "Monthly Upkeep = (Home Value × 1%) ÷ 12", "Budget 1% of home value annually for maintenance"),
            ("RRSP Repayment", "Monthly = Withdrawal ÷ 15 ÷ 12", "Home Buyers' Plan repayment, starting the second year"),
        ],
    },
    {
        "category": "Affordability",
        "items": [
            ("Affordability Ratio", "Ratio = (Total Monthly Costs ÷ Gross Monthly Income) × 100", "≤30% = Affordable, 30-40% = Caution, >40% = High Risk"),
            ("GDS", "(Income Share × (Loans + City Taxes + Heating)) ÷ Income", "≤32% Excellent, ≤39% Acceptable"),
            ("TDS", "(Housing Share + Personal Debts + RRSP Share) ÷ Income", "≤40% Excellent, ≤44% Acceptable"),
        ],
    },
]
