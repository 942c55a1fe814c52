from __future__ import annotations
import math
from typing import Optional

import pandas as pd

from homebudget.presets import (
    CMHC_EXTENDED_AMORTIZATION_SURCHARGE,
    CMHC_RATES,
    INSURANCE_REQUIRED_ABOVE_LTV,
    QUEBEC_TVQ_RATE,
    SUGGESTED_UPKEEP_PCT,
    WELCOME_TAX_BRACKETS,
)

SCHEDULE_COLUMNS = ["Month", "Interest", "Principal", "RemainingBalance"]


def nz(x, default=0.0):
    """Return a float for ``x`` or a fallback value.

    Values arrive from form fields and imported JSON where blanks show up as
    ``None``, empty strings, ``NaN`` or infinities.  This helper mirrors the spreadsheet
    ``NZ()`` function and keeps later math from breaking when a value is
    missing or not a number.
    """

    if x is None:
        return default
    try:
        value = float(x)
    except (TypeError, ValueError, OverflowError):
        return default
    return value if math.isfinite(value) else default


def compute_ltv(purchase_price, down_payment):
    """Loan-to-value as a ratio (``0.9`` for 90%)."""

    price = nz(purchase_price)
    if price <= 0:
        return 0.0
    return max(0.0, (price - nz(down_payment)) / price)


def insurance_premium_rate(
    ltv,
    is_extended_amortization=False,
    rate_table=CMHC_RATES,
    surcharge=CMHC_EXTENDED_AMORTIZATION_SURCHARGE,
):
    """Look up the CMHC premium rate for an LTV.

    Brackets are scanned in ascending order and the first ceiling at or above
    ``ltv`` wins.  An LTV above the highest ceiling is clamped to the highest
    bracket; such loans are not insurable and :mod:`homebudget.rules` flags
    them.  Extended (30-year) amortization adds a flat surcharge.
    """

    ltv = nz(ltv)
    if not rate_table:
        return 0.0
    rate = rate_table[-1][1]
    for max_ltv, bracket_rate in rate_table:
        if ltv <= max_ltv:
            rate = bracket_rate
            break
    if is_extended_amortization:
        rate += surcharge
    return rate


def insurance_calculation(
    purchase_price,
    down_payment,
    is_extended_amortization=False,
    rate_table=CMHC_RATES,
    tax_rate=QUEBEC_TVQ_RATE,
):
    """CMHC premium, provincial tax on the premium and the financed total.

    Insurance applies only above 80% LTV.  The premium and its tax are added
    to the loan rather than paid in cash, so ``total_financed_amount`` is the
    figure the bank mortgage is drawn for.
    """

    price = nz(purchase_price)
    down = nz(down_payment)
    mortgage_amount = max(0.0, price - down)
    ltv = compute_ltv(price, down)
    down_pct = 100.0 * down / price if price > 0 else 0.0
    required = ltv > INSURANCE_REQUIRED_ABOVE_LTV
    premium_rate = insurance_premium_rate(ltv, is_extended_amortization, rate_table)
    premium = mortgage_amount * premium_rate if required else 0.0
    provincial_tax = premium * tax_rate
    total_cost = premium + provincial_tax
    return {
        "mortgage_amount": mortgage_amount,
        "ltv": ltv,
        "down_payment_percent": down_pct,
        "insurance_required": required,
        "premium_rate": premium_rate,
        "premium": premium,
        "provincial_tax_on_premium": provincial_tax,
        "total_insurance_cost": total_cost,
        "total_financed_amount": mortgage_amount + total_cost,
        "exceeds_insurable_ltv": bool(rate_table) and ltv > rate_table[-1][0],
    }


def land_transfer_tax(purchase_price, brackets=WELCOME_TAX_BRACKETS):
    """Quebec welcome tax walked bracket by bracket.

    Each breakdown record holds the slice of the price taxed at that bracket's
    rate; the ``amount_taxed`` values add up to the price.
    """

    price = nz(purchase_price)
    remaining = price
    previous = 0.0
    total = 0.0
    breakdown = []
    for threshold, rate in brackets:
        if remaining <= 0:
            break
        in_bracket = min(remaining, threshold - previous)
        if in_bracket > 0:
            tax = in_bracket * rate
            breakdown.append(
                {
                    "from": previous,
                    "to": min(threshold, price),
                    "rate": rate,
                    "amount_taxed": in_bracket,
                    "tax_owed": tax,
                }
            )
            total += tax
            remaining -= in_bracket
        previous = threshold
    return {"total_tax": total, "breakdown": breakdown}


def offer_percentages(offer_price, asking_price, evaluation_price):
    """Offer as a percentage of the asking and municipal evaluation prices."""

    offer = nz(offer_price)
    asking = nz(asking_price)
    evaluation = nz(evaluation_price)
    if offer <= 0:
        return {"of_asking": None, "of_evaluation": None}
    return {
        "of_asking": 100.0 * offer / asking if asking > 0 else None,
        "of_evaluation": 100.0 * offer / evaluation if evaluation > 0 else None,
    }


def suggested_upkeep(purchase_price, annual_pct=SUGGESTED_UPKEEP_PCT):
    """Monthly upkeep budget using the 1%-of-value-per-year rule of thumb."""

    price = nz(purchase_price)
    if price <= 0:
        return 0.0
    return price * annual_pct / 100 / 12


def level_payment(principal, annual_rate_pct, term_months):
    """Calculate the fully amortizing monthly payment for a loan.

    ``principal`` is the starting loan amount, ``annual_rate_pct`` is the
    nominal yearly interest rate (e.g. ``4.5`` for 4.5%), and ``term_months``
    is the amortization period in months.
    """

    L = nz(principal)
    n = int(nz(term_months))
    if L <= 0 or n <= 0:
        return {"monthly_payment": 0.0, "total_paid": 0.0, "total_interest": 0.0}
    r = nz(annual_rate_pct) / 100 / 12
    if abs(r) < 1e-12:
        return {"monthly_payment": L / n, "total_paid": L, "total_interest": 0.0}
    factor = (1 + r) ** n
    payment = L * (r * factor) / (factor - 1)
    total = payment * n
    return {"monthly_payment": payment, "total_paid": total, "total_interest": total - L}


def payment_split(balance, annual_rate_pct, monthly_payment):
    """Interest and principal portions of one payment against ``balance``."""

    interest = nz(balance) * nz(annual_rate_pct) / 100 / 12
    return {"interest_portion": interest, "principal_portion": nz(monthly_payment) - interest}


def amortization_schedule(principal, annual_rate_pct, term_months, horizon_months: Optional[int] = None):
    """Month-by-month schedule as a DataFrame.

    Stops at ``min(term_months, horizon_months)``.  The principal portion is
    capped at the outstanding balance and the last month of the term retires
    whatever floating point residue is left, so a full schedule ends at zero.
    """

    L = nz(principal)
    n = int(nz(term_months))
    months = n if horizon_months is None else min(n, int(nz(horizon_months)))
    payment = level_payment(L, annual_rate_pct, n)["monthly_payment"]
    if L <= 0 or months <= 0 or payment <= 0:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS)
    rows = []
    balance = L
    for month in range(1, months + 1):
        split = payment_split(balance, annual_rate_pct, payment)
        principal_part = min(split["principal_portion"], balance)
        if month == n:
            principal_part = balance
        balance = max(0.0, balance - principal_part)
        rows.append((month, split["interest_portion"], principal_part, balance))
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)
