DISCLAIMER = (
    "This tool implements common calculations for Quebec home purchases "
    "(CMHC mortgage insurance with provincial tax, the welcome tax brackets and GDS/TDS ratios). "
    "Results are estimates only; lender underwriting, CMHC eligibility rules and your notary's figures prevail. "
    "Verify program limits (CELIAPP, RRSP Home Buyers' Plan) with your financial institution."
)

# CMHC premium rates by loan-to-value ceiling, ascending. A bracket applies when
# the LTV is at or below its ceiling.
CMHC_RATES = [
    (0.65, 0.0060),
    (0.75, 0.0170),
    (0.80, 0.0240),
    (0.85, 0.0280),
    (0.90, 0.0310),
    (0.95, 0.0400),
]
CMHC_EXTENDED_AMORTIZATION_SURCHARGE = 0.0020
INSURANCE_REQUIRED_ABOVE_LTV = 0.80
QUEBEC_TVQ_RATE = 0.09975

# Land transfer ("welcome") tax, cumulative marginal brackets.
WELCOME_TAX_BRACKETS = [
    (55200.0, 0.005),
    (276200.0, 0.010),
    (500000.0, 0.015),
    (1000000.0, 0.020),
    (float("inf"), 0.025),
]

SUGGESTED_UPKEEP_PCT = 1.0

# Ratio classification ceilings in percent, checked in order.
HOUSING_RATIO_LIMITS = [(30.0, "Affordable"), (40.0, "Caution")]
HOUSING_RATIO_OVER = "High Risk"
GDS_LIMITS = [(32.0, "Excellent"), (39.0, "Acceptable")]
TDS_LIMITS = [(40.0, "Excellent"), (44.0, "Acceptable")]
RATIO_OVER = "May Not Qualify"
RATIO_UNKNOWN = "Unknown"
RATIO_NOT_APPLICABLE = "N/A"

PROJECTION_MONTHS = 360
PROJECTION_YEARS = 30

FINANCING_TYPES = {
    "mortgage": {
        "label": "Bank Mortgage",
        "requires_repayment": True,
        "is_loan": True,
        "counts_toward_down_payment": False,
        "description": "Standard mortgage loan from a financial institution",
    },
    "celiapp": {
        "label": "CELIAPP",
        "requires_repayment": False,
        "is_loan": False,
        "counts_toward_down_payment": True,
        "description": "First Home Savings Account - Tax-free withdrawal for first home purchase",
        "max_contribution": 40000.0,
    },
    "rrsp": {
        "label": "RRSP (Home Buyers' Plan)",
        "requires_repayment": True,
        "is_loan": False,
        "counts_toward_down_payment": True,
        "description": "Home Buyers' Plan - Must repay to RRSP over 15 years (starting 2nd year after withdrawal)",
        "max_withdrawal": 60000.0,
        "repayment_years": 15,
        "repayment_start_delay_months": 12,
    },
    "tfsa": {
        "label": "TFSA",
        "requires_repayment": False,
        "is_loan": False,
        "counts_toward_down_payment": True,
        "description": "Tax-Free Savings Account - No repayment required",
    },
    "joint_account": {
        "label": "Joint Account",
        "requires_repayment": False,
        "is_loan": False,
        "counts_toward_down_payment": False,
        "description": "Joint savings - Kept separate from down payment (for moving costs, renovations, etc.)",
    },
    "parents_loan": {
        "label": "Parent's Loan",
        "requires_repayment": True,
        "is_loan": True,
        "counts_toward_down_payment": True,
        "is_auto_calculated": True,
        "description": "Loan from parents to cover the gap between your savings and required down payment",
    },
    "other_loan": {
        "label": "Other Loan",
        "requires_repayment": True,
        "is_loan": True,
        "counts_toward_down_payment": False,
        "description": "Any other loan (personal loan, line of credit, etc.)",
    },
    "other_savings": {
        "label": "Other Savings",
        "requires_repayment": False,
        "is_loan": False,
        "counts_toward_down_payment": True,
        "description": "Other savings or gifts",
    },
}
DEFAULT_SOURCE_TYPE = "other_savings"
