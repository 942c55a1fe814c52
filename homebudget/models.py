from __future__ import annotations
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from homebudget.calculators import nz
from homebudget.presets import DEFAULT_SOURCE_TYPE, FINANCING_TYPES

SourceType = Literal[
    "mortgage",
    "celiapp",
    "rrsp",
    "tfsa",
    "joint_account",
    "parents_loan",
    "other_loan",
    "other_savings",
]


def _money(v) -> float:
    return max(0.0, nz(v))


class SourceCapabilities(BaseModel):
    label: str
    requires_repayment: bool = False
    is_loan: bool = False
    counts_toward_down_payment: bool = False
    is_auto_calculated: bool = False
    max_contribution: Optional[float] = None
    max_withdrawal: Optional[float] = None
    repayment_years: Optional[int] = None
    repayment_start_delay_months: int = 0
    description: str = ""

    @property
    def has_deferred_repayment(self) -> bool:
        return not self.is_loan and bool(self.repayment_years)


CAPABILITIES = {key: SourceCapabilities(**cfg) for key, cfg in FINANCING_TYPES.items()}


def capabilities_for(source_type: str) -> SourceCapabilities:
    if not isinstance(source_type, str):
        source_type = DEFAULT_SOURCE_TYPE
    return CAPABILITIES.get(source_type, CAPABILITIES[DEFAULT_SOURCE_TYPE])


class FinancingSource(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    source_type: SourceType = Field(DEFAULT_SOURCE_TYPE, alias="sourceType")
    amount: float = 0.0
    rate: float = 0.0
    term_months: int = Field(0, alias="termMonths")
    is_auto_fill_mortgage: bool = Field(False, alias="isAutoFillMortgage")
    is_auto_calculated: bool = Field(False, alias="isAutoCalculated")

    @field_validator("source_type", mode="before")
    @classmethod
    def _known_type(cls, v):
        return v if isinstance(v, str) and v in FINANCING_TYPES else DEFAULT_SOURCE_TYPE

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, v):
        return _money(v)

    @field_validator("rate", mode="before")
    @classmethod
    def _rate(cls, v):
        return nz(v)

    @field_validator("term_months", mode="before")
    @classmethod
    def _term(cls, v):
        return max(0, int(round(nz(v))))

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v):
        return "" if v is None else str(v)

    @property
    def capabilities(self) -> SourceCapabilities:
        return capabilities_for(self.source_type)

    @property
    def is_gap_slot(self) -> bool:
        return self.is_auto_calculated and self.source_type == "parents_loan"

    @classmethod
    def create(cls, source_type: str, name: str = "", **fields) -> "FinancingSource":
        """Build a source with the label and auto-calculation default of its type."""
        caps = capabilities_for(source_type)
        fields.setdefault("is_auto_calculated", caps.is_auto_calculated)
        return cls(name=name or caps.label, source_type=source_type, **fields)


class HouseholdMember(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    income: float = 0.0
    car_loan_payment: float = Field(0.0, alias="carLoanPayment")
    student_loan_payment: float = Field(0.0, alias="studentLoanPayment")
    personal_loan_payment: float = Field(0.0, alias="personalLoanPayment")
    credit_card_payment: float = Field(0.0, alias="creditCardPayment")

    @field_validator(
        "income",
        "car_loan_payment",
        "student_loan_payment",
        "personal_loan_payment",
        "credit_card_payment",
        mode="before",
    )
    @classmethod
    def _non_negative(cls, v):
        return _money(v)

    @property
    def total_debts(self) -> float:
        return (
            self.car_loan_payment
            + self.student_loan_payment
            + self.personal_loan_payment
            + self.credit_card_payment
        )


class RenovationItem(BaseModel):
    description: str = ""
    amount: float = 0.0

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, v):
        return _money(v)


class RecurringCosts(BaseModel):
    insurance: float = 0.0
    utility: float = 0.0
    upkeep: float = 0.0

    @field_validator("insurance", "utility", "upkeep", mode="before")
    @classmethod
    def _non_negative(cls, v):
        return _money(v)


class OneTimeCosts(BaseModel):
    notary_fees: float = 0.0
    moving_base: float = 0.0
    paint_per_sqft: float = 0.0
    square_footage: float = 0.0

    @field_validator("notary_fees", "moving_base", "paint_per_sqft", "square_footage", mode="before")
    @classmethod
    def _non_negative(cls, v):
        return _money(v)


class CalculatorInputs(BaseModel):
    """Everything one recalculation pass reads.

    The list fields are sparse: a removed source, member or renovation leaves
    ``None`` in its slot so positions stay stable for the caller.
    """

    asking_price: float = 0.0
    evaluation_price: float = 0.0
    purchase_price: float = 0.0
    down_payment: float = 0.0
    down_payment_mode: Literal["amount", "percent"] = "amount"
    use_extended_amortization: bool = False
    annual_property_tax: float = 0.0
    recurring: RecurringCosts = Field(default_factory=RecurringCosts)
    one_time: OneTimeCosts = Field(default_factory=OneTimeCosts)
    financing_sources: List[Optional[FinancingSource]] = Field(default_factory=list)
    household_members: List[Optional[HouseholdMember]] = Field(default_factory=list)
    renovation_items: List[Optional[RenovationItem]] = Field(default_factory=list)

    @field_validator(
        "asking_price",
        "evaluation_price",
        "purchase_price",
        "down_payment",
        "annual_property_tax",
        mode="before",
    )
    @classmethod
    def _non_negative(cls, v):
        return _money(v)

    @field_validator("down_payment_mode", mode="before")
    @classmethod
    def _mode(cls, v):
        return "percent" if v == "percent" else "amount"

    def down_payment_amount(self) -> float:
        """Down payment in dollars, resolving percent mode against the offer price."""
        if self.down_payment_mode == "percent":
            return self.down_payment / 100 * self.purchase_price
        return self.down_payment
