import pytest

from homebudget.models import (
    CalculatorInputs,
    FinancingSource,
    HouseholdMember,
    OneTimeCosts,
    RecurringCosts,
    RenovationItem,
)


@pytest.fixture
def inputs():
    return CalculatorInputs(
        asking_price=520000,
        evaluation_price=480000,
        purchase_price=500000,
        down_payment=50000,
        annual_property_tax=3600,
        recurring=RecurringCosts(insurance=100, utility=150, upkeep=400),
        one_time=OneTimeCosts(notary_fees=1800, moving_base=1500, paint_per_sqft=2, square_footage=1000),
        financing_sources=[
            FinancingSource.create("mortgage", is_auto_fill_mortgage=True, rate=4.5, term_months=300),
            FinancingSource.create("celiapp", amount=20000),
            FinancingSource.create("rrsp", name="RRSP", amount=18000),
            FinancingSource.create("joint_account", amount=8000),
            FinancingSource.create("parents_loan", term_months=60),
        ],
        household_members=[
            HouseholdMember(name="Alex", income=7000, car_loan_payment=350),
            HouseholdMember(name="Sam", income=5000, credit_card_payment=80),
        ],
        renovation_items=[RenovationItem(description="Kitchen", amount=12000)],
    )
