"""Saved and exported calculator state.

The JSON layout is flat and uses the same keys as the browser version of the
calculator so exported files stay interchangeable.  Removed slots are dropped
on export; only the order and values of the remaining entries survive.
"""
import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import ValidationError

from homebudget.models import (
    CalculatorInputs,
    FinancingSource,
    HouseholdMember,
    OneTimeCosts,
    RecurringCosts,
    RenovationItem,
    capabilities_for,
)

logger = logging.getLogger(__name__)

SESSION_FILE = os.environ.get("HOMEBUDGET_SESSION_FILE", "home_budget_session.json")
STATE_VERSION = "1.0"


class StateImportError(ValueError):
    """Raised when saved or imported state cannot be turned into inputs."""


def export_payload(inputs: CalculatorInputs, exported_at: Optional[str] = None) -> dict:
    if exported_at is None:
        exported_at = datetime.now(timezone.utc).isoformat()
    return {
        "askingPrice": inputs.asking_price,
        "evaluationPrice": inputs.evaluation_price,
        "offerPrice": inputs.purchase_price,
        "squareFootage": inputs.one_time.square_footage,
        "downPayment": inputs.down_payment,
        "downPaymentMode": inputs.down_payment_mode,
        "is30Year": inputs.use_extended_amortization,
        "insurance": inputs.recurring.insurance,
        "electricity": inputs.recurring.utility,
        "upkeep": inputs.recurring.upkeep,
        "cityTaxes": inputs.annual_property_tax,
        "notaryFees": inputs.one_time.notary_fees,
        "movingBase": inputs.one_time.moving_base,
        "paintPerSqft": inputs.one_time.paint_per_sqft,
        "financingSources": [
            s.model_dump(by_alias=True) for s in inputs.financing_sources if s is not None
        ],
        "owners": [m.model_dump(by_alias=True) for m in inputs.household_members if m is not None],
        "renovations": [r.model_dump() for r in inputs.renovation_items if r is not None],
        "exportedAt": exported_at,
        "version": STATE_VERSION,
    }


def export_state(inputs: CalculatorInputs) -> str:
    return json.dumps(export_payload(inputs), indent=2)


def _records(data: dict, key: str) -> List[dict]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise StateImportError(f"'{key}' must be a list")
    return [v for v in value if isinstance(v, dict)]


def _owner(record: dict) -> HouseholdMember:
    # Early saves stored only a name and a (possibly textual) income.
    if "income" in record and not isinstance(record["income"], (int, float)):
        record = {"name": record.get("name", ""), "income": record.get("income")}
    return HouseholdMember.model_validate(record)


def _source(record: dict) -> FinancingSource:
    # The gap-loan flag follows the source type unless the record sets it.
    if "isAutoCalculated" not in record and "is_auto_calculated" not in record:
        source_type = record.get("sourceType", record.get("source_type"))
        record = {**record, "isAutoCalculated": capabilities_for(source_type).is_auto_calculated}
    return FinancingSource.model_validate(record)


def inputs_from_payload(data: Any) -> CalculatorInputs:
    """Rebuild calculator inputs from an exported or saved payload."""
    if not isinstance(data, dict):
        raise StateImportError("Saved state must be a JSON object")
    try:
        return CalculatorInputs(
            asking_price=data.get("askingPrice"),
            evaluation_price=data.get("evaluationPrice"),
            purchase_price=data.get("offerPrice"),
            down_payment=data.get("downPayment"),
            down_payment_mode=data.get("downPaymentMode", "amount"),
            use_extended_amortization=bool(data.get("is30Year", False)),
            annual_property_tax=data.get("cityTaxes"),
            recurring=RecurringCosts(
                insurance=data.get("insurance"),
                utility=data.get("electricity"),
                upkeep=data.get("upkeep"),
            ),
            one_time=OneTimeCosts(
                notary_fees=data.get("notaryFees"),
                moving_base=data.get("movingBase"),
                paint_per_sqft=data.get("paintPerSqft"),
                square_footage=data.get("squareFootage"),
            ),
            financing_sources=[_source(s) for s in _records(data, "financingSources")],
            household_members=[_owner(o) for o in _records(data, "owners")],
            renovation_items=[RenovationItem.model_validate(r) for r in _records(data, "renovations")],
        )
    except ValidationError as exc:
        raise StateImportError(f"Saved state has invalid values: {exc.error_count()} error(s)") from exc
    except (TypeError, OverflowError) as exc:
        raise StateImportError(f"Saved state has invalid values: {exc}") from exc


def import_state(text: str) -> CalculatorInputs:
    """Parse an exported JSON document.

    Raises :class:`StateImportError` so the caller can keep its current state
    and tell the user the file was rejected.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise StateImportError("Failed to import JSON file. Please check the file format.") from exc
    return inputs_from_payload(data)


def save_state(inputs: CalculatorInputs, path: Optional[str] = None) -> None:
    """Persist inputs to the session file."""
    path = path or SESSION_FILE
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(export_payload(inputs), f)
    except OSError:
        logger.warning("could not write session file %s", path, exc_info=True)


def load_state(path: Optional[str] = None) -> Optional[CalculatorInputs]:
    """Restore inputs from the session file, or ``None`` if there is nothing usable."""
    path = path or SESSION_FILE
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return import_state(f.read())
    except (OSError, StateImportError):
        logger.warning("ignoring unreadable session file %s", path, exc_info=True)
        return None
