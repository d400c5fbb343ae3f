"""Pydantic schemas for API request/response models."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from feecalc.config import settings
from feecalc.data.state_store import OfferState, ScenarioState


# ---- Request schemas ----

class EvaluateRequest(BaseModel):
    scenario: ScenarioState
    offers: list[OfferState] = Field(..., min_length=1)
    steps: int = Field(settings.sensitivity_steps, ge=1, le=200, description="Sensitivity grid steps")


class ValidateRequest(BaseModel):
    scenario: ScenarioState
    offers: list[OfferState] = []


# ---- Response schemas ----

class _FromEngine(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class FeeBreakdownResponse(_FromEngine):
    setup_fee: Decimal
    placement_fee: Decimal
    total_management_fees: Decimal
    total_admin_fees: Decimal
    carry: Decimal


class CalculationResultResponse(_FromEngine):
    offer_id: str
    offer_name: str
    offer_color: str
    shares_acquired: Decimal
    upfront_fees: Decimal
    total_cash_outlay: Decimal
    gross_exit_value: Decimal
    gross_profit: Decimal
    gross_moic: Decimal
    net_exit_value: Decimal
    net_return: Decimal
    net_moic: Decimal
    net_irr: Decimal | None = None
    total_fees: Decimal
    effective_fee_rate: Decimal
    break_even_price: Decimal
    fee_breakdown: FeeBreakdownResponse


class SensitivityResultResponse(_FromEngine):
    net_return: Decimal
    net_moic: Decimal
    net_irr: Decimal | None = None


class SensitivityPointResponse(_FromEngine):
    exit_price: Decimal
    results: dict[str, SensitivityResultResponse]


class ComparisonRowResponse(_FromEngine):
    label: str
    key: str
    values: list[str]
    best_index: int | None = None
    highlight: bool = False
    delta: str | None = None


class ValidationErrorResponse(_FromEngine):
    field: str
    message: str


class ValidationResponse(BaseModel):
    valid: bool
    scenario_errors: list[ValidationErrorResponse] = []
    collection_errors: list[ValidationErrorResponse] = []
    offer_errors: dict[str, list[ValidationErrorResponse]] = {}


class EvaluateResponse(ValidationResponse):
    results: list[CalculationResultResponse]
    sensitivity: list[SensitivityPointResponse]
    comparison: list[ComparisonRowResponse]


class DefaultsResponse(BaseModel):
    scenario: ScenarioState
    offers: list[OfferState]
