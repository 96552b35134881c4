# This project was developed with assistance from AI tools.
"""Public calculator routes -- no authentication required.

The affordability endpoints are stateless: the client posts its current
form state (and an event) and receives the next state with every derived
value. Nothing is stored between requests.
"""

import logging
import math

from fastapi import APIRouter, HTTPException

from ..schemas.calculator import (
    AffordabilityState,
    AffordabilitySummary,
    CostRange,
    LTVRequest,
    LTVResponse,
    PaymentRequest,
    PaymentResponse,
    PropertyTransferTaxCost,
    PropertyTransferTaxRequest,
    TransitionRequest,
    UpfrontCostDetails,
)
from ..services.affordability import apply_event, initial_state, summarize
from ..services.formulas import (
    PTT_BRACKETS,
    calculate_bracketed_tax,
    calculate_ltv,
    calculate_pmt,
    calculate_upfront_cost,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_finite(name: str, value: float, detail: str) -> float:
    """Refuse a result that overflowed or has no defined value."""
    if not math.isfinite(value):
        logger.warning("Refused %s with non-finite result: %s", name, value)
        raise HTTPException(status_code=422, detail=detail)
    return value


@router.get("/affordability/initial", response_model=AffordabilitySummary)
async def affordability_initial() -> AffordabilitySummary:
    """Summary of an empty form."""
    return summarize(initial_state())


@router.post("/affordability/transition", response_model=AffordabilitySummary)
async def affordability_transition(req: TransitionRequest) -> AffordabilitySummary:
    """Apply one form event to the posted state and return the result."""
    return summarize(apply_event(req.state, req.event))


@router.post("/affordability/summary", response_model=AffordabilitySummary)
async def affordability_summary(state: AffordabilityState) -> AffordabilitySummary:
    """Derived values for a posted state. The amortization is clamped first."""
    return summarize(state)


@router.post("/calculate-upfront-cost", response_model=CostRange)
async def upfront_cost(details: UpfrontCostDetails) -> CostRange:
    """Estimate the cash needed at closing as a min/max range."""
    result = calculate_upfront_cost(details)
    for bound in (result.min, result.max):
        _require_finite("upfront cost", bound, "Upfront cost is too large to represent.")
    return result


@router.post("/calculate-payment", response_model=PaymentResponse)
async def payment(req: PaymentRequest) -> PaymentResponse:
    """Periodic payment (PMT) for a loan.

    A zero rate or a rate of -1 has no closed-form answer; those inputs are
    refused rather than answered with NaN.
    """
    result = calculate_pmt(req.rate, req.num_periods, req.present_value, req.future_value)
    _require_finite(
        "PMT", result, "Payment is undefined for this rate and number of periods."
    )
    return PaymentResponse(payment=result)


@router.post("/calculate-ltv", response_model=LTVResponse)
async def ltv(req: LTVRequest) -> LTVResponse:
    ratio = calculate_ltv(req.loan, req.value)
    _require_finite("LTV", ratio, "Loan-to-value ratio is too large to represent.")
    return LTVResponse(ltv=ratio)


@router.post("/calculate-property-transfer-tax", response_model=PropertyTransferTaxCost)
async def property_transfer_tax(req: PropertyTransferTaxRequest) -> PropertyTransferTaxCost:
    """Progressive transfer tax, using the default schedule when none is given."""
    brackets = req.brackets if req.brackets is not None else PTT_BRACKETS
    total = calculate_bracketed_tax(req.price, brackets)
    _require_finite("transfer tax", total, "Transfer tax is too large to represent.")
    return PropertyTransferTaxCost(total=total, breakdown=list(brackets))
