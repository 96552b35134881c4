# This project was developed with assistance from AI tools.
"""Derived state for the affordability form.

The form owns four inputs (purchase price and down payment as raw text, the
amortization in years, the new-construction toggle). ``apply_event`` is a pure
reducer over those inputs; every transition re-derives the amortization
ceiling from scratch and clamps the stored amortization to it, so
``amortization <= max_amortization(price, down_payment)`` holds after every
event. ``summarize`` computes everything else on read.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Final, Literal, assert_never

from ..core.config import settings
from ..schemas.calculator import (
    AffordabilityEvent,
    AffordabilityState,
    AffordabilitySummary,
    Bracket,
    DownPaymentCost,
    PropertyTransferTaxCost,
    SetAmortization,
    SetDownPayment,
    SetNewConstruction,
    SetPurchasePrice,
    UpfrontCostItem,
    UpfrontCostLine,
    UpfrontCostType,
)
from .formulas import PTT_BRACKETS, calculate_bracketed_tax, calculate_pmt, divide
from .number_input import assert_number, is_string_number, number_or_default

logger = logging.getLogger(__name__)

INSURED_MAX_AMORTIZATION: Final = 25
UNINSURED_MAX_AMORTIZATION: Final = 35
MIN_DOWN_PAYMENT_RATIO = 0.2


def max_amortization(purchase_price: float, down_payment: float) -> Literal[25, 35]:
    """Longest amortization allowed for the given price and down payment.

    Under 20% down the mortgage needs default insurance, which caps the
    amortization at 25 years. A zero price divides like floats do
    (0/0 is NaN, which never compares below the threshold).
    """
    ratio = divide(down_payment, purchase_price)
    if ratio < MIN_DOWN_PAYMENT_RATIO:
        return INSURED_MAX_AMORTIZATION
    return UNINSURED_MAX_AMORTIZATION


def max_amortization_for(purchase_price: str, down_payment: str) -> Literal[25, 35]:
    """``max_amortization`` over raw text; unparseable text counts as 0."""
    return max_amortization(
        number_or_default(purchase_price, 0),
        number_or_default(down_payment, 0),
    )


def clamp_amortization(requested: int, purchase_price: str, down_payment: str) -> int:
    ceiling = max_amortization_for(purchase_price, down_payment)
    if requested > ceiling:
        logger.debug("Clamped amortization %s -> %s", requested, ceiling)
    return min(requested, ceiling)


def initial_state() -> AffordabilityState:
    return AffordabilityState(amortization=settings.DEFAULT_AMORTIZATION)


def apply_event(state: AffordabilityState, event: AffordabilityEvent) -> AffordabilityState:
    """Return the state that follows ``event``. ``state`` is not modified."""
    purchase_price = state.purchase_price
    down_payment = state.down_payment
    requested = state.amortization
    is_new_construction = state.is_new_construction

    match event:
        case SetPurchasePrice(value=value):
            purchase_price = value
        case SetDownPayment(value=value):
            down_payment = value
        case SetAmortization(value=value):
            requested = value
        case SetNewConstruction(value=value):
            is_new_construction = value
        case _:
            assert_never(event)

    return AffordabilityState(
        purchase_price=purchase_price,
        down_payment=down_payment,
        amortization=clamp_amortization(requested, purchase_price, down_payment),
        is_new_construction=is_new_construction,
    )


def normalize_state(state: AffordabilityState) -> AffordabilityState:
    """Re-apply the amortization ceiling to a state received from a client."""
    amortization = clamp_amortization(
        state.amortization, state.purchase_price, state.down_payment
    )
    if amortization == state.amortization:
        return state
    return state.model_copy(update={"amortization": amortization})


def cost_type_label(cost_type: UpfrontCostType) -> str:
    match cost_type:
        case UpfrontCostType.DOWN_PAYMENT:
            return "Down Payment"
        case UpfrontCostType.PROPERTY_TRANSFER_TAX:
            return "Property Transfer Tax"
        case _:
            assert_never(cost_type)


def get_upfront_costs(
    purchase_price: str,
    down_payment: str,
    brackets: Sequence[Bracket] = PTT_BRACKETS,
) -> list[UpfrontCostItem]:
    """Line items that can be shown for the current inputs.

    A field that does not read as a number simply drops its line item.
    """
    result: list[UpfrontCostItem] = []

    if is_string_number(down_payment):
        result.append(DownPaymentCost(total=assert_number(down_payment)))

    if is_string_number(purchase_price):
        tax = calculate_bracketed_tax(assert_number(purchase_price), brackets)
        result.append(PropertyTransferTaxCost(total=tax, breakdown=list(brackets)))

    return result


def cost_line(item: UpfrontCostItem) -> UpfrontCostLine:
    match item:
        case DownPaymentCost():
            cost_type = UpfrontCostType.DOWN_PAYMENT
        case PropertyTransferTaxCost():
            cost_type = UpfrontCostType.PROPERTY_TRANSFER_TAX
        case _:
            assert_never(item)
    return UpfrontCostLine(type=cost_type, label=cost_type_label(cost_type), total=item.total)


def calculate_principal(
    purchase_price: float,
    down_payment: float,
    is_new_construction: bool,
    gst: float | None = None,
    include_resale_price: bool | None = None,
) -> float:
    """Amount to be borrowed.

    New construction adds GST on top of the price. For resale the price
    multiplier is 0 unless ``PRINCIPAL_INCLUDE_RESALE_PRICE`` is enabled, in
    which case it is 1.
    """
    if gst is None:
        gst = settings.GST_RATE
    if include_resale_price is None:
        include_resale_price = settings.PRINCIPAL_INCLUDE_RESALE_PRICE

    if is_new_construction:
        multiplier = 1 + gst
    elif include_resale_price:
        multiplier = 1.0
    else:
        multiplier = 0.0
    return purchase_price * multiplier - down_payment


def estimate_monthly_payment(
    principal: float, amortization_years: int, annual_rate: float | None = None
) -> float:
    if annual_rate is None:
        annual_rate = settings.ANNUAL_INTEREST_RATE
    months = amortization_years * 12
    if annual_rate == 0:
        return principal / months
    return calculate_pmt(annual_rate / 12, months, -principal)


def summarize(state: AffordabilityState) -> AffordabilitySummary:
    """Everything the form displays for ``state``."""
    state = normalize_state(state)
    price_ok = is_string_number(state.purchase_price)
    down_payment_ok = is_string_number(state.down_payment)

    principal = None
    monthly_payment = None
    if price_ok and down_payment_ok:
        principal = calculate_principal(
            assert_number(state.purchase_price),
            assert_number(state.down_payment),
            state.is_new_construction,
        )
        monthly_payment = round(estimate_monthly_payment(principal, state.amortization), 2)

    costs = get_upfront_costs(state.purchase_price, state.down_payment)
    return AffordabilitySummary(
        state=state,
        max_amortization=max_amortization_for(state.purchase_price, state.down_payment),
        purchase_price_is_number=price_ok,
        down_payment_is_number=down_payment_ok,
        principal=principal,
        monthly_payment=monthly_payment,
        upfront_costs=costs,
        cost_lines=[cost_line(item) for item in costs],
        total_upfront_cost=sum(item.total for item in costs),
    )


class AffordabilitySession:
    """One user's calculator inputs.

    Holds the current state and notifies subscribers after each transition.
    A UI binds to it by dispatching events and re-rendering from ``summary()``.
    """

    def __init__(self, state: AffordabilityState | None = None):
        self._state = normalize_state(state) if state is not None else initial_state()
        self._subscribers: list[Callable[[AffordabilityState], None]] = []

    @property
    def state(self) -> AffordabilityState:
        return self._state

    def subscribe(
        self, callback: Callable[[AffordabilityState], None]
    ) -> Callable[[], None]:
        """Register ``callback``; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def dispatch(self, event: AffordabilityEvent) -> AffordabilityState:
        self._state = apply_event(self._state, event)
        for callback in list(self._subscribers):
            callback(self._state)
        return self._state

    def set_purchase_price(self, value: str) -> AffordabilityState:
        return self.dispatch(SetPurchasePrice(value=value))

    def set_down_payment(self, value: str) -> AffordabilityState:
        return self.dispatch(SetDownPayment(value=value))

    def set_amortization(self, value: int) -> AffordabilityState:
        return self.dispatch(SetAmortization(value=value))

    def set_new_construction(self, value: bool) -> AffordabilityState:
        return self.dispatch(SetNewConstruction(value=value))

    def summary(self) -> AffordabilitySummary:
        return summarize(self._state)
