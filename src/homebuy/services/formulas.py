# This project was developed with assistance from AI tools.
"""Mortgage and closing-cost formulas.

Pure math, no I/O. Shared by the affordability controller and the public API.

Degenerate inputs (a zero rate in ``calculate_pmt``, a zero value in
``calculate_ltv``) are not rejected here: they yield ``nan`` or ``inf`` the
same way IEEE float division would, and callers decide what to do with them.
"""

import math
from collections.abc import Sequence

from ..schemas.calculator import (
    Bracket,
    CostRange,
    DownPaymentType,
    OwnershipType,
    PropertyType,
    UpfrontCostDetails,
)

FIRST_BRACKET = 200_000
SECOND_BRACKET = 2_000_000

PTT_BRACKETS: tuple[Bracket, ...] = (
    Bracket(amount=FIRST_BRACKET, factor=0.01),
    Bracket(amount=SECOND_BRACKET - FIRST_BRACKET, factor=0.02),
    Bracket(amount=math.inf, factor=0.03),
)

LEGAL_FEES = 1300
PROPERTY_APPRAISAL = 300
PROPERTY_SURVEY = 500
MAX_MOVE_IN_FEE = 500
MAX_HOME_INSPECTION = 450


def divide(numerator: float, denominator: float) -> float:
    """Float division with IEEE results instead of ZeroDivisionError."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1, denominator)
    return numerator / denominator


def _compound(rate: float, num_periods: float) -> float:
    try:
        result = (1 + rate) ** num_periods
    except (OverflowError, ZeroDivisionError):
        return math.inf
    if isinstance(result, complex):
        return math.nan
    return result


def calculate_pmt(
    rate: float,
    num_periods: float,
    present_value: float,
    future_value: float = 0,
) -> float:
    """Fixed periodic payment that amortizes ``present_value`` over ``num_periods``.

    Follows the spreadsheet PMT convention for the inputs (money received is
    negative) but flips the sign of the result, so borrowing with a negative
    present value reports a positive payment.
    """
    compound = _compound(rate, num_periods)
    denominator = compound - 1
    numerator = rate * (present_value * compound + future_value)
    return -divide(numerator, denominator)


def calculate_ptt(price: float) -> float:
    """Property transfer tax: 1% to 200k, 2% to 2M, 3% above."""
    total = min(FIRST_BRACKET, price) * 0.01
    if price > FIRST_BRACKET:
        total += min(SECOND_BRACKET - FIRST_BRACKET, price - FIRST_BRACKET) * 0.02
    if price > SECOND_BRACKET:
        total += (price - SECOND_BRACKET) * 0.03
    return total


def calculate_bracketed_tax(price: float, brackets: Sequence[Bracket]) -> float:
    """Apply a progressive schedule to ``price``.

    Brackets are consumed in the order given; the caller is responsible for
    supplying them in ascending order of applicability.
    """
    threshold = 0.0
    total = 0.0
    for bracket in brackets:
        if price < threshold:
            break
        remaining = price - threshold
        total += min(remaining, bracket.amount) * bracket.factor
        threshold += bracket.amount
    return total


def calculate_ltv(loan: float, value: float) -> float:
    """Loan-to-value ratio."""
    return divide(loan, value)


def calculate_upfront_cost(details: UpfrontCostDetails) -> CostRange:
    """Range of cash needed at closing.

    ``min`` and ``max`` differ only by the costs that are uncertain when the
    quote is made: the home inspection and the survey or strata move-in fee.
    """
    ptt = calculate_ptt(details.price)
    low = ptt + LEGAL_FEES + PROPERTY_APPRAISAL
    high = low + MAX_HOME_INSPECTION

    if details.property_type is PropertyType.LAND:
        high += PROPERTY_SURVEY * details.gst
    elif details.property_type is PropertyType.STRATA:
        high += MAX_MOVE_IN_FEE

    if details.ownership_type is OwnershipType.NEW_CONSTRUCTION:
        with_gst = details.price * (1 + details.gst)
        low += with_gst
        high += with_gst

    if details.down_payment.type is DownPaymentType.AMOUNT:
        down_payment = details.down_payment.value
    else:
        down_payment = details.price * details.down_payment.value

    return CostRange(min=low + down_payment, max=high + down_payment)
