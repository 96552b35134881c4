# This project was developed with assistance from AI tools.
"""Affordability calculator schemas."""

import enum
import math
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class PropertyType(str, enum.Enum):
    STRATA = "STRATA"
    LAND = "LAND"


class OwnershipType(str, enum.Enum):
    NEW_CONSTRUCTION = "NEW_CONSTRUCTION"
    RESALE = "RESALE"


class DownPaymentType(str, enum.Enum):
    PERCENTAGE = "PERCENTAGE"
    AMOUNT = "AMOUNT"


class UpfrontCostType(str, enum.Enum):
    DOWN_PAYMENT = "DOWN_PAYMENT"
    PROPERTY_TRANSFER_TAX = "PROPERTY_TRANSFER_TAX"


class Bracket(BaseModel):
    """One segment of a progressive tax schedule.

    ``amount`` is the width of the segment; ``math.inf`` marks the open-ended
    top bracket and travels over JSON as ``null``. Brackets are immutable so a
    schedule can be shared between responses.
    """

    model_config = ConfigDict(frozen=True)

    amount: float = Field(gt=0)
    factor: float = Field(ge=0, le=1)

    @field_validator("amount", mode="before")
    @classmethod
    def _unbounded_amount(cls, value):
        return math.inf if value is None else value

    @field_serializer("amount")
    def _serialize_amount(self, value: float) -> float | None:
        return None if math.isinf(value) else value


class DownPaymentCost(BaseModel):
    type: Literal["DOWN_PAYMENT"] = "DOWN_PAYMENT"
    total: float


class PropertyTransferTaxCost(BaseModel):
    type: Literal["PROPERTY_TRANSFER_TAX"] = "PROPERTY_TRANSFER_TAX"
    total: float
    breakdown: list[Bracket]


UpfrontCostItem = Annotated[
    DownPaymentCost | PropertyTransferTaxCost,
    Field(discriminator="type"),
]


class UpfrontCostLine(BaseModel):
    """Display row for one upfront cost item."""

    type: UpfrontCostType
    label: str
    total: float


class DownPayment(BaseModel):
    type: DownPaymentType
    value: float = Field(ge=0)


class UpfrontCostDetails(BaseModel):
    """Input for the upfront cost range estimate."""

    gst: float = Field(default=0.05, ge=0, le=1)
    price: float = Field(ge=0)
    property_type: PropertyType = PropertyType.LAND
    ownership_type: OwnershipType = OwnershipType.RESALE
    down_payment: DownPayment


class CostRange(BaseModel):
    min: float
    max: float


class PaymentRequest(BaseModel):
    """Input for the periodic payment (PMT) calculation."""

    rate: float = Field(description="Interest rate per period, e.g. 0.005 for 0.5%.")
    num_periods: int = Field(ge=0)
    present_value: float
    future_value: float = 0


class PaymentResponse(BaseModel):
    payment: float


class LTVRequest(BaseModel):
    loan: float = Field(ge=0)
    value: float = Field(gt=0)


class LTVResponse(BaseModel):
    ltv: float


class PropertyTransferTaxRequest(BaseModel):
    price: float = Field(ge=0)
    brackets: list[Bracket] | None = Field(
        default=None,
        description="Progressive schedule in ascending order. Defaults to the provincial schedule.",
    )


class AffordabilityState(BaseModel):
    """User-editable calculator fields.

    Price and down payment are kept as the raw text the user typed.
    """

    purchase_price: str = ""
    down_payment: str = ""
    amortization: int = Field(default=25, ge=1, le=35)
    is_new_construction: bool = False


class SetPurchasePrice(BaseModel):
    type: Literal["SET_PURCHASE_PRICE"] = "SET_PURCHASE_PRICE"
    value: str


class SetDownPayment(BaseModel):
    type: Literal["SET_DOWN_PAYMENT"] = "SET_DOWN_PAYMENT"
    value: str


class SetAmortization(BaseModel):
    type: Literal["SET_AMORTIZATION"] = "SET_AMORTIZATION"
    value: int = Field(ge=1, le=35)


class SetNewConstruction(BaseModel):
    type: Literal["SET_NEW_CONSTRUCTION"] = "SET_NEW_CONSTRUCTION"
    value: bool


AffordabilityEvent = Annotated[
    SetPurchasePrice | SetDownPayment | SetAmortization | SetNewConstruction,
    Field(discriminator="type"),
]


class TransitionRequest(BaseModel):
    state: AffordabilityState = Field(default_factory=AffordabilityState)
    event: AffordabilityEvent


class AffordabilitySummary(BaseModel):
    """Current state plus every value derived from it."""

    state: AffordabilityState
    max_amortization: int
    purchase_price_is_number: bool
    down_payment_is_number: bool
    principal: float | None = None
    monthly_payment: float | None = None
    upfront_costs: list[UpfrontCostItem] = Field(default_factory=list)
    cost_lines: list[UpfrontCostLine] = Field(default_factory=list)
    total_upfront_cost: float = 0
