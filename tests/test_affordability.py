# This project was developed with assistance from AI tools.
"""Tests for the affordability form state and derived values."""

import pytest
from pydantic import ValidationError

from homebuy.core.config import settings
from homebuy.schemas.calculator import (
    AffordabilityState,
    DownPaymentCost,
    PropertyTransferTaxCost,
    SetAmortization,
    SetDownPayment,
    SetNewConstruction,
    SetPurchasePrice,
    UpfrontCostType,
)
from homebuy.services.affordability import (
    AffordabilitySession,
    apply_event,
    calculate_principal,
    cost_type_label,
    estimate_monthly_payment,
    get_upfront_costs,
    initial_state,
    max_amortization,
    max_amortization_for,
    summarize,
)
from homebuy.services.formulas import PTT_BRACKETS


class TestMaxAmortization:
    def test_low_down_payment(self):
        assert max_amortization(500_000, 50_000) == 25

    def test_high_down_payment(self):
        assert max_amortization(500_000, 150_000) == 35

    def test_exactly_twenty_percent(self):
        assert max_amortization(500_000, 100_000) == 35

    def test_zero_price(self):
        # 0/0 and x/0 never read as "under 20%"
        assert max_amortization(0, 0) == 35
        assert max_amortization(0, 10_000) == 35

    @pytest.mark.parametrize("price", [0, 1, 250_000, 1e9])
    @pytest.mark.parametrize("down_payment", [-5, 0, 49_999, 50_000, 1e9])
    def test_only_two_possible_ceilings(self, price, down_payment):
        assert max_amortization(price, down_payment) in (25, 35)

    def test_text_that_is_not_a_number_counts_as_zero(self):
        assert max_amortization_for("500000", "lots") == 25
        assert max_amortization_for("", "") == 35


class TestTransitions:
    def test_initial_state(self):
        state = initial_state()
        assert state.purchase_price == ""
        assert state.down_payment == ""
        assert state.amortization == 25
        assert state.is_new_construction is False

    def test_price_change_clamps_amortization(self):
        state = AffordabilityState(amortization=35)
        state = apply_event(state, SetPurchasePrice(value="500000"))
        assert state.amortization == 25

    def test_down_payment_raises_ceiling_without_restoring_value(self):
        state = AffordabilityState(purchase_price="500000", amortization=25)
        state = apply_event(state, SetDownPayment(value="150000"))
        assert state.amortization == 25
        state = apply_event(state, SetAmortization(value=35))
        assert state.amortization == 35

    def test_requested_amortization_is_capped(self):
        state = AffordabilityState(purchase_price="500000", down_payment="50000", amortization=20)
        state = apply_event(state, SetAmortization(value=30))
        assert state.amortization == 25

    def test_text_is_kept_verbatim(self):
        state = apply_event(initial_state(), SetPurchasePrice(value=" 12abc "))
        assert state.purchase_price == " 12abc "

    def test_does_not_mutate_input_state(self):
        before = AffordabilityState(amortization=35)
        apply_event(before, SetPurchasePrice(value="500000"))
        assert before.amortization == 35
        assert before.purchase_price == ""

    def test_toggle_new_construction(self):
        state = apply_event(initial_state(), SetNewConstruction(value=True))
        assert state.is_new_construction is True

    def test_invariant_holds_over_event_sequence(self):
        events = [
            SetAmortization(value=35),
            SetPurchasePrice(value="800000"),
            SetDownPayment(value="400000"),
            SetAmortization(value=35),
            SetDownPayment(value="1000"),
            SetAmortization(value=30),
            SetPurchasePrice(value="abc"),
            SetAmortization(value=35),
            SetPurchasePrice(value="1e6"),
            SetDownPayment(value=""),
            SetAmortization(value=1),
            SetAmortization(value=35),
        ]
        state = initial_state()
        for event in events:
            state = apply_event(state, event)
            ceiling = max_amortization_for(state.purchase_price, state.down_payment)
            assert 1 <= state.amortization <= ceiling


class TestUpfrontCosts:
    def test_nothing_when_both_empty(self):
        assert get_upfront_costs("", "") == []

    def test_down_payment_only(self):
        costs = get_upfront_costs("", "50000")
        assert len(costs) == 1
        assert isinstance(costs[0], DownPaymentCost)
        assert costs[0].total == 50_000

    def test_tax_only(self):
        costs = get_upfront_costs("500000", "n/a")
        assert len(costs) == 1
        assert isinstance(costs[0], PropertyTransferTaxCost)

    def test_both_down_payment_first(self):
        costs = get_upfront_costs("500000", "100000")
        assert [c.type for c in costs] == ["DOWN_PAYMENT", "PROPERTY_TRANSFER_TAX"]
        assert costs[1].total == pytest.approx(8000)
        assert len(costs[1].breakdown) == 3

    def test_labels(self):
        assert cost_type_label(UpfrontCostType.DOWN_PAYMENT) == "Down Payment"
        assert cost_type_label(UpfrontCostType.PROPERTY_TRANSFER_TAX) == "Property Transfer Tax"


class TestPrincipal:
    def test_resale_keeps_legacy_formula(self):
        assert calculate_principal(500_000, 100_000, False, include_resale_price=False) == -100_000

    def test_new_construction_adds_gst(self):
        result = calculate_principal(500_000, 100_000, True, gst=0.05)
        assert result == pytest.approx(425_000)

    def test_resale_with_full_price(self):
        assert calculate_principal(500_000, 100_000, False, include_resale_price=True) == 400_000

    def test_setting_switches_resale_formula(self, monkeypatch):
        monkeypatch.setattr(settings, "PRINCIPAL_INCLUDE_RESALE_PRICE", True)
        assert calculate_principal(500_000, 100_000, False) == 400_000


class TestMonthlyPayment:
    def test_zero_rate_is_straight_line(self):
        assert estimate_monthly_payment(300_000, 25, annual_rate=0) == pytest.approx(1000)

    def test_positive_rate(self):
        payment = estimate_monthly_payment(400_000, 25, annual_rate=0.06)
        assert payment == pytest.approx(2577.2, rel=1e-3)


class TestSummary:
    def test_empty_form(self):
        summary = summarize(initial_state())
        assert summary.max_amortization == 35
        assert summary.purchase_price_is_number is False
        assert summary.down_payment_is_number is False
        assert summary.principal is None
        assert summary.monthly_payment is None
        assert summary.upfront_costs == []
        assert summary.total_upfront_cost == 0

    def test_full_form(self, monkeypatch):
        monkeypatch.setattr(settings, "PRINCIPAL_INCLUDE_RESALE_PRICE", False)
        state = AffordabilityState(purchase_price="500000", down_payment="100000")
        summary = summarize(state)
        assert summary.max_amortization == 35
        assert summary.principal == -100_000
        assert summary.total_upfront_cost == pytest.approx(108_000)
        assert [line.label for line in summary.cost_lines] == [
            "Down Payment",
            "Property Transfer Tax",
        ]

    def test_new_construction_payment(self):
        state = AffordabilityState(
            purchase_price="500000", down_payment="100000", is_new_construction=True
        )
        summary = summarize(state)
        assert summary.principal == pytest.approx(425_000)
        assert summary.monthly_payment > 0

    def test_clamps_posted_state(self):
        state = AffordabilityState(purchase_price="500000", down_payment="50000", amortization=35)
        assert summarize(state).state.amortization == 25


class TestSession:
    def test_setters_apply_clamp(self):
        session = AffordabilitySession()
        session.set_amortization(35)
        session.set_purchase_price("600000")
        assert session.state.amortization == 25
        session.set_down_payment("300000")
        session.set_amortization(35)
        assert session.state.amortization == 35
        session.set_new_construction(True)
        assert session.summary().state.is_new_construction is True

    def test_starting_state_is_normalized(self):
        session = AffordabilitySession(
            AffordabilityState(purchase_price="100", down_payment="1", amortization=30)
        )
        assert session.state.amortization == 25

    def test_subscribers_see_each_transition(self):
        session = AffordabilitySession()
        seen = []
        unsubscribe = session.subscribe(seen.append)
        session.set_purchase_price("500000")
        session.set_down_payment("50000")
        unsubscribe()
        session.set_down_payment("60000")
        assert [s.down_payment for s in seen] == ["", "50000"]


class TestDefaultScheduleIsShared:
    def test_breakdown_brackets_cannot_be_edited(self):
        tax = get_upfront_costs("500000", "")[0]
        with pytest.raises(ValidationError):
            tax.breakdown[0].factor = 0.5
        assert PTT_BRACKETS[0].factor == 0.01

    def test_breakdown_list_is_a_copy(self):
        tax = get_upfront_costs("500000", "")[0]
        tax.breakdown.clear()
        assert len(PTT_BRACKETS) == 3
        assert get_upfront_costs("500000", "")[0].total == pytest.approx(8000)
