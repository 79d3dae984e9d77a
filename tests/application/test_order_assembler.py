"""Tests for the OrderAssembler: exhaustive validation and draft building."""

from decimal import Decimal

import pytest

from storefront.application.dto import CheckoutForm
from storefront.application.order_assembler import OrderAssembler
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.product import Customer, Product
from storefront.domain.model.value_objects import Money

VALID_FORM = CheckoutForm(
    name="  Alice Smith ",
    email="alice@example.com ",
    phone="",
    address="1 Main St\nSpringfield",
    notes="   ",
)


def _line(pid: str = "sku-1", price: str = "19.99", qty: int = 2, stock: int = 5) -> CartLine:
    return CartLine(pid, f"Item {pid}", Money.of(price), quantity=qty, stock_ceiling=stock)


class TestValidation:

    def test_valid_input_has_no_errors(self):
        assert OrderAssembler().validate([_line()], VALID_FORM) == []

    def test_empty_address_and_email_reported_together(self):
        form = CheckoutForm(name="Alice", email="", address="")
        with pytest.raises(ValidationError) as exc_info:
            OrderAssembler().assemble([_line()], form)
        assert exc_info.value.errors == ["Email is required", "Shipping address is required"]

    def test_every_rule_is_checked(self):
        errors = OrderAssembler().validate([], CheckoutForm(name="   ", email="nope", address=" "))
        assert errors == [
            "Name is required",
            "Email is not valid",
            "Shipping address is required",
            "Cart is empty",
        ]

    @pytest.mark.parametrize(
        "email",
        ["alice", "alice@example", "@example.com", "al ice@example.com", "alice@@example.com"],
    )
    def test_malformed_email_rejected(self, email):
        form = CheckoutForm(name="Alice", email=email, address="1 Main St")
        assert OrderAssembler().validate([_line()], form) == ["Email is not valid"]

    def test_zero_price_line_rejected(self):
        errors = OrderAssembler().validate([_line(price="0")], VALID_FORM)
        assert errors == ["Invalid price for one or more products"]

    def test_price_rounding_to_zero_rejected(self):
        errors = OrderAssembler().validate([_line(price="0.004")], VALID_FORM)
        assert errors == ["Invalid price for one or more products"]

    def test_message_lists_all_errors(self):
        with pytest.raises(ValidationError, match="Name is required; Email is required"):
            OrderAssembler().assemble([_line()], CheckoutForm(address="x"))


class TestDraft:

    def test_total_is_derived_from_lines(self):
        draft = OrderAssembler().assemble([_line(price="19.99", qty=2)], VALID_FORM)
        assert draft.total_amount == Money.of("39.98")

    def test_total_is_rounded_sum_of_exact_line_totals(self):
        cart = Cart()
        cart.add(Product("sku-1", "Half cent", Money.of("0.125"), stock=5), 2)
        draft = OrderAssembler().assemble(cart.lines, VALID_FORM)
        # 0.125 * 2 = 0.25; rounding each price first would give 0.26
        assert draft.total_amount.amount == Decimal("0.25")
        assert draft.total_amount == cart.total().rounded()
        assert draft.lines[0].unit_price == Money.of("0.125")

    def test_total_matches_cart_for_mixed_fractional_prices(self):
        lines = [_line("a", "0.333", 3, 10), _line("b", "1.005", 1, 10)]
        draft = OrderAssembler().assemble(lines, VALID_FORM)
        # 0.999 + 1.005 = 2.004
        assert draft.total_amount.amount == Decimal("2.00")
        assert [line.unit_price.amount for line in draft.lines] == [Decimal("0.333"), Decimal("1.005")]

    def test_fields_are_trimmed_and_blanks_become_none(self):
        draft = OrderAssembler().assemble([_line()], VALID_FORM)
        assert draft.customer_name == "Alice Smith"
        assert draft.customer_email == "alice@example.com"
        assert draft.customer_phone is None
        assert draft.notes is None

    def test_optional_fields_kept_when_present(self):
        form = CheckoutForm(
            name="Bob", email="bob@example.com", phone=" +56 9 1234 5678 ",
            address="2 Side St", notes="Leave at the door",
        )
        draft = OrderAssembler().assemble([_line()], form)
        assert draft.customer_phone == "+56 9 1234 5678"
        assert draft.notes == "Leave at the door"

    def test_lines_keep_cart_order(self):
        lines = [_line("z"), _line("a"), _line("m")]
        draft = OrderAssembler().assemble(lines, VALID_FORM)
        assert [line.product_id for line in draft.lines] == ["z", "a", "m"]

    def test_draft_is_immutable(self):
        draft = OrderAssembler().assemble([_line()], VALID_FORM)
        with pytest.raises(AttributeError):
            draft.customer_name = "Mallory"


class TestPrefill:

    def test_form_prefilled_from_customer(self):
        customer = Customer.from_metadata(
            " alice@example.com ",
            {"full_name": " Alice ", "phone": "555", "shipping_address": "1 Main St"},
        )
        form = CheckoutForm.prefilled(customer)
        assert form == CheckoutForm(
            name="Alice", email="alice@example.com", phone="555", address="1 Main St",
        )

    def test_no_customer_gives_blank_form(self):
        assert CheckoutForm.prefilled(None) == CheckoutForm()
