from decimal import Decimal

import pytest

from labubu_store.app.common.events import OrderPlaced, StepAdvanced, ValidationErrors
from labubu_store.app.models import BillingAddress, CheckoutState, CheckoutStep, SameAsShipping, ShippingMethod
from labubu_store.modules.checkout.flow import reopen, select_shipping_method, submit_payment, submit_shipping
from labubu_store.modules.checkout.forms import BILLING_REQUIRED_MESSAGE, validate_payment, validate_shipping


def fixed_id():
    return "LBTEST0001"


@pytest.fixture()
def at_method(shipping_form):
    return submit_shipping(CheckoutState(), shipping_form).state


@pytest.fixture()
def at_payment(at_method):
    return select_shipping_method(at_method, "standard").state


def test_valid_shipping_advances(shipping_form):
    t = submit_shipping(CheckoutState(), shipping_form)

    assert t.accepted
    assert t.state.step is CheckoutStep.SHIPPING_METHOD
    assert t.find(StepAdvanced).step is CheckoutStep.SHIPPING_METHOD
    assert t.state.shipping_address.city == "Toyville"


def test_optional_blank_fields_are_absent(shipping_form):
    address, errors = validate_shipping(shipping_form)
    assert errors == {}
    assert address.address_line2 is None
    assert address.phone_number is None


def test_short_name_is_rejected(shipping_form):
    t = submit_shipping(CheckoutState(), {**shipping_form, "full_name": "A"})

    assert t.rejected
    assert t.state.step is CheckoutStep.SHIPPING_ADDRESS
    assert t.find(ValidationErrors).errors == {"full_name": "Full name must be at least 2 characters."}
    # what the user typed is kept for re-display
    assert t.state.shipping_values["full_name"] == "A"


def test_every_bad_field_is_reported(shipping_form):
    bad = {**shipping_form, "email": "nope", "postal_code": "12", "phone_number": "123"}
    _, errors = validate_shipping(bad)
    assert errors == {
        "email": "Please enter a valid email address.",
        "postal_code": "Postal code is too short.",
        "phone_number": "Phone number is too short.",
    }


def test_method_before_shipping_is_rejected():
    t = select_shipping_method(CheckoutState(), "express")
    assert t.rejected == "Step shipping-method is not active"


def test_unknown_method(at_method):
    t = select_shipping_method(at_method, "teleport")
    assert t.find(ValidationErrors).errors == {"method": "Please select a shipping method."}
    assert t.state.step is CheckoutStep.SHIPPING_METHOD


def test_method_advances_to_payment(at_method):
    t = select_shipping_method(at_method, "express")
    assert t.state.step is CheckoutStep.PAYMENT_DETAILS
    assert t.state.shipping_method is ShippingMethod.EXPRESS
    assert t.state.unlocked_steps() == tuple(CheckoutStep)


def test_payment_before_method_is_rejected(at_method, payment_form):
    t = submit_payment(at_method, payment_form, Decimal("5.00"))
    assert not t.accepted
    assert t.state is at_method


def test_payment_places_order(at_payment, payment_form):
    t = submit_payment(at_payment, payment_form, Decimal("5.00"), make_confirmation_id=fixed_id)

    assert t.accepted
    assert t.state.confirmation_id == "LBTEST0001"
    placed = t.find(OrderPlaced)
    assert placed.payment.billing_same_as_shipping
    assert placed.to_dict()["payment"]["card_last4"] == "4242"
    assert "card_number" not in placed.to_dict()["payment"]


def test_card_details_are_never_retained(at_payment, payment_form):
    ok = submit_payment(at_payment, payment_form, Decimal("5.00"), make_confirmation_id=fixed_id)
    bad = submit_payment(at_payment, {**payment_form, "cvc": "12"}, Decimal("5.00"))

    for state in (ok.state, bad.state):
        assert "card_number" not in state.payment_values
        assert "cvc" not in state.payment_values
    assert bad.state.payment_values["cardholder_name"] == "Labubu Lover"


def test_no_changes_after_order_placed(at_payment, payment_form, shipping_form):
    placed = submit_payment(at_payment, payment_form, Decimal("5.00"), make_confirmation_id=fixed_id).state

    assert submit_payment(placed, payment_form, Decimal("5.00")).rejected == "Order already placed"
    assert reopen(placed, "shipping-address").rejected == "Order already placed"


@pytest.mark.parametrize(
    "field,value,message",
    [
        ("card_number", "4242-4242", "Invalid card number format."),
        ("expiry_date", "13/29", "Expiry date must be MM/YY."),
        ("cvc", "12a", "CVC must be 3 or 4 digits."),
        ("cardholder_name", "L", "Cardholder name is too short."),
    ],
)
def test_payment_field_messages(payment_form, field, value, message):
    _, errors = validate_payment({**payment_form, field: value})
    assert errors == {field: message}


def test_separate_billing_requires_address(payment_form):
    _, errors = validate_payment({**payment_form, "billing_same_as_shipping": False})
    assert errors == {"billing_address_line1": BILLING_REQUIRED_MESSAGE}


@pytest.mark.parametrize("flag", [False, "false", "f", "n", "no", "off", 0])
def test_every_false_spelling_requires_billing(payment_form, flag):
    details, errors = validate_payment({**payment_form, "billing_same_as_shipping": flag})
    assert details is None
    assert errors == {"billing_address_line1": BILLING_REQUIRED_MESSAGE}


def test_unreadable_billing_flag(payment_form):
    _, errors = validate_payment({**payment_form, "billing_same_as_shipping": "maybe"})
    assert errors == {"billing_same_as_shipping": "Please choose whether billing matches shipping."}


def test_billing_rule_runs_after_field_checks(payment_form):
    values = {**payment_form, "billing_same_as_shipping": False, "cvc": ""}
    _, errors = validate_payment(values)
    assert errors == {"cvc": "CVC must be 3 or 4 digits."}

    _, errors = validate_payment({**values, "cvc": "123"})
    assert errors == {"billing_address_line1": BILLING_REQUIRED_MESSAGE}


def test_blank_billing_field_counts_as_missing(payment_form):
    values = {
        **payment_form,
        "billing_same_as_shipping": False,
        "billing_address_line1": "9 Invoice Road",
        "billing_city": "   ",
        "billing_postal_code": "99999",
        "billing_country": "GB",
    }
    _, errors = validate_payment(values)
    assert errors == {"billing_address_line1": BILLING_REQUIRED_MESSAGE}


@pytest.mark.parametrize(
    "field,value",
    [
        ("card_number", "٤٢٤٢٤٢٤٢٤٢٤٢٤٢٤٢"),
        ("cvc", "١٢٣"),
        ("expiry_date", "١٢/٢٩"),
    ],
)
def test_only_ascii_digits_accepted(payment_form, field, value):
    details, errors = validate_payment({**payment_form, field: value})
    assert details is None
    assert field in errors


def test_separate_billing_address(payment_form):
    values = {
        **payment_form,
        "billing_same_as_shipping": False,
        "billing_address_line1": "9 Invoice Road",
        "billing_city": "Ledger",
        "billing_postal_code": "99999",
        "billing_country": "GB",
    }
    details, errors = validate_payment(values)
    assert errors == {}
    assert isinstance(details.billing, BillingAddress)
    assert details.billing.city == "Ledger"


def test_same_as_shipping_ignores_billing_fields(payment_form):
    details, _ = validate_payment({**payment_form, "billing_city": "Ledger"})
    assert isinstance(details.billing, SameAsShipping)


def test_reopen_keeps_submitted_values(at_payment, shipping_form):
    t = reopen(at_payment, "shipping-address")

    assert t.accepted
    assert t.state.step is CheckoutStep.SHIPPING_ADDRESS
    assert t.state.shipping_values == shipping_form
    assert t.state.shipping_method is ShippingMethod.STANDARD


def test_reopen_locked_step(at_method):
    assert reopen(at_method, "payment-details").rejected
    assert reopen(at_method, "confirm").rejected


def test_invalid_resubmission_locks_later_steps(at_payment, shipping_form):
    back = reopen(at_payment, "shipping-address").state
    t = submit_shipping(back, {**shipping_form, "city": "X"})

    assert t.rejected
    assert t.state.unlocked_steps() == (CheckoutStep.SHIPPING_ADDRESS,)
