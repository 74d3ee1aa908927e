"""Tests for StripePaymentGateway with the stripe resource classes patched out."""

from types import SimpleNamespace

import pytest
import stripe

from app.core.errors import PaymentGatewayError
from app.infrastructure.stripe_gateway import StripePaymentGateway


@pytest.fixture
def calls(monkeypatch):
    recorded = []

    def record(name, result):
        def fn(*args, **params):
            recorded.append((name, args, params))
            return result
        return fn

    monkeypatch.setattr(stripe.Customer, "create", record("Customer.create", SimpleNamespace(id="cus_1")))
    monkeypatch.setattr(stripe.Customer, "modify", record("Customer.modify", SimpleNamespace(id="cus_1")))
    monkeypatch.setattr(stripe.Charge, "create", record("Charge.create", SimpleNamespace(id="ch_1")))
    return recorded


async def test_create_customer(calls):
    gateway = StripePaymentGateway("sk_test")
    assert await gateway.create_customer("tok_visa", {"userIden": "U1"}) == "cus_1"
    assert calls == [(
        "Customer.create", (),
        {"api_key": "sk_test", "source": "tok_visa", "metadata": {"userIden": "U1"}},
    )]


async def test_update_customer_source(calls):
    gateway = StripePaymentGateway("sk_test")
    await gateway.update_customer_source("cus_1", "tok_new")
    assert calls == [("Customer.modify", ("cus_1",), {"api_key": "sk_test", "source": "tok_new"})]


async def test_create_charge_uses_configured_currency(calls):
    gateway = StripePaymentGateway("sk_test", currency="eur")
    charge_id = await gateway.create_charge(2500, "cus_1", {"eventIden": "E1"})
    assert charge_id == "ch_1"
    [(_, _, params)] = calls
    assert params["amount"] == 2500
    assert params["currency"] == "eur"
    assert params["customer"] == "cus_1"


async def test_stripe_error_becomes_gateway_error(monkeypatch):
    def decline(*args, **params):
        raise stripe.CardError("Your card was declined.", "source", "card_declined")

    monkeypatch.setattr(stripe.Charge, "create", decline)
    gateway = StripePaymentGateway("sk_test")
    with pytest.raises(PaymentGatewayError, match="declined") as exc_info:
        await gateway.create_charge(2500, "cus_1", {})
    assert exc_info.value.http_status == 400
    assert exc_info.value.operation == "charge"
