"""Stripe Payment Gateway — billing customers and charges through the stripe SDK.

Invariants:
    - Amounts arrive in minor units (cents); currency fixed per gateway instance
    - Every stripe.StripeError maps to PaymentGatewayError (no retry)
    - Blocking SDK calls run in a worker thread, never on the event loop

Design Decisions:
    - api_key passed per call instead of mutating the stripe module global, so a
      test process can hold several gateways
"""

import asyncio
import logging

import stripe

from app.core.domain_types import StripeCustomerId
from app.core.errors import PaymentGatewayError

logger = logging.getLogger(__name__)


class StripePaymentGateway:
    """PaymentGateway backed by Stripe customers and charges."""

    def __init__(self, api_key: str, currency: str = "usd"):
        self._api_key = api_key
        self.currency = currency

    async def create_customer(self, source: str, metadata: dict[str, str]) -> StripeCustomerId:
        customer = await self._call(
            "customer create",
            stripe.Customer.create,
            source=source,
            metadata=metadata,
        )
        return StripeCustomerId(customer.id)

    async def update_customer_source(self, customer_id: StripeCustomerId, source: str) -> None:
        await self._call(
            "customer update",
            stripe.Customer.modify,
            customer_id,
            source=source,
        )

    async def create_charge(
        self, amount: int, customer_id: StripeCustomerId, metadata: dict[str, str],
    ) -> str:
        charge = await self._call(
            "charge",
            stripe.Charge.create,
            amount=amount,
            currency=self.currency,
            customer=customer_id,
            metadata=metadata,
        )
        logger.info(
            f"Charged {amount} {self.currency} to {customer_id}",
            extra={"charge_id": charge.id},
        )
        return charge.id

    async def _call(self, operation: str, fn, *args, **params):
        try:
            return await asyncio.to_thread(fn, *args, api_key=self._api_key, **params)
        except stripe.StripeError as e:
            logger.warning(f"Stripe {operation} rejected: {e.user_message or e}")
            raise PaymentGatewayError(e.user_message or str(e), operation)
