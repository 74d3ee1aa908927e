"""Payment Method Service — attach a card token to the user's billing customer.

Invariants:
    - Empty card token is a BadRequestError, checked before any IO
    - At most one billing customer per user: an existing reference is updated,
      never replaced
    - Customer creation precedes persisting the reference; if persisting fails the
      gateway customer exists with no internal reference (logged, not repaired)
"""

import logging

from app.core import store_keys
from app.core.domain_types import StripeCustomerId
from app.core.errors import BadRequestError, ErrorContext, StorageError
from app.core.records import UserProfile
from app.core.repository_protocols import KeyValueStore, PaymentGateway

logger = logging.getLogger(__name__)


class PaymentMethodService:

    def __init__(self, store: KeyValueStore, gateway: PaymentGateway):
        self._store = store
        self._gateway = gateway

    async def set_card(self, user: UserProfile, card_token: str | None) -> None:
        if not card_token:
            raise BadRequestError("cardToken is required")

        stored_id = await self._store.hget(
            store_keys.USER_IDEN_TO_STRIPE_CUSTOMER_ID, user.iden,
        )
        if stored_id:
            await self._gateway.update_customer_source(
                StripeCustomerId(stored_id), card_token,
            )
            logger.info("Updated card on file", extra={"user_iden": user.iden})
            return

        customer_id: StripeCustomerId = await self._gateway.create_customer(
            card_token, {"userIden": user.iden},
        )
        try:
            await self._store.hset(
                store_keys.USER_IDEN_TO_STRIPE_CUSTOMER_ID, user.iden, customer_id,
            )
        except StorageError as e:
            logger.error(
                f"Billing customer {customer_id} created but not recorded; needs reconciliation",
                extra={"user_iden": user.iden, "error_code": e.code},
            )
            e.context = ErrorContext(
                user_iden=user.iden,
                store_key=store_keys.USER_IDEN_TO_STRIPE_CUSTOMER_ID,
                debug_info={"orphaned_customer_id": customer_id},
            )
            raise
        logger.info("Created billing customer", extra={"user_iden": user.iden})
