"""Contribution Recording Service — validate, charge, then record a contribution.

Invariants:
    - Request preconditions checked before any IO (contribution_rules)
    - Billing reference, event and PAC are resolved concurrently; any lookup failure
      is a StorageError
    - Validation runs in order and short-circuits: payment method, event, PAC, stance
    - Nothing is written unless the charge succeeded
    - After a successful charge, six bookkeeping writes fire concurrently (record,
      user list, event counter, politician counter, global sum, user sum). Failures
      are logged per write and never surfaced: the call reports success because
      the money moved

Design Decisions:
    - Charge-then-record is not transactional. A failed write leaves counters short
      of the ledger with no reconciliation job. Re-running record_contribution for
      the same contribution double counts; there is no idempotency key
"""

import logging
import time
from collections.abc import Callable

from app.core import store_keys
from app.core.contribution_rules import (
    build_contribution,
    charge_metadata,
    check_contribution_request,
    to_minor_units,
    validate_resolved,
)
from app.core.domain_types import ContributionIden, EventIden, PacIden, Polarity
from app.core.identifiers import IdenGenerator
from app.core.records import ContributionRecord, EventRecord, UserProfile
from app.core.repository_protocols import KeyValueStore, PaymentGateway
from app.services.entity_lookup import EntityLookupService
from app.services.task_flow import Settled, gather_all, settle_all

logger = logging.getLogger(__name__)


class ContributionService:

    def __init__(
        self,
        store: KeyValueStore,
        entities: EntityLookupService,
        gateway: PaymentGateway,
        new_iden: IdenGenerator,
        clock: Callable[[], float] = time.time,
    ):
        self._store = store
        self._entities = entities
        self._gateway = gateway
        self._new_iden = new_iden
        self._clock = clock

    async def create_contribution(
        self,
        user: UserProfile,
        event_iden: EventIden | None,
        pac_iden: PacIden | None,
        amount: int | None,
    ) -> ContributionRecord:
        check_contribution_request(event_iden, pac_iden, amount)

        customer_id, event, pac = await gather_all(
            self._store.hget(store_keys.USER_IDEN_TO_STRIPE_CUSTOMER_ID, user.iden),
            self._entities.get_event(event_iden),
            self._entities.get_pac(pac_iden),
        )
        support = validate_resolved(customer_id, event, pac)

        charge_id = await self._gateway.create_charge(
            to_minor_units(amount),
            customer_id,
            charge_metadata(event.iden, pac.iden, support),
        )

        contribution = build_contribution(
            iden=ContributionIden(self._new_iden()),
            now=self._clock(),
            charge_id=charge_id,
            amount=amount,
            event_iden=event.iden,
            pac_iden=pac.iden,
            support=support,
        )
        await self.record_contribution(user, event, contribution)
        return contribution

    async def record_contribution(
        self,
        user: UserProfile,
        event: EventRecord,
        contribution: ContributionRecord,
    ) -> list[Settled]:
        """Fire the bookkeeping writes for a charged contribution. Never raises."""
        store = self._store
        polarity = Polarity.from_support(contribution.support).value
        writes = [
            ("store_record", store.hset(
                store_keys.CONTRIBUTIONS, contribution.iden, contribution.to_json(),
            )),
            ("push_user_list", store.lpush(
                store_keys.user_reverse_chronological_contributions(user.iden),
                contribution.iden,
            )),
            ("event_total", store.hincrby(
                store_keys.event_contribution_totals(event.iden),
                polarity, contribution.amount,
            )),
            ("global_sum", store.incrby(
                store_keys.CONTRIBUTIONS_SUM, contribution.amount,
            )),
            ("user_sum", store.incrby(
                store_keys.user_contributions_sum(user.iden), contribution.amount,
            )),
        ]
        if event.politician:
            writes.append(("politician_total", store.hincrby(
                store_keys.politician_contribution_totals(event.politician),
                polarity, contribution.amount,
            )))
        else:
            logger.warning(
                f"Event {event.iden} has no politician; politician total not updated",
                extra={"contribution_iden": contribution.iden},
            )

        settled = await settle_all(writes)
        for outcome in settled:
            if not outcome.ok:
                logger.error(
                    f"Bookkeeping write failed after charge: {outcome.error}",
                    extra={
                        "user_iden": user.iden,
                        "contribution_iden": contribution.iden,
                        "charge_id": contribution.charge_id,
                        "step": outcome.label,
                    },
                )
        return settled
