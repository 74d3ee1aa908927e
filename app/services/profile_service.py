"""Profile Service — read the signed-in user's dashboard data and patch their profile.

Invariants:
    - get_profile fetches chargeable + contributions concurrently; any failure fails
      the whole call (no partial result)
    - update_profile persists the whole record and always advances modified
"""

import logging
import time
from collections.abc import Callable

from app.core import store_keys
from app.core.profile_patch import apply_profile_patch
from app.core.records import UserProfile
from app.core.repository_protocols import KeyValueStore
from app.services.entity_lookup import EntityLookupService
from app.services.task_flow import gather_all

logger = logging.getLogger(__name__)


class ProfileService:

    def __init__(
        self,
        store: KeyValueStore,
        entities: EntityLookupService,
        clock: Callable[[], float] = time.time,
    ):
        self._store = store
        self._entities = entities
        self._clock = clock

    async def get_profile(self, user: UserProfile) -> dict:
        customer_id, contributions = await gather_all(
            self._store.hget(store_keys.USER_IDEN_TO_STRIPE_CUSTOMER_ID, user.iden),
            self._entities.list_user_contributions(user.iden),
        )
        return {
            "profile": user.to_dict(),
            "chargeable": bool(customer_id),
            "contributions": [c.to_dict() for c in contributions],
        }

    async def update_profile(self, user: UserProfile, patch: dict) -> UserProfile:
        updated = apply_profile_patch(user, patch, self._clock())
        await self._store.hset(store_keys.USERS, updated.iden, updated.to_json())
        logger.info("Profile updated", extra={"user_iden": updated.iden})
        return updated
