"""Identity & Token Service — social login exchange and bearer-token resolution.

Invariants:
    - One internal user per Facebook id; the same identity always gets the same token
    - New-user writes run in series, in this order: user record -> token->iden ->
      iden->token -> facebook id->iden. The facebook mapping is last so a failure
      before it leaves no mapping pointing at a half-written user
    - A known user without a token mapping is an InternalInconsistencyError
    - Any failed write aborts the remaining ones and surfaces as StorageError

Design Decisions:
    - Not atomic, by the ordering contract above: a crash after the third write leaves
      an orphan user and the next login creates a second one. No reconciliation here
    - Tokens never rotate or expire
"""

import logging
import time
from collections.abc import Callable

from app.core import store_keys
from app.core.domain_types import AccessToken, UserIden
from app.core.errors import (
    BadRequestError, ErrorContext, InternalInconsistencyError, UnauthorizedError,
)
from app.core.identifiers import IdenGenerator, generate_access_token
from app.core.records import UserProfile
from app.core.repository_protocols import IdentityProvider, KeyValueStore
from app.services.task_flow import run_in_series

logger = logging.getLogger(__name__)


class IdentityService:
    """Exchanges Facebook tokens for bearer tokens and resolves bearer tokens to users."""

    def __init__(
        self,
        store: KeyValueStore,
        identity_provider: IdentityProvider,
        new_iden: IdenGenerator,
        clock: Callable[[], float] = time.time,
        new_token: Callable[[], AccessToken] = generate_access_token,
    ):
        self._store = store
        self._identity_provider = identity_provider
        self._new_iden = new_iden
        self._clock = clock
        self._new_token = new_token

    async def authenticate(self, external_token: str | None) -> AccessToken:
        """Return the bearer token for the Facebook identity behind external_token."""
        if not external_token:
            raise BadRequestError("facebookToken is required")

        identity = await self._identity_provider.fetch_identity(external_token)

        user_iden = await self._store.hget(
            store_keys.FACEBOOK_USER_ID_TO_USER_IDEN, identity.id,
        )
        if user_iden:
            return await self._existing_token(UserIden(user_iden))

        now = self._clock()
        user = UserProfile(
            iden=UserIden(self._new_iden()),
            facebook_id=identity.id,
            name=identity.name,
            email=identity.email,
            created=now,
            modified=now,
        )
        access_token = self._new_token()
        await self._register(user, access_token)
        logger.info("Registered new user", extra={"user_iden": user.iden})
        return access_token

    async def resolve_bearer_token(self, access_token: AccessToken | None) -> UserProfile:
        """Map a bearer token to its stored user profile."""
        if not access_token:
            raise UnauthorizedError()
        user_iden = await self._store.hget(
            store_keys.ACCESS_TOKEN_TO_USER_IDEN, access_token,
        )
        if not user_iden:
            raise UnauthorizedError()
        raw = await self._store.hget(store_keys.USERS, user_iden)
        if not raw:
            raise InternalInconsistencyError(
                f"Token maps to user {user_iden} but no user record exists",
                ErrorContext(user_iden=user_iden, store_key=store_keys.USERS),
            )
        return UserProfile.model_validate_json(raw)

    async def _existing_token(self, user_iden: UserIden) -> AccessToken:
        token = await self._store.hget(
            store_keys.USER_IDEN_TO_ACCESS_TOKEN, user_iden,
        )
        if not token:
            logger.error(
                f"Entry for {user_iden} missing in {store_keys.USER_IDEN_TO_ACCESS_TOKEN}",
                extra={"user_iden": user_iden},
            )
            raise InternalInconsistencyError(
                f"No access token stored for user {user_iden}",
                ErrorContext(
                    user_iden=user_iden,
                    store_key=store_keys.USER_IDEN_TO_ACCESS_TOKEN,
                ),
            )
        return AccessToken(token)

    async def _register(self, user: UserProfile, access_token: AccessToken) -> None:
        store = self._store
        await run_in_series([
            lambda: store.hset(store_keys.USERS, user.iden, user.to_json()),
            lambda: store.hset(
                store_keys.USER_IDEN_TO_ACCESS_TOKEN, user.iden, access_token,
            ),
            lambda: store.hset(
                store_keys.ACCESS_TOKEN_TO_USER_IDEN, access_token, user.iden,
            ),
            # Must come last: its presence marks the user as fully registered
            lambda: store.hset(
                store_keys.FACEBOOK_USER_ID_TO_USER_IDEN, user.facebook_id, user.iden,
            ),
        ])
