"""Service Container — wires store, gateways and services once per process.

Invariants:
    - Built once in the FastAPI lifespan, stored on app.state, closed on shutdown
    - Every service receives its collaborators here; none constructs its own
    - Routes reach services only through app.state.services (api/deps.py)

Design Decisions:
    - Explicit construction over a DI framework: every wire is visible in build()
    - build_services accepts prebuilt collaborators so tests swap in fakes
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from app.config import Settings
from app.core.identifiers import IdenGenerator, LegacyIdenGenerator, SecureIdenGenerator
from app.core.repository_protocols import IdentityProvider, KeyValueStore, PaymentGateway
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.facebook_client import FacebookIdentityProvider
from app.infrastructure.kv_store import SqlKeyValueStore
from app.infrastructure.stripe_gateway import StripePaymentGateway
from app.services.contribution_service import ContributionService
from app.services.entity_lookup import EntityLookupService
from app.services.identity_service import IdentityService
from app.services.payment_method_service import PaymentMethodService
from app.services.profile_service import ProfileService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    db: DatabaseSessionManager
    store: KeyValueStore
    identity_provider: IdentityProvider
    gateway: PaymentGateway
    identity: IdentityService
    entities: EntityLookupService
    profiles: ProfileService
    payment_methods: PaymentMethodService
    contributions: ContributionService

    async def close(self) -> None:
        close = getattr(self.identity_provider, "close", None)
        if close is not None:
            await close()
        await self.db.dispose()


def select_iden_generator(scheme: str) -> IdenGenerator:
    if scheme == "legacy":
        logger.warning("Using legacy base-36 identifiers (weak randomness)")
        return LegacyIdenGenerator()
    return SecureIdenGenerator()


def build_services(
    db: DatabaseSessionManager,
    identity_provider: IdentityProvider,
    gateway: PaymentGateway,
    new_iden: IdenGenerator,
    store: KeyValueStore | None = None,
    clock: Callable[[], float] = time.time,
) -> ServiceContainer:
    store = store or SqlKeyValueStore(db)
    entities = EntityLookupService(db, store)
    return ServiceContainer(
        db=db,
        store=store,
        identity_provider=identity_provider,
        gateway=gateway,
        identity=IdentityService(store, identity_provider, new_iden, clock),
        entities=entities,
        profiles=ProfileService(store, entities, clock),
        payment_methods=PaymentMethodService(store, gateway),
        contributions=ContributionService(store, entities, gateway, new_iden, clock),
    )


def build_services_from_settings(settings: Settings) -> ServiceContainer:
    db = DatabaseSessionManager.from_url(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    return build_services(
        db,
        FacebookIdentityProvider(
            settings.facebook_app_id,
            settings.facebook_app_secret,
            graph_url=settings.facebook_graph_url,
            timeout_seconds=settings.http_timeout_seconds,
        ),
        StripePaymentGateway(settings.stripe_secret_key, settings.stripe_currency),
        select_iden_generator(settings.iden_scheme),
    )
