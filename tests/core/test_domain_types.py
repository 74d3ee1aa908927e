"""Domain Types — tests that records and ports carry the named identifier types."""

from typing import get_type_hints

from app.core.domain_types import (
    AccessToken,
    ContributionIden,
    EventIden,
    FacebookUserId,
    PacIden,
    StripeCustomerId,
    UserIden,
)
from app.core.identifiers import generate_access_token
from app.core.records import ContributionRecord, PacRecord, UserProfile
from app.core.repository_protocols import ExternalIdentity, PaymentGateway
from app.services.entity_lookup import EntityLookupService
from app.services.identity_service import IdentityService


def test_records_use_named_idens():
    assert get_type_hints(UserProfile)["iden"] is UserIden
    assert get_type_hints(UserProfile)["facebook_id"] is FacebookUserId
    assert get_type_hints(ContributionRecord)["iden"] is ContributionIden
    assert get_type_hints(ContributionRecord)["event"] is EventIden
    assert get_type_hints(ContributionRecord)["pac"] is PacIden
    assert get_type_hints(PacRecord)["iden"] is PacIden


def test_external_identity_carries_facebook_user_id():
    assert get_type_hints(ExternalIdentity)["id"] is FacebookUserId


def test_payment_gateway_speaks_stripe_customer_ids():
    assert get_type_hints(PaymentGateway.create_customer)["return"] is StripeCustomerId
    assert get_type_hints(PaymentGateway.update_customer_source)["customer_id"] is StripeCustomerId
    assert get_type_hints(PaymentGateway.create_charge)["customer_id"] is StripeCustomerId


def test_identity_service_issues_access_tokens():
    assert get_type_hints(IdentityService.authenticate)["return"] is AccessToken
    assert get_type_hints(generate_access_token)["return"] is AccessToken


def test_lookups_take_named_idens():
    assert get_type_hints(EntityLookupService.get_pac)["pac_iden"] is PacIden
    assert get_type_hints(EntityLookupService.get_event)["event_iden"] is EventIden

