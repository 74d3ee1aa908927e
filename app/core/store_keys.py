"""Store Keys — naming conventions for every key in the key/value store.

Invariants:
    - Every key used by services is produced here (no inline key strings)
    - Per-entity keys embed the entity iden between fixed prefix and suffix
"""

from app.core.domain_types import EventIden, PoliticianIden, UserIden

USERS = "users"
USER_IDEN_TO_ACCESS_TOKEN = "userIdenToAccessToken"
ACCESS_TOKEN_TO_USER_IDEN = "accessTokenToUserIden"
FACEBOOK_USER_ID_TO_USER_IDEN = "facebookUserIdToUserIden"
USER_IDEN_TO_STRIPE_CUSTOMER_ID = "userIdenToStripeCustomerId"
CONTRIBUTIONS = "contributions"
CONTRIBUTIONS_SUM = "contributionsSum"


def user_reverse_chronological_contributions(user_iden: UserIden) -> str:
    return f"user:{user_iden}:reverseChronologicalContributions"


def user_contributions_sum(user_iden: UserIden) -> str:
    return f"user:{user_iden}:contributionsSum"


def event_contribution_totals(event_iden: EventIden) -> str:
    return f"event:{event_iden}:contributionTotals"


def politician_contribution_totals(politician_iden: PoliticianIden) -> str:
    return f"politician:{politician_iden}:contributionTotals"
