"""Domain Types — named identifiers carried by records, ports and service signatures.

Invariants:
    - UserIden, ContributionIden, EventIden, PacIden, PoliticianIden are opaque strings
    - FacebookUserId and StripeCustomerId are issued by the external services, never minted here
    - AccessToken is a hex-encoded secret, never logged in full
    - Polarity encodes support/oppose — no raw string matching on counter fields

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and to counter field names without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserIden = NewType("UserIden", str)
ContributionIden = NewType("ContributionIden", str)
EventIden = NewType("EventIden", str)
PacIden = NewType("PacIden", str)
PoliticianIden = NewType("PoliticianIden", str)
AccessToken = NewType("AccessToken", str)
FacebookUserId = NewType("FacebookUserId", str)
StripeCustomerId = NewType("StripeCustomerId", str)


# ─── Enums ───────────────────────────────────────────────────────

class Polarity(str, Enum):
    """Stance of a contribution relative to an event. Value is the counter field."""
    SUPPORT = "support"
    OPPOSE = "oppose"

    @classmethod
    def from_support(cls, support: bool) -> "Polarity":
        return cls.SUPPORT if support else cls.OPPOSE


# Profile fields a user may overwrite through update-profile
EDITABLE_PROFILE_FIELDS = (
    "name", "occupation", "employer", "streetAddress", "cityStateZip",
)
