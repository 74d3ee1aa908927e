"""Domain Records — the shapes stored in the key/value store and read from the ORM.

Invariants:
    - UserProfile and ContributionRecord serialize to camelCase JSON (stored format)
    - Unset optional profile fields are omitted from the stored JSON
    - EventRecord support/oppose lists are derived from PacEvent rows, read-only here

Design Decisions:
    - Pydantic for stored records: one place for JSON encode/decode with aliases
    - Frozen dataclasses for relational lookups: services never mutate them
"""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.core.domain_types import (
    ContributionIden, EventIden, FacebookUserId, PacIden, PoliticianIden, UserIden,
)


class _CamelRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class UserProfile(_CamelRecord):
    """Internal user record keyed by iden."""
    iden: UserIden
    facebook_id: FacebookUserId
    name: str | None = None
    email: str | None = None
    occupation: str | None = None
    employer: str | None = None
    street_address: str | None = None
    city_state_zip: str | None = None
    created: float
    modified: float


class ContributionRecord(_CamelRecord):
    """Ledger entry for a completed charge. Never mutated after creation."""
    iden: ContributionIden
    created: float
    modified: float
    charge_id: str
    amount: int
    event: EventIden
    pac: PacIden
    support: bool


@dataclass(frozen=True)
class EventRecord:
    iden: EventIden
    politician: PoliticianIden | None
    support_pacs: tuple[PacIden, ...] = field(default_factory=tuple)
    oppose_pacs: tuple[PacIden, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PacRecord:
    iden: PacIden
    name: str
