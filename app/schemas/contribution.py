"""Contribution Schemas — create-contribution body.

Invariants:
    - amount is whole dollars; floats, booleans and numeric strings fail
      validation (400)
    - Presence checks live in core/contribution_rules.py so a missing field and a
      falsy field fail the same way
"""

from pydantic import StrictInt

from app.schemas._base import CamelModel


class CreateContributionRequest(CamelModel):
    event_iden: str | None = None
    pac_iden: str | None = None
    amount: StrictInt | None = None
