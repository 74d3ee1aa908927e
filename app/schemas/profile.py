"""Profile Schemas — update-profile body and card registration.

Invariants:
    - Every field optional; absent and empty values mean "leave unchanged"
    - No length or format limits (deliberately permissive)
"""

from app.schemas._base import CamelModel


class ProfileUpdate(CamelModel):
    name: str | None = None
    occupation: str | None = None
    employer: str | None = None
    street_address: str | None = None
    city_state_zip: str | None = None

    def to_patch(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class SetCardRequest(CamelModel):
    card_token: str | None = None
