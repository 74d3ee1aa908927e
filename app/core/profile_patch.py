"""Profile Patch — pure merge of an update-profile body into a stored profile.

Invariants:
    - Only EDITABLE_PROFILE_FIELDS can change; iden, facebookId, email, created never do
    - Empty or missing patch values leave the stored value untouched
    - modified is always advanced to `now`, even for an empty patch
    - No length or format validation on field contents (deliberately permissive)
"""

from app.core.domain_types import EDITABLE_PROFILE_FIELDS
from app.core.records import UserProfile


def apply_profile_patch(
    profile: UserProfile, patch: dict, now: float,
) -> UserProfile:
    """Return a new profile with non-empty patch fields applied."""
    current = profile.to_dict()
    for key in EDITABLE_PROFILE_FIELDS:
        value = patch.get(key)
        if value:
            current[key] = value
    current["modified"] = now
    return UserProfile.model_validate(current)
