"""Contribution Rules — pure validation and record construction for create-contribution.

Invariants:
    - Request preconditions are checked before any IO: event iden, pac iden and a
      positive whole-dollar amount must all be present
    - A PAC must sit in exactly one of the event's support/oppose lists
    - Amounts are whole dollars everywhere except the gateway call (cents)
    - First failing check wins; every failure is a BadRequestError

Design Decisions:
    - Pure functions, no IO: the service layer orchestrates lookups around them
    - A PAC listed on both sides is rejected rather than silently treated as support
"""

from app.core.domain_types import ContributionIden, EventIden, PacIden
from app.core.errors import BadRequestError
from app.core.records import ContributionRecord, EventRecord, PacRecord

CENTS_PER_DOLLAR = 100


def check_contribution_request(
    event_iden: str | None, pac_iden: str | None, amount: int | None,
) -> None:
    """Reject requests missing an event, a PAC or a positive amount."""
    if not event_iden or not pac_iden or not amount:
        raise BadRequestError("eventIden, pacIden and amount are required")
    if amount < 0:
        raise BadRequestError("amount must be a positive whole number of dollars")


def resolve_support(event: EventRecord, pac_iden: PacIden) -> bool:
    """True if the PAC supports the event, False if it opposes it."""
    in_support = pac_iden in event.support_pacs
    in_oppose = pac_iden in event.oppose_pacs
    if in_support and in_oppose:
        raise BadRequestError(
            f"PAC '{pac_iden}' is listed as both supporting and opposing event '{event.iden}'",
        )
    if in_support:
        return True
    if in_oppose:
        return False
    raise BadRequestError(
        f"PAC '{pac_iden}' takes no position on event '{event.iden}'",
    )


def validate_resolved(
    customer_id: str | None,
    event: EventRecord | None,
    pac: PacRecord | None,
) -> bool:
    """Validate the three concurrent lookups in order. Returns the support flag."""
    if not customer_id:
        raise BadRequestError("No payment method on file")
    if event is None:
        raise BadRequestError("Event does not exist")
    if pac is None:
        raise BadRequestError("PAC does not exist")
    return resolve_support(event, pac.iden)


def to_minor_units(amount: int) -> int:
    return amount * CENTS_PER_DOLLAR


def charge_metadata(event_iden: str, pac_iden: str, support: bool) -> dict[str, str]:
    """Auxiliary charge metadata. Gateway metadata values are strings."""
    return {
        "eventIden": event_iden,
        "pacIden": pac_iden,
        "support": "true" if support else "false",
    }


def build_contribution(
    *,
    iden: ContributionIden,
    now: float,
    charge_id: str,
    amount: int,
    event_iden: EventIden,
    pac_iden: PacIden,
    support: bool,
) -> ContributionRecord:
    return ContributionRecord(
        iden=iden,
        created=now,
        modified=now,
        charge_id=charge_id,
        amount=amount,
        event=event_iden,
        pac=pac_iden,
        support=support,
    )
