"""Task Flow — the three orchestration shapes services use for concurrent IO.

Invariants:
    - gather_all: join-all, first failure wins; results in argument order
    - run_in_series: each step starts only after the previous completed; first
      failure stops the sequence and propagates
    - settle_all: join-all that never raises; one Settled per input, in order
    - No cancellation anywhere: in-flight siblings of a failed awaitable keep running

Design Decisions:
    - asyncio.gather without return_exceptions for gather_all: propagates the first
      exception to the caller as-is
    - Settled is an explicit result/error pair so callers decide what a failure means
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Settled:
    """Outcome of one labelled awaitable: exactly one of value/error is meaningful."""
    label: str
    value: Any = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def gather_all(*awaitables: Awaitable) -> list:
    """Await all concurrently. Raises the first failure."""
    return list(await asyncio.gather(*awaitables))


async def run_in_series(steps: Sequence[Callable[[], Awaitable]]) -> list:
    """Run zero-arg async callables one at a time, in order."""
    results = []
    for step in steps:
        results.append(await step())
    return results


async def settle_all(labelled: Sequence[tuple[str, Awaitable]]) -> list[Settled]:
    """Await all concurrently, capturing every failure instead of raising."""
    outcomes = await asyncio.gather(
        *(aw for _, aw in labelled), return_exceptions=True,
    )
    settled = []
    for (label, _), outcome in zip(labelled, outcomes):
        if isinstance(outcome, BaseException):
            settled.append(Settled(label=label, error=outcome))
        else:
            settled.append(Settled(label=label, value=outcome))
    return settled
