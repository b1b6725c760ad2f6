"""Batched concurrent fan-out with a courtesy pause between groups."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, Hashable, Iterator, Sequence, TypeVar

from fplsync.report.constants import BATCH_PAUSE_SEC, BATCH_SIZE

from .client import Sleep

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass
class BatchOutcome(Generic[K, V]):
    """Per-item results of a batched run.

    ``values`` holds successes, ``errors`` the failure reason of every item
    that did not succeed. A key is in exactly one of the two.
    """

    values: dict[K, V] = field(default_factory=dict)
    errors: dict[K, BaseException] = field(default_factory=dict)
    groups: int = 0


def partition(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    if size < 1:
        raise ValueError("batch size must be at least 1")
    for start in range(0, len(items), size):
        yield items[start : start + size]


async def run_batched(
    items: Sequence[T],
    key: Callable[[T], K],
    fetch: Callable[[T], Awaitable[V]],
    *,
    batch_size: int = BATCH_SIZE,
    pause: float = BATCH_PAUSE_SEC,
    sleep: Sleep = asyncio.sleep,
    label: str = "item",
) -> BatchOutcome[K, V]:
    """Run ``fetch`` over ``items`` in sequential groups of ``batch_size``.

    Items inside a group run concurrently and the group is awaited as a whole;
    a failure is logged and recorded but never cancels its siblings. The pause
    happens between groups only.
    """
    outcome: BatchOutcome[K, V] = BatchOutcome()
    groups = list(partition(items, batch_size))
    for index, group in enumerate(groups, start=1):
        results = await asyncio.gather(*(fetch(item) for item in group), return_exceptions=True)
        for item, result in zip(group, results):
            k = key(item)
            if isinstance(result, Exception):
                logger.warning("%s %s failed in group %d: %s", label, k, index, result)
                outcome.errors[k] = result
            elif isinstance(result, BaseException):
                raise result
            else:
                outcome.values[k] = result
        if index < len(groups):
            await sleep(pause)
    outcome.groups = len(groups)
    return outcome
