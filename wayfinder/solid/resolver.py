"""Resolve person profiles from pods with a local fallback."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Dict, Optional, Protocol, Union

from wayfinder.models.person import PersonCore, PersonExtended, RemoteProfileFragment
from wayfinder.models.resolution import FallbackReason, FallbackResult, LiveResult, LoadingResult, ResolutionResult
from wayfinder.solid.cache import ProfileCache
from wayfinder.solid.client import FetchKind, FetchOutcome

logger = logging.getLogger(__name__)

FinalResult = Union[LiveResult, FallbackResult]
Listener = Callable[[ResolutionResult], None]

_FALLBACK_REASONS: Dict[FetchKind, FallbackReason] = {
    FetchKind.OFFLINE: FallbackReason.OFFLINE,
    FetchKind.ERROR: FallbackReason.ERROR,
    FetchKind.EMPTY: FallbackReason.EMPTY,
}


class ProfileFetcher(Protocol):
    async def fetch(self, web_id: str) -> FetchOutcome:
        ...


def merge_profile(fallback: PersonExtended, fragment: RemoteProfileFragment) -> PersonExtended:
    """Overlay every present, non-empty remote field on the fallback record."""

    updates = {name: value for name, value in fragment if value not in (None, "", [])}
    return fallback.model_copy(update=updates)


def as_extended(record: Union[PersonCore, PersonExtended]) -> PersonExtended:
    if isinstance(record, PersonExtended):
        return record
    return PersonExtended(**record.model_dump())


class ResolutionSubscription:
    """Handle for a watched resolution.

    Cancelling stops delivery to the listener only; the underlying fetch keeps
    running so its result still reaches the cache.
    """

    def __init__(self) -> None:
        self.active = True
        self.task: Optional[asyncio.Task] = None

    def cancel(self) -> None:
        self.active = False

    async def wait(self) -> None:
        if self.task is not None:
            await self.task


class ProfileResolver:
    """Combine pod data with fallback records and cache live results briefly."""

    def __init__(self, client: ProfileFetcher, cache: Optional[ProfileCache] = None) -> None:
        self.client = client
        self.cache = cache if cache is not None else ProfileCache()
        self._inflight: Dict[str, "asyncio.Task[FetchOutcome]"] = {}

    async def resolve(self, web_id: str, fallback: Union[PersonCore, PersonExtended]) -> FinalResult:
        cached = self.cache.get(web_id)
        if cached is not None:
            return cached

        record = as_extended(fallback)
        task = self._inflight.get(web_id)
        if task is None:
            task = asyncio.create_task(self._fetch(web_id, record))
            self._inflight[web_id] = task
            task.add_done_callback(lambda done, key=web_id: self._forget(key, done))
        # Only the fetch is shared; each caller merges against its own fallback.
        # Shielded so an abandoned caller does not cancel the fetch other callers share.
        outcome = await asyncio.shield(task)
        return self._result_for(outcome, record)

    def watch(
        self,
        web_id: str,
        fallback: Union[PersonCore, PersonExtended],
        listener: Listener,
    ) -> ResolutionSubscription:
        """Push ``loading`` and then the final state to ``listener``.

        Must be called from a running event loop.
        """

        subscription = ResolutionSubscription()
        cached = self.cache.get(web_id)
        if cached is not None:
            listener(cached)
            return subscription

        listener(LoadingResult())

        async def deliver() -> None:
            result = await self.resolve(web_id, fallback)
            if subscription.active:
                listener(result)
            else:
                logger.debug("Dropping resolution for %s; subscriber went away", web_id)

        subscription.task = asyncio.create_task(deliver())
        return subscription

    async def _fetch(self, web_id: str, fallback: PersonExtended) -> FetchOutcome:
        """Fetch once for every concurrent caller and cache a live result.

        Caching happens here so it completes even when every caller went away.
        """

        try:
            outcome = await self.client.fetch(web_id)
        except Exception:  # the resolver always yields a renderable result
            logger.exception("Unexpected failure resolving %s", web_id)
            return FetchOutcome(FetchKind.ERROR, detail="Unexpected fetch failure")

        if outcome.ok and outcome.fragment is not None:
            self.cache.set(web_id, LiveResult(data=merge_profile(fallback, outcome.fragment)))
            logger.debug("Resolved %s live from pod (%s)", web_id, ", ".join(outcome.fragment.present_fields()))
        return outcome

    @staticmethod
    def _result_for(outcome: FetchOutcome, fallback: PersonExtended) -> FinalResult:
        if outcome.ok and outcome.fragment is not None:
            return LiveResult(data=merge_profile(fallback, outcome.fragment))
        return FallbackResult(data=fallback, reason=_FALLBACK_REASONS.get(outcome.kind, FallbackReason.ERROR))

    def _forget(self, web_id: str, task: asyncio.Task) -> None:
        if self._inflight.get(web_id) is task:
            del self._inflight[web_id]
