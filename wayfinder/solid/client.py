"""Read-only client for profile documents held in Solid pods.

Pods are personal, self-hosted stores and are routinely offline, so an
unreachable pod is reported as an outcome value rather than raised. Each fetch
is one GET with a bounded timeout, retried once after a fixed backoff.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Iterable, Optional
from urllib.parse import quote, urlsplit

import httpx
from opentelemetry import trace

from wayfinder.core.config import settings
from wayfinder.models.person import RemoteProfileFragment
from wayfinder.solid.vocab import ProfileDocumentError, extract_profile, parse_profile_document
from wayfinder.utils.monitoring import observe_pod_fetch

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class FetchKind(str, Enum):
    SUCCESS = "success"
    EMPTY = "empty"
    OFFLINE = "offline"
    ERROR = "error"


@dataclass(frozen=True)
class FetchOutcome:
    kind: FetchKind
    fragment: Optional[RemoteProfileFragment] = None
    attempts: int = 0
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind is FetchKind.SUCCESS


class ProfileFetchError(Exception):
    """A single attempt reached the pod but got no usable document."""


def document_url_for(web_id: str) -> str:
    """Strip the fragment from a WebID to get the profile document URL."""

    return web_id.split("#", 1)[0]


class RemoteProfileClient:
    """Fetch profile fragments from pods, optionally through the pod proxy."""

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        *,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        backoff: Optional[float] = None,
        accept: Optional[str] = None,
        proxy_base_url: Optional[str] = None,
        proxy_hosts: Optional[Iterable[str]] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.timeout = settings.POD_FETCH_TIMEOUT_SECONDS if timeout is None else timeout
        self.retries = settings.POD_FETCH_RETRIES if retries is None else retries
        self.backoff = settings.POD_RETRY_BACKOFF_SECONDS if backoff is None else backoff
        self.accept = accept or settings.POD_ACCEPT_HEADER
        if proxy_base_url is None and settings.POD_PROXY_ENABLED:
            proxy_base_url = settings.POD_PROXY_BASE_URL
        self.proxy_base_url = proxy_base_url.rstrip("/") if proxy_base_url else None
        self.proxy_hosts = set(settings.POD_PROXY_ALLOWED_HOSTS if proxy_hosts is None else proxy_hosts)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=self.timeout)
        self._sleep = sleep

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    async def fetch_profile(self, web_id: str) -> Optional[RemoteProfileFragment]:
        """Return the profile fragment for ``web_id`` or ``None`` when none could be read."""

        outcome = await self.fetch(web_id)
        return outcome.fragment if outcome.ok else None

    async def fetch(self, web_id: str) -> FetchOutcome:
        """Fetch and extract a profile, reporting how the attempt went."""

        document_url = document_url_for(web_id)
        if urlsplit(document_url).scheme not in ("http", "https"):
            observe_pod_fetch(FetchKind.ERROR.value)
            return FetchOutcome(FetchKind.ERROR, detail=f"Not an HTTP WebID: {web_id}")

        request_url = self.request_url(document_url)
        max_attempts = self.retries + 1
        outcome = FetchOutcome(FetchKind.ERROR)

        for attempt in range(1, max_attempts + 1):
            outcome = await self._attempt(web_id, document_url, request_url, attempt)
            if outcome.kind in (FetchKind.SUCCESS, FetchKind.EMPTY):
                break
            if attempt < max_attempts:
                logger.debug("Retrying pod fetch for %s in %.1fs (%s)", web_id, self.backoff, outcome.detail)
                await self._sleep(self.backoff)

        if outcome.kind is FetchKind.OFFLINE:
            logger.info("Pod unreachable for %s after %d attempts", web_id, outcome.attempts)
        elif outcome.kind is FetchKind.ERROR:
            logger.warning("Pod returned no usable profile for %s: %s", web_id, outcome.detail)
        observe_pod_fetch(outcome.kind.value)
        return outcome

    async def _attempt(self, web_id: str, document_url: str, request_url: str, attempt: int) -> FetchOutcome:
        with tracer.start_as_current_span("pod.fetch") as span:
            span.set_attribute("pod.host", urlsplit(document_url).netloc)
            span.set_attribute("pod.attempt", attempt)
            span.set_attribute("pod.proxied", request_url != document_url)
            try:
                fragment = await self._fetch_once(web_id, document_url, request_url)
            except httpx.TransportError as exc:
                outcome = FetchOutcome(FetchKind.OFFLINE, attempts=attempt, detail=f"{type(exc).__name__}: {exc}")
            except (httpx.RequestError, ProfileFetchError, ProfileDocumentError) as exc:
                outcome = FetchOutcome(FetchKind.ERROR, attempts=attempt, detail=str(exc))
            else:
                if fragment is None or fragment.is_empty():
                    outcome = FetchOutcome(FetchKind.EMPTY, attempts=attempt, detail="No profile fields found")
                else:
                    outcome = FetchOutcome(FetchKind.SUCCESS, fragment=fragment, attempts=attempt)
            span.set_attribute("pod.outcome", outcome.kind.value)
            return outcome

    async def _fetch_once(self, web_id: str, document_url: str, request_url: str) -> Optional[RemoteProfileFragment]:
        response = await self._client.get(request_url, headers={"Accept": self.accept}, timeout=self.timeout)
        if not response.is_success:
            raise ProfileFetchError(f"Pod returned {response.status_code} for {document_url}")

        graph = parse_profile_document(
            response.text,
            content_type=response.headers.get("content-type"),
            document_url=document_url,
        )
        return extract_profile(graph, web_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def request_url(self, document_url: str) -> str:
        """Route allow-listed pod hosts through the proxy when one is configured."""

        if self.proxy_base_url and urlsplit(document_url).netloc in self.proxy_hosts:
            return f"{self.proxy_base_url}/proxy?url={quote(document_url, safe='')}"
        return document_url

    async def is_available(self, url: str) -> bool:
        """Check whether a pod server answers at all."""

        try:
            response = await self._client.head(self.request_url(url), timeout=self.timeout)
        except httpx.HTTPError as exc:
            logger.debug("Pod server %s unavailable: %s", url, exc)
            return False
        return response.is_success
