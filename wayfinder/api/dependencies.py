from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx
from fastapi import Header, Request

from wayfinder.access.audit import AccessAuditTrail, audit_trail
from wayfinder.catalogue.people import FallbackStore, fallback_store
from wayfinder.catalogue.relationships import RelationshipGraph
from wayfinder.core.config import settings
from wayfinder.solid.cache import ProfileCache
from wayfinder.solid.client import RemoteProfileClient
from wayfinder.solid.proxy import PodProxy
from wayfinder.solid.resolver import ProfileResolver


@dataclass
class ProfileServices:
    """Collaborators shared by the profile routes for one application instance."""

    http_client: httpx.AsyncClient
    client: RemoteProfileClient
    resolver: ProfileResolver
    proxy: PodProxy
    store: FallbackStore
    relationships: RelationshipGraph
    audit: AccessAuditTrail

    async def aclose(self) -> None:
        await self.http_client.aclose()


def build_services(
    http_client: Optional[httpx.AsyncClient] = None,
    *,
    store: Optional[FallbackStore] = None,
    cache: Optional[ProfileCache] = None,
    audit: Optional[AccessAuditTrail] = None,
    retry_backoff: Optional[float] = None,
) -> ProfileServices:
    http_client = http_client or httpx.AsyncClient(timeout=settings.POD_FETCH_TIMEOUT_SECONDS)
    store = store if store is not None else fallback_store
    client = RemoteProfileClient(http_client, backoff=retry_backoff)
    return ProfileServices(
        http_client=http_client,
        client=client,
        resolver=ProfileResolver(client, cache),
        proxy=PodProxy(http_client),
        store=store,
        relationships=RelationshipGraph(store),
        audit=audit if audit is not None else audit_trail,
    )


@dataclass(frozen=True)
class Viewer:
    id: Optional[str] = None
    web_id: Optional[str] = None

    @property
    def label(self) -> Optional[str]:
        return self.id or self.web_id


async def get_services(request: Request) -> ProfileServices:
    return request.app.state.services


async def get_viewer(
    x_viewer_id: Optional[str] = Header(None),
    x_viewer_webid: Optional[str] = Header(None, alias="X-Viewer-WebId"),
) -> Viewer:
    return Viewer(id=x_viewer_id or None, web_id=x_viewer_webid or None)
