"""Pod diagnostics endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from wayfinder.api.dependencies import ProfileServices, get_services
from wayfinder.catalogue.people import web_id_for
from wayfinder.core.config import settings
from wayfinder.models.person import RemoteProfileFragment

router = APIRouter(prefix="/pods", tags=["pods"])


class PodTestResponse(BaseModel):
    success: bool
    web_id: str
    outcome: str
    attempts: int
    profile: Optional[RemoteProfileFragment] = None
    message: str


class PodAvailabilityResponse(BaseModel):
    url: str
    available: bool


@router.get("/test", response_model=PodTestResponse)
async def test_pod(
    web_id: Optional[str] = Query(None, alias="webId"),
    services: ProfileServices = Depends(get_services),
) -> PodTestResponse:
    """Fetch a WebID straight from its pod, bypassing cache and fallback."""

    web_id = web_id or web_id_for("flint-rivers")
    outcome = await services.client.fetch(web_id)
    return PodTestResponse(
        success=outcome.ok,
        web_id=web_id,
        outcome=outcome.kind.value,
        attempts=outcome.attempts,
        profile=outcome.fragment,
        message="Profile fetched successfully" if outcome.ok else (outcome.detail or "No profile data returned"),
    )


@router.get("/status", response_model=PodAvailabilityResponse)
async def pod_status(
    url: Optional[str] = Query(None),
    services: ProfileServices = Depends(get_services),
) -> PodAvailabilityResponse:
    target = url or settings.DEMO_POD_SERVER
    return PodAvailabilityResponse(url=target, available=await services.client.is_available(target))
