"""Person profile endpoints with graduated disclosure."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel

from wayfinder.access.policy import compute_visible_fields, evaluate_access
from wayfinder.api.dependencies import ProfileServices, Viewer, get_services, get_viewer
from wayfinder.core.exceptions import NotFoundError
from wayfinder.models.access import AccessEvaluation, AccessTier
from wayfinder.models.person import PersonExtended
from wayfinder.solid.status import PodStatus, describe

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/people", tags=["people"])


class ProfileResponse(BaseModel):
    web_id: str
    resolution: Literal["live", "fallback"]
    profile: Dict[str, Any]
    access: AccessEvaluation
    pod: PodStatus


@router.get("", response_model=List[Dict[str, Any]])
async def list_people(services: ProfileServices = Depends(get_services)) -> List[Dict[str, Any]]:
    """Public listing of catalogue people, without contacting any pod."""

    return [compute_visible_fields(AccessTier.PUBLIC, person).to_dict() for person in services.store.all()]


@router.get("/by-webid", response_model=ProfileResponse)
async def get_person_by_web_id(
    request: Request,
    web_id: str = Query(..., alias="webId"),
    services: ProfileServices = Depends(get_services),
    viewer: Viewer = Depends(get_viewer),
) -> ProfileResponse:
    subject = services.store.get_by_web_id(web_id)
    if subject is None:
        raise NotFoundError(f"No person with WebID '{web_id}'")
    return await _serve_profile(services, subject, viewer, getattr(request.state, "request_id", None))


@router.get("/{person_id}", response_model=ProfileResponse)
async def get_person(
    person_id: str,
    request: Request,
    services: ProfileServices = Depends(get_services),
    viewer: Viewer = Depends(get_viewer),
) -> ProfileResponse:
    """Resolve a profile from its pod and redact it for the requesting viewer."""

    subject = services.store.get(person_id)
    if subject is None:
        raise NotFoundError(f"Person '{person_id}' not found")
    return await _serve_profile(services, subject, viewer, getattr(request.state, "request_id", None))


async def _serve_profile(
    services: ProfileServices,
    subject: PersonExtended,
    viewer: Viewer,
    request_id: Optional[str],
) -> ProfileResponse:
    result = await services.resolver.resolve(subject.web_id, subject)

    if viewer.web_id and not viewer.id:
        relationship = services.relationships.relationship_for_web_id(viewer.web_id, subject.id)
    else:
        relationship = services.relationships.relationship(viewer.id, subject.id)

    redacted = compute_visible_fields(relationship.tier, result.data)
    evaluation = evaluate_access(relationship.tier, relationship.reason, result.data)
    services.audit.record(
        viewer=viewer.label,
        subject_id=subject.id,
        tier=relationship.tier,
        fields_revealed=list(redacted),
        fields_denied=evaluation.hidden_fields,
        request_id=request_id,
    )

    return ProfileResponse(
        web_id=subject.web_id,
        resolution=result.status,
        profile=redacted.to_dict(),
        access=evaluation,
        pod=describe(result, subject.web_id),
    )
