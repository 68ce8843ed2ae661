"""Renderable pod status for a profile resolution."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel

from wayfinder.models.resolution import FallbackReason, FallbackResult, LiveResult, LoadingResult, ResolutionResult
from wayfinder.solid.client import document_url_for

_FALLBACK_COPY = {
    FallbackReason.OFFLINE: ("Pod offline - using demo data", "The personal data store could not be reached."),
    FallbackReason.ERROR: ("Pod error - showing cached data", "The personal data store returned an unusable profile."),
    FallbackReason.EMPTY: (
        "Pod returned no profile - using demo data",
        "The personal data store holds no profile fields for this WebID.",
    ),
}


class PodStatus(BaseModel):
    state: Literal["fetching", "live", "fallback"]
    label: str
    tone: Literal["yellow", "green", "grey", "red"]
    message: str
    reason: Optional[FallbackReason] = None
    document_url: Optional[str] = None


def describe(result: ResolutionResult, web_id: str) -> PodStatus:
    """Map a resolution state onto the three states a profile page must show distinctly."""

    if isinstance(result, LoadingResult):
        return PodStatus(
            state="fetching",
            label="Fetching from Pod...",
            tone="yellow",
            message="Requesting the profile from the owner's personal data store.",
        )

    if isinstance(result, LiveResult):
        return PodStatus(
            state="live",
            label="Live from Pod",
            tone="green",
            message=f"This profile was fetched directly from {result.data.name}'s personal data store.",
            document_url=document_url_for(web_id),
        )

    if isinstance(result, FallbackResult):
        label, message = _FALLBACK_COPY[result.reason]
        return PodStatus(
            state="fallback",
            label=label,
            tone="red" if result.reason is FallbackReason.ERROR else "grey",
            message=message,
            reason=result.reason,
        )

    raise TypeError(f"Unsupported resolution result: {type(result).__name__}")
