"""Disclosure tiers and access evaluation models."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, List

from pydantic import BaseModel, Field


class AccessTier(IntEnum):
    """Relationship between a viewer and a profile subject, coarsest first."""

    PUBLIC = 0
    GOVERNMENT = 1
    SAME_DEPARTMENT = 2
    SAME_TEAM = 3
    SELF = 4

    @property
    def slug(self) -> str:
        return self.name.lower().replace("_", "-")

    @property
    def label(self) -> str:
        return _TIER_LABELS[self]

    @property
    def colour(self) -> str:
        return _TIER_COLOURS[self]

    @classmethod
    def from_slug(cls, value: str) -> "AccessTier":
        try:
            return cls[value.strip().upper().replace("-", "_")]
        except KeyError as exc:
            raise ValueError(f"Unknown access tier '{value}'") from exc


_TIER_LABELS = {
    AccessTier.PUBLIC: "Public",
    AccessTier.GOVERNMENT: "Government Staff",
    AccessTier.SAME_DEPARTMENT: "Same Department",
    AccessTier.SAME_TEAM: "Same Team",
    AccessTier.SELF: "Profile Owner",
}

_TIER_COLOURS = {
    AccessTier.PUBLIC: "#505a5f",
    AccessTier.GOVERNMENT: "#00703c",
    AccessTier.SAME_DEPARTMENT: "#4c2c92",
    AccessTier.SAME_TEAM: "#d4351c",
    AccessTier.SELF: "#1d70b8",
}

# Fields without a declared tier are never shown below this one.
UNDECLARED_FIELD_TIER = AccessTier.SAME_TEAM


def tiered(tier: AccessTier, default: Any = None, **kwargs: Any) -> Any:
    """Declare a model field together with the minimum tier allowed to see it."""

    extra = {"min_tier": tier.slug}
    if "default_factory" in kwargs:
        return Field(json_schema_extra=extra, **kwargs)
    return Field(default, json_schema_extra=extra, **kwargs)


class AccessEvaluation(BaseModel):
    tier: AccessTier
    level: str
    label: str
    colour: str
    visible_fields: List[str] = Field(default_factory=list)
    hidden_fields: List[str] = Field(default_factory=list)
    reason: str
