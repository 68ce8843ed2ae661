"""Graduated field-level disclosure for person profiles.

Every field on `PersonExtended` declares the coarsest tier allowed to see it.
A viewer sees a field when their tier is at or above that minimum. Fields the
model does not declare (extra attributes from newer data) are treated as
team-only, so an unclassified value can never leak to a wider audience.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional

from wayfinder.models.access import UNDECLARED_FIELD_TIER, AccessEvaluation, AccessTier
from wayfinder.models.person import PersonExtended


def min_tier_for(field_name: str) -> AccessTier:
    """Return the minimum tier for a field, failing closed for undeclared ones."""

    info = PersonExtended.model_fields.get(field_name)
    extra = info.json_schema_extra if info is not None else None
    if isinstance(extra, dict) and "min_tier" in extra:
        return AccessTier.from_slug(str(extra["min_tier"]))
    return UNDECLARED_FIELD_TIER


FIELD_TIERS: Dict[str, AccessTier] = {name: min_tier_for(name) for name in PersonExtended.model_fields}


def is_visible(field_name: str, viewer_tier: AccessTier) -> bool:
    return viewer_tier >= min_tier_for(field_name)


class RedactedProfile(Mapping[str, Any]):
    """Read-only view of a profile holding only the fields a viewer may see.

    Redacted fields are absent rather than ``None`` so templates cannot render
    them by accident.
    """

    def __init__(self, tier: AccessTier, fields: Dict[str, Any]) -> None:
        self.tier = tier
        self._fields = dict(fields)

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RedactedProfile):
            return self.tier == other.tier and self._fields == other._fields
        return NotImplemented

    def __repr__(self) -> str:
        return f"RedactedProfile(tier={self.tier.slug}, fields={sorted(self._fields)})"

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._fields)


def compute_visible_fields(viewer_tier: AccessTier, subject: PersonExtended) -> RedactedProfile:
    """Compose the redacted view of ``subject`` for a viewer at ``viewer_tier``."""

    values = subject.model_dump(mode="json")
    visible = {
        name: value
        for name, value in values.items()
        if value is not None and is_visible(name, viewer_tier)
    }
    return RedactedProfile(viewer_tier, visible)


def all_field_names(subject: Optional[PersonExtended] = None) -> List[str]:
    names = list(FIELD_TIERS)
    if subject is not None and subject.model_extra:
        names.extend(name for name in subject.model_extra if name not in FIELD_TIERS)
    return names


def visible_field_names(viewer_tier: AccessTier, subject: Optional[PersonExtended] = None) -> List[str]:
    return [name for name in all_field_names(subject) if is_visible(name, viewer_tier)]


def hidden_field_names(viewer_tier: AccessTier, subject: Optional[PersonExtended] = None) -> List[str]:
    return [name for name in all_field_names(subject) if not is_visible(name, viewer_tier)]


def evaluate_access(
    viewer_tier: AccessTier,
    reason: str,
    subject: Optional[PersonExtended] = None,
) -> AccessEvaluation:
    return AccessEvaluation(
        tier=viewer_tier,
        level=viewer_tier.slug,
        label=viewer_tier.label,
        colour=viewer_tier.colour,
        visible_fields=visible_field_names(viewer_tier, subject),
        hidden_fields=hidden_field_names(viewer_tier, subject),
        reason=reason,
    )
