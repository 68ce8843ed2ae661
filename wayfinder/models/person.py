"""Person data model definitions."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from wayfinder.models.access import AccessTier, tiered

PUBLIC = AccessTier.PUBLIC
GOVERNMENT = AccessTier.GOVERNMENT
SAME_DEPARTMENT = AccessTier.SAME_DEPARTMENT
SAME_TEAM = AccessTier.SAME_TEAM


class PersonCore(BaseModel):
    """Publicly-known facts held in the local catalogue."""

    model_config = ConfigDict(frozen=True)

    id: str = tiered(PUBLIC, ...)
    web_id: str = tiered(PUBLIC, ..., description="Profile document URL plus fragment")
    name: str = tiered(PUBLIC, ...)
    role: str = tiered(PUBLIC, ...)
    department_id: str = tiered(PUBLIC, ...)
    team_id: str = tiered(PUBLIC, ...)
    maintains: List[str] = tiered(PUBLIC, default_factory=list, description="Maintained service IDs")
    skills: List[str] = tiered(PUBLIC, default_factory=list)
    photo: Optional[str] = tiered(PUBLIC)


class PersonExtended(PersonCore):
    """Person record with graduated-disclosure fields.

    Extra attributes are accepted so that newer pod or catalogue fields flow
    through; they carry no declared tier and are treated as team-only.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    # Government staff
    email: Optional[str] = tiered(GOVERNMENT)
    chat_handle: Optional[str] = tiered(GOVERNMENT)
    office_hours: Optional[str] = tiered(GOVERNMENT)

    # Same department
    calendar: Optional[str] = tiered(SAME_DEPARTMENT)
    current_focus: Optional[str] = tiered(SAME_DEPARTMENT)
    availability: Optional[str] = tiered(SAME_DEPARTMENT)

    # Same team
    mobile: Optional[str] = tiered(SAME_TEAM)
    home_working_days: Optional[str] = tiered(SAME_TEAM)
    escalation_notes: Optional[str] = tiered(SAME_TEAM)


class RemoteProfileFragment(BaseModel):
    """Fields read from a pod profile document in a single fetch. Any may be absent."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    role: Optional[str] = None
    email: Optional[str] = None
    skills: Optional[List[str]] = None
    photo: Optional[str] = None

    def present_fields(self) -> List[str]:
        return [name for name, value in self if value not in (None, "", [])]

    def is_empty(self) -> bool:
        return not self.present_fields()
