"""Viewer-to-subject relationships derived from catalogue membership."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional
from urllib.parse import urlsplit

from wayfinder.catalogue.people import FallbackStore
from wayfinder.core.config import settings
from wayfinder.models.access import AccessTier
from wayfinder.models.person import PersonCore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Relationship:
    tier: AccessTier
    reason: str


class RelationshipGraph:
    """Answers how closely a viewer is related to a profile subject.

    Every person in the catalogue is government staff. Viewers outside the
    catalogue are government only when their WebID is hosted on a government
    domain. An unknown subject never grants more than public access.
    """

    def __init__(self, store: FallbackStore, *, government_suffixes: Optional[Iterable[str]] = None) -> None:
        self._store = store
        suffixes = settings.GOVERNMENT_DOMAIN_SUFFIXES if government_suffixes is None else government_suffixes
        self._government_suffixes: List[str] = [suffix.lower() for suffix in suffixes]

    def tier_for(self, viewer_id: Optional[str], subject_id: str) -> AccessTier:
        return self.relationship(viewer_id, subject_id).tier

    def relationship(self, viewer_id: Optional[str], subject_id: str) -> Relationship:
        subject = self._store.get(subject_id)
        if subject is None:
            return Relationship(AccessTier.PUBLIC, f"Unknown profile '{subject_id}'")
        if not viewer_id:
            return Relationship(AccessTier.PUBLIC, "No identity verified")

        viewer = self._store.get(viewer_id)
        if viewer is None:
            logger.debug("Viewer %s not found in catalogue; treating as public", viewer_id)
            return Relationship(AccessTier.PUBLIC, "Viewer not recognised")
        return self._compare(viewer, subject)

    def relationship_for_web_id(self, viewer_web_id: Optional[str], subject_id: str) -> Relationship:
        """Resolve a viewer known only by WebID."""

        if not viewer_web_id:
            return self.relationship(None, subject_id)

        viewer = self._store.get_by_web_id(viewer_web_id)
        if viewer is not None:
            return self.relationship(viewer.id, subject_id)

        if self._store.get(subject_id) is None:
            return Relationship(AccessTier.PUBLIC, f"Unknown profile '{subject_id}'")
        if self.is_government_web_id(viewer_web_id):
            return Relationship(AccessTier.GOVERNMENT, "Government domain verified")
        return Relationship(AccessTier.PUBLIC, "WebID is not on a government domain")

    def is_government_web_id(self, web_id: str) -> bool:
        host = (urlsplit(web_id).hostname or "").lower()
        if not host:
            return False
        return any(host.endswith(suffix) or host == suffix.lstrip(".") for suffix in self._government_suffixes)

    def _compare(self, viewer: PersonCore, subject: PersonCore) -> Relationship:
        if viewer.id == subject.id:
            return Relationship(AccessTier.SELF, "Viewing own profile")
        if viewer.team_id == subject.team_id:
            return Relationship(AccessTier.SAME_TEAM, f"Same team ({viewer.team_id})")
        if viewer.department_id == subject.department_id:
            return Relationship(AccessTier.SAME_DEPARTMENT, f"Same department ({viewer.department_id})")
        return Relationship(AccessTier.GOVERNMENT, "Government staff")
