"""In-memory audit trail for profile disclosure decisions."""

from __future__ import annotations

import hashlib
import logging
import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Deque, List, Optional

from pydantic import BaseModel, Field

from wayfinder.core.config import settings
from wayfinder.models.access import AccessTier

logger = logging.getLogger("wayfinder.audit")


class AccessAuditEntry(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str
    viewer: Optional[str] = None
    subject_id: str
    tier: AccessTier
    fields_revealed: List[str] = Field(default_factory=list)
    fields_denied: List[str] = Field(default_factory=list)
    request_id: Optional[str] = None
    integrity_hash: str = ""


def _integrity_hash(entry: AccessAuditEntry) -> str:
    parts = [
        entry.timestamp,
        entry.viewer or "",
        entry.subject_id,
        entry.tier.slug,
        ",".join(entry.fields_revealed),
        ",".join(entry.fields_denied),
    ]
    return hashlib.sha256("|".join(parts).encode("utf-8")).hexdigest()


class AccessAuditTrail:
    """Bounded, append-only record of which fields were revealed to whom.

    Only field names are kept, never values.
    """

    def __init__(self, max_entries: Optional[int] = None) -> None:
        self._entries: Deque[AccessAuditEntry] = deque(maxlen=max_entries or settings.AUDIT_LOG_MAX_ENTRIES)

    def record(
        self,
        *,
        viewer: Optional[str],
        subject_id: str,
        tier: AccessTier,
        fields_revealed: List[str],
        fields_denied: List[str],
        request_id: Optional[str] = None,
    ) -> AccessAuditEntry:
        entry = AccessAuditEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            viewer=viewer,
            subject_id=subject_id,
            tier=tier,
            fields_revealed=sorted(fields_revealed),
            fields_denied=sorted(fields_denied),
            request_id=request_id,
        )
        entry.integrity_hash = _integrity_hash(entry)
        self._entries.append(entry)
        logger.info(
            "access.decision",
            extra={
                "viewer": viewer,
                "subject": subject_id,
                "tier": tier.slug,
                "revealed": len(entry.fields_revealed),
                "denied": len(entry.fields_denied),
            },
        )
        return entry

    def recent(self, limit: int = 50) -> List[AccessAuditEntry]:
        entries = list(self._entries)
        return list(reversed(entries[-limit:])) if limit > 0 else []

    def verify(self, entry: AccessAuditEntry) -> bool:
        return entry.integrity_hash == _integrity_hash(entry)

    def __len__(self) -> int:
        return len(self._entries)


audit_trail = AccessAuditTrail()
