"""Administrative endpoints for Wayfinder."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query

from wayfinder.access.audit import AccessAuditEntry
from wayfinder.api.dependencies import ProfileServices, get_services
from wayfinder.core.config import settings

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/health")
async def healthcheck() -> Dict[str, str]:
    """Liveness probe."""

    return {"status": "ok", "environment": settings.ENVIRONMENT}


@router.get("/config")
async def configuration_snapshot() -> Dict[str, Any]:
    """Return a limited configuration snapshot for admins."""

    return {
        "api_title": settings.API_TITLE,
        "environment": settings.ENVIRONMENT,
        "demo_pod_server": settings.DEMO_POD_SERVER,
        "pod_fetch_timeout_seconds": settings.POD_FETCH_TIMEOUT_SECONDS,
        "pod_fetch_retries": settings.POD_FETCH_RETRIES,
        "profile_cache_ttl_seconds": settings.PROFILE_CACHE_TTL_SECONDS,
        "pod_proxy_enabled": settings.POD_PROXY_ENABLED,
        "pod_proxy_allowed_hosts": settings.POD_PROXY_ALLOWED_HOSTS,
    }


@router.get("/audit", response_model=List[AccessAuditEntry])
async def recent_access_decisions(
    limit: int = Query(50, ge=1, le=500),
    services: ProfileServices = Depends(get_services),
) -> List[AccessAuditEntry]:
    """Most recent disclosure decisions, newest first."""

    return services.audit.recent(limit)
