"""Pod proxy endpoint for network-isolated deployments."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Header, Query
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from wayfinder.api.dependencies import ProfileServices, get_services

router = APIRouter(tags=["proxy"])


@router.api_route("/proxy", methods=["GET", "HEAD"])
async def proxy_pod_request(
    url: Optional[str] = Query(None),
    accept: Optional[str] = Header(None),
    services: ProfileServices = Depends(get_services),
) -> StreamingResponse:
    """Relay a pod document from an allow-listed local pod host."""

    upstream = await services.proxy.open(url, accept=accept)
    return StreamingResponse(
        upstream.aiter_bytes(),
        status_code=upstream.status_code,
        media_type=upstream.headers.get("content-type", "text/turtle"),
        headers={"Access-Control-Allow-Origin": "*"},
        background=BackgroundTask(upstream.aclose),
    )
