"""Server-side forwarding to pod hosts the caller cannot reach directly.

Only hosts on the allow-list are forwarded. Anything else is rejected before
a connection is attempted, so the proxy cannot be used to reach arbitrary
hosts from inside the deployment network.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional
from urllib.parse import urlsplit

import httpx

from wayfinder.core.config import settings
from wayfinder.core.exceptions import (
    ApplicationError,
    InvalidProxyTargetError,
    ProxyTargetDeniedError,
    UpstreamUnavailableError,
)
from wayfinder.utils.monitoring import observe_proxy_request

logger = logging.getLogger(__name__)


class PodProxy:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        allowed_hosts: Optional[Iterable[str]] = None,
        accept: Optional[str] = None,
    ) -> None:
        self._client = http_client
        self.allowed_hosts = set(settings.POD_PROXY_ALLOWED_HOSTS if allowed_hosts is None else allowed_hosts)
        self.default_accept = accept or settings.POD_ACCEPT_HEADER

    def check_target(self, url: Optional[str]) -> str:
        """Validate a proxy target and return its host, raising for anything not allowed."""

        if not url:
            observe_proxy_request("invalid")
            raise InvalidProxyTargetError("Missing url parameter")

        try:
            parts = urlsplit(url)
            host = parts.netloc
        except ValueError as exc:
            observe_proxy_request("invalid")
            raise InvalidProxyTargetError("Invalid URL") from exc

        if parts.scheme not in ("http", "https") or not host:
            observe_proxy_request("invalid")
            raise InvalidProxyTargetError("Invalid URL")

        if host not in self.allowed_hosts:
            observe_proxy_request("denied")
            logger.warning("Rejected pod proxy request for disallowed host %s", host)
            raise ProxyTargetDeniedError(host)
        return host

    async def open(self, url: Optional[str], *, accept: Optional[str] = None) -> httpx.Response:
        """Start a streamed GET to an allowed pod URL.

        The caller owns the returned response and must close it once the body
        has been relayed.
        """

        self.check_target(url)
        request = self._client.build_request("GET", url, headers={"Accept": accept or self.default_accept})
        try:
            response = await self._client.send(request, stream=True)
        except httpx.TransportError as exc:
            observe_proxy_request("unavailable")
            raise UpstreamUnavailableError(f"Failed to connect to Pod server: {exc}") from exc

        if not response.is_success:
            await response.aclose()
            observe_proxy_request("upstream_error")
            # Redirects are not followed, and relaying one would send the client to an unchecked host.
            status_code = response.status_code if response.status_code >= 400 else 502
            raise ApplicationError(
                f"Pod returned {response.status_code}",
                status_code=status_code,
                code="upstream_status",
            )

        observe_proxy_request("forwarded")
        return response
