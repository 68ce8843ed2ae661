"""Custom exception hierarchy for Wayfinder."""

from __future__ import annotations

from fastapi import status


class ApplicationError(Exception):
    """Base application error with HTTP semantics."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "application_error"

    def __init__(self, message: str, *, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.message = message


class NotFoundError(ApplicationError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class InvalidProxyTargetError(ApplicationError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_proxy_target"


class ProxyTargetDeniedError(ApplicationError):
    """Raised when a proxy request names a host outside the pod allow-list."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "proxy_target_denied"

    def __init__(self, host: str) -> None:
        super().__init__(f"Proxy only allowed for local Pod server, not '{host}'")
        self.host = host


class UpstreamUnavailableError(ApplicationError):
    status_code = status.HTTP_502_BAD_GATEWAY
    code = "upstream_unavailable"
