import httpx
import pytest

from wayfinder.access.audit import AccessAuditTrail
from wayfinder.api.dependencies import build_services
from wayfinder.api.main import create_app
from wayfinder.solid.cache import ProfileCache

TURTLE = "@prefix foaf: <http://xmlns.com/foaf/0.1/> .\n<#me> foaf:name \"Flint Rivers\" .\n"


class StubPodServer:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


def api_client(pod):
    services = build_services(
        httpx.AsyncClient(transport=httpx.MockTransport(pod)),
        cache=ProfileCache(),
        audit=AccessAuditTrail(max_entries=50),
        retry_backoff=0,
    )
    app = create_app(services)
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")


@pytest.mark.asyncio
async def test_disallowed_host_is_rejected_without_upstream_call():
    pod = StubPodServer(httpx.Response(200, text=TURTLE))

    async with api_client(pod) as client:
        response = await client.get("/proxy", params={"url": "http://evil.example/x"})

    assert response.status_code == 403
    assert response.json()["code"] == "proxy_target_denied"
    assert pod.requests == []


@pytest.mark.asyncio
async def test_allowed_host_is_forwarded_with_upstream_content_type():
    pod = StubPodServer(
        httpx.Response(200, text=TURTLE, headers={"content-type": "text/turtle; charset=utf-8"})
    )

    async with api_client(pod) as client:
        response = await client.get(
            "/proxy",
            params={"url": "http://localhost:3002/flint-rivers/profile/card"},
            headers={"Accept": "text/turtle"},
        )

    assert response.status_code == 200
    assert response.headers["content-type"] == "text/turtle; charset=utf-8"
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.text == TURTLE
    assert len(pod.requests) == 1
    assert str(pod.requests[0].url) == "http://localhost:3002/flint-rivers/profile/card"
    assert pod.requests[0].headers["accept"] == "text/turtle"


@pytest.mark.asyncio
async def test_missing_url_is_bad_request():
    pod = StubPodServer(httpx.Response(200, text=TURTLE))

    async with api_client(pod) as client:
        response = await client.get("/proxy")

    assert response.status_code == 400
    assert pod.requests == []


@pytest.mark.asyncio
async def test_upstream_status_is_passed_through():
    pod = StubPodServer(httpx.Response(404, text="not found"))

    async with api_client(pod) as client:
        response = await client.get("/proxy", params={"url": "http://localhost:3002/nobody/profile/card"})

    assert response.status_code == 404
    assert response.json()["code"] == "upstream_status"


@pytest.mark.asyncio
async def test_unreachable_pod_is_bad_gateway():
    pod = StubPodServer(error=httpx.ConnectError("connection refused"))

    async with api_client(pod) as client:
        response = await client.get("/proxy", params={"url": "http://localhost:3002/flint-rivers/profile/card"})

    assert response.status_code == 502


@pytest.mark.asyncio
async def test_upstream_redirect_is_bad_gateway_not_relayed():
    pod = StubPodServer(httpx.Response(302, headers={"location": "http://evil.example/card"}))

    async with api_client(pod) as client:
        response = await client.get("/proxy", params={"url": "http://localhost:3002/flint-rivers/profile/card"})

    assert response.status_code == 502
    assert response.json()["code"] == "upstream_status"
    assert "location" not in response.headers
