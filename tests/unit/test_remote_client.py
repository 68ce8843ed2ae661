from urllib.parse import unquote

import httpx
import pytest

from tests.support import turtle_profile
from wayfinder.solid.client import FetchKind, RemoteProfileClient

WEB_ID = "http://localhost:3002/river-stone/profile/card#me"
DOCUMENT_URL = "http://localhost:3002/river-stone/profile/card"


class RecordingSleep:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


class ScriptedPod:
    """Mock transport handler replaying one step per request."""

    def __init__(self, *steps):
        self.steps = list(steps)
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        step = self.steps.pop(0) if len(self.steps) > 1 else self.steps[0]
        if isinstance(step, Exception):
            raise step
        return step


def turtle_response(status_code=200, **fields):
    return httpx.Response(status_code, text=turtle_profile(**fields), headers={"content-type": "text/turtle"})


def make_client(handler, **kwargs):
    sleep = RecordingSleep()
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    kwargs.setdefault("proxy_base_url", "")
    client = RemoteProfileClient(http_client, retries=1, backoff=1.0, sleep=sleep, **kwargs)
    return client, sleep


@pytest.mark.asyncio
async def test_fetch_success_returns_fragment():
    pod = ScriptedPod(turtle_response(name="River Stone", email="river@dcs.gov.uk"))
    client, sleep = make_client(pod)

    outcome = await client.fetch(WEB_ID)

    assert outcome.kind is FetchKind.SUCCESS
    assert outcome.attempts == 1
    assert outcome.fragment.email == "river@dcs.gov.uk"
    assert str(pod.requests[0].url) == DOCUMENT_URL
    assert "text/turtle" in pod.requests[0].headers["accept"]
    assert sleep.calls == []


@pytest.mark.asyncio
async def test_unreachable_pod_is_tried_twice_then_reported_offline():
    pod = ScriptedPod(httpx.ConnectError("connection refused"))
    client, sleep = make_client(pod)

    assert await client.fetch_profile(WEB_ID) is None
    assert len(pod.requests) == 2

    outcome = await client.fetch(WEB_ID)
    assert outcome.kind is FetchKind.OFFLINE
    assert outcome.attempts == 2
    assert sleep.calls == [1.0, 1.0]


@pytest.mark.asyncio
async def test_timeouts_count_as_offline():
    pod = ScriptedPod(httpx.ReadTimeout("timed out"))
    client, _ = make_client(pod)

    outcome = await client.fetch(WEB_ID)

    assert outcome.kind is FetchKind.OFFLINE
    assert len(pod.requests) == 2


@pytest.mark.asyncio
async def test_first_failure_then_success():
    pod = ScriptedPod(httpx.ConnectError("refused"), turtle_response(name="River Stone"))
    client, sleep = make_client(pod)

    outcome = await client.fetch(WEB_ID)

    assert outcome.kind is FetchKind.SUCCESS
    assert outcome.attempts == 2
    assert outcome.fragment.name == "River Stone"
    assert sleep.calls == [1.0]


@pytest.mark.asyncio
async def test_error_status_is_reported_as_error():
    pod = ScriptedPod(httpx.Response(500, text="boom"))
    client, _ = make_client(pod)

    outcome = await client.fetch(WEB_ID)

    assert outcome.kind is FetchKind.ERROR
    assert outcome.attempts == 2
    assert "500" in outcome.detail


@pytest.mark.asyncio
async def test_unparseable_document_is_error():
    pod = ScriptedPod(httpx.Response(200, text="<#me> not turtle at all", headers={"content-type": "text/turtle"}))
    client, _ = make_client(pod)

    outcome = await client.fetch(WEB_ID)

    assert outcome.kind is FetchKind.ERROR
    assert outcome.fragment is None


@pytest.mark.asyncio
async def test_document_without_profile_is_empty_and_not_retried():
    body = "@prefix foaf: <http://xmlns.com/foaf/0.1/> .\n<#someone-else> foaf:name \"Other\" .\n"
    pod = ScriptedPod(httpx.Response(200, text=body, headers={"content-type": "text/turtle"}))
    client, sleep = make_client(pod)

    outcome = await client.fetch(WEB_ID)

    assert outcome.kind is FetchKind.EMPTY
    assert outcome.attempts == 1
    assert len(pod.requests) == 1
    assert sleep.calls == []


@pytest.mark.asyncio
async def test_non_http_web_id_is_rejected_without_network():
    pod = ScriptedPod(turtle_response(name="River Stone"))
    client, _ = make_client(pod)

    outcome = await client.fetch("urn:example:river-stone#me")

    assert outcome.kind is FetchKind.ERROR
    assert outcome.attempts == 0
    assert pod.requests == []


@pytest.mark.asyncio
async def test_allow_listed_hosts_go_through_proxy():
    pod = ScriptedPod(turtle_response(name="River Stone"))
    client, _ = make_client(pod, proxy_base_url="http://wayfinder.internal/", proxy_hosts=["localhost:3002"])

    outcome = await client.fetch(WEB_ID)

    assert outcome.ok
    request = pod.requests[0]
    assert request.url.host == "wayfinder.internal"
    assert request.url.path == "/proxy"
    assert unquote(request.url.params["url"]) == DOCUMENT_URL


def test_other_hosts_are_fetched_directly():
    client, _ = make_client(ScriptedPod(httpx.Response(200)), proxy_base_url="http://wayfinder.internal", proxy_hosts=["localhost:3002"])

    assert client.request_url("https://pods.dwp.gov.uk/jane/profile/card") == "https://pods.dwp.gov.uk/jane/profile/card"


@pytest.mark.asyncio
async def test_is_available_uses_head_requests():
    pod = ScriptedPod(httpx.Response(200))
    client, _ = make_client(pod)

    assert await client.is_available("http://localhost:3002/")
    assert pod.requests[0].method == "HEAD"


@pytest.mark.asyncio
async def test_is_available_false_when_unreachable():
    client, _ = make_client(ScriptedPod(httpx.ConnectError("refused")))

    assert await client.is_available("http://localhost:3002/") is False
