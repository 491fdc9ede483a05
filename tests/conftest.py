import asyncio

import httpx
import pytest

from reservation_client.configuration import get_configuration


@pytest.fixture(autouse=True)
def fresh_configuration(monkeypatch):
    """Each test reads the environment afresh."""
    monkeypatch.delenv("API_BASE_URL", raising=False)
    get_configuration.cache_clear()
    yield
    get_configuration.cache_clear()


class Backend:
    """Scripted backend that records the requests it receives."""

    def __init__(self):
        self.requests = []
        self._reply = (200, {"json": {"data": []}})

    def reply(self, status_code=200, **kwargs):
        self._reply = (status_code, kwargs)

    def handler(self, request):
        self.requests.append(request)
        status_code, kwargs = self._reply
        return httpx.Response(status_code, **kwargs)

    @property
    def last(self):
        return self.requests[-1]

    def call(self, operation, *args, **kwargs):
        async def run():
            async with httpx.AsyncClient(transport=httpx.MockTransport(self.handler)) as client:
                return await operation(*args, client=client, **kwargs)

        return asyncio.run(run())


@pytest.fixture
def backend():
    return Backend()
