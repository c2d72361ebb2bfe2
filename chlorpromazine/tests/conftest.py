from __future__ import annotations

import pytest

from chlorpromazine.core.config import ServerSettings
from chlorpromazine.core.exceptions import ServiceDisabledError
from chlorpromazine.mcp.catalog import ToolServices
from chlorpromazine.mcp.dispatcher import build_dispatcher
from chlorpromazine.mcp.rate_limiter import RateLimiter


class FakeSearch:
    def __init__(self, result: str = "Result - snippet (https://example.com)", *, configured: bool = True):
        self.result = result
        self.configured = configured
        self.queries: list[str] = []
        self.error: Exception | None = None

    def is_configured(self) -> bool:
        return self.configured

    async def search(self, query: str) -> str:
        if not self.configured:
            raise ServiceDisabledError("Search disabled (SERPAPI_KEY missing)")
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.result


class FakeFiles:
    def __init__(self, content: str = "--- README.md ---\n# Project"):
        self.content = content
        self.calls = 0
        self.error: Exception | None = None

    async def read_project_files(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.content


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _make_settings(**overrides) -> ServerSettings:
    values = {"app_env": "development", "log_file": None, "api_key": None, "serpapi_key": None}
    values.update(overrides)
    return ServerSettings(_env_file=None, **values)


@pytest.fixture
def settings_factory():
    return _make_settings


@pytest.fixture
def settings() -> ServerSettings:
    return _make_settings()


@pytest.fixture
def fake_search() -> FakeSearch:
    return FakeSearch()


@pytest.fixture
def fake_files() -> FakeFiles:
    return FakeFiles()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_dispatcher(fake_search, fake_files, clock):
    def factory(*, max_calls: int = 5, window: float = 60.0, **setting_overrides):
        return build_dispatcher(
            _make_settings(**setting_overrides),
            services=ToolServices(search=fake_search, files=fake_files),
            rate_limiter=RateLimiter(max_calls, window, clock=clock),
        )

    return factory
