import pytest

from tests.support import FakeClock
from wayfinder.catalogue.people import fallback_store


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def river_stone():
    return fallback_store.get("river-stone")
