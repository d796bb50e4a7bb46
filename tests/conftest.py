import pytest
from fastapi.testclient import TestClient

from contactbook.main import create_app
from contactbook.models.domain.contact_domain import Contact
from contactbook.repositories.contact_repository import ContactRepository
from contactbook.services.contact_store import ContactStore
from contactbook.services.latency_simulator import LatencySimulator

FIXED_NOW_MS = 1_700_000_000_000


class FakeRedis:
    def __init__(self):
        self.store: dict[str, str] = {}
        self.writes = 0

    async def set_with_ttl(self, key: str, value: str, ttl_s: int | None = None) -> bool:
        self.store[key] = value
        self.writes += 1
        return True

    async def get(self, key: str) -> str | None:
        return self.store.get(key)

    async def delete(self, key: str) -> bool:
        return self.store.pop(key, None) is not None

    async def ping(self) -> bool:
        return True


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def repository(fake_redis):
    return ContactRepository(fake_redis, clock=lambda: FIXED_NOW_MS)


@pytest.fixture
def contact_store(repository):
    ids = iter(f"new-{n}" for n in range(1, 1000))
    return ContactStore(
        repository,
        latency=LatencySimulator.disabled(),
        clock=lambda: FIXED_NOW_MS + 5_000,
        id_factory=lambda: next(ids),
    )


@pytest.fixture
def client(contact_store):
    app = create_app(contact_store=contact_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_contact():
    def _make(**fields) -> Contact:
        fields.setdefault("id", f"c-{fields.get('first', '')}-{fields.get('last', '')}".lower())
        return Contact(**fields)

    return _make
