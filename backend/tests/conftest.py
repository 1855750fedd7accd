import json

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from parkwatch.db.base import Base
from parkwatch.models.key_value import KeyValue  # noqa: F401
from parkwatch.services.parking import ParkingClient, ParkingConfig
from parkwatch.services.store import KeyValueStore

SAMPLE_LOTS = [
    {"name": "Dizengoff Center", "address": "Dizengoff 50", "freeParkingNumber": 42, "id": 1, "lat": 32.07},
    {"name": "Habima", "address": "Tarsat 2", "freeParkingNumber": 0, "id": 2, "lat": 32.07},
    {"name": "Reading", "address": "Levanon 1", "freeParkingNumber": 17, "id": 3, "lat": 32.1},
]


def rsc_line(lots, prefix="5:"):
    return prefix + json.dumps(["$", "$L1c", None, {"parkingLots": lots, "locale": "he"}])


def rsc_body(*lines):
    head = ['0:["$","$L1",null,{"children":"page"}]', '2:I["123",["static/chunk.js"],"default"]']
    return "\n".join(head + list(lines) + ['6:["$","div",null,{}]'])


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'parkwatch_test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def store(session_factory):
    db = session_factory()
    yield KeyValueStore(db)
    db.close()


@pytest.fixture
def make_client():
    """ParkingClient whose GET is answered by handler(request) -> httpx.Response."""
    def _make(handler):
        config = ParkingConfig(url="https://parking.example/parking", timeout=1.0)
        return ParkingClient(config, transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def sample_body():
    return rsc_body(rsc_line(SAMPLE_LOTS))
