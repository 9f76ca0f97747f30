import pytest
from fastapi.testclient import TestClient #in-process http client, no server needed

from confsched.core.config import Settings
from confsched.main import app
from confsched.schemas.catalogue import Minisymposium, RoomSpec
from confsched.services.catalogue import RoomCatalogue, SessionCatalogue


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def settings():
    return Settings(worker_count=2, random_seed=1234)


@pytest.fixture()
def sessions():
    return SessionCatalogue(
        [
            Minisymposium(title="Sparse Solvers", theme="Linear Algebra", priority=3, series="Sparse", part=1),
            Minisymposium(title="Sparse Solvers", theme="Linear Algebra", priority=3, series="Sparse", part=2),
            Minisymposium(title="Mesh Adaptivity", theme="PDE", priority=2, participants=["Ada"]),
            Minisymposium(title="Uncertainty", theme="Statistics", priority=1, participants=["Ada"]),
            Minisymposium(title="Graph Partitioning", theme="Combinatorics", priority=0),
            Minisymposium(title="Krylov Methods", theme="Linear Algebra", priority=1),
        ]
    )


@pytest.fixture()
def rooms():
    return RoomCatalogue(
        [
            RoomSpec(name="Main", priority=3),
            RoomSpec(name="West", priority=2),
            RoomSpec(name="East", priority=1),
        ]
    )
