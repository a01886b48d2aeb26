import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from coffee_agent.agent import get_agent
from coffee_agent.app import app
from coffee_tools.seed import seed


@pytest.fixture
def engine():
    # One shared in-memory connection, usable from the broker's worker threads.
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    seed(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def override_agent_factory():
    def _override(factory):
        app.state.agent_factory = factory

    yield _override
    app.state.agent_factory = get_agent


@pytest.fixture
def override_agent(override_agent_factory):
    def _override(agent):
        override_agent_factory(lambda: agent)

    return _override


@pytest.fixture
def file_engine(tmp_path):
    # Pooled connections, one per worker thread, for concurrent runs.
    engine = create_engine(
        f"sqlite:///{tmp_path / 'coffee.db'}",
        connect_args={"check_same_thread": False},
    )
    seed(engine)
    yield engine
    engine.dispose()
