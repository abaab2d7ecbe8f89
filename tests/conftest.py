"""Shared test fixtures for todolist-service."""

import pytest

from todolist_service.access import AccessDecisionEngine
from todolist_service.api import create_app
from todolist_service.config import Settings
from todolist_service.identity import CallerIdentity, issue_token
from todolist_service.policy import PolicyRegistry
from todolist_service.todos import Todo, TodoStore

SECRET = "test-secret-with-at-least-thirty-two-bytes"


def identity(name="", oid=None, scopes=(), roles=()):
    return CallerIdentity(
        name=name,
        object_id=oid,
        scopes=frozenset(scopes),
        roles=frozenset(roles),
    )


@pytest.fixture
def store():
    return TodoStore([
        Todo(id=1, owner="alice", title="A"),
        Todo(id=2, owner="alice", title="A2"),
        Todo(id=3, owner="bob", title="B"),
    ])


@pytest.fixture
def policy_registry():
    return PolicyRegistry()


@pytest.fixture
def engine(store, policy_registry):
    return AccessDecisionEngine(store=store, policies=policy_registry)


@pytest.fixture
def strict_engine(store, policy_registry):
    return AccessDecisionEngine(store=store, policies=policy_registry, strict_ownership=True)


@pytest.fixture
def alice():
    return identity("Alice", "alice", scopes=["ToDo.Read", "ToDo.Write"])


@pytest.fixture
def bob():
    return identity("Bob", "bob", scopes=["ToDo.Read", "ToDo.Write"])


@pytest.fixture
def reader_app():
    return identity("sync-daemon", "daemon-oid", roles=["Todo.Read.All"])


@pytest.fixture
def settings():
    return Settings(jwt_secret=SECRET, seed_sample_data=False)


@pytest.fixture
def app(settings, store):
    app = create_app(settings=settings, store=store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def auth_header():
    def make(name="", oid=None, scopes=(), roles=(), **extra):
        token = issue_token(SECRET, name=name, oid=oid, scopes=list(scopes), roles=list(roles), **extra)
        return {"Authorization": f"Bearer {token}"}
    return make


@pytest.fixture
def make_identity():
    return identity


@pytest.fixture
def secret():
    return SECRET
