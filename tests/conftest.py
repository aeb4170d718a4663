"""
Shared fixtures: fresh SQLite stores per test and in-process HTTP wiring.

Apps are exercised through TestClient without entering its context manager,
so the lifespan (which targets the DB_PATH files) never runs; each test binds
the apps to its own files under tmp_path instead.
"""
import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from food_delivery import config
from food_delivery.gateway import proxy
from food_delivery.gateway.main import app as gateway_app
from food_delivery.orders import database as orders_database
from food_delivery.orders.clients import users_client
from food_delivery.orders.main import app as orders_app
from food_delivery.users import database as users_database
from food_delivery.users.main import app as users_app


def make_store(path, database_module):
    engine = create_engine(f"sqlite:///{path}", connect_args={"check_same_thread": False})
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    database_module.init_db(bind=engine, session_factory=factory)
    return engine, factory


def session_dependency(factory):
    def get_db():
        db = factory()
        try:
            yield db
        finally:
            db.close()
    return get_db


class StubUserService:
    """MockTransport handler standing in for the Users service; records every hit."""

    def __init__(self):
        self.hits = []
        self.failure = None
        self.users = {
            1: {"id": 1, "name": "John Doe", "email": "john@example.com",
                "phone": "081234567890", "address": "Jl. Sudirman No. 1, Jakarta"},
            2: {"id": 2, "name": "Jane Smith", "email": "jane@example.com",
                "phone": "081234567891", "address": "Jl. Thamrin No. 2, Jakarta"},
        }

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.hits.append(request.url.path)
        if self.failure is not None:
            return self.failure(request)
        user_id = int(request.url.path.rsplit("/", 1)[-1])
        if user_id in self.users:
            return httpx.Response(200, json={"success": True, "data": self.users[user_id]})
        return httpx.Response(404, json={"success": False, "message": "User tidak ditemukan"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


class ServiceRouter(httpx.AsyncBaseTransport):
    """Routes outbound calls to in-process apps by the port of the target URL."""

    def __init__(self, routes):
        self.routes = routes

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self.routes[request.url.port].handle_async_request(request)


def port_of(url: str) -> int:
    return httpx.URL(url).port


@pytest.fixture
def users_store(tmp_path):
    engine, factory = make_store(tmp_path / "database" / "users.db", users_database)
    users_app.dependency_overrides[users_database.get_db] = session_dependency(factory)
    yield factory
    users_app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def orders_store(tmp_path):
    engine, factory = make_store(tmp_path / "database" / "orders.db", orders_database)
    orders_app.dependency_overrides[orders_database.get_db] = session_dependency(factory)
    yield factory
    orders_app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def users_api(users_store):
    return TestClient(users_app)


@pytest.fixture
def user_stub():
    return StubUserService()


@pytest.fixture
def orders_api(orders_store, user_stub):
    orders_app.dependency_overrides[users_client.get_transport] = lambda: user_stub.transport
    return TestClient(orders_app)


@pytest.fixture
def wired_services(users_store, orders_store):
    """Orders service calling the in-process users service over ASGI."""
    orders_app.dependency_overrides[users_client.get_transport] = lambda: httpx.ASGITransport(app=users_app)
    yield


@pytest.fixture
def gateway_api(wired_services):
    router = ServiceRouter({
        port_of(config.USER_SERVICE_URL): httpx.ASGITransport(app=users_app),
        port_of(config.ORDER_SERVICE_URL): httpx.ASGITransport(app=orders_app),
    })
    gateway_app.dependency_overrides[proxy.get_transport] = lambda: router
    yield TestClient(gateway_app)
    gateway_app.dependency_overrides.clear()
