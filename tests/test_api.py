"""Tests for the FastAPI application and queue routes."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from waitroom.api.app import create_app
from waitroom.core.config import Config, SchedulerConfig, TokenConfig
from waitroom.core.errors import ConfigurationFatalError, StoreUnavailableError
from waitroom.queue import TokenGenerator
from waitroom.stores import MemoryOrderedStore


@pytest.fixture
def store() -> MemoryOrderedStore:
    return MemoryOrderedStore()


@pytest.fixture
async def client(store):
    """Provide an HTTP client bound to an app over an in-memory store."""
    app = create_app(Config(), store=store)

    async with app.router.lifespan_context(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client


class TestAppCreation:
    """Test application factory."""

    def test_create_app_with_defaults(self) -> None:
        """Test creating app with default configuration."""
        app = create_app()

        assert app.title == "Waitroom API"
        assert app.version == "0.1.0"
        assert isinstance(app.state.settings, Config)
        assert app.state.owns_store is True

    def test_injected_store_is_not_owned(self, store) -> None:
        """Test an injected store is used and left open on shutdown."""
        app = create_app(store=store)

        assert app.state.store is store
        assert app.state.owns_store is False

    async def test_mounts_api_at_v1(self, client) -> None:
        """Test queue routes answer under /api/v1 and the waiting room at the root."""
        health = await client.get("/api/v1/monitoring/health")
        room = await client.get("/waiting-room", params={"user_id": 1, "redirect_url": "http://site.test/"})
        unmounted = await client.get("/monitoring/health")

        assert health.status_code == 200
        assert room.status_code == 200
        assert unmounted.status_code == 404

    def test_unknown_token_algorithm_fails_at_boot(self) -> None:
        """Test a missing hash algorithm fails app creation."""
        config = Config(token=TokenConfig(algorithm="not-a-hash"))

        with pytest.raises(ConfigurationFatalError):
            create_app(config)

    async def test_lifespan_starts_enabled_scheduler(self, store) -> None:
        """Test the scheduler runs for the app's lifetime when enabled."""
        config = Config(scheduler=SchedulerConfig(enabled=True, initial_delay_seconds=60))
        app = create_app(config, store=store)

        async with app.router.lifespan_context(app):
            assert app.state.scheduler.running is True

        assert app.state.scheduler.running is False


class TestRegister:
    """Test POST /api/v1/queue."""

    async def test_register_returns_rank(self, client) -> None:
        """Test successive registrations get increasing ranks."""
        first = await client.post("/api/v1/queue", params={"user_id": 1})
        second = await client.post("/api/v1/queue", params={"user_id": 2})

        assert first.status_code == 200
        assert first.json() == {"rank": 1}
        assert second.json() == {"rank": 2}

    async def test_duplicate_registration_conflict(self, client) -> None:
        """Test a repeated registration answers 409 with the error code."""
        await client.post("/api/v1/queue", params={"user_id": 42})
        response = await client.post("/api/v1/queue", params={"user_id": 42})

        assert response.status_code == 409
        body = response.json()
        assert body["code"] == "UQ-0001"
        assert "Already registered" in body["reason"]

    async def test_named_queue(self, client, store) -> None:
        """Test the queue parameter selects the wait key."""
        await client.post("/api/v1/queue", params={"queue": "concert", "user_id": 1})

        assert await store.size("users:queue:concert:wait") == 1
        assert await store.size("users:queue:default:wait") == 0

    async def test_user_id_required(self, client) -> None:
        """Test a missing user_id is a validation error."""
        response = await client.post("/api/v1/queue")

        assert response.status_code == 422


class TestAllowAndRank:
    """Test admission and rank endpoints."""

    async def test_allow_admits_batch(self, client) -> None:
        """Test POST /queue/allow reports requested and admitted counts."""
        for user_id in range(3):
            await client.post("/api/v1/queue", params={"user_id": user_id})

        response = await client.post("/api/v1/queue/allow", params={"count": 2})

        assert response.status_code == 200
        assert response.json() == {"requested_count": 2, "allowed_count": 2}

    async def test_allow_rejects_zero_count(self, client) -> None:
        """Test count must be positive."""
        response = await client.post("/api/v1/queue/allow", params={"count": 0})

        assert response.status_code == 422

    async def test_rank_after_admission(self, client) -> None:
        """Test ranks shift and admitted users report -1."""
        for user_id in range(3):
            await client.post("/api/v1/queue", params={"user_id": user_id})
        await client.post("/api/v1/queue/allow", params={"count": 2})

        admitted = await client.get("/api/v1/queue/rank", params={"user_id": 0})
        waiting = await client.get("/api/v1/queue/rank", params={"user_id": 2})

        assert admitted.json() == {"rank": -1}
        assert waiting.json() == {"rank": 1}

    async def test_admitted_lookup(self, client) -> None:
        """Test GET /queue/admitted reflects the admitted set."""
        await client.post("/api/v1/queue", params={"user_id": 5})

        before = await client.get("/api/v1/queue/admitted", params={"user_id": 5})
        await client.post("/api/v1/queue/allow", params={"count": 1})
        after = await client.get("/api/v1/queue/admitted", params={"user_id": 5})

        assert before.json() == {"admitted": False}
        assert after.json() == {"admitted": True}

    async def test_status(self, client) -> None:
        """Test GET /queue/status counts waiting users."""
        await client.post("/api/v1/queue", params={"user_id": 1})

        response = await client.get("/api/v1/queue/status")

        assert response.json() == {"queue": "default", "waiting": 1}

    async def test_store_outage_is_503(self) -> None:
        """Test store failures answer 503 with the store error code."""
        store = MemoryOrderedStore()
        store.rank_of = AsyncMock(side_effect=StoreUnavailableError("connection refused"))
        app = create_app(store=store)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/api/v1/queue/rank", params={"user_id": 1})

        assert response.status_code == 503
        assert response.json()["code"] == "ST-0001"


class TestTokens:
    """Test token issue and verification endpoints."""

    async def test_touch_sets_cookie(self, client) -> None:
        """Test GET /queue/touch returns the token and sets it as a cookie."""
        response = await client.get("/api/v1/queue/touch", params={"user_id": 42})

        token = response.json()["token"]
        assert token == TokenGenerator().generate("default", 42)
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f"user-queue-default-token={token}")
        assert "Max-Age=300" in set_cookie
        assert "Path=/" in set_cookie

    async def test_allowed_with_issued_token(self, client) -> None:
        """Test the issued token verifies."""
        touch = await client.get("/api/v1/queue/touch", params={"user_id": 42})
        token = touch.json()["token"]

        response = await client.get("/api/v1/queue/allowed", params={"user_id": 42, "token": token})

        assert response.json() == {"allowed": True}

    async def test_allowed_with_wrong_token(self, client) -> None:
        """Test an arbitrary token is rejected."""
        response = await client.get("/api/v1/queue/allowed", params={"user_id": 42, "token": "wrong"})

        assert response.json() == {"allowed": False}

    async def test_allowed_without_token(self, client) -> None:
        """Test a missing token is rejected."""
        response = await client.get("/api/v1/queue/allowed", params={"user_id": 42})

        assert response.json() == {"allowed": False}


class TestWaitingRoom:
    """Test GET /waiting-room."""

    async def test_new_user_is_registered(self, client) -> None:
        """Test a user without a token is registered and told their rank."""
        response = await client.get(
            "/waiting-room", params={"user_id": 7, "redirect_url": "http://site.test/"}
        )

        assert response.status_code == 200
        assert response.json() == {"number": 1, "user_id": 7, "queue": "default"}

    async def test_returning_user_gets_rank(self, client) -> None:
        """Test a user already waiting falls back to a rank lookup."""
        await client.post("/api/v1/queue", params={"user_id": 1})
        params = {"user_id": 7, "redirect_url": "http://site.test/"}

        await client.get("/waiting-room", params=params)
        response = await client.get("/waiting-room", params=params)

        assert response.status_code == 200
        assert response.json()["number"] == 2

    async def test_valid_cookie_redirects(self, client) -> None:
        """Test a valid token cookie redirects to the protected site."""
        token = TokenGenerator().generate("default", 7)

        response = await client.get(
            "/waiting-room",
            params={"user_id": 7, "redirect_url": "http://site.test/?user_id=7"},
            headers={"Cookie": f"user-queue-default-token={token}"},
        )

        assert response.status_code == 307
        assert response.headers["location"] == "http://site.test/?user_id=7"

    async def test_cookie_for_other_user_does_not_redirect(self, client) -> None:
        """Test a token for someone else is ignored."""
        token = TokenGenerator().generate("default", 8)

        response = await client.get(
            "/waiting-room",
            params={"user_id": 7, "redirect_url": "http://site.test/"},
            headers={"Cookie": f"user-queue-default-token={token}"},
        )

        assert response.status_code == 200
        assert response.json()["number"] == 1


class TestMonitoring:
    """Test monitoring endpoints."""

    async def test_health(self, client) -> None:
        """Test health reports store and scheduler state."""
        response = await client.get("/api/v1/monitoring/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["store"] == "ok"
        assert data["version"] == "0.1.0"
        assert data["scheduler"] == {
            "enabled": False,
            "running": False,
            "batch_size": 100,
            "interval_seconds": 10.0,
        }

    async def test_health_degraded_when_store_down(self) -> None:
        """Test an unreachable store reports degraded health."""
        store = MemoryOrderedStore()
        store.ping = AsyncMock(side_effect=StoreUnavailableError("down"))
        app = create_app(store=store)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/api/v1/monitoring/health")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"
        assert response.json()["store"] == "unavailable"

    async def test_list_queues(self, client) -> None:
        """Test queues with waiting users are listed."""
        await client.post("/api/v1/queue", params={"queue": "b", "user_id": 1})
        await client.post("/api/v1/queue", params={"queue": "a", "user_id": 1})

        response = await client.get("/api/v1/monitoring/queues")

        assert response.json() == {"queues": ["a", "b"], "total": 2}
