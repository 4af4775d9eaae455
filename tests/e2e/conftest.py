"""E2E test fixtures for API layer testing."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from archsim.infrastructure.api.main import create_app
from archsim.infrastructure.config import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings per test so environment overrides take effect."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def app(fresh_settings) -> FastAPI:
    """Build a fresh app so rate limiter buckets never leak between tests."""
    return create_app()


@pytest_asyncio.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP client for testing the API."""
    transport = ASGITransport(app=app)

    async with AsyncClient(
        transport=transport,
        base_url="http://testserver",
    ) as client:
        yield client


@pytest.fixture
def traffic_profile() -> dict:
    return {
        "baseline_rps": 2800,
        "peak_multiplier": 3,
        "read_percentage": 80,
        "write_percentage": 20,
        "payload_kb": 12,
        "region_distribution": {"us_east": 50, "us_west": 20, "europe": 20, "apac": 10},
        "burstiness": "spiky",
    }


@pytest.fixture
def chain_payload(traffic_profile: dict) -> dict:
    """Gateway -> database chain that saturates on the database."""
    return {
        "components": [
            {
                "id": "gateway",
                "type": "api-gateway",
                "label": "Gateway",
                "position": {"x": 20, "y": 20},
                "capacity": {"ops_per_second": 900, "cpu_cores": 2, "memory_gb": 4},
                "scaling": {"replicas": 1, "vertical_tier": "small"},
                "behavior": {"stateful": False},
            },
            {
                "id": "database",
                "type": "database",
                "label": "Primary DB",
                "position": {"x": 3000, "y": 80},
                "capacity": {"ops_per_second": 500, "cpu_cores": 2, "memory_gb": 4},
                "scaling": {"replicas": 1, "vertical_tier": "small"},
                "behavior": {"stateful": True},
            },
        ],
        "edges": [{"id": "edge-1", "source_id": "gateway", "target_id": "database"}],
        "traffic_profile": traffic_profile,
    }
