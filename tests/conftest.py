"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Sample stage tables
- Sample parameter snapshots
- Stage repository doubles
- FastAPI test client
"""
import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from app.main import app
from app.domain.models import ParameterSnapshot, PhenologyStage
from app.infrastructure.stage_repository import StageRepository, StaticStageRepository
from app.infrastructure.stage_table_client import StageTableError


# ============================================================
# Sample Data Fixtures
# ============================================================

@pytest.fixture
def two_stage_table() -> list[PhenologyStage]:
    """Dormant at 0 and Green Tip at 100."""
    return [
        PhenologyStage(stage_code=0, stage_name="Dormant", heat_threshold=0),
        PhenologyStage(stage_code=7, stage_name="Green Tip", heat_threshold=100),
    ]


@pytest.fixture
def sample_stages() -> list[PhenologyStage]:
    """A sorted apple stage table with gaps between thresholds."""
    return [
        PhenologyStage(stage_code=0, stage_name="Dormancy", heat_threshold=0,
                       description="Buds closed"),
        PhenologyStage(stage_code=7, stage_name="Green tip", heat_threshold=100),
        PhenologyStage(stage_code=57, stage_name="Pink bud", heat_threshold=220),
        PhenologyStage(stage_code=65, stage_name="Full bloom", heat_threshold=300),
        PhenologyStage(stage_code=71, stage_name="Fruit set", heat_threshold=420),
    ]


@pytest.fixture
def calm_snapshot() -> ParameterSnapshot:
    """Readings that trigger no recommendation."""
    return ParameterSnapshot(
        accumulated_heat_units=150,
        air_temperature=18,
        leaf_wetness_hours=2,
        wind_speed_ms=3,
        pest_trap_count=0,
    )


@pytest.fixture
def alarming_snapshot() -> ParameterSnapshot:
    """Readings that trigger every recommendation."""
    return ParameterSnapshot(
        accumulated_heat_units=310,
        air_temperature=18,
        leaf_wetness_hours=12,
        wind_speed_ms=6,
        pest_trap_count=6,
    )


@pytest.fixture
def evaluation_payload() -> dict:
    """Request body using the simulator field names."""
    return {
        "gdd": 0,
        "temperature": 22,
        "leafWetness": 8,
        "windSpeed": 2,
        "codlingMothTraps": 0,
    }


# ============================================================
# Stage Repository Fixtures
# ============================================================

@pytest.fixture
def static_repository(two_stage_table) -> StaticStageRepository:
    """In-memory repository with the two-stage table."""
    return StaticStageRepository(two_stage_table)


@pytest.fixture
def failing_repository():
    """Repository whose source is unreachable."""
    mock_repository = AsyncMock(spec=StageRepository)
    mock_repository.get_stages.side_effect = StageTableError("connection refused")
    return mock_repository


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client() -> TestClient:
    """Create a synchronous test client for FastAPI."""
    return TestClient(app)
