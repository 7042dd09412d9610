"""
Unit tests for stage table sources.

Tests cover:
- Remote client responses and payload parsing
- Retry on 5xx, no retry on 4xx
- Async context manager
- File and in-memory repositories
- Repository selection from settings
"""
import json
import pytest
import httpx
import respx
from unittest.mock import AsyncMock

from app.domain.models import PhenologyStage
from app.infrastructure.stage_repository import (
    FileStageRepository,
    RemoteStageRepository,
    StaticStageRepository,
    get_stage_repository,
)
from app.infrastructure.stage_table_client import (
    StageTableClient,
    StageTableError,
    get_stage_table_client,
    parse_stages,
)
from app.infrastructure.stage_table_constants import (
    DEFAULT_APPLE_STAGES,
    StageTableEndpoints,
)


BASE_URL = "http://stages.test"

STAGE_PAYLOAD = [
    {"stage_code": 0, "stage_name": "Dormancy", "heat_threshold": 0},
    {"stage_code": 7, "stage_name": "Green tip", "heat_threshold": 100,
     "description": "Green leaf tips visible"},
]


# ============================================================
# Payload Parsing Tests
# ============================================================

class TestParseStages:
    """Tests for stage table payload parsing."""

    def test_bare_list(self):
        """A bare list of stages is accepted."""
        stages = parse_stages(STAGE_PAYLOAD)

        assert len(stages) == 2
        assert isinstance(stages[0], PhenologyStage)
        assert stages[1].description == "Green leaf tips visible"

    def test_results_envelope(self):
        """A paginated envelope is accepted."""
        stages = parse_stages({"count": 2, "results": STAGE_PAYLOAD})

        assert [s.stage_code for s in stages] == [0, 7]

    def test_malformed_entry(self):
        """Entries missing fields raise StageTableError."""
        with pytest.raises(StageTableError, match="Malformed"):
            parse_stages([{"stage_code": 1}])

    def test_not_a_list(self):
        """Non-list payloads raise StageTableError."""
        with pytest.raises(StageTableError):
            parse_stages({"detail": "nope"})

    def test_default_table_is_valid_and_sorted(self):
        """The bundled table parses and is sorted with a zero threshold first."""
        stages = parse_stages(DEFAULT_APPLE_STAGES)
        thresholds = [s.heat_threshold for s in stages]

        assert thresholds == sorted(thresholds)
        assert thresholds[0] == 0
        assert len({s.stage_code for s in stages}) == len(stages)


# ============================================================
# Endpoint Constant Tests
# ============================================================

class TestEndpoints:
    """Tests for endpoint path building."""

    def test_stages_path(self):
        assert StageTableEndpoints.get_stages() == "/phenology/stages/"

    def test_stages_by_crop(self):
        assert StageTableEndpoints.get_stages("apple") == "/phenology/stages/?crop=apple"


# ============================================================
# Client Tests
# ============================================================

class TestStageTableClient:
    """Tests for the remote client."""

    def test_client_initialization(self):
        """Client should initialize with the given base URL."""
        client = StageTableClient(base_url=BASE_URL)

        assert client.base_url == BASE_URL
        assert client.client is not None

    def test_singleton_pattern(self):
        """get_stage_table_client should return the same instance."""
        import app.infrastructure.stage_table_client as module
        module._stage_table_client = None

        client1 = get_stage_table_client()
        client2 = get_stage_table_client()

        assert client1 is client2
        module._stage_table_client = None

    @pytest.mark.asyncio
    async def test_context_manager_closes_client(self):
        """__aexit__ should close the HTTP client."""
        client = StageTableClient(base_url=BASE_URL)
        client.close = AsyncMock()

        async with client as ctx_client:
            assert ctx_client is client

        client.close.assert_called_once()

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_stages_success(self):
        """get_stages returns parsed stages."""
        respx.get(f"{BASE_URL}/phenology/stages/").mock(
            return_value=httpx.Response(200, json={"results": STAGE_PAYLOAD})
        )

        async with StageTableClient(base_url=BASE_URL) as client:
            stages = await client.get_stages()

        assert [s.stage_name for s in stages] == ["Dormancy", "Green tip"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_4xx_error_no_retry(self):
        """4xx errors raise StageTableError without retrying."""
        respx.get(f"{BASE_URL}/phenology/stages/").mock(
            return_value=httpx.Response(404, text="Not Found")
        )

        async with StageTableClient(base_url=BASE_URL) as client:
            with pytest.raises(StageTableError, match="404"):
                await client.get_stages()

        assert respx.calls.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_5xx_error_triggers_retry(self):
        """5xx errors are retried."""
        route = respx.get(f"{BASE_URL}/phenology/stages/")
        route.side_effect = [
            httpx.Response(500, text="Internal Server Error"),
            httpx.Response(200, json=STAGE_PAYLOAD),
        ]

        async with StageTableClient(base_url=BASE_URL) as client:
            stages = await client.get_stages()

        assert len(stages) == 2
        assert respx.calls.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_persistent_5xx_raises_stage_table_error(self):
        """Exhausted retries surface as StageTableError."""
        respx.get(f"{BASE_URL}/phenology/stages/").mock(
            return_value=httpx.Response(503, text="Unavailable")
        )

        async with StageTableClient(base_url=BASE_URL) as client:
            with pytest.raises(StageTableError, match="503"):
                await client.get_stages()

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_json(self):
        """Undecodable bodies raise StageTableError."""
        respx.get(f"{BASE_URL}/phenology/stages/").mock(
            return_value=httpx.Response(200, text="<html>")
        )

        async with StageTableClient(base_url=BASE_URL) as client:
            with pytest.raises(StageTableError, match="JSON"):
                await client.get_stages()


# ============================================================
# Repository Tests
# ============================================================

class TestRepositories:
    """Tests for the stage table sources."""

    @pytest.mark.asyncio
    async def test_static_default_table(self):
        """The default static repository serves the bundled table."""
        stages = await StaticStageRepository().get_stages()

        assert len(stages) == len(DEFAULT_APPLE_STAGES)

    @pytest.mark.asyncio
    async def test_static_returns_copies(self, two_stage_table):
        """Callers cannot alter the held table."""
        repository = StaticStageRepository(two_stage_table)

        first = await repository.get_stages()
        first.clear()

        assert len(await repository.get_stages()) == 2

    @pytest.mark.asyncio
    async def test_file_repository_loads_once(self, tmp_path):
        """The file is read on first use and cached."""
        path = tmp_path / "stages.json"
        path.write_text(json.dumps(STAGE_PAYLOAD), encoding="utf-8")
        repository = FileStageRepository(str(path))

        stages = await repository.get_stages()
        path.unlink()
        cached = await repository.get_stages()

        assert stages == cached
        assert len(cached) == 2

    @pytest.mark.asyncio
    async def test_file_repository_missing_file(self, tmp_path):
        """A missing file raises StageTableError."""
        repository = FileStageRepository(str(tmp_path / "missing.json"))

        with pytest.raises(StageTableError, match="Cannot read"):
            await repository.get_stages()

    @pytest.mark.asyncio
    async def test_file_repository_invalid_json(self, tmp_path):
        """Invalid JSON raises StageTableError."""
        path = tmp_path / "stages.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(StageTableError, match="not valid JSON"):
            await FileStageRepository(str(path)).get_stages()

    @pytest.mark.asyncio
    async def test_remote_repository_delegates(self):
        """The remote repository delegates to the client."""
        client = AsyncMock(spec=StageTableClient)
        client.get_stages.return_value = parse_stages(STAGE_PAYLOAD)
        repository = RemoteStageRepository(client)

        stages = await repository.get_stages()
        await repository.close()

        assert len(stages) == 2
        client.get_stages.assert_awaited_once_with(None)
        client.close.assert_awaited_once()

    @pytest.mark.asyncio
    @respx.mock
    async def test_remote_repository_sends_crop_filter(self):
        """A configured crop reaches the remote service as a query filter."""
        route = respx.get(f"{BASE_URL}/phenology/stages/", params={"crop": "apple"}).mock(
            return_value=httpx.Response(200, json=STAGE_PAYLOAD)
        )
        repository = RemoteStageRepository(StageTableClient(base_url=BASE_URL), crop="apple")

        stages = await repository.get_stages()
        await repository.close()

        assert route.called
        assert route.calls.last.request.url.params["crop"] == "apple"
        assert len(stages) == 2

    def test_repository_selection(self, monkeypatch, tmp_path):
        """Remote URL beats file path, which beats the bundled table."""
        import app.infrastructure.stage_repository as module
        from app.config import settings

        monkeypatch.setattr(module, "_stage_repository", None)
        monkeypatch.setattr(settings, "stage_table_url", None)
        monkeypatch.setattr(settings, "stage_table_path", None)
        assert isinstance(get_stage_repository(), StaticStageRepository)

        monkeypatch.setattr(module, "_stage_repository", None)
        monkeypatch.setattr(settings, "stage_table_path", str(tmp_path / "stages.json"))
        assert isinstance(get_stage_repository(), FileStageRepository)

        monkeypatch.setattr(module, "_stage_repository", None)
        monkeypatch.setattr(module, "get_stage_table_client", lambda: StageTableClient(BASE_URL))
        monkeypatch.setattr(settings, "stage_table_url", BASE_URL)
        monkeypatch.setattr(settings, "stage_table_crop", "apple")
        repository = get_stage_repository()
        assert isinstance(repository, RemoteStageRepository)
        assert repository.crop == "apple"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
