"""
Infrastructure layer: Phenology stage table sources.

Three interchangeable sources share one async interface:
- StaticStageRepository: in-memory table (bundled apple BBCH stages by default)
- FileStageRepository: JSON file, read once and cached
- RemoteStageRepository: remote service via StageTableClient
"""
import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from app.config import settings
from app.domain.models import PhenologyStage
from app.infrastructure.stage_table_client import (
    StageTableClient,
    StageTableError,
    get_stage_table_client,
    parse_stages,
)
from app.infrastructure.stage_table_constants import DEFAULT_APPLE_STAGES

logger = logging.getLogger(__name__)


class StageRepository:
    """Base interface for stage table sources."""

    async def get_stages(self) -> List[PhenologyStage]:
        """
        Return the full stage table.

        Raises:
            StageTableError: If the table cannot be provided
        """
        raise NotImplementedError

    async def close(self):
        """Release any resources held by the source."""
        return None


class StaticStageRepository(StageRepository):
    """Stage table held in memory."""

    def __init__(self, stages: Optional[Iterable[PhenologyStage]] = None):
        if stages is None:
            stages = parse_stages(DEFAULT_APPLE_STAGES)
        self._stages = tuple(stages)

    async def get_stages(self) -> List[PhenologyStage]:
        return list(self._stages)


class FileStageRepository(StageRepository):
    """Stage table loaded from a JSON file on first use."""

    def __init__(self, path: str):
        self.path = Path(path)
        self._stages: Optional[List[PhenologyStage]] = None

    async def get_stages(self) -> List[PhenologyStage]:
        if self._stages is None:
            self._stages = self._load()
            logger.info(f"Loaded {len(self._stages)} phenology stages from {self.path}")
        return list(self._stages)

    def _load(self) -> List[PhenologyStage]:
        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise StageTableError(f"Cannot read stage table file {self.path}: {str(e)}")
        except ValueError as e:
            raise StageTableError(f"Stage table file {self.path} is not valid JSON: {str(e)}")
        return parse_stages(data)


class RemoteStageRepository(StageRepository):
    """Stage table fetched from a remote service on every call."""

    def __init__(self, client: StageTableClient, crop: Optional[str] = None):
        self.client = client
        self.crop = crop

    async def get_stages(self) -> List[PhenologyStage]:
        return await self.client.get_stages(self.crop)

    async def close(self):
        await self.client.close()


# Singleton instance
_stage_repository: Optional[StageRepository] = None


def get_stage_repository() -> StageRepository:
    """
    Get or create the configured stage repository.

    A remote URL takes precedence over a file path; with neither set the
    bundled table is used.

    Returns:
        StageRepository instance
    """
    global _stage_repository
    if _stage_repository is None:
        if settings.stage_table_url:
            _stage_repository = RemoteStageRepository(
                get_stage_table_client(), crop=settings.stage_table_crop
            )
        elif settings.stage_table_path:
            _stage_repository = FileStageRepository(settings.stage_table_path)
        else:
            _stage_repository = StaticStageRepository()
        logger.info(f"Using stage table source: {type(_stage_repository).__name__}")
    return _stage_repository
