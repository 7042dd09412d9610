"""
Infrastructure layer: Remote stage table client with retry logic.
"""
from typing import Any, List, Optional
import httpx
from pydantic import ValidationError
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from app.config import settings
from app.domain.models import PhenologyStage
from app.infrastructure.stage_table_constants import (
    StageTableConstants,
    StageTableEndpoints,
)


class StageTableError(Exception):
    """Raised when a stage table source cannot provide the table."""
    pass


def parse_stages(data: Any) -> List[PhenologyStage]:
    """
    Parse a stage table payload.

    Accepts a bare list of stages or an envelope with a ``results`` list.

    Raises:
        StageTableError: If the payload does not describe a stage table
    """
    if isinstance(data, dict):
        data = data.get(StageTableConstants.RESULTS_KEY)
    if not isinstance(data, list):
        raise StageTableError("Stage table payload must be a list of stages")
    try:
        return [PhenologyStage(**item) for item in data]
    except (TypeError, ValidationError) as e:
        raise StageTableError(f"Malformed stage table entry: {str(e)}")


class StageTableClient:
    """
    Client for a remote phenology stage table service.
    Implements retry logic with exponential backoff.
    """

    def __init__(self, base_url: Optional[str] = None):
        """Initialize the client with configuration."""
        self.base_url = base_url or settings.stage_table_url or "http://localhost"
        self.api_key = settings.stage_table_api_key
        headers = {"accept": StageTableConstants.CONTENT_TYPE_JSON}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=settings.request_timeout,
        )

    async def __aenter__(self) -> "StageTableClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    @retry(
        stop=stop_after_attempt(settings.max_retry_attempts),
        wait=wait_exponential(
            multiplier=settings.retry_backoff_multiplier,
            min=settings.retry_min_wait,
            max=settings.retry_max_wait,
        ),
        retry=retry_if_exception_type((httpx.HTTPStatusError, httpx.RequestError)),
        reraise=True,
    )
    async def _make_request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> Any:
        """
        Make an HTTP request with retry logic.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            **kwargs: Additional arguments for the request

        Returns:
            Decoded JSON body

        Raises:
            StageTableError: On client errors (4xx) or undecodable bodies
            httpx.HTTPStatusError: On server errors once retries are exhausted
            httpx.RequestError: On connection failures once retries are exhausted
        """
        response = await self.client.request(method, endpoint, **kwargs)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            # Retry on server errors (5xx)
            if e.response.status_code >= 500:
                raise
            # Don't retry on client errors (4xx)
            raise StageTableError(
                f"Stage table request failed: {e.response.status_code} - {e.response.text}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise StageTableError(f"Stage table response is not valid JSON: {str(e)}")

    async def get_stages(self, crop: Optional[str] = None) -> List[PhenologyStage]:
        """
        Fetch the phenology stage table.

        Args:
            crop: Optional crop filter

        Returns:
            List of PhenologyStage instances in the order served

        Raises:
            StageTableError: If the table cannot be fetched or parsed
        """
        try:
            data = await self._make_request("GET", StageTableEndpoints.get_stages(crop))
        except httpx.HTTPStatusError as e:
            raise StageTableError(
                f"Stage table request failed: {e.response.status_code} - {e.response.text}"
            )
        except httpx.RequestError as e:
            raise StageTableError(f"Stage table request error: {str(e)}")
        return parse_stages(data)


# Singleton instance
_stage_table_client: Optional[StageTableClient] = None


def get_stage_table_client() -> StageTableClient:
    """
    Get or create the singleton stage table client instance.

    Returns:
        StageTableClient instance
    """
    global _stage_table_client
    if _stage_table_client is None:
        _stage_table_client = StageTableClient()
    return _stage_table_client
