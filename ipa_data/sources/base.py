"""Base client for all IPA data sources."""

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Optional

import aiohttp

logger = logging.getLogger(__name__)


class DataSourceError(Exception):
    """Custom exception for data source errors."""

    pass


class NetworkError(DataSourceError):
    """Raised when a service responds with a non-success status or is unreachable."""

    def __init__(self, message: str, status: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.url = url


class BaseClient(ABC):
    """Abstract base client with common functionality for all data sources.

    Provides:
    - Rate limiting
    - A single JSON GET with status checking (no automatic retries)
    - Logging
    """

    def __init__(self, rate_limit: int = 60, timeout: float = 60):
        """Initialize base client.

        Args:
            rate_limit: Maximum requests per minute
            timeout: Total timeout in seconds for one request
        """
        self.rate_limit = rate_limit
        self.timeout = timeout
        self.last_request = datetime.min

    async def _rate_limit_wait(self):
        """Implement rate limiting to avoid overwhelming APIs."""
        now = datetime.now()
        time_since_last = (now - self.last_request).total_seconds()
        min_interval = 60.0 / self.rate_limit

        if time_since_last < min_interval:
            wait_time = min_interval - time_since_last
            logger.debug(f"Rate limiting: waiting {wait_time:.2f}s")
            await asyncio.sleep(wait_time)

        self.last_request = datetime.now()

    async def _get_json(
        self,
        url: str,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
        description: str = "Request failed",
    ) -> Any:
        """Make one GET request and decode the JSON body.

        Args:
            url: Request URL
            params: Query string parameters
            headers: Extra request headers
            description: Label used in log and error messages

        Returns:
            Decoded JSON body

        Raises:
            NetworkError: On a non-200 status, transport failure or timeout
            DataSourceError: If the body is not valid JSON
        """
        await self._rate_limit_wait()

        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(
                    url,
                    params=params,
                    headers=headers,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    if response.status != 200:
                        logger.warning(f"{description}: HTTP {response.status}")
                        raise NetworkError(
                            f"{description}: {response.status}",
                            status=response.status,
                            url=url,
                        )

                    # ArcGIS sometimes labels GeoJSON as text/plain
                    return await response.json(content_type=None)

        except aiohttp.ClientError as e:
            logger.warning(f"{description}: {e}")
            raise NetworkError(f"{description}: {e}", url=url) from e
        except asyncio.TimeoutError as e:
            logger.warning(f"{description}: timed out after {self.timeout}s")
            raise NetworkError(f"{description}: timed out", url=url) from e
        except ValueError as e:
            raise DataSourceError(f"{description}: invalid JSON ({e})") from e

    @abstractmethod
    async def fetch(self, *args, **kwargs) -> Any:
        """Fetch data from the source.

        This method must be implemented by subclasses.
        """
        pass
