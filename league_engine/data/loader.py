"""
League data loader.

Reads the {"teams": [...], "matches": [...]} fixture from a local JSON file
or an http(s) URL and validates it into a LeaguePayload.
"""

import logging
import time
from pathlib import Path
from typing import Optional

import httpx
from pydantic import ValidationError
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential_jitter,
    retry_if_exception_type,
)

from league_engine.config import Config, DEFAULT_CONFIG
from league_engine.models import LeaguePayload

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """HTTP fetch error (retriable)."""
    pass


class LoadError(Exception):
    """The data source could not be read or did not hold a valid payload."""
    pass


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


class LeagueDataLoader:
    """
    Loads the league fixture from a file or URL.

    An httpx.AsyncClient can be injected; otherwise one is created per
    request using the configured timeout and user agent.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.client = client

    async def load(self, source: Optional[str] = None) -> LeaguePayload:
        """
        Load and validate the league payload.

        Args:
            source: File path or URL (defaults to config.data_source)

        Returns:
            Validated payload

        Raises:
            LoadError: If the source is unreadable or malformed
        """
        source = source or self.config.data_source
        try:
            if is_url(source):
                raw = await self._fetch(source)
            else:
                raw = Path(source).read_bytes()
            payload = LeaguePayload.model_validate_json(raw)
        except (httpx.HTTPError, FetchError, OSError) as e:
            raise LoadError(f"Could not read {source}: {e}") from e
        except ValidationError as e:
            raise LoadError(f"Invalid league data in {source}: {e}") from e

        logger.info(
            "Loaded %d teams and %d matches from %s",
            len(payload.teams),
            len(payload.matches),
            source,
        )
        return payload

    async def _fetch(self, url: str) -> bytes:
        retrying = retry(
            reraise=True,
            stop=stop_after_attempt(max(self.config.retries, 1)),
            wait=wait_exponential_jitter(initial=0.5, max=6),
            retry=retry_if_exception_type((httpx.TransportError, FetchError)),
        )
        return await retrying(self._get)(url)

    async def _get(self, url: str) -> bytes:
        """Fetch URL once, raising FetchError on server errors."""
        start = time.time()
        if self.client is not None:
            response = await self.client.get(url)
        else:
            async with httpx.AsyncClient(
                follow_redirects=True,
                headers={"User-Agent": self.config.user_agent},
                timeout=self.config.req_timeout_s,
            ) as client:
                response = await client.get(url)
        elapsed_ms = int((time.time() - start) * 1000)

        logger.debug("fetch url=%s status=%s ms=%d", url, response.status_code, elapsed_ms)

        if response.status_code >= 500:
            raise FetchError(f"Server error {response.status_code}")

        response.raise_for_status()
        return response.content


class StaticLoader:
    """Serves an already-built payload, e.g. generated sample data."""

    def __init__(self, payload: LeaguePayload):
        self.payload = payload

    async def load(self, source: Optional[str] = None) -> LeaguePayload:
        return self.payload.model_copy(deep=True)
