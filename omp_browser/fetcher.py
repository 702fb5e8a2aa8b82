"""
Server list download.

Performs a single HTTP GET against the public list endpoint and turns the
JSON payload into ServerRecord objects.
"""

import json
import asyncio
from typing import Any, List, Optional

import aiohttp
from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JSONPathError

from . import __version__
from .models import ServerRecord
from .exceptions import ConfigError, FetchError
from .logging_config import get_logger, TRACE


USER_AGENT = f"omp-browser/{__version__}"


class ServerListFetcher:
    """Downloads the server list from the configured endpoint."""

    def __init__(self, url: str, timeout: float = 30.0, servers_path: Optional[str] = None):
        """
        Args:
            url: Server list endpoint
            timeout: Total request timeout in seconds
            servers_path: Optional JSONPath selecting the server entries inside
                a wrapped payload (e.g. "$.servers[*]")
        """
        self.url = url
        self.timeout = timeout
        self.servers_path = servers_path
        self._expr = None
        if servers_path:
            try:
                self._expr = jsonpath_parse(servers_path)
            except JSONPathError as e:
                raise ConfigError(f"Invalid servers_path '{servers_path}': {e}") from e
        self.logger = get_logger(__name__)

    async def fetch(self) -> List[ServerRecord]:
        """
        Download and parse the server list.

        Returns:
            Valid server records; malformed entries are skipped

        Raises:
            FetchError: on network failure, bad status or unusable payload
        """
        self.logger.info(f"Downloading server list from {self.url}")
        try:
            text = await self._download()
        except asyncio.TimeoutError as e:
            raise FetchError(f"Request timed out after {self.timeout:g}s") from e
        except UnicodeDecodeError as e:
            raise FetchError(f"JSON error: {e}") from e
        except aiohttp.ClientResponseError as e:
            raise FetchError(f"Request error: HTTP {e.status} {e.message}") from e
        except aiohttp.ClientError as e:
            raise FetchError(f"Request error: {e}") from e

        self.logger.log(TRACE, f"<<< {self.url}: {text}")
        servers = self.parse(text)
        self.logger.info(f"Received {len(servers)} servers")
        return servers

    async def _download(self) -> str:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        async with aiohttp.ClientSession(timeout=timeout, headers=headers) as session:
            async with session.get(self.url) as response:
                response.raise_for_status()
                return await response.text()

    def parse(self, text: str) -> List[ServerRecord]:
        """Turn a response body into server records."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise FetchError(f"JSON error: {e}") from e

        entries = self._select_entries(data)
        if not isinstance(entries, list):
            raise FetchError(f"JSON error: expected a list of servers, got {type(entries).__name__}")

        servers = []
        for entry in entries:
            try:
                servers.append(ServerRecord.from_dict(entry))
            except ValueError as e:
                self.logger.warning(f"Skipping server entry: {e}")
        return servers

    def _select_entries(self, data: Any) -> Any:
        if self._expr is None:
            return data

        values = [match.value for match in self._expr.find(data)]
        # "$.servers" yields the list itself, "$.servers[*]" yields its items
        if len(values) == 1 and isinstance(values[0], list):
            return values[0]
        return values
