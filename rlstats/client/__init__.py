import asyncio
import os
from typing import Any, Iterable, Optional

import aiohttp
from aiohttp import hdrs

from rlstats.logger import logger
from rlstats.client.decoding import decode_body
from rlstats.client.errors import MalformedResponse, RateLimited, ServiceError, TransportError
from rlstats.client.http_session import DEFAULT_TIMEOUT, build_headers, create_session
from rlstats.client.structures import (
    BatchPlayer,
    Platform,
    Player,
    Playlist,
    SearchResponse,
    Season,
    StatType,
    Tier,
)

API_URL = os.getenv("RLSTATS_API_URL", "https://api.rocketleaguestats.com/v1")


class RlStats:
    """
    Client for the RocketLeagueStats api.

    The headers are fixed when the client is built and shared by every call.
    The underlying session is opened on first use and released by
    :meth:`close` or by leaving an ``async with`` block.
    """

    def __init__(
            self,
            api_key: str,
            *,
            api_url: str = API_URL,
            timeout: aiohttp.ClientTimeout = DEFAULT_TIMEOUT
    ):
        self._headers = build_headers(api_key)
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    def _get_session(self) -> aiohttp.ClientSession:
        # a session is bound to the loop that opened it
        loop = asyncio.get_running_loop()
        if self._session and not self._session.closed and self._loop is loop:
            return self._session
        if self._session and self._loop is not loop:
            logger.debug("Event loop changed, opening a new session")
        self._session = create_session(self._headers, self.timeout)
        self._loop = loop
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed and self._loop is asyncio.get_running_loop():
            await self._session.close()
        self._session = None
        self._loop = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type: Any, exc_value: Any, tb: Any) -> None:
        await self.close()

    async def get_platforms(self) -> list[Platform]:
        return await self._request("/data/platforms", hdrs.METH_GET, list[Platform])

    async def get_seasons(self) -> list[Season]:
        return await self._request("/data/seasons", hdrs.METH_GET, list[Season])

    async def get_playlists(self) -> list[Playlist]:
        return await self._request("/data/playlists", hdrs.METH_GET, list[Playlist])

    async def get_tiers(self) -> list[Tier]:
        return await self._request("/data/tiers", hdrs.METH_GET, list[Tier])

    async def get_player(self, unique_id: str, platform_id: int) -> Player:
        return await self._request(
            f"/player?unique_id={unique_id}&platform_id={int(platform_id)}", hdrs.METH_GET, Player
        )

    async def search_players(self, display_name: str, page: int = 0) -> SearchResponse:
        """Searches rocketleaguestats' player database, not Rocket League's."""
        return await self._request(
            f"/search/players?display_name={display_name}&page={page}", hdrs.METH_GET, SearchResponse
        )

    async def batch_players(self, players: Iterable[BatchPlayer]) -> list[Player]:
        """
        Retrieve several players in one request.

        The service caps a batch at 10 players. Players it cannot find are
        left out of the result.
        """
        payload = [player.to_payload() for player in players]
        return await self._request("/player/batch", hdrs.METH_POST, list[Player], body=payload)

    async def get_ranked_leaderboard(self, playlist_id: int) -> list[Player]:
        return await self._request(
            f"/leaderboard/ranked?playlist_id={int(playlist_id)}", hdrs.METH_GET, list[Player]
        )

    async def get_stat_leaderboard(self, stat_type: StatType | str) -> list[Player]:
        if isinstance(stat_type, StatType):
            stat_type = stat_type.value
        return await self._request(f"/leaderboard/stat?type={stat_type}", hdrs.METH_GET, list[Player])

    async def _request(self, path: str, method: str, expected: Any, body: Optional[Any] = None) -> Any:
        url = f"{self.api_url}{path}"
        session = self._get_session()
        kwargs = {} if body is None else {"json": body}
        logger.debug("%s %s", method, url)

        try:
            async with session.request(method, url, **kwargs) as resp:
                if resp.status == 429:
                    retry_after = _parse_retry_after(resp.headers.get(hdrs.RETRY_AFTER))
                    logger.warning("Rate limited on %s %s (retry after: %s)", method, url, retry_after)
                    raise RateLimited(url, retry_after=retry_after)
                data = await resp.read()
                status = resp.status
        except aiohttp.ClientError as e:
            logger.error(f"HTTP error on {method} {url}: {e}", exc_info=True)
            raise TransportError(f"HTTP error: {e}", url=url) from e
        except asyncio.TimeoutError as e:
            logger.error(f"Timeout on {method} {url}")
            raise TransportError("Request timed out", url=url) from e

        return _decode(expected, data, url, status)


def _decode(expected: Any, data: bytes, url: str, status: int) -> Any:
    try:
        return decode_body(expected, data, url=url, status_code=status)
    except ServiceError as e:
        logger.warning("Service error on %s -> %s: %s (%s)", url, e.code, e.message, status)
        raise
    except MalformedResponse as e:
        logger.error("Malformed response on %s (%s): %s", url, status, e.error)
        raise


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None
