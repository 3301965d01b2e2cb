"""IGDB catalog client: candidate pool for the daily grid and title search.

Requests use the IGDB query language as a plain-text body, authenticated with
the Twitch client id and a bearer token from AccessTokenManager.
"""

import logging
from datetime import date
from typing import Any, List

import httpx

from gamegrid.domain.grid_rules import month_start_timestamp, sanitize_query
from gamegrid.exceptions import UpstreamError
from gamegrid.models.dc_models import GameModel
from gamegrid.services.token_manager import AccessTokenManager

IGDB_GAMES_URL = "https://api.igdb.com/v4/games"

POOL_FIELDS = "name, id, cover.url, screenshots.url, first_release_date, rating, total_rating_count, summary"
SEARCH_FIELDS = "name, id, first_release_date, cover.url"


class CatalogGateway:
    def __init__(
        self,
        client: httpx.AsyncClient,
        token_manager: AccessTokenManager,
        client_id: str | None,
        games_url: str = IGDB_GAMES_URL,
        pool_limit: int = 500,
        search_limit: int = 10,
        min_rating: int = 60,
        min_rating_count: int = 10,
    ):
        self.client = client
        self.token_manager = token_manager
        self.client_id = client_id
        self.games_url = games_url
        self.pool_limit = pool_limit
        self.search_limit = search_limit
        self.min_rating = min_rating
        self.min_rating_count = min_rating_count

    def build_pool_query(self, today: date) -> str:
        """Filter for well-known games released before this month, most rated first.

        Sorting by total_rating_count keeps the pool order stable from day to day,
        which the date-seeded selection relies on.
        """
        cutoff = month_start_timestamp(today)
        return (
            f"fields {POOL_FIELDS}; "
            "where screenshots != null "
            "& cover != null "
            "& first_release_date != null "
            f"& first_release_date < {cutoff} "
            f"& rating > {self.min_rating} "
            f"& total_rating_count > {self.min_rating_count} "
            "& summary != null; "
            "sort total_rating_count desc; "
            f"limit {self.pool_limit};"
        )

    def build_search_query(self, query: str) -> str:
        sanitized = sanitize_query(query)
        return f'search "{sanitized}"; fields {SEARCH_FIELDS}; limit {self.search_limit};'

    async def fetch_pool(self, today: date) -> List[GameModel]:
        """Fetch the candidate pool, sorted by popularity (not yet deduplicated)."""
        data = await self._post(self.build_pool_query(today))
        logging.info(f"Fetched {len(data)} candidate games from the catalog")
        return [GameModel.model_validate(game) for game in data]

    async def search(self, query: str) -> List[GameModel]:
        """Free-text title search.

        Raises:
            QueryValidationError: the query is too short once sanitized
            UpstreamError: token exchange or catalog call failed
        """
        data = await self._post(self.build_search_query(query))
        return [GameModel.model_validate(game) for game in data]

    async def _post(self, body: str) -> List[Any]:
        token = await self.token_manager.get_token()
        try:
            response = await self.client.post(
                self.games_url,
                content=body,
                headers={
                    "Client-ID": self.client_id or "",
                    "Authorization": f"Bearer {token}",
                    "Accept": "application/json",
                },
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            error = UpstreamError.from_httpx(e)
            logging.error(f"IGDB error: {error.details or error}")
            raise error from e
        return response.json()
