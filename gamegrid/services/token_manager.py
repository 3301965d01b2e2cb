import logging
import time
from typing import Callable, Optional

import httpx

from gamegrid.exceptions import UpstreamError
from gamegrid.models.schema_models import AccessTokenSchema

TWITCH_TOKEN_URL = "https://id.twitch.tv/oauth2/token"
EXPIRY_SAFETY_MARGIN = 60  # seconds


class AccessTokenManager:
    """Caches the catalog bearer token and renews it through a client-credentials exchange.

    Concurrent callers that both see an expired token may both renew it; the
    provider hands out a valid token either way, so renewals are not serialized.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        client_id: Optional[str],
        client_secret: Optional[str],
        token_url: str = TWITCH_TOKEN_URL,
        safety_margin: float = EXPIRY_SAFETY_MARGIN,
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url
        self.safety_margin = safety_margin
        self.clock = clock
        self._token: Optional[AccessTokenSchema] = None

    async def get_token(self) -> str:
        """Return a bearer token that is valid now.

        Raises:
            UpstreamError: credentials are missing or the exchange failed
        """
        token = self._token
        if token is not None and self.clock() < token.expires_at:
            return token.value

        if not self.client_id or not self.client_secret:
            raise UpstreamError("Catalog credentials are not configured")

        try:
            response = await self.client.post(
                self.token_url,
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "grant_type": "client_credentials",
                },
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            error = UpstreamError.from_httpx(e)
            logging.error(f"Token exchange failed: {error}")
            raise error from e

        data = response.json()
        expires_at = self.clock() + float(data["expires_in"]) - self.safety_margin
        self._token = AccessTokenSchema(value=data["access_token"], expires_at=expires_at)
        logging.info("Renewed catalog access token")
        return self._token.value
