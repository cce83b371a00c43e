"""
Tagger service client.

The tagger's GraphQL endpoint only accepts requests carrying the CSRF token
embedded in its pages, so a client first loads the origin page (load()) and
then issues card lookups (fetch_card()).
"""

import logging
import re
from typing import Any

import httpx

from taggerlink.bridge.errors import FrameLoadError, TaggerFetchError
from taggerlink.config import settings
from taggerlink.models.tagger import TaggerPayload

logger = logging.getLogger(__name__)

_CSRF_PATTERN = re.compile(
    r'<meta\s+name="csrf-token"\s+content="([^"]+)"',
    re.IGNORECASE,
)

FETCH_CARD_QUERY = """
query FetchCard(
  $set: String!
  $number: String!
  $back: Boolean = false
  $moderatorView: Boolean = false
) {
  card: cardBySet(set: $set, number: $number, back: $back) {
    name
    illustrationId
    oracleId
    taggings(moderatorView: $moderatorView) {
      tag {
        name
        type
      }
    }
    relationships(moderatorView: $moderatorView) {
      foreignKey
      relatedId
      contentName
      relatedName
      classifier
      classifierInverse
    }
  }
}
"""


def extract_csrf_token(html: str) -> str | None:
    """Find the CSRF token meta tag in a tagger page."""
    match = _CSRF_PATTERN.search(html)
    return match.group(1) if match else None


class TaggerClient:
    """HTTP session against a tagger origin."""

    def __init__(
        self,
        origin: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.origin = origin.rstrip("/")
        self._client = client or httpx.AsyncClient(
            base_url=self.origin,
            headers={"User-Agent": settings.user_agent},
            timeout=timeout,
            follow_redirects=True,
        )
        self.csrf_token: str | None = None

    @property
    def loaded(self) -> bool:
        return self.csrf_token is not None

    async def load(self) -> None:
        """
        Load the origin page and keep its CSRF token.

        Raises:
            FrameLoadError: If the page cannot be fetched or has no token
        """
        try:
            response = await self._client.get(f"{self.origin}/")
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FrameLoadError(
                f"Failed to load {self.origin}: HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise FrameLoadError(f"Failed to load {self.origin}: {e}") from e

        token = extract_csrf_token(response.text)
        if token is None:
            raise FrameLoadError(f"No CSRF token found on {self.origin}")

        self.csrf_token = token
        logger.debug("Loaded tagger origin %s", self.origin)

    async def fetch_card(self, set_code: str, number: str) -> TaggerPayload:
        """
        Fetch taggings and relationships for a card printing.

        Args:
            set_code: Set code (e.g., "dom")
            number: Collector number

        Returns:
            The card object from the GraphQL response

        Raises:
            TaggerFetchError: If the client is not loaded or the request fails
        """
        if self.csrf_token is None:
            raise TaggerFetchError("Tagger client used before load()")

        body: dict[str, Any] = {
            "operationName": "FetchCard",
            "query": FETCH_CARD_QUERY,
            "variables": {
                "set": set_code,
                "number": number,
                "back": False,
                "moderatorView": False,
            },
        }

        try:
            response = await self._client.post(
                f"{self.origin}/graphql",
                json=body,
                headers={"X-CSRF-Token": self.csrf_token},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TaggerFetchError(
                f"Failed to fetch {set_code}/{number}: HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise TaggerFetchError(f"Failed to fetch {set_code}/{number}: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise TaggerFetchError(
                f"Failed to fetch {set_code}/{number}: response is not JSON"
            ) from e
        if not isinstance(data, dict):
            raise TaggerFetchError(f"Failed to fetch {set_code}/{number}: unexpected response")

        if data.get("errors"):
            messages = "; ".join(str(error.get("message")) for error in data["errors"])
            raise TaggerFetchError(f"Tagger rejected {set_code}/{number}: {messages}")

        card = (data.get("data") or {}).get("card")
        if card is None:
            raise TaggerFetchError(f"Card {set_code}/{number} not found on tagger")

        payload: TaggerPayload = card
        return payload

    async def close(self) -> None:
        await self._client.aclose()
