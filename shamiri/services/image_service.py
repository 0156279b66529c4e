"""Mood image lookup against the Pixabay search API."""

from typing import Optional
import httpx

from server.config import config
from server.logging_config import get_logger

logger = get_logger(__name__)


class ImageService:
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = config.PIXABAY.API_KEY if api_key is None else api_key
        self.base_url = base_url or config.PIXABAY.BASE_URL
        self.timeout = timeout or config.PIXABAY.TIMEOUT
        self._transport = transport

    async def find_mood_image(self, query: Optional[str]) -> Optional[str]:
        """
        Return the URL of the first matching illustration, or None.

        The image is decoration: lookup failures are logged and never raised.
        """
        if not query or not self.api_key:
            return None

        params = {
            "q": query,
            "key": self.api_key,
            "min_width": 1280,
            "min_height": 720,
            "image_type": "illustration",
            "category": "feelings",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.base_url, params=params)
                response.raise_for_status()
                hits = response.json().get("hits") or []
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Pixabay lookup failed for '{query}': {e}")
            return None

        if not hits:
            return None
        return hits[0].get("largeImageURL")
