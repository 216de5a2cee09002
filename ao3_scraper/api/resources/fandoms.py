from typing import Any

from ao3_scraper.api.client import AO3ApiClient
from ao3_scraper.api.models import Fandom, FandomCategory
from ao3_scraper.api.parsers import parse_document, parse_fandom_categories, parse_fandoms


class FandomsApi:
    """
    API for browsing AO3 fandoms

    Args:
        client (AO3ApiClient): AO3ApiClient instance

    Attributes:
        URL_PATH (str): URL path for media categories
    """

    URL_PATH: str = "/media"

    def __init__(self, client: AO3ApiClient):
        self._client = client

    def fetch_categories(self) -> list[FandomCategory]:
        """
        Fetches the media categories, e.g. "Anime & Manga".

        Returns:
            categories (list[FandomCategory]): List of categories
        """

        media_page: Any = self._client.get_or_fetch(self.URL_PATH)
        categories = parse_fandom_categories(parse_document(media_page))
        self._client._debug_info(f"Found {len(categories)} fandom categories")
        return categories

    def fetch_category(self, category: str) -> list[Fandom]:
        """
        Fetches all the fandoms under a media category.

        Args:
            category (str): Category slug, e.g. "Anime%20*a*%20Manga"

        Returns:
            fandoms (list[Fandom]): List of fandoms
        """

        category_page: Any = self._client.get_or_fetch(f"{self.URL_PATH}/{category}/fandoms")
        fandoms = parse_fandoms(parse_document(category_page))
        self._client._debug_info(f"Found {len(fandoms)} fandoms in {category}")
        return fandoms
