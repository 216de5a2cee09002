from typing import Any

from ao3_scraper.api.models import Series
from ao3_scraper.api.parsers import parse_document, parse_series


class SeriesApi:
    """
    API for handling AO3 series

    Args:
        client (AO3ApiClient): AO3ApiClient instance

    Attributes:
        URL_PATH (str): URL path for series
    """

    URL_PATH: str = "/series"

    def __init__(self, client):
        self._client = client

    def fetch(self, series_id: str) -> Series:
        """
        Fetches a series from AO3.

        Args:
            series_id (str): Series ID

        Returns:
            series (Series): Series metadata and the works it contains
        """

        series_page: Any = self._client.get_or_fetch(f"{self.URL_PATH}/{series_id}")
        series = parse_series(parse_document(series_page), self._client.sanitizer, series_id)
        self._client._debug_info(f"Found {len(series.works)} works in series {series_id}")
        return series
