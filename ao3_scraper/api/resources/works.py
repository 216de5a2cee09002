import os
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from ao3_scraper.api.client import AO3ApiClient
from ao3_scraper.api.models import Work
from ao3_scraper.api.parsers import parse_document, parse_work


class WorksApi:
    """
    API for handling AO3 works

    Args:
        client (AO3ApiClient): AO3ApiClient instance

    Attributes:
        URL_PATH (str): URL path for works
    """

    URL_PATH: str = "/works"

    def __init__(self, client: AO3ApiClient):
        self._client = client

    def fetch(self, work_id: str) -> Work:
        """
        Fetches a work from its page, skipping the adult content warning.

        Args:
            work_id (str): Work ID

        Returns:
            work (Work): Parsed work
        """

        work_page: Any = self._client.get_or_fetch(f"{self.URL_PATH}/{work_id}", query_params={"view_adult": "true"})
        return parse_work(parse_document(work_page), self._client.sanitizer, work_id)

    def download_html(self, work_id: str, work: Work | None = None) -> Path:
        """
        Downloads the HTML file of a work.

        Args:
            work_id (str): Work ID
            work (Work | None): The already fetched work. Fetched when not provided

        Returns:
            filepath (Path): Path of the downloaded file
        """

        if work is None:
            work = self.fetch(work_id)

        filename = os.path.basename(urlparse(work.html_download_path).path)
        self._client._debug_log(f"Downloading {work.html_download_path} for work: {work_id}")
        content = self._client._download_file(work.html_download_path)
        filepath = self._client._save_downloaded_file(filename, content)
        self._client._debug_info(f"Downloaded work: {work_id}")
        return filepath
