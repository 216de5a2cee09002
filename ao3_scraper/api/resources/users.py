from typing import Any

from ao3_scraper.api.client import AO3ApiClient
from ao3_scraper.api.models import WorkList
from ao3_scraper.api.parsers import parse_document, parse_work_list


class UsersApi:
    """
    API for handling AO3 users

    Args:
        client (AO3ApiClient): AO3ApiClient instance

    Attributes:
        URL_PATH (str): URL path for users
    """

    URL_PATH: str = "/users"

    def __init__(self, client: AO3ApiClient):
        self._client = client

    def fetch_works(self, username: str, page: int = 0) -> WorkList:
        """
        Fetches a page of the works posted by a user.

        Args:
            username (str): User slug
            page (int): Page number. Defaults to 0, AO3's first page

        Returns:
            work_list (WorkList): Works on the page
        """

        query_params = {"page": page} if page != 0 else None
        works_page: Any = self._client.get_or_fetch(f"{self.URL_PATH}/{username}/works", query_params=query_params)
        return parse_work_list(parse_document(works_page), self._client.sanitizer)
