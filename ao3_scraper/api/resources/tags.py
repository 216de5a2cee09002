from typing import Any

from tqdm import tqdm

from ao3_scraper.api.client import AO3ApiClient
from ao3_scraper.api.enums import WORK_SORT_QUERY_KEY, WORK_SORT_QUERY_PARAM, WorkSortOption
from ao3_scraper.api.models import WorkList
from ao3_scraper.api.parsers import parse_document, parse_work_list


class TagsApi:
    """
    API for handling works listed under an AO3 tag

    A tag can represent a fandom, a character, a relationship, etc.

    Args:
        client (AO3ApiClient): AO3ApiClient instance

    Attributes:
        URL_PATH (str): URL path for tags
    """

    URL_PATH: str = "/tags"

    def __init__(self, client: AO3ApiClient):
        self._client = client

    def fetch_works(self, tag: str, page: int = 0, sort_by: WorkSortOption | None = None) -> WorkList:
        """
        Fetches a page of works tagged with the given tag.

        Args:
            tag (str): Tag slug, e.g. "Action*s*Adventure"
            page (int): Page number. Defaults to 0, AO3's first page
            sort_by (WorkSortOption | None): Sort order. Defaults to AO3's default order

        Returns:
            work_list (WorkList): Works on the page
        """

        query_params: dict[str, Any] = {}
        if page != 0:
            query_params["page"] = page
        if sort_by is not None:
            query_params[WORK_SORT_QUERY_KEY] = WORK_SORT_QUERY_PARAM[sort_by]

        tag_page: Any = self._client.get_or_fetch(
            f"{self.URL_PATH}/{tag}/works",
            query_params=query_params or None,
        )
        return parse_work_list(parse_document(tag_page), self._client.sanitizer)

    def fetch_pages(
        self,
        tag: str,
        start_page: int = 1,
        end_page: int | None = None,
        sort_by: WorkSortOption | None = None,
    ) -> WorkList:
        """
        Fetches consecutive pages of works tagged with the given tag.

        If `end_page` is not provided, it will fetch all pages from `start_page` to the last page.

        Args:
            tag (str): Tag slug
            start_page (int): Starting page. Defaults to 1
            end_page (int | None): Ending page. Defaults to None
            sort_by (WorkSortOption | None): Sort order. Defaults to AO3's default order

        Returns:
            work_list (WorkList): Works on all fetched pages, with the pagination of the last one
        """

        first_page = self.fetch_works(tag, page=start_page, sort_by=sort_by)
        last_page = first_page.pagination.last_page if first_page.pagination.is_paginated else start_page
        end_page = last_page if end_page is None else min(end_page, last_page)

        if end_page <= start_page:
            return first_page

        self._client._log(f"Fetching {end_page - start_page + 1} pages, from page {start_page} to {end_page}")

        works = list(first_page.works)
        pagination = first_page.pagination
        for page_num in tqdm(range(start_page + 1, end_page + 1), desc="Pages", unit="pg"):
            work_list = self.fetch_works(tag, page=page_num, sort_by=sort_by)
            works.extend(work_list.works)
            pagination = work_list.pagination

        return WorkList(works=works, count=first_page.count, pagination=pagination)
