import hashlib
import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional
from urllib.parse import urljoin

import requests
from loguru import logger
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console

import ao3_scraper.api.exceptions
from ao3_scraper.api.enums import DEFAULT_SANITIZATION_POLICY
from ao3_scraper.api.sanitizer import Sanitizer

if TYPE_CHECKING:
    from ao3_scraper.api.resources.fandoms import FandomsApi
    from ao3_scraper.api.resources.series import SeriesApi
    from ao3_scraper.api.resources.tags import TagsApi
    from ao3_scraper.api.resources.users import UsersApi
    from ao3_scraper.api.resources.works import WorksApi


console = Console()

RATE_LIMIT_STATUS_CODES = (429, 503, 504)


class AO3Session(requests.Session):
    def __init__(self, timeout, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.timeout = timeout

    def request(self, method, url, *args, **kwargs):
        kwargs.setdefault("timeout", self.timeout)
        return super().request(method, url, *args, **kwargs)


class AO3ApiClient(BaseSettings):
    """
    AO3 API

    All settings can be overridden with `AO3_` prefixed environment variables,
    e.g. `AO3_SANITIZATION_POLICY=none`.

    Args:
        http_client (requests.Session | None): Session to send requests with. Defaults to an AO3Session

    Attributes:
        HOST (str): AO3 host
        TIMEOUT (float): Request timeout, in seconds
        SANITIZATION_POLICY (str): Policy used to sanitize summaries, notes and descriptions
        OUTPUT_FOLDER (str): Output folder
        DOWNLOADS_FOLDER (str): Downloads folder
        DEBUG (bool): Debug mode
        USE_DEBUG_CACHE (bool): Use debug cache
        DEBUG_CACHE_FOLDER (str): Debug cache folder

    Raises:
        ao3_scraper.api.exceptions.InvalidConfiguration: If the sanitization policy is unknown
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="AO3_",
        extra="ignore",
        env_ignore_empty=True,
    )

    _http_client: requests.Session
    _sanitizer: Sanitizer

    HOST: str = "https://archiveofourown.org"
    TIMEOUT: float = 5

    SANITIZATION_POLICY: str = DEFAULT_SANITIZATION_POLICY.value

    OUTPUT_FOLDER: str = "output"
    DOWNLOADS_FOLDER: str = "downloads"

    DEBUG: bool = False
    USE_DEBUG_CACHE: bool = True
    DEBUG_CACHE_FOLDER: str = "debug_cache"

    def __init__(self, *args, http_client: requests.Session | None = None, **kwargs):
        super().__init__(*args, **kwargs)

        if self.DEBUG:
            logger.enable("ao3_scraper")

        self._sanitizer = Sanitizer(self.SANITIZATION_POLICY)

        if http_client is None:
            http_client = AO3Session(self.TIMEOUT)
            http_client.headers.update(
                {"User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:127.0) Gecko/20100101 Firefox/127.0"}
            )
        self._http_client = http_client

        # Resources
        self._fandoms: Optional["FandomsApi"] = None
        self._series: Optional["SeriesApi"] = None
        self._tags: Optional["TagsApi"] = None
        self._users: Optional["UsersApi"] = None
        self._works: Optional["WorksApi"] = None

    @property
    def sanitizer(self) -> Sanitizer:
        """
        Sanitizer built from SANITIZATION_POLICY

        Returns:
            (Sanitizer): Sanitizer instance
        """

        return self._sanitizer

    @property
    def fandoms(self):
        """
        Fandoms Api Instance

        Returns:
            (FandomsApi): FandomsApi Instance
        """

        if self._fandoms is None:
            from ao3_scraper.api.resources.fandoms import FandomsApi

            self._fandoms = FandomsApi(self)

        return self._fandoms

    @property
    def series(self):
        """
        Series Api Instance

        Returns:
            (SeriesApi): SeriesApi Instance
        """

        if self._series is None:
            from ao3_scraper.api.resources.series import SeriesApi

            self._series = SeriesApi(self)

        return self._series

    @property
    def tags(self):
        """
        Tags Api Instance

        Returns:
            (TagsApi): TagsApi Instance
        """

        if self._tags is None:
            from ao3_scraper.api.resources.tags import TagsApi

            self._tags = TagsApi(self)

        return self._tags

    @property
    def users(self):
        """
        Users Api Instance

        Returns:
            (UsersApi): UsersApi Instance
        """

        if self._users is None:
            from ao3_scraper.api.resources.users import UsersApi

            self._users = UsersApi(self)

        return self._users

    @property
    def works(self):
        """
        Works Api Instance

        Returns:
            (WorksApi): WorksApi Instance
        """

        if self._works is None:
            from ao3_scraper.api.resources.works import WorksApi

            self._works = WorksApi(self)

        return self._works

    def fetch(
        self,
        url: str,
        *args: Any,
        **kwargs: Any,
    ) -> requests.Response:
        """
        Wrapper around requests.get that classifies failures

        Args:
            url (str): URL to fetch, relative to HOST
            *args: Positional arguments to pass to requests
            **kwargs: Keyword arguments to pass to requests

        Returns:
            (requests.Response): Response object

        Raises:
            ao3_scraper.api.exceptions.ServiceUnavailable: If AO3 cannot be reached
            ao3_scraper.api.exceptions.RateLimitError: If AO3 rate limits the request
            ao3_scraper.api.exceptions.FailedRequest: If the request fails
        """
        ao3_url = urljoin(self.HOST, url)

        try:
            res = self._http_client.get(ao3_url, *args, **kwargs)
        except requests.RequestException as e:
            self._debug_error(f"Unable to reach {ao3_url}: {e}")
            raise ao3_scraper.api.exceptions.ServiceUnavailable(f"Unable to reach {ao3_url}", errors=[e]) from e

        if res.status_code in RATE_LIMIT_STATUS_CODES:
            self._debug_log(f"Rate limit exceeded with status code: {res.status_code}")
            raise ao3_scraper.api.exceptions.RateLimitError(
                "Rate limit exceeded, wait a bit and try again", code=res.status_code
            )
        elif not 200 <= res.status_code < 300:
            self._debug_log(f"Failed to fetch page with status code: {res.status_code}")
            raise ao3_scraper.api.exceptions.FailedRequest(
                f"Fetching {ao3_url} returned a non-200 status code: {res.status_code}", code=res.status_code
            )
        return res

    def get_or_fetch(
        self,
        url: str,
        query_params: dict | None = None,
        process_response=None,
        **kwargs: Any,
    ):
        """
        Fetches a page and caches it if debug mode is enabled and USE_DEBUG_CACHE is True

        Args:
            url (str): URL to fetch
            query_params (dict): Query parameters
            process_response (Callable): Function to process the response
            **kwargs: Keyword arguments to pass to requests

        Returns:
            (str | bytes): Page contents

        Raises:
            ao3_scraper.api.exceptions.FailedRequest: If the request fails
        """

        contents = None

        cache_key = self._get_cache_key(url, query_params)

        if self.DEBUG and self.USE_DEBUG_CACHE:
            self._debug_log(f"Cache key for {url} is {cache_key}")
            contents = self._get_cached_file(cache_key)

        if not contents:
            self._debug_log(f"Fetching {url} with params {query_params}")
            res = self.fetch(url, params=query_params, **kwargs)

            if process_response:
                contents = process_response(res)
            else:
                contents = res.text

            if self.DEBUG and self.USE_DEBUG_CACHE:
                self._save_cached_file(cache_key, contents)

        if not contents:
            raise ao3_scraper.api.exceptions.FailedRequest("Fetched an empty page")

        return contents

    def get_output_folder(self):
        """
        Get the output folder

        Returns:
            (Path): Output folder
        """

        return Path(self.OUTPUT_FOLDER)

    def get_downloads_folder(self):
        """
        Get the downloads folder

        Returns:
            (Path): Downloads folder
        """
        return self.get_output_folder() / self.DOWNLOADS_FOLDER

    def _download_file(self, relative_path):
        self._debug_log(f"Downloading file at {relative_path}")
        file_content = self.get_or_fetch(relative_path, process_response=lambda res: res.content, allow_redirects=True)

        if not file_content:
            raise ao3_scraper.api.exceptions.FailedDownload("Failed to download")

        return file_content

    def _save_downloaded_file(self, filename, data: str | bytes) -> Path:
        download_folder = self.get_downloads_folder()
        downloaded_filepath = download_folder / filename
        self._debug_log(f"Saving downloaded file: {downloaded_filepath}")
        os.makedirs(download_folder, exist_ok=True)
        mode = "wb" if isinstance(data, bytes) else "w"
        with open(downloaded_filepath, mode) as f:
            f.write(data)
        return downloaded_filepath

    def _get_cache_key(self, url: str, query_params: dict | None = None) -> str:
        query_string = json.dumps(query_params, sort_keys=True) if query_params else ""
        source_str = f"{url}{query_string}"
        return hashlib.sha1(source_str.encode()).hexdigest()

    def _get_cache_filepath(self, cache_key: str) -> Path:
        return self.get_output_folder() / self.DEBUG_CACHE_FOLDER / f"{cache_key}"

    def _get_cached_file(self, cache_key: str):
        filepath = self._get_cache_filepath(cache_key)
        if os.path.exists(filepath):
            try:
                with open(filepath, "r") as f:
                    return f.read()
            except UnicodeDecodeError:
                with open(filepath, "rb") as f:
                    return f.read()

    def _save_cached_file(self, cache_key: str, data: str | bytes):
        filepath = self._get_cache_filepath(cache_key)
        os.makedirs(os.path.dirname(filepath), exist_ok=True)
        mode = "wb" if isinstance(data, bytes) else "w"
        with open(filepath, mode) as f:
            f.write(data)

    def _log(self, *args, **kwargs):
        """
        Generic user-facing log function
        """
        console.print(*args, **kwargs)

    def _debug_log(self, *args, **kwargs):
        """
        Debug Mode Only: Basic log
        """

        if not self.DEBUG:
            return

        logger.opt(depth=1).debug(*args, **kwargs)

    def _debug_error(self, *args, **kwargs):
        """
        Debug Mode Only: Error log
        """
        if not self.DEBUG:
            return

        logger.opt(depth=1).error(*args, **kwargs)

    def _debug_info(self, *args, **kwargs):
        """
        Debug Mode Only: Info log
        """
        if not self.DEBUG:
            return

        logger.opt(depth=1).info(*args, **kwargs)
