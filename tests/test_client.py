from unittest import mock

import pytest
import requests

from ao3_scraper.api import AO3ApiClient
from ao3_scraper.api.client import AO3Session
from ao3_scraper.api.enums import SanitizationPolicy
from ao3_scraper.api.exceptions import (
    FailedRequest,
    InvalidConfiguration,
    RateLimitError,
    ServiceUnavailable,
)
from tests.conftest import make_response


def test_fetch_joins_host(api, http_client):
    http_client.get.return_value = make_response("<html></html>")

    res = api.fetch("/works/1", params={"view_adult": "true"})

    assert res.text == "<html></html>"
    http_client.get.assert_called_once_with("https://archiveofourown.org/works/1", params={"view_adult": "true"})


def test_fetch_unreachable(api, http_client):
    http_client.get.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(ServiceUnavailable) as exc_info:
        api.fetch("/works/1")

    assert exc_info.value.code == 503
    assert isinstance(exc_info.value.errors[0], requests.ConnectionError)


def test_fetch_timeout(api, http_client):
    http_client.get.side_effect = requests.Timeout("timed out")

    with pytest.raises(ServiceUnavailable):
        api.fetch("/works/1")


@pytest.mark.parametrize("status_code", [400, 403, 404, 500])
def test_fetch_failed_request(api, http_client, status_code):
    http_client.get.return_value = make_response(status_code=status_code)

    with pytest.raises(FailedRequest) as exc_info:
        api.fetch("/works/1")

    assert not isinstance(exc_info.value, RateLimitError)
    assert exc_info.value.code == status_code


@pytest.mark.parametrize("status_code", [429, 503, 504])
def test_fetch_rate_limited(api, http_client, status_code):
    http_client.get.return_value = make_response(status_code=status_code)

    with pytest.raises(RateLimitError) as exc_info:
        api.fetch("/works/1")

    assert exc_info.value.code == status_code


def test_get_or_fetch_rejects_empty_page(api, http_client):
    http_client.get.return_value = make_response("")

    with pytest.raises(FailedRequest):
        api.get_or_fetch("/works/1")


def test_debug_cache(http_client, tmp_path):
    api = AO3ApiClient(OUTPUT_FOLDER=str(tmp_path), DEBUG=True, USE_DEBUG_CACHE=True, http_client=http_client)
    http_client.get.return_value = make_response("<html>cached</html>")

    assert api.get_or_fetch("/works/1", query_params={"view_adult": "true"}) == "<html>cached</html>"
    assert api.get_or_fetch("/works/1", query_params={"view_adult": "true"}) == "<html>cached</html>"

    http_client.get.assert_called_once()
    assert len(list((tmp_path / api.DEBUG_CACHE_FOLDER).iterdir())) == 1


def test_default_settings(http_client):
    api = AO3ApiClient(http_client=http_client)

    assert api.HOST == "https://archiveofourown.org"
    assert api.TIMEOUT == 5
    assert api.sanitizer.policy == SanitizationPolicy.AO3


def test_settings_from_environment(http_client):
    with mock.patch.dict("os.environ", {"AO3_SANITIZATION_POLICY": "ao3-android", "AO3_TIMEOUT": "12.5"}):
        api = AO3ApiClient(http_client=http_client)

    assert api.TIMEOUT == 12.5
    assert api.sanitizer.policy == SanitizationPolicy.AO3_ANDROID


def test_invalid_sanitization_policy(http_client):
    with pytest.raises(InvalidConfiguration):
        AO3ApiClient(SANITIZATION_POLICY="strict", http_client=http_client)


def test_default_session_timeout():
    api = AO3ApiClient(TIMEOUT=7)

    assert isinstance(api._http_client, AO3Session)
    with mock.patch.object(requests.Session, "request", return_value=make_response()) as request:
        api._http_client.get("https://archiveofourown.org/works/1")

    assert request.call_args.kwargs["timeout"] == 7
    assert "Mozilla" in api._http_client.headers["User-Agent"]


def test_resources_are_reused(api):
    assert api.works is api.works
    assert api.tags is api.tags
    assert api.fandoms is not api.series
