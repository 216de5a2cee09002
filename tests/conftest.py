from pathlib import Path
from unittest import mock

import pytest
import requests

from ao3_scraper.api import AO3ApiClient
from ao3_scraper.api.parsers import parse_document
from ao3_scraper.api.sanitizer import Sanitizer

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


def make_response(text="", status_code=200, content=None):
    response = mock.Mock(spec=requests.Response)
    response.status_code = status_code
    response.text = text
    response.content = content if content is not None else text.encode()
    return response


@pytest.fixture
def load_fixture():
    return read_fixture


@pytest.fixture
def load_document():
    def _load_document(name: str):
        return parse_document(read_fixture(name))

    return _load_document


@pytest.fixture
def sanitizer():
    return Sanitizer("ao3")


@pytest.fixture
def http_client():
    return mock.Mock(spec=requests.Session)


@pytest.fixture
def api(http_client, tmp_path):
    return AO3ApiClient(
        HOST="https://archiveofourown.org",
        OUTPUT_FOLDER=str(tmp_path),
        DEBUG=False,
        http_client=http_client,
    )
