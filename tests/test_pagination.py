import pytest

from ao3_scraper.api.exceptions import ConversionError, NodeCountError
from ao3_scraper.api.models import Pagination
from ao3_scraper.api.parsers import parse_document, parse_pagination

PAGINATION_BAR = """
<ol class="pagination actions">
  <li class="previous"><a rel="prev" href="?page=2">&#8592; Previous</a></li>
  <li><a href="?page=1">1</a></li>
  <li><a href="?page=2">2</a></li>
  <li><span class="current">3</span></li>
  <li><a href="?page=4">4</a></li>
  <li><a href="?page=5">5</a></li>
  <li class="next"><a rel="next" href="?page=4">Next &#8594;</a></li>
</ol>
"""


def listing(*bars):
    return parse_document(f"<html><body><div id='main'>{''.join(bars)}</div></body></html>")


def test_paginated_listing():
    pagination = parse_pagination(listing(PAGINATION_BAR, "<ol class='work index group'></ol>", PAGINATION_BAR))
    assert pagination == Pagination(is_paginated=True, current_page=3, last_page=5)


def test_single_page_listing():
    assert parse_pagination(listing("<ol class='work index group'></ol>")) == Pagination(
        is_paginated=False, current_page=0, last_page=0
    )


@pytest.mark.parametrize("num_bars", [1, 3])
def test_unexpected_number_of_bars(num_bars):
    with pytest.raises(NodeCountError) as exc_info:
        parse_pagination(listing(*[PAGINATION_BAR] * num_bars))
    assert exc_info.value.field == "pagination"


def test_missing_current_page():
    bar = PAGINATION_BAR.replace('<span class="current">3</span>', '<a href="?page=3">3</a>')
    with pytest.raises(NodeCountError) as exc_info:
        parse_pagination(listing(bar, bar))
    assert exc_info.value.field == "current_page"


def test_too_few_items():
    bar = '<ol class="pagination actions"><li><span class="current">1</span></li></ol>'
    with pytest.raises(NodeCountError) as exc_info:
        parse_pagination(listing(bar, bar))
    assert exc_info.value.field == "last_page"


def test_non_numeric_last_page():
    bar = PAGINATION_BAR.replace('<a href="?page=5">5</a>', "<span>five</span>")
    with pytest.raises(ConversionError) as exc_info:
        parse_pagination(listing(bar, bar))
    assert exc_info.value.field == "last_page"
