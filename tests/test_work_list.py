import pytest

from ao3_scraper.api.exceptions import ConversionError, PatternMismatchError
from ao3_scraper.api.models import Link, Pagination
from ao3_scraper.api.parsers import parse_document, parse_work_list


def test_parse_tag_listing(load_document, sanitizer):
    work_list = parse_work_list(load_document("tag_works.html"), sanitizer)

    assert work_list.count == 1234
    assert work_list.pagination == Pagination(is_paginated=True, current_page=3, last_page=62)
    assert [work.slug for work in work_list.works] == ["2080878", "31"]
    assert work_list.works[0].authors == [Link(text="author1", slug="author1")]
    assert work_list.works[1].is_anonymous is True


def test_parse_user_listing(load_document, sanitizer):
    work_list = parse_work_list(load_document("user_works.html"), sanitizer)

    assert work_list.count == 1
    assert work_list.pagination.is_paginated is False
    assert len(work_list.works) == 1
    assert work_list.works[0].authors[0].slug == "open_doors"


def test_empty_listing(sanitizer):
    doc = parse_document('<div id="main"><h2 class="heading">0 Works in Nothing</h2></div>')
    work_list = parse_work_list(doc, sanitizer)

    assert work_list.count == 0
    assert work_list.works == []
    assert work_list.pagination.is_paginated is False


def test_missing_count(sanitizer):
    doc = parse_document('<div id="main"><h2 class="heading">Works in Nothing</h2></div>')
    with pytest.raises(PatternMismatchError) as exc_info:
        parse_work_list(doc, sanitizer)
    assert exc_info.value.field == "count"


def test_failing_blurb_is_identified(load_fixture, sanitizer):
    html = load_fixture("tag_works.html").replace(">5,678</a>", ">many</a>")

    with pytest.raises(ConversionError) as exc_info:
        parse_work_list(parse_document(html), sanitizer)

    assert str(exc_info.value).startswith("Unable to parse work 1:")
    assert exc_info.value.field == "kudos"
    assert exc_info.value.raw == "many"
    assert isinstance(exc_info.value.__cause__, ConversionError)


def test_listing_with_work_in_several_series(load_fixture, sanitizer):
    html = load_fixture("tag_works.html").replace(
        '<li>Part <strong>2</strong> of <a href="/series/6909">Title</a></li>',
        '<li>Part <strong>2</strong> of <a href="/series/6909">Title</a></li>'
        '<li>Part <strong>5</strong> of <a href="/series/12">Other</a></li>',
    )

    work_list = parse_work_list(parse_document(html), sanitizer)

    assert len(work_list.works) == 2
    assert work_list.works[0].series == Link(text="Title", slug="6909")
    assert work_list.works[0].series_part == 2
