import pytest

from ao3_scraper.api.exceptions import ExtractionError, NodeCountError
from ao3_scraper.api.models import Link
from ao3_scraper.api.parsers import parse_document, parse_series


def test_parse_series(load_document, sanitizer):
    series = parse_series(load_document("series.html"), sanitizer, "6909")

    assert series.slug == "6909"
    assert series.title == "Tree Talk"
    assert series.is_anonymous is False
    assert series.creators == [
        Link(text="author1", slug="author1"),
        Link(text="Second Pseud (author2)", slug="author2"),
    ]
    assert series.begun == "2014-08-09"
    assert series.updated == "2015-01-01"
    assert series.description == "<p>Conversations with a <strong>tree</strong>.</p>"
    assert series.notes == "<p>Read in order.</p>"
    assert series.words == 2468
    assert series.num_works == 2
    assert series.is_complete is False
    assert series.bookmarks == 1212


def test_series_works(load_document, sanitizer):
    series = parse_series(load_document("series.html"), sanitizer, "6909")

    assert [work.slug for work in series.works] == ["100", "101"]
    assert [work.series_part for work in series.works] == [1, 2]
    assert all(work.series == Link(text="Tree Talk", slug="6909") for work in series.works)
    assert series.works[0].summary == "<p>The first.</p>"
    assert series.works[1].status == "Work in Progress"


def test_anonymous_series(load_fixture, sanitizer):
    html = load_fixture("series.html")
    start = html.index("<dt>Creator:</dt>")
    end = html.index("<dt>Series Begun:</dt>")
    html = html[:start] + "<dt>Creator:</dt><dd>Anonymous</dd>" + html[end:]

    series = parse_series(parse_document(html), sanitizer, "6909")

    assert series.is_anonymous is True
    assert series.creators == []


def test_complete_series(load_fixture, sanitizer):
    html = load_fixture("series.html").replace("<dd>No</dd>", "<dd>Yes</dd>")
    assert parse_series(parse_document(html), sanitizer, "6909").is_complete is True


def test_unpaired_metadata(load_fixture, sanitizer):
    html = load_fixture("series.html").replace("<dt>Subscriptions:</dt>", "")
    with pytest.raises(NodeCountError) as exc_info:
        parse_series(parse_document(html), sanitizer, "6909")
    assert exc_info.value.field == "metadata"


def test_misordered_metadata(load_fixture, sanitizer):
    html = load_fixture("series.html").replace("<dt>Subscriptions:</dt>\n      <dd>7</dd>", "<dd>7</dd><dt>Subscriptions:</dt>")
    with pytest.raises(ExtractionError) as exc_info:
        parse_series(parse_document(html), sanitizer, "6909")
    assert exc_info.value.field == "metadata"


def test_missing_metadata(sanitizer):
    doc = parse_document('<div id="main"><h2 class="heading">Tree Talk</h2></div>')
    with pytest.raises(NodeCountError) as exc_info:
        parse_series(doc, sanitizer, "6909")
    assert exc_info.value.field == "metadata"
