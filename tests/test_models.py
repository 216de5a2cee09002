import pytest
from pydantic import ValidationError

from ao3_scraper.api.models import Link, Pagination, Series, Work, WorkListing

LISTING = dict(
    title="Title",
    slug="1",
    last_updated="01 Aug 2011",
    rating="General Audiences",
    warnings="No Archive Warnings Apply",
    category="Gen",
    status="Complete Work",
    language="English",
    chapters="1/1",
)


def test_anonymous_work_cannot_have_authors():
    with pytest.raises(ValidationError):
        WorkListing(**LISTING, is_anonymous=True, authors=[Link(text="author1", slug="author1")])


def test_series_details_require_series_membership():
    with pytest.raises(ValidationError):
        WorkListing(**LISTING, series=Link(text="Series", slug="2"), series_part=1)

    work = WorkListing(**LISTING, is_series=True, series=Link(text="Series", slug="2"), series_part=1)
    assert work.series_part == 1


def test_counts_are_non_negative():
    with pytest.raises(ValidationError):
        WorkListing(**LISTING, kudos=-1)


def test_slugs_are_non_empty():
    with pytest.raises(ValidationError):
        Link(text="Fluff", slug="")


def test_records_are_frozen():
    link = Link(text="Fluff", slug="Fluff")
    with pytest.raises(ValidationError):
        link.text = "Angst"


def test_anonymous_series_cannot_have_creators():
    with pytest.raises(ValidationError):
        Series(slug="1", title="Series", is_anonymous=True, creators=[Link(text="a", slug="a")])


def test_pagination_defaults():
    assert Pagination() == Pagination(is_paginated=False, current_page=0, last_page=0)


def test_work_download_path():
    work = Work(slug="1", title="Title", html_download_slug="1/Title.html?updated_at=2")
    assert work.html_download_path == "/downloads/1/Title.html?updated_at=2"
