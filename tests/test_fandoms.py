import pytest

from ao3_scraper.api.exceptions import PatternMismatchError
from ao3_scraper.api.models import Fandom, FandomCategory
from ao3_scraper.api.parsers import parse_document, parse_fandom_categories, parse_fandoms


def test_parse_fandom_categories(load_document):
    categories = parse_fandom_categories(load_document("media.html"))

    assert categories == [
        FandomCategory(name="Anime & Manga", slug="Anime%20*a*%20Manga"),
        FandomCategory(name="Books & Literature", slug="Books%20*a*%20Literature"),
        FandomCategory(name="Uncategorized Fandoms", slug="Uncategorized%20Fandoms"),
    ]


def test_parse_fandoms(load_document):
    fandoms = parse_fandoms(load_document("fandoms.html"))

    assert fandoms == [
        Fandom(
            name="Alice in Wonderland - Lewis Carroll",
            letter="A",
            slug="Alice%20in%20Wonderland%20-%20Lewis%20Carroll",
            count=302,
        ),
        Fandom(
            name="Artemis Fowl - Eoin Colfer",
            letter="A",
            slug="Artemis%20Fowl%20-%20Eoin%20Colfer",
            count=1468,
        ),
        Fandom(
            name="Bartimaeus - Jonathan Stroud",
            letter="B",
            slug="Bartimaeus%20-%20Jonathan%20Stroud",
            count=0,
        ),
    ]


def test_empty_pages():
    doc = parse_document("<html><body><div id='main'></div></body></html>")
    assert parse_fandom_categories(doc) == []
    assert parse_fandoms(doc) == []


def test_fandom_without_count(load_fixture):
    html = load_fixture("fandoms.html").replace("(302)", "")
    with pytest.raises(PatternMismatchError) as exc_info:
        parse_fandoms(parse_document(html))
    assert exc_info.value.field == "count"


def test_category_with_unexpected_link(load_fixture):
    html = load_fixture("media.html").replace('href="/media/Anime%20*a*%20Manga/fandoms">Anime', 'href="/media">Anime')
    with pytest.raises(PatternMismatchError) as exc_info:
        parse_fandom_categories(parse_document(html))
    assert exc_info.value.field == "category"
