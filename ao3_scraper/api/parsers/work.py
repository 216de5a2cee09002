import html
import re

import parsel

import ao3_scraper.api.exceptions
from ao3_scraper.api.models import Link, Work
from ao3_scraper.api.parsers.nodes import (
    get_attr,
    inner_html,
    match_pattern,
    parse_count,
    select_first,
    select_one,
    text_of,
)
from ao3_scraper.api.parsers.work_blurb import parse_tag_link, parse_user_link
from ao3_scraper.api.sanitizer import Sanitizer

SERIES_REGEX = re.compile(r'Part (.+?) of the <a href="[^"]*/series/([^"]+)">(.+?)</a> series')
DOWNLOAD_PREFIX = "/downloads/"

# (field, <dd> class) of each tag list in the metadata box
TAG_LISTS = (
    ("rating_tags", "rating"),
    ("warning_tags", "warning"),
    ("category_tags", "category"),
    ("fandom_tags", "fandom"),
    ("relationship_tags", "relationship"),
    ("character_tags", "character"),
    ("freeform_tags", "freeform"),
)

STAT_COUNTS = ("comments", "kudos", "bookmarks", "hits")


def _parse_byline(doc: parsel.Selector, work: dict):
    byline = select_one(doc, "#workskin > div.preface > h3.byline.heading", "authors")
    byline_text = " ".join(text_of(byline).split())

    if byline_text == "Anonymous":
        work["is_anonymous"] = True
        return

    # Archived works are bylined "AUTHOR_NAME [archived by ARCHIVIST_NAME]"
    if "[archived by" in byline_text:
        archivist = parse_user_link(select_one(byline, 'a[rel="author"]', "archivist"), "archivist")
        work["authors"] = [Link(text=byline_text, slug=archivist.slug)]
        return

    work["authors"] = [parse_user_link(author_node, "authors") for author_node in byline.css("a")]


def _parse_download_slug(doc: parsel.Selector) -> str:
    for download_node in doc.css("li.download > ul > li > a"):
        if text_of(download_node) != "HTML":
            continue

        href = get_attr(download_node, "href", "html_download_slug")
        return href.removeprefix(DOWNLOAD_PREFIX)

    raise ao3_scraper.api.exceptions.NodeCountError("Unable to find the HTML download link", field="html_download_slug")


def parse_work(doc: parsel.Selector, sanitizer: Sanitizer, slug: str) -> Work:
    """
    Parses a work page, e.g. /works/[work]?view_adult=true

    Args:
        doc (parsel.Selector): Work page
        sanitizer (Sanitizer): Sanitizer applied to the summary
        slug (str): Work ID

    Returns:
        (Work): Parsed work

    Raises:
        ao3_scraper.api.exceptions.ExtractionError: If the page does not have the expected shape
    """

    work = {"slug": slug}

    meta_node = select_one(doc, ".work.meta.group", "metadata")

    for field, tag_class in TAG_LISTS:
        work[field] = [parse_tag_link(tag_node, field) for tag_node in meta_node.css(f"dd.{tag_class} > ul > li > a")]

    language_node = select_first(meta_node, "dd.language")
    if language_node is not None:
        work["language"] = text_of(language_node)

    # A work can belong to several series; the first one is kept
    series_node = select_first(meta_node, "span.series > span.position")
    if series_node is not None:
        series_match = match_pattern(SERIES_REGEX, inner_html(series_node), "series")
        part, series_slug, series_title = series_match.groups()
        work["is_series"] = True
        work["series"] = Link(text=html.unescape(series_title), slug=series_slug)
        work["series_part"] = parse_count(part, "series_part")

    published_node = select_first(meta_node, "dd.published")
    if published_node is not None:
        work["published"] = text_of(published_node)

    updated_node = select_first(meta_node, "dd.status")
    if updated_node is not None:
        work["updated"] = text_of(updated_node)

    words_node = select_first(meta_node, "dd.words")
    if words_node is not None:
        try:
            work["words"] = parse_count(text_of(words_node), "words")
        except ao3_scraper.api.exceptions.ConversionError:
            work["words"] = 0

    chapters_node = select_first(meta_node, "dd.chapters")
    if chapters_node is not None:
        work["chapters"] = text_of(chapters_node)

    for field in STAT_COUNTS:
        stat_node = select_first(meta_node, f"dd.{field}")
        if stat_node is not None:
            work[field] = parse_count(text_of(stat_node), field)

    work["title"] = text_of(select_one(doc, ".preface > h2.title", "title"))

    summary_node = select_first(doc, ".summary > blockquote.userstuff")
    if summary_node is not None:
        work["summary"] = sanitizer.sanitize(inner_html(summary_node).strip())

    _parse_byline(doc, work)

    work["recipients"] = [
        parse_user_link(gift_node, "recipients")
        for gift_node in doc.css("#workskin > div.preface ul.associations a")
        if "gifts" in gift_node.attrib.get("href", "")
    ]

    work["html_download_slug"] = _parse_download_slug(doc)

    return Work(**work)
