import re

import parsel
from loguru import logger

import ao3_scraper.api.exceptions
from ao3_scraper.api.models import Link, Series
from ao3_scraper.api.parsers.nodes import get_attr, inner_html, match_pattern, parse_count, select_one, text_of
from ao3_scraper.api.parsers.work_list import parse_work_blurbs
from ao3_scraper.api.sanitizer import Sanitizer

CREATOR_SLUG_REGEX = re.compile(r"/users/(.+)/pseuds/.+")


def _iter_description_list(dl_node: parsel.Selector):
    """
    Yields the (dt, dd) pairs of a description list
    """

    children = dl_node.xpath("./*")
    if len(children) % 2 == 1:
        raise ao3_scraper.api.exceptions.NodeCountError(
            f"Expected pairs of metadata nodes, found {len(children)} nodes", field="metadata"
        )

    for dt_node, dd_node in zip(children[::2], children[1::2]):
        if dt_node.xpath("name()").get() != "dt" or dd_node.xpath("name()").get() != "dd":
            raise ao3_scraper.api.exceptions.ExtractionError("Expected a <dt> followed by a <dd>", field="metadata")
        yield dt_node, dd_node


def _parse_creators(dd_node: parsel.Selector, series: dict):
    if text_of(dd_node) == "Anonymous":
        series["is_anonymous"] = True
        return

    creators = []
    for creator_node in dd_node.css("a"):
        href = get_attr(creator_node, "href", "creators")
        slug = match_pattern(CREATOR_SLUG_REGEX, href, "creators").group(1)
        creators.append(Link(text=text_of(creator_node), slug=slug))
    series["creators"] = creators


def _parse_metadata(dl_node: parsel.Selector, series: dict, sanitizer: Sanitizer):
    for dt_node, dd_node in _iter_description_list(dl_node):
        label = text_of(dt_node)

        # Labels end with a colon, e.g. "Series Begun:"
        if "Creator" in label:
            _parse_creators(dd_node, series)
        elif "Series Begun" in label:
            series["begun"] = text_of(dd_node)
        elif "Series Updated" in label:
            series["updated"] = text_of(dd_node)
        elif "Description" in label:
            series["description"] = sanitizer.sanitize(inner_html(dd_node).strip())
        elif "Notes" in label:
            series["notes"] = sanitizer.sanitize(inner_html(dd_node).strip())
        elif "Words" in label:
            series["words"] = parse_count(text_of(dd_node), "words")
        elif "Works" in label:
            series["num_works"] = parse_count(text_of(dd_node), "num_works")
        elif "Complete" in label:
            series["is_complete"] = text_of(dd_node) == "Yes"
        elif "Bookmarks" in label:
            series["bookmarks"] = parse_count(text_of(dd_node), "bookmarks")
        elif "Stats" in label:
            _parse_metadata(select_one(dd_node, "dl.stats", "stats"), series, sanitizer)
        else:
            logger.debug(f"Skipping unknown series metadata: {label}")


def parse_series(doc: parsel.Selector, sanitizer: Sanitizer, slug: str) -> Series:
    """
    Parses a series page

    Args:
        doc (parsel.Selector): Series page
        sanitizer (Sanitizer): Sanitizer applied to the description, notes and work summaries
        slug (str): Series ID

    Returns:
        (Series): Series metadata and the works it contains
    """

    series = {"slug": slug}
    series["title"] = text_of(select_one(doc, "div#main > h2.heading", "title"))

    _parse_metadata(select_one(doc, "dl.series.meta.group", "metadata"), series, sanitizer)

    series["works"] = parse_work_blurbs(doc, sanitizer)

    return Series(**series)
