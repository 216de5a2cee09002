import re

import parsel

import ao3_scraper.api.exceptions
from ao3_scraper.api.models import WorkList
from ao3_scraper.api.parsers.nodes import match_pattern, parse_count, select_one, text_of
from ao3_scraper.api.parsers.pagination import parse_pagination
from ao3_scraper.api.parsers.work_blurb import parse_work_blurb
from ao3_scraper.api.sanitizer import Sanitizer

# e.g. "1 - 20 of 1,234 Works in Fluff" or "3 Works by someone"
COUNT_REGEX = re.compile(r"([\d,]+)\s+Works?\b")


def parse_work_blurbs(doc: parsel.Selector, sanitizer: Sanitizer):
    works = []
    for idx, work_node in enumerate(doc.css(".work.blurb.group"), start=1):
        try:
            works.append(parse_work_blurb(work_node, sanitizer))
        except ao3_scraper.api.exceptions.ExtractionError as e:
            wrapped = type(e)(f"Unable to parse work {idx}: {e}", field=e.field, errors=[e])
            wrapped.raw = e.raw
            raise wrapped from e
    return works


def parse_work_list(doc: parsel.Selector, sanitizer: Sanitizer) -> WorkList:
    """
    Parses a paginated listing of works, e.g. /tags/[tag]/works

    Args:
        doc (parsel.Selector): Listing page
        sanitizer (Sanitizer): Sanitizer applied to the work summaries

    Returns:
        (WorkList): Works on the page, total count and pagination state
    """

    count_text = text_of(select_one(doc, "#main > h2.heading", "count"))
    count = parse_count(match_pattern(COUNT_REGEX, count_text, "count").group(1), "count")

    return WorkList(
        works=parse_work_blurbs(doc, sanitizer),
        count=count,
        pagination=parse_pagination(doc),
    )
