import html
import re

import parsel

import ao3_scraper.api.exceptions
from ao3_scraper.api.enums import TagType
from ao3_scraper.api.models import Link, WorkListing
from ao3_scraper.api.parsers.nodes import (
    get_attr,
    inner_html,
    match_pattern,
    parse_count,
    select_first,
    select_one,
    select_optional,
    text_of,
)
from ao3_scraper.api.sanitizer import Sanitizer

WORK_SLUG_REGEX = re.compile(r"^work_(\S+)$")
TAG_SLUG_REGEX = re.compile(r"/tags/(.+)/works")
SERIES_REGEX = re.compile(r'Part <strong>(.+?)</strong> of <a href="[^"]*/series/([^"]+)">(.+?)</a>')
ARCHIVIST_REGEX = re.compile(r"^.*by\s*(.+ \[archived by .+\])", re.MULTILINE)
USER_SLUG_REGEX = re.compile(r"^/(?:users/([^/]+)/(?:pseuds|gifts).*|gifts\?recipient=(\S+?))\s*$")

# (field, selector) of the four symbols shown in the corner of a blurb
SYMBOLS = (
    ("rating", ".rating"),
    ("warnings", ".warnings"),
    ("category", ".category"),
    ("status", ".iswip"),
)

# (field, selector) of the optional stats, which default to zero
OPTIONAL_STATS = (
    ("kudos", "dd.kudos > a"),
    ("bookmarks", "dd.bookmarks > a"),
    ("hits", "dd.hits"),
)

TAG_FIELDS = {
    TagType.WARNINGS: "warning_tags",
    TagType.RELATIONSHIPS: "relationship_tags",
    TagType.CHARACTERS: "character_tags",
    TagType.FREEFORMS: "freeform_tags",
}


def parse_tag_link(node: parsel.Selector, field: str) -> Link:
    href = get_attr(node, "href", field)
    slug_match = match_pattern(TAG_SLUG_REGEX, href, field)
    return Link(text=text_of(node), slug=slug_match.group(1))


def parse_user_link(node: parsel.Selector, field: str) -> Link:
    href = get_attr(node, "href", field)
    slug_match = match_pattern(USER_SLUG_REGEX, href, field)
    slug = slug_match.group(1) or slug_match.group(2)
    return Link(text=text_of(node), slug=slug)


def parse_archived_byline(heading: parsel.Selector, user_links: parsel.SelectorList) -> Link:
    """
    Parses the byline of a work posted by an archivist on behalf of its author

    The byline is displayed as:
    ```
    <a href="/works/WORK_ID">WORK_NAME</a>
       by
       AUTHOR_NAME [archived by <a rel="author" href="ARCHIVIST_URL">ARCHIVIST_NAME</a>]
    ```
    The author is named "AUTHOR_NAME [archived by ARCHIVIST_NAME]" and takes the
    archivist's slug, as the original author has no account.

    Args:
        heading (parsel.Selector): Heading node containing the byline
        user_links (parsel.SelectorList): Anchors in the heading, title excluded

    Returns:
        (Link): The single author of the work
    """

    name_match = match_pattern(ARCHIVIST_REGEX, text_of(heading, strip=False), "archivist")

    # TODO: AO3 markup never shows more than one archivist; support it if it ever does
    archivist_links = [link for link in user_links if link.attrib.get("rel") == "author"]
    if len(archivist_links) != 1:
        raise ao3_scraper.api.exceptions.NodeCountError(
            f"Expected exactly one archivist link, found {len(archivist_links)}", field="archivist"
        )

    archivist = parse_user_link(archivist_links[0], "archivist")
    return Link(text=name_match.group(1).strip(), slug=archivist.slug)


def parse_work_blurb(node: parsel.Selector, sanitizer: Sanitizer) -> WorkListing:
    """
    Parses the standardised listing of a work displayed on tag, user and series pages.

    Args:
        node (parsel.Selector): The `.work.blurb.group` node of a single work
        sanitizer (Sanitizer): Sanitizer applied to the summary

    Returns:
        (WorkListing): Parsed work

    Raises:
        ao3_scraper.api.exceptions.ExtractionError: If the blurb does not have the expected shape
    """

    work = {}

    work_id = get_attr(node, "id", "slug")
    work["slug"] = match_pattern(WORK_SLUG_REGEX, work_id, "slug").group(1)

    work["last_updated"] = text_of(select_one(node, ".datetime", "last_updated"))

    fandom_nodes = node.css(".fandoms.heading > a")
    if len(fandom_nodes) < 1:
        raise ao3_scraper.api.exceptions.NodeCountError("Expected at least one fandom", field="fandom_tags")
    work["fandom_tags"] = [parse_tag_link(fandom_node, "fandom_tags") for fandom_node in fandom_nodes]

    work["language"] = text_of(select_one(node, "dd.language", "language"))

    # The word count may contain commas (e.g. 3,884) or may be missing altogether
    words_text = text_of(select_one(node, "dd.words", "words"))
    try:
        work["words"] = parse_count(words_text, "words")
    except ao3_scraper.api.exceptions.ConversionError:
        work["words"] = 0

    # e.g. "1/1", "3/?"
    work["chapters"] = text_of(select_one(node, "dd.chapters", "chapters"))

    for field, query in OPTIONAL_STATS:
        stat_node = select_optional(node, query, field)
        work[field] = parse_count(text_of(stat_node), field) if stat_node is not None else 0

    # A work can belong to several series; the first one is kept
    series_node = select_first(node, ".series > li")
    if series_node is not None:
        series_match = match_pattern(SERIES_REGEX, inner_html(series_node), "series")
        part, series_slug, series_title = series_match.groups()
        work["is_series"] = True
        work["series"] = Link(text=html.unescape(series_title), slug=series_slug)
        work["series_part"] = parse_count(part, "series_part")

    tags: dict[TagType, list[Link]] = {tag_type: [] for tag_type in TagType}
    for tag_node in node.css("ul.tags.commas > li"):
        class_attr = get_attr(tag_node, "class", "tags")
        try:
            tag_type = TagType.from_class_attr(class_attr)
        except ValueError as e:
            raise ao3_scraper.api.exceptions.PatternMismatchError(
                "Unable to infer tag type", field="tags", raw=class_attr, errors=[e]
            ) from e

        field = TAG_FIELDS[tag_type]
        tags[tag_type].append(parse_tag_link(select_one(tag_node, "a.tag", field), field))

    for tag_type, field in TAG_FIELDS.items():
        work[field] = tags[tag_type]

    symbols_node = select_one(node, ".required-tags", "symbols")
    for field, query in SYMBOLS:
        work[field] = get_attr(select_one(symbols_node, query, field), "title", field)

    summary_node = select_optional(node, "blockquote.summary", "summary")
    if summary_node is not None:
        work["summary"] = sanitizer.sanitize(inner_html(summary_node).strip())

    # The heading holds the title, then any authors and recipients
    heading = select_one(node, ".header.module > h4.heading", "heading")
    heading_links = heading.css("a")
    if len(heading_links) < 1:
        raise ao3_scraper.api.exceptions.NodeCountError("Expected a title link", field="title")

    work["title"] = text_of(heading_links[0])
    user_links = heading_links[1:]

    work["is_anonymous"] = len(user_links) == 0
    if user_links and "[archived by" in text_of(heading, strip=False):
        work["authors"] = [parse_archived_byline(heading, user_links)]
    elif user_links:
        authors, recipients = [], []
        for user_node in user_links:
            if user_node.attrib.get("rel") == "author":
                authors.append(parse_user_link(user_node, "authors"))
            else:
                recipients.append(parse_user_link(user_node, "recipients"))
        work["authors"] = authors
        work["recipients"] = recipients

    return WorkListing(**work)
