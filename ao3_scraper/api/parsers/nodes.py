"""
Selector helpers shared by the page parsers.

Each helper raises a typed `ExtractionError` naming the field being extracted.
"""

import html
import re

import parsel

import ao3_scraper.api.exceptions
from ao3_scraper.utils import atoi_with_comma


def parse_document(text: str) -> parsel.Selector:
    """
    Parses an HTML page

    Args:
        text (str): Page contents

    Returns:
        (parsel.Selector): Root selector

    Raises:
        ao3_scraper.api.exceptions.DocumentParseError: If the page cannot be parsed
    """

    try:
        return parsel.Selector(text=text)
    except (TypeError, ValueError) as e:
        raise ao3_scraper.api.exceptions.DocumentParseError("Unable to parse page", errors=[e]) from e


def select_one(node: parsel.Selector, query: str, field: str) -> parsel.Selector:
    matches = node.css(query)
    if len(matches) != 1:
        raise ao3_scraper.api.exceptions.NodeCountError(
            f"Expected exactly one {query!r} node, found {len(matches)}", field=field
        )
    return matches[0]


def select_optional(node: parsel.Selector, query: str, field: str) -> parsel.Selector | None:
    matches = node.css(query)
    if len(matches) > 1:
        raise ao3_scraper.api.exceptions.NodeCountError(
            f"Expected at most one {query!r} node, found {len(matches)}", field=field
        )
    return matches[0] if matches else None


def select_first(node: parsel.Selector, query: str) -> parsel.Selector | None:
    matches = node.css(query)
    return matches[0] if matches else None


def get_attr(node: parsel.Selector, name: str, field: str) -> str:
    value = node.attrib.get(name)
    if value is None:
        raise ao3_scraper.api.exceptions.MissingAttributeError(f"Missing {name!r} attribute", field=field)
    return value


def text_of(node: parsel.Selector, strip: bool = True) -> str:
    """
    All the text inside a node, descendants included
    """

    text = node.xpath("string()").get("")
    return text.strip() if strip else text


def inner_html(node: parsel.Selector) -> str:
    """
    The markup inside a node, without the node's own tag
    """

    # Text nodes come back unescaped, element nodes come back serialized
    return "".join(
        html.escape(child.get(), quote=False) if isinstance(child.root, str) else child.get()
        for child in node.xpath("./node()")
    )


def match_pattern(pattern: re.Pattern, value: str, field: str) -> re.Match:
    match = pattern.search(value)
    if not match:
        raise ao3_scraper.api.exceptions.PatternMismatchError(f"Unable to parse {field}", field=field, raw=value)
    return match


def parse_count(text: str, field: str) -> int:
    """
    Converts a count such as "1,234" to an integer

    Raises:
        ao3_scraper.api.exceptions.ConversionError: If the text is not a count
    """

    try:
        return atoi_with_comma(text)
    except ValueError as e:
        raise ao3_scraper.api.exceptions.ConversionError(
            f"Unable to convert {field} to an integer", field=field, raw=text, errors=[e]
        ) from e
