import re

import parsel

from ao3_scraper.api.models import Fandom, FandomCategory
from ao3_scraper.api.parsers.nodes import get_attr, match_pattern, parse_count, select_one, text_of

CATEGORY_SLUG_REGEX = re.compile(r"^/media/(.+)/fandoms$")
FANDOM_SLUG_REGEX = re.compile(r"^/tags/(.+)/works$")
LETTER_REGEX = re.compile(r"(\S+)")
COUNT_REGEX = re.compile(r"\(([\d,]+)\)\s*$")


def parse_fandom_categories(doc: parsel.Selector) -> list[FandomCategory]:
    """
    Parses the media categories listed on /media

    Args:
        doc (parsel.Selector): Media page

    Returns:
        (list[FandomCategory]): Categories, e.g. "Anime & Manga"
    """

    categories = []
    for category_node in doc.css(".medium.listbox.group > h3 > a"):
        href = get_attr(category_node, "href", "category")
        slug = match_pattern(CATEGORY_SLUG_REGEX, href, "category").group(1)
        categories.append(FandomCategory(name=text_of(category_node), slug=slug))

    return categories


def parse_fandoms(doc: parsel.Selector) -> list[Fandom]:
    """
    Parses the fandoms listed on /media/[category]/fandoms

    Fandoms are grouped into sections headed by the first letter of their name.

    Args:
        doc (parsel.Selector): Category page

    Returns:
        (list[Fandom]): Fandoms, in page order
    """

    fandoms = []
    for section_node in doc.css("ol > .letter.listbox.group"):
        letter_text = text_of(select_one(section_node, "h3", "letter"))
        letter = match_pattern(LETTER_REGEX, letter_text, "letter").group(1)

        for fandom_node in section_node.css("ul > li"):
            # e.g. "Artemis Fowl - Eoin Colfer (1,468)"
            fandom_text = text_of(fandom_node)
            count_text = match_pattern(COUNT_REGEX, fandom_text, "count").group(1)

            link_node = select_one(fandom_node, "a", "fandom")
            href = get_attr(link_node, "href", "fandom")

            fandoms.append(
                Fandom(
                    name=text_of(link_node),
                    letter=letter,
                    slug=match_pattern(FANDOM_SLUG_REGEX, href, "fandom").group(1),
                    count=parse_count(count_text, "count"),
                )
            )

    return fandoms
