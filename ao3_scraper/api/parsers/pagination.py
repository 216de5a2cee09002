import parsel

import ao3_scraper.api.exceptions
from ao3_scraper.api.models import Pagination
from ao3_scraper.api.parsers.nodes import parse_count, select_one, text_of


def parse_pagination(doc: parsel.Selector) -> Pagination:
    """
    Reads the pagination bars of a listing page.

    A paginated page shows two identical bars, one above and one below the
    listing. A page without bars is a single-page listing.

    Args:
        doc (parsel.Selector): Listing page

    Returns:
        (Pagination): Pagination state

    Raises:
        ao3_scraper.api.exceptions.ExtractionError: If the bars do not have the expected shape
    """

    pagination_nodes = doc.css("ol.pagination")
    if len(pagination_nodes) == 0:
        return Pagination(is_paginated=False)

    if len(pagination_nodes) != 2:
        raise ao3_scraper.api.exceptions.NodeCountError(
            f"Expected two pagination bars, found {len(pagination_nodes)}", field="pagination"
        )

    pagination_node = pagination_nodes[0]

    current_page = parse_count(text_of(select_one(pagination_node, "span.current", "current_page")), "current_page")

    # The list always ends with the "Next" control, so the last page is the
    # penultimate item. Expect at least "Previous", one page and "Next".
    page_items = pagination_node.css("li")
    if len(page_items) < 3:
        raise ao3_scraper.api.exceptions.NodeCountError(
            f"Expected at least three pagination items, found {len(page_items)}", field="last_page"
        )

    last_page = parse_count(text_of(page_items[-2]), "last_page")

    return Pagination(is_paginated=True, current_page=current_page, last_page=last_page)
