from .fandoms import parse_fandom_categories, parse_fandoms
from .nodes import parse_document
from .pagination import parse_pagination
from .series import parse_series
from .work import parse_work
from .work_blurb import parse_work_blurb
from .work_list import parse_work_list

__all__ = [
    "parse_document",
    "parse_fandom_categories",
    "parse_fandoms",
    "parse_pagination",
    "parse_series",
    "parse_work",
    "parse_work_blurb",
    "parse_work_list",
]
