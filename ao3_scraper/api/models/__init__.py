from .common import Link, Pagination
from .fandoms import Fandom, FandomCategory
from .series import Series
from .works import Work, WorkList, WorkListing

__all__ = [
    "Fandom",
    "FandomCategory",
    "Link",
    "Pagination",
    "Series",
    "Work",
    "WorkList",
    "WorkListing",
]
