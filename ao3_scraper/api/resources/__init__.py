from .fandoms import FandomsApi
from .series import SeriesApi
from .tags import TagsApi
from .users import UsersApi
from .works import WorksApi

__all__ = [
    "FandomsApi",
    "SeriesApi",
    "TagsApi",
    "UsersApi",
    "WorksApi",
]
